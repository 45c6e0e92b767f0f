"""Analysis JSON API endpoint.

- POST /analyze: analyze a Reddit user's comment history

The analyzer is shared by every request (app.state.analyzer); each request
runs its own analysis under the analyzer's configured deadline.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from reddit_psychiatrist.api.models import AnalyzeRequest, AnalyzeResponse
from reddit_psychiatrist.api.responses import VALIDATION_ERROR, raise_api_error, status_for_code
from reddit_psychiatrist.utils.errors import AnalysisError
from reddit_psychiatrist.utils.logging_config import get_logger

router = APIRouter(tags=["analysis"])
logger = get_logger(__name__)


@router.post("/analyze", response_model=AnalyzeResponse, response_model_exclude_none=True)
async def analyze_user(body: AnalyzeRequest, request: Request):
    """Analyze a Reddit user.

    Returns:
        200 with username, interests and summary on success.
        500 (504 on timeout) with username and the error message if the analysis fails.

    Example:
        POST /analyze {"username": "spez"}
        -> {"username": "spez", "interests": ["webdev", ...], "summary": "..."}
    """
    username = body.username.strip()
    if not username:
        raise_api_error(VALIDATION_ERROR, "Missing or invalid 'username' in request body")

    logger.info("analyze_request_received", username=username)
    analyzer = request.app.state.analyzer

    try:
        result = await analyzer.analyze(username)
    except AnalysisError as e:
        logger.warning("analyze_request_failed", username=username, code=e.code, error=str(e))
        payload = AnalyzeResponse(username=username, error=str(e))
        return JSONResponse(
            status_code=status_for_code(e.code),
            content=payload.model_dump(),
        )

    return AnalyzeResponse(
        username=username,
        interests=list(result.interests),
        summary=result.summary,
    )
