"""HTML form for running an analysis from the browser.

- GET /: empty username form
- POST /: run the analysis and render the summary and interests, or the error
"""

from html import escape
from typing import Optional, Sequence

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse

from reddit_psychiatrist.utils.errors import AnalysisError
from reddit_psychiatrist.utils.logging_config import get_logger

router = APIRouter(tags=["ui"])
logger = get_logger(__name__)


def _html_page(
    username: str = "",
    summary: Optional[str] = None,
    interests: Sequence[str] = (),
    error: Optional[str] = None,
) -> HTMLResponse:
    """Render the form page. All dynamic text is HTML-escaped."""
    body = ""
    if error:
        body += f'<p class="error">{escape(error)}</p>'
    if summary is not None:
        items = "".join(f"<li>{escape(interest)}</li>" for interest in interests)
        body += (
            f"<h2>u/{escape(username)}</h2>"
            "<h3>Personality Summary</h3>"
            f'<p class="summary">{escape(summary)}</p>'
            "<h3>Inferred Interests</h3>"
            f"<ul>{items}</ul>"
        )

    html = f"""<!DOCTYPE html>
<html>
<head><title>Reddit Psychiatrist</title>
<style>
body {{ font-family: system-ui, sans-serif; max-width: 600px; margin: 80px auto; padding: 0 20px; }}
h1 {{ color: #1a1a1a; }}
.error {{ color: #dc2626; }}
.summary {{ line-height: 1.5; }}
</style>
</head>
<body>
<h1>Reddit Psychiatrist</h1>
<form method="post" action="/">
<input type="text" name="username" placeholder="Reddit username" value="{escape(username)}">
<button type="submit">Analyze</button>
</form>
{body}
</body>
</html>"""
    return HTMLResponse(content=html)


@router.get("/", response_class=HTMLResponse)
async def index():
    """Render the empty form."""
    return _html_page()


@router.post("/", response_class=HTMLResponse)
async def analyze_form(request: Request, username: str = Form("")):
    """Run an analysis for the submitted username and render the outcome."""
    username = username.strip()
    if not username:
        return _html_page(error="Username is required")

    analyzer = request.app.state.analyzer
    try:
        result = await analyzer.analyze(username)
    except AnalysisError as e:
        logger.warning("form_analysis_failed", username=username, code=e.code, error=str(e))
        return _html_page(username=username, error=str(e))

    return _html_page(
        username=username,
        summary=result.summary,
        interests=result.interests,
    )
