"""Pydantic models for API request/response structures.

Analyze Structure:
    POST /analyze accepts AnalyzeRequest and always answers with AnalyzeResponse:
    - success: username, interests, summary
    - analysis failure: username, empty interests/summary, and the error message

Error Structure:
    Requests rejected before an analysis starts (bad body, blank username) use
    ErrorEnvelope with:
    - error: ErrorDetail containing code and message
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Body of POST /analyze.

    Attributes:
        username: Reddit username to analyze, without the u/ prefix
    """
    username: str = Field(..., description="Reddit username to analyze")


class AnalyzeResponse(BaseModel):
    """Result of POST /analyze.

    Attributes:
        username: Username that was analyzed (echoed back)
        interests: Inferred interest tokens (empty on error)
        summary: Personality summary (empty on error)
        error: Error message when the analysis failed, omitted on success
    """
    username: str
    interests: List[str] = Field(default_factory=list)
    summary: str = ""
    error: Optional[str] = None


class ErrorDetail(BaseModel):
    """Error details included in error responses.

    Attributes:
        code: Machine-readable error code (see responses.py for constants)
        message: Human-readable error message
    """
    code: str
    message: str


class ErrorEnvelope(BaseModel):
    """Standard error envelope for rejected requests."""
    error: ErrorDetail
