"""Analysis Error Taxonomy

Every failure inside an analysis is terminal: the orchestrator translates the
underlying cause into exactly one AnalysisError subclass and propagates it to the
caller. Presentation surfaces render str(error) verbatim and may use `code` to
pick a status.

Kinds:
    RetrievalFailedError: the comment source did not return a batch
    InterestExtractionFailedError: the interests completion failed or was empty
    SummaryGenerationFailedError: the summary completion failed or was empty
    AnalysisTimeoutError: the shared deadline elapsed during any step

EmptyResponseError is raised by the response parsers when the generation service
returns zero candidate completions. It is not an AnalysisError on its own; the
orchestrator wraps it in the extraction error for the step that hit it.

Cancellation of the analysis task is not translated: asyncio.CancelledError
propagates unchanged so task cancellation keeps working for the caller.
"""

from typing import Optional


# Analysis steps, in execution order
STEP_FETCHING = "fetching"
STEP_EXTRACTING_INTERESTS = "extracting_interests"
STEP_EXTRACTING_SUMMARY = "extracting_summary"

# Error codes carried on AnalysisError.code
RETRIEVAL_FAILED = "RETRIEVAL_FAILED"
INTEREST_EXTRACTION_FAILED = "INTEREST_EXTRACTION_FAILED"
SUMMARY_GENERATION_FAILED = "SUMMARY_GENERATION_FAILED"
ANALYSIS_TIMEOUT = "ANALYSIS_TIMEOUT"


class EmptyResponseError(Exception):
    """Raised when a chat completion comes back with zero candidate completions."""

    def __init__(self, message: str = "no response choices returned"):
        super().__init__(message)


class AnalysisError(Exception):
    """Base class for terminal analysis failures.

    Attributes:
        code: Machine-readable error code (one of the constants above)
        step: Analysis step that failed (one of the STEP_* constants)
        username: Reddit username under analysis, if known
    """

    code: str = "ANALYSIS_FAILED"
    step: Optional[str] = None

    def __init__(self, message: str, username: Optional[str] = None):
        super().__init__(message)
        self.username = username


class RetrievalFailedError(AnalysisError):
    """The comment source failed (network error, bad status, undecodable payload)."""

    code = RETRIEVAL_FAILED
    step = STEP_FETCHING


class InterestExtractionFailedError(AnalysisError):
    """The interests completion failed or returned no choices."""

    code = INTEREST_EXTRACTION_FAILED
    step = STEP_EXTRACTING_INTERESTS


class SummaryGenerationFailedError(AnalysisError):
    """The summary completion failed or returned no choices."""

    code = SUMMARY_GENERATION_FAILED
    step = STEP_EXTRACTING_SUMMARY


class AnalysisTimeoutError(AnalysisError):
    """The shared analysis deadline elapsed before the analysis completed.

    Unlike the other kinds this one can occur at any step, so the step is set
    per instance.
    """

    code = ANALYSIS_TIMEOUT

    def __init__(self, message: str, step: str, username: Optional[str] = None):
        super().__init__(message, username=username)
        self.step = step
