"""Reddit comment-history analysis.

RedditPsychoanalyzer runs one analysis as a strictly linear sequence:

    fetching -> extracting_interests -> extracting_summary -> completed

Each step awaits one external call. A failure at any step is terminal and is
raised as the matching AnalysisError; the summary call is never attempted when
interest extraction fails, and no partial result is ever returned.

A single deadline bounds the whole analysis. Each step runs under whatever is
left of it; when it runs out the in-flight call is cancelled and
AnalysisTimeoutError is raised for the step that was running.
"""

import asyncio
from typing import Any, Coroutine, List, Optional, TypeVar

import structlog

from reddit_psychiatrist.ai_parser import parse_interests, parse_summary
from reddit_psychiatrist.config import AnalyzerConfig
from reddit_psychiatrist.integrations.openai_client import OpenAIClient, TextGenerationClient
from reddit_psychiatrist.integrations.reddit import (
    AsyncPrawCommentSource,
    CommentSource,
    get_reddit_client,
)
from reddit_psychiatrist.models.analysis_models import AnalysisResult, CommentBatch
from reddit_psychiatrist.prompts import build_interests_prompt, build_summary_prompt
from reddit_psychiatrist.utils.errors import (
    AnalysisError,
    AnalysisTimeoutError,
    InterestExtractionFailedError,
    RetrievalFailedError,
    STEP_EXTRACTING_INTERESTS,
    STEP_EXTRACTING_SUMMARY,
    STEP_FETCHING,
    SummaryGenerationFailedError,
)

logger = structlog.get_logger()

T = TypeVar('T')

# Human-readable step names used in timeout messages
_STEP_LABELS = {
    STEP_FETCHING: "fetching comments",
    STEP_EXTRACTING_INTERESTS: "extracting interests",
    STEP_EXTRACTING_SUMMARY: "generating the summary",
}


class RedditPsychoanalyzer:
    """Orchestrates comment retrieval, interest extraction and summary generation.

    The collaborators are long-lived and may be shared by many concurrent
    analyses; the analyzer itself keeps no per-request state.

    Attributes:
        comment_source: Where comments come from
        text_client: Chat completion capability
        config: Model, limits, temperatures and default deadline

    Example:
        >>> analyzer = await create_analyzer()
        >>> result = await analyzer.analyze("spez", timeout=60)
        >>> print(result.interests, result.summary)
    """

    def __init__(
        self,
        comment_source: CommentSource,
        text_client: TextGenerationClient,
        config: Optional[AnalyzerConfig] = None,
    ):
        self.comment_source = comment_source
        self.text_client = text_client
        self.config = config or AnalyzerConfig()

    async def analyze(self, username: str, timeout: Optional[float] = None) -> AnalysisResult:
        """Analyze a Reddit user's public comment history.

        Args:
            username: Reddit username (non-empty; validated by the caller)
            timeout: Deadline in seconds for the whole analysis. Defaults to
                config.timeout_seconds; no deadline when both are None.

        Returns:
            AnalysisResult with interests and summary

        Raises:
            RetrievalFailedError: Comments could not be fetched
            InterestExtractionFailedError: Interests call failed or returned no choices
            SummaryGenerationFailedError: Summary call failed or returned no choices
            AnalysisTimeoutError: The deadline elapsed during any step
            asyncio.CancelledError: The calling task was cancelled
        """
        if timeout is None:
            timeout = self.config.timeout_seconds
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        log = logger.bind(username=username)
        log.info(
            "analysis_started",
            model=self.config.model,
            max_comments=self.config.max_comments,
            timeout_seconds=timeout
        )

        try:
            comments = await self._run_step(
                STEP_FETCHING, self._fetch_comments(username), deadline, username
            )
            log.info("comments_fetched", comment_count=len(comments))

            interests = await self._run_step(
                STEP_EXTRACTING_INTERESTS, self._extract_interests(comments, username), deadline, username
            )
            log.info("interests_extracted", interest_count=len(interests))

            summary = await self._run_step(
                STEP_EXTRACTING_SUMMARY, self._extract_summary(comments, username), deadline, username
            )

        except AnalysisError as e:
            log.error(
                "analysis_failed",
                code=e.code,
                step=e.step,
                error=str(e),
                error_type=type(e.__cause__).__name__ if e.__cause__ else type(e).__name__
            )
            raise

        except asyncio.CancelledError:
            log.warning("analysis_cancelled")
            raise

        result = AnalysisResult(interests=tuple(interests), summary=summary)
        log.info("analysis_completed", interest_count=len(result.interests), summary_length=len(summary))
        return result

    async def _run_step(
        self,
        step: str,
        work: Coroutine[Any, Any, T],
        deadline: Optional[float],
        username: str,
    ) -> T:
        """Await one step under the remaining deadline.

        Translates an elapsed deadline into AnalysisTimeoutError; every other
        failure is already an AnalysisError raised by the step itself.
        """
        loop = asyncio.get_running_loop()
        remaining = None

        if deadline is not None:
            remaining = deadline - loop.time()
            if remaining <= 0:
                # Never started; close the coroutine so it isn't reported as unawaited
                work.close()
                raise AnalysisTimeoutError(
                    f"analysis of u/{username} timed out before {_STEP_LABELS[step]}",
                    step=step,
                    username=username,
                )

        try:
            return await asyncio.wait_for(work, timeout=remaining)
        except asyncio.TimeoutError as e:
            raise AnalysisTimeoutError(
                f"analysis of u/{username} timed out while {_STEP_LABELS[step]}",
                step=step,
                username=username,
            ) from e

    async def _fetch_comments(self, username: str) -> CommentBatch:
        try:
            comments = await self.comment_source.get_user_comments(username, self.config.max_comments)
        except Exception as e:
            raise RetrievalFailedError(
                f"failed to fetch comments for u/{username}: {e}", username=username
            ) from e
        # Sources may ignore the limit; the cap is enforced here
        return tuple(comments)[:self.config.max_comments]

    async def _extract_interests(self, comments: CommentBatch, username: str) -> List[str]:
        request = build_interests_prompt(comments, self.config)
        try:
            response = await self.text_client.chat(request)
            return parse_interests(response)
        except Exception as e:
            raise InterestExtractionFailedError(
                f"failed to extract interests for u/{username}: {e}", username=username
            ) from e

    async def _extract_summary(self, comments: CommentBatch, username: str) -> str:
        request = build_summary_prompt(comments, self.config)
        try:
            response = await self.text_client.chat(request)
            return parse_summary(response)
        except Exception as e:
            raise SummaryGenerationFailedError(
                f"failed to generate summary for u/{username}: {e}", username=username
            ) from e

    async def close(self) -> None:
        """Close both collaborators."""
        await self.comment_source.close()
        await self.text_client.close()


async def create_analyzer(
    openai_api_key: Optional[str] = None,
    config: Optional[AnalyzerConfig] = None,
) -> RedditPsychoanalyzer:
    """Build an analyzer wired to the real Reddit and OpenAI clients.

    Args:
        openai_api_key: Explicit key; falls back to OPENAI_API_KEY
        config: Analysis settings; defaults to AnalyzerConfig.from_env()

    Raises:
        ValueError: If a required credential is missing
        RedditAPIError: If the Reddit client cannot be created
    """
    config = config or AnalyzerConfig.from_env()
    text_client = OpenAIClient(api_key=openai_api_key)
    try:
        reddit = await get_reddit_client()
    except Exception:
        await text_client.close()
        raise
    return RedditPsychoanalyzer(
        comment_source=AsyncPrawCommentSource(reddit),
        text_client=text_client,
        config=config,
    )
