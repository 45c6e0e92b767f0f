"""OpenAI chat completion client.

The analyzer depends only on the TextGenerationClient capability: send a
PromptRequest, get back every candidate completion. OpenAIClient implements it
on top of the official SDK's async client and keeps a running estimate of
this month's spend, warning once it crosses a threshold.
"""

import os
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional, Tuple

import openai
import structlog

from reddit_psychiatrist.models.analysis_models import ChatResponse, PromptRequest


def _get_logger():
    """Get logger instance (allows for easier mocking in tests)."""
    return structlog.get_logger()


def _month_label(period: Tuple[int, int]) -> str:
    return f"{period[0]}-{period[1]:02d}"


class TextGenerationClient(ABC):
    """Capability: run a chat completion and return every candidate."""

    @abstractmethod
    async def chat(self, request: PromptRequest) -> ChatResponse:
        """Send `request` and return its candidate completions.

        Raises:
            Exception: Any transport or API error, propagated unchanged
        """

    async def close(self) -> None:
        """Release network resources. No-op by default."""


# (input, output) list prices in dollars per 1M tokens; dated snapshots match by prefix
MODEL_PRICES_PER_1M: Dict[str, Tuple[float, float]] = {
    "gpt-4o": (2.50, 10.00),
    "gpt-4o-mini": (0.15, 0.60),
    "gpt-4.1": (2.00, 8.00),
    "gpt-4.1-mini": (0.40, 1.60),
    "gpt-4.1-nano": (0.10, 0.40),
    "gpt-4-turbo": (10.00, 30.00),
    "gpt-3.5-turbo": (0.50, 1.50),
}


def price_for(model: str) -> Optional[Tuple[float, float]]:
    """Per-1M-token (input, output) prices for `model`, or None if unknown."""
    for prefix in sorted(MODEL_PRICES_PER_1M, key=len, reverse=True):
        if model == prefix or model.startswith(prefix + "-"):
            return MODEL_PRICES_PER_1M[prefix]
    return None


class MonthlyUsage:
    """Token totals for the current calendar month and their estimated cost.

    Each request is priced for the model that served it. Requests to models
    missing from MODEL_PRICES_PER_1M count toward the token totals but add
    nothing to the cost estimate. Totals reset on the first request of a new
    month.

    Attributes:
        prompt_tokens: Input tokens used this month
        completion_tokens: Output tokens used this month
        cost: Estimated spend in dollars for priced requests this month
        period: (year, month) the totals belong to
    """

    def __init__(self, period: Optional[Tuple[int, int]] = None):
        if period is None:
            now = datetime.now()
            period = (now.year, now.month)
        self.period = period
        self.prompt_tokens = 0
        self.completion_tokens = 0
        self.cost = 0.0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def record(self, model: str, prompt_tokens: int, completion_tokens: int) -> float:
        """Add one request's tokens, rolling over first if the month changed.

        Returns:
            Estimated monthly cost in dollars after this request
        """
        now = datetime.now()
        if (now.year, now.month) != self.period:
            _get_logger().info(
                "monthly_usage_reset",
                old_month=_month_label(self.period),
                new_month=_month_label((now.year, now.month)),
                old_tokens=self.total_tokens
            )
            self.period = (now.year, now.month)
            self.prompt_tokens = 0
            self.completion_tokens = 0
            self.cost = 0.0

        self.prompt_tokens += prompt_tokens
        self.completion_tokens += completion_tokens

        prices = price_for(model)
        if prices is None:
            _get_logger().warning("openai_model_unpriced", model=model)
        else:
            self.cost += (prompt_tokens * prices[0] + completion_tokens * prices[1]) / 1_000_000
        return self.cost


class OpenAIClient(TextGenerationClient):
    """TextGenerationClient backed by openai.AsyncOpenAI.

    The async SDK client lets the analyzer's deadline cancel an in-flight
    completion. SDK retries are disabled so a failed call surfaces at once; API
    errors are logged with the request's shape and re-raised.

    Attributes:
        client: AsyncOpenAI SDK client instance
        usage: Token totals and cost estimate for the current month

    Example:
        >>> client = OpenAIClient()
        >>> response = await client.chat(request)
        >>> print(response.choices[0])
    """

    MONTHLY_COST_WARNING_THRESHOLD = 60.0

    def __init__(self, api_key: Optional[str] = None):
        """Create the SDK client.

        Args:
            api_key: Explicit API key. Falls back to the OPENAI_API_KEY environment variable.

        Raises:
            ValueError: If no API key is given and OPENAI_API_KEY is missing or empty
        """
        api_key = (api_key or os.environ.get("OPENAI_API_KEY", "")).strip()
        if not api_key:
            raise ValueError(
                "OPENAI_API_KEY is not set. Export it, add it to .env, "
                "or pass the key explicitly."
            )

        self.client = openai.AsyncOpenAI(api_key=api_key, max_retries=0)
        self.usage = MonthlyUsage()

        _get_logger().info("openai_client_initialized", month=_month_label(self.usage.period))

    @staticmethod
    def _token_counts(response) -> Dict[str, int]:
        usage = getattr(response, "usage", None)
        counts = {}
        for key in ("prompt_tokens", "completion_tokens"):
            value = getattr(usage, key, 0)
            counts[key] = value if isinstance(value, int) else 0
        counts["total_tokens"] = counts["prompt_tokens"] + counts["completion_tokens"]
        return counts

    async def chat(self, request: PromptRequest) -> ChatResponse:
        """Run one chat completion.

        Args:
            request: Model, temperature and messages for the completion

        Returns:
            ChatResponse with the content of every returned choice (possibly none)
            and the token counts for this call

        Raises:
            openai.APIError: Authentication, rate limit, server or connection errors
        """
        try:
            response = await self.client.chat.completions.create(
                model=request.model,
                messages=[message.to_dict() for message in request.messages],
                temperature=request.temperature,
            )
        except Exception as e:
            _get_logger().error(
                "openai_api_error",
                error=str(e),
                error_type=type(e).__name__,
                model=request.model,
                message_lengths=[len(message.content) for message in request.messages]
            )
            raise

        choices = tuple(choice.message.content for choice in (response.choices or []))
        tokens = self._token_counts(response)
        monthly_cost = self.usage.record(request.model, tokens["prompt_tokens"], tokens["completion_tokens"])

        _get_logger().info(
            "openai_chat_completion_success",
            model=request.model,
            temperature=request.temperature,
            choices=len(choices),
            total_tokens=tokens["total_tokens"],
            monthly_tokens=self.usage.total_tokens,
            estimated_monthly_cost=round(monthly_cost, 2)
        )

        if monthly_cost >= self.MONTHLY_COST_WARNING_THRESHOLD:
            _get_logger().warning(
                "monthly_cost_threshold_exceeded",
                monthly_cost=round(monthly_cost, 2),
                threshold=self.MONTHLY_COST_WARNING_THRESHOLD,
                month=_month_label(self.usage.period)
            )

        return ChatResponse(choices=choices, usage=tokens)

    async def close(self) -> None:
        await self.client.close()
