"""Runtime configuration for Reddit Psychiatrist.

AnalyzerConfig holds the process-wide analysis constants (model, comment cap,
per-purpose temperatures, default deadline). It is immutable and handed to the
analyzer at construction so tests can substitute values freely.

Secrets are never stored here; OPENAI_API_KEY and the REDDIT_* credentials are
read from the environment by the integration clients themselves.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_COMMENTS = 200
DEFAULT_TIMEOUT_SECONDS = 60.0

# Low temperature keeps the interest categories consistent between runs;
# the summary gets more room for stylistic variety.
INTERESTS_TEMPERATURE = 0.5
SUMMARY_TEMPERATURE = 0.7


@dataclass(frozen=True)
class AnalyzerConfig:
    """Immutable analysis settings.

    Attributes:
        model: Chat model used for both completions
        max_comments: Maximum number of comments fetched per analysis
        interests_temperature: Sampling temperature for the interests call
        summary_temperature: Sampling temperature for the summary call
        timeout_seconds: Default deadline for a whole analysis (None disables it)
    """
    model: str = DEFAULT_MODEL
    max_comments: int = DEFAULT_MAX_COMMENTS
    interests_temperature: float = INTERESTS_TEMPERATURE
    summary_temperature: float = SUMMARY_TEMPERATURE
    timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "AnalyzerConfig":
        """Build a config from optional environment overrides.

        Reads PSYCHE_MODEL, PSYCHE_MAX_COMMENTS and PSYCHE_TIMEOUT_SECONDS.
        Unset or empty variables keep their defaults.

        Raises:
            ValueError: If a numeric override is not a positive number
        """
        model = os.environ.get("PSYCHE_MODEL", "").strip() or DEFAULT_MODEL
        max_comments = _positive_number("PSYCHE_MAX_COMMENTS", DEFAULT_MAX_COMMENTS, int)
        timeout_seconds = _positive_number("PSYCHE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, float)
        return cls(model=model, max_comments=max_comments, timeout_seconds=timeout_seconds)


def _positive_number(var_name: str, default: Union[int, float], cast):
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{var_name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var_name} must be greater than zero, got {raw!r}")
    return value


def load_dotenv(env_path: Union[str, Path] = ".env") -> None:
    """Load a .env file into os.environ if it exists.

    Existing environment variables win over values from the file.
    """
    env_path = Path(env_path)
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                os.environ.setdefault(key.strip(), value.strip())
