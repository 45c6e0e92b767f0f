"""Data models for Reddit Psychiatrist.

This module defines the data structures that flow through one analysis:
comments fetched from Reddit, the chat requests built from them, the raw
completions returned by the generation service, and the final result.

Data Models:
    Comment: one public comment (subreddit + body, permalink/score carried along)
    Message: one role-tagged chat message
    PromptRequest: model, temperature and exactly two messages (system, user)
    ChatResponse: candidate completion texts plus token usage
    AnalysisResult: parsed interests and personality summary

All models are frozen dataclasses: they are built once per analysis step and
read-only afterwards. A CommentBatch is simply a tuple of Comment in retrieval
order.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


ROLE_SYSTEM = "system"
ROLE_USER = "user"


@dataclass(frozen=True)
class Comment:
    """A single public Reddit comment.

    Attributes:
        subreddit: Subreddit display name, without the r/ prefix
        body: Raw comment text, passed to the model verbatim
        permalink: Reddit permalink (unused by the analysis)
        score: Reddit score (unused by the analysis)
    """
    subreddit: str
    body: str
    permalink: str = ""
    score: int = 0


CommentBatch = Tuple[Comment, ...]


@dataclass(frozen=True)
class Message:
    """A role-tagged chat message ("system" or "user")."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class PromptRequest:
    """A chat completion request.

    Attributes:
        model: Chat model name (e.g., "gpt-4o")
        temperature: Sampling temperature for this purpose
        messages: Ordered messages; always one system message then one user message
    """
    model: str
    temperature: float
    messages: Tuple[Message, ...]


@dataclass(frozen=True)
class ChatResponse:
    """Result of a chat completion call.

    Attributes:
        choices: Content of each candidate completion, in the order returned.
            May be empty; only the first entry is ever read.
        usage: Token usage (prompt_tokens, completion_tokens, total_tokens)
    """
    choices: Tuple[str, ...]
    usage: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of a successful analysis.

    Only constructed when both the interests and the summary calls succeed.

    Attributes:
        interests: Interest tokens in the order the model listed them
        summary: Free-form personality summary (4-6 sentences requested)
    """
    interests: Tuple[str, ...]
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        interests: List[str] = list(self.interests)
        return {"interests": interests, "summary": self.summary}
