"""
AI prompt templates for Reddit comment-history analysis.

This module provides the two fixed system prompts (interests and personality
summary) and the transcript serializer that turns a batch of comments into the
user message of a chat request.

Transcript format, one line per comment in retrieval order:
    [r/<subreddit>] <body>\n
Comment bodies are passed through verbatim; nothing is escaped.
"""

from typing import Iterable

from reddit_psychiatrist.config import AnalyzerConfig
from reddit_psychiatrist.models.analysis_models import (
    Comment,
    Message,
    PromptRequest,
    ROLE_SYSTEM,
    ROLE_USER,
)


# System prompt for interest extraction: a bare comma-separated list
INTERESTS_SYSTEM_PROMPT = """You are analyzing a Reddit user's public comment history.

Your job is to infer this person's core interests, hobbies, or topic obsessions — not just the subreddits they post in, but what they actually seem to care about or engage with deeply.

Base your response on:
- Subreddit context (e.g., posting in r/AskPhysics likely means interest in physics)
- Comment content and tone
- Recurring themes, topics, or thought patterns

Output format:
A comma-separated list of 5–10 interest categories or concepts. Use lowercase. No spaces. Examples: philosophy,webdev,anarchism,slowcooking,standupcomedy.

Only return the list. Do not include explanations or extra formatting."""


# System prompt for the personality summary: blunt, funny, 4-6 sentences
SUMMARY_SYSTEM_PROMPT = """You're a brutally honest psychologist with a sharp tongue and a low tolerance for bullshit. You've just reviewed a Reddit user's public comment history.

Your job is to psychoanalyze this person with unfiltered accuracy. Be funny, yes — but always aim for the truth. If they posture as virtuous, call out the performative. If they act aloof, point out the insecurity. Praise is rare and only earned. Insight is mandatory.

Focus on:
- How they present themselves online (attention-seeking, insecure, hyper-logical, overly agreeable, passive-aggressive, etc.)
- What their choice of subreddits reveals about their real values, not just their stated ones
- Tone, writing style, emotional patterns (condescending? overly polite? smug? defensive? desperate for approval?)

You may mock them, but do not lie. Be ruthless only when deserved. Pretend you're describing them to their face, at a roast, and they're not allowed to interrupt.

Write a personality summary in 4 to 6 sentences. Keep it tight, punchy, and honest."""


def serialize_comments(comments: Iterable[Comment]) -> str:
    """
    Render comments as a line-oriented transcript.

    Args:
        comments: Comments in retrieval order

    Returns:
        Concatenation of "[r/<subreddit>] <body>\\n" for every comment.
        Empty string for an empty batch.

    Example:
        >>> serialize_comments([Comment("python", "use a venv")])
        '[r/python] use a venv\\n'
    """
    return "".join(f"[r/{c.subreddit}] {c.body}\n" for c in comments)


def build_prompt(
    instruction: str,
    comments: Iterable[Comment],
    model: str,
    temperature: float,
) -> PromptRequest:
    """
    Build a two-message chat request: the fixed instruction, then the transcript.

    Args:
        instruction: System prompt text (INTERESTS_SYSTEM_PROMPT or SUMMARY_SYSTEM_PROMPT)
        comments: Comment batch; read once, never mutated
        model: Chat model name
        temperature: Sampling temperature for this purpose

    Returns:
        PromptRequest with messages (system, user)
    """
    return PromptRequest(
        model=model,
        temperature=temperature,
        messages=(
            Message(role=ROLE_SYSTEM, content=instruction),
            Message(role=ROLE_USER, content=serialize_comments(comments)),
        ),
    )


def build_interests_prompt(comments: Iterable[Comment], config: AnalyzerConfig) -> PromptRequest:
    """Build the interest-extraction request (low temperature)."""
    return build_prompt(
        INTERESTS_SYSTEM_PROMPT,
        comments,
        model=config.model,
        temperature=config.interests_temperature,
    )


def build_summary_prompt(comments: Iterable[Comment], config: AnalyzerConfig) -> PromptRequest:
    """Build the personality-summary request (higher temperature)."""
    return build_prompt(
        SUMMARY_SYSTEM_PROMPT,
        comments,
        model=config.model,
        temperature=config.summary_temperature,
    )
