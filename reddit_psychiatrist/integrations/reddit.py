"""Reddit Integration Module

This module provides the comment source used by the analyzer: an abstract
CommentSource capability and its Async PRAW implementation, which reads a
user's most recent public comments.
"""

import os
from abc import ABC, abstractmethod
from typing import List, Optional

import asyncpraw
import structlog

from reddit_psychiatrist.models.analysis_models import Comment, CommentBatch

logger = structlog.get_logger()

# Reddit API policy requires a descriptive user agent on every request
DEFAULT_USER_AGENT = "python:reddit-psychiatrist:v1.0 (comment history analyzer)"


class RedditAPIError(Exception):
    """Raised for any failure talking to the Reddit API.

    Network errors, non-success statuses, unknown users and undecodable payloads
    all surface as this one error; callers do not distinguish between them.
    """
    pass


class CommentSource(ABC):
    """Capability: fetch a user's public comments."""

    @abstractmethod
    async def get_user_comments(self, username: str, limit: int) -> CommentBatch:
        """Return up to `limit` comments by `username`, newest first.

        Raises:
            RedditAPIError: If the comments could not be retrieved
        """

    async def close(self) -> None:
        """Release network resources. No-op by default."""


async def get_reddit_client() -> asyncpraw.Reddit:
    """Initialize and return an Async PRAW Reddit client.

    Reads authentication credentials from environment variables:
    - REDDIT_CLIENT_ID: Reddit application client ID
    - REDDIT_CLIENT_SECRET: Reddit application client secret
    - REDDIT_USER_AGENT: User agent string (optional, defaults to DEFAULT_USER_AGENT)

    Returns:
        asyncpraw.Reddit: Configured read-only Reddit client instance

    Raises:
        ValueError: If the client ID or secret is missing or empty
        RedditAPIError: If Async PRAW fails to initialize

    Example:
        >>> client = await get_reddit_client()
        >>> redditor = await client.redditor("spez")
    """
    missing_vars = []

    client_id = os.environ.get('REDDIT_CLIENT_ID', '').strip()
    client_secret = os.environ.get('REDDIT_CLIENT_SECRET', '').strip()
    user_agent = os.environ.get('REDDIT_USER_AGENT', '').strip() or DEFAULT_USER_AGENT

    if not client_id:
        missing_vars.append('REDDIT_CLIENT_ID')
    if not client_secret:
        missing_vars.append('REDDIT_CLIENT_SECRET')

    if missing_vars:
        error_msg = f"Missing required environment variable(s): {', '.join(missing_vars)}"
        logger.error("reddit_client_init_failed", missing_vars=missing_vars)
        raise ValueError(error_msg)

    try:
        reddit = asyncpraw.Reddit(
            client_id=client_id,
            client_secret=client_secret,
            user_agent=user_agent
        )

        logger.info("reddit_client_initialized", user_agent=user_agent)
        return reddit

    except Exception as e:
        logger.error(
            "reddit_authentication_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise RedditAPIError(f"Reddit API unavailable: {str(e)}") from e


class AsyncPrawCommentSource(CommentSource):
    """Comment source backed by an Async PRAW client.

    The client is long-lived and shared by every analysis running in the
    process; this class keeps no per-request state.

    Example:
        >>> source = AsyncPrawCommentSource(await get_reddit_client())
        >>> comments = await source.get_user_comments("spez", limit=200)
        >>> print(comments[0].subreddit, comments[0].body)
    """

    def __init__(self, reddit: asyncpraw.Reddit):
        self.reddit = reddit

    async def get_user_comments(self, username: str, limit: int) -> CommentBatch:
        """Fetch up to `limit` of the user's newest comments.

        Args:
            username: Reddit username, without the u/ prefix
            limit: Maximum number of comments to return

        Returns:
            Tuple of Comment in listing order (newest first)

        Raises:
            RedditAPIError: On any Async PRAW or network failure, including
                unknown or suspended users
        """
        try:
            redditor = await self.reddit.redditor(username)
            comments: List[Comment] = []

            async for item in redditor.comments.new(limit=limit):
                comments.append(Comment(
                    subreddit=item.subreddit.display_name,
                    body=item.body,
                    permalink=item.permalink,
                    score=item.score,
                ))
                if len(comments) >= limit:
                    break

            logger.info(
                "user_comments_fetched",
                username=username,
                requested_limit=limit,
                fetched_count=len(comments)
            )
            return tuple(comments)

        except Exception as e:
            logger.error(
                "user_comments_fetch_failed",
                username=username,
                limit=limit,
                error=str(e),
                error_type=type(e).__name__
            )
            raise RedditAPIError(f"Reddit API request failed for u/{username}: {str(e)}") from e

    async def close(self) -> None:
        await self.reddit.close()
