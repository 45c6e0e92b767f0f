"""
Tests for the Reddit comment source.

Behavioral tests verifying Async PRAW client initialization and the mapping
of a user's comment listing into Comment objects.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from reddit_psychiatrist.integrations.reddit import (
    DEFAULT_USER_AGENT,
    AsyncPrawCommentSource,
    CommentSource,
    RedditAPIError,
    get_reddit_client,
)
from reddit_psychiatrist.models.analysis_models import Comment


def _mock_comment(subreddit, body, permalink="/r/x/comments/1", score=1):
    comment = MagicMock()
    comment.subreddit.display_name = subreddit
    comment.body = body
    comment.permalink = permalink
    comment.score = score
    return comment


def _mock_reddit(comments, fail_after=None):
    """Build a mock Reddit client whose redditor yields `comments`."""
    mock_reddit = MagicMock()
    mock_redditor = MagicMock()
    mock_reddit.redditor = AsyncMock(return_value=mock_redditor)
    mock_reddit.close = AsyncMock()

    # comments.new() returns an async iterator directly (not a coroutine)
    async def async_iter(limit=None):
        for i, comment in enumerate(comments[:limit]):
            if fail_after is not None and i >= fail_after:
                raise Exception("received 500 HTTP response")
            yield comment

    mock_redditor.comments.new = MagicMock(side_effect=lambda limit=None: async_iter(limit))
    return mock_reddit, mock_redditor


class TestAsyncPRAWInitialization:
    """Test Async PRAW client initialization."""

    @pytest.mark.asyncio
    async def test_client_initializes_with_credentials(self):
        with patch.dict('os.environ', {
            'REDDIT_CLIENT_ID': 'test_client_id',
            'REDDIT_CLIENT_SECRET': 'test_secret',
            'REDDIT_USER_AGENT': 'test_agent/1.0'
        }):
            with patch('asyncpraw.Reddit') as mock_reddit:
                client = await get_reddit_client()

                assert client is mock_reddit.return_value
                mock_reddit.assert_called_once_with(
                    client_id='test_client_id',
                    client_secret='test_secret',
                    user_agent='test_agent/1.0'
                )

    @pytest.mark.asyncio
    async def test_default_user_agent_when_unset(self):
        """An identifying user agent is always sent."""
        with patch.dict('os.environ', {
            'REDDIT_CLIENT_ID': 'id',
            'REDDIT_CLIENT_SECRET': 'secret',
        }, clear=True):
            with patch('asyncpraw.Reddit') as mock_reddit:
                await get_reddit_client()

                assert mock_reddit.call_args[1]['user_agent'] == DEFAULT_USER_AGENT

    @pytest.mark.asyncio
    @pytest.mark.parametrize('missing_var', ['REDDIT_CLIENT_ID', 'REDDIT_CLIENT_SECRET'])
    async def test_missing_credential_raises_clear_error(self, missing_var):
        env = {'REDDIT_CLIENT_ID': 'id', 'REDDIT_CLIENT_SECRET': 'secret'}
        env[missing_var] = ''

        with patch.dict('os.environ', env, clear=True):
            with pytest.raises(ValueError, match=missing_var):
                await get_reddit_client()

    @pytest.mark.asyncio
    async def test_praw_init_failure_raises_reddit_api_error(self):
        with patch.dict('os.environ', {'REDDIT_CLIENT_ID': 'id', 'REDDIT_CLIENT_SECRET': 'secret'}):
            with patch('asyncpraw.Reddit', side_effect=Exception("bad config")):
                with pytest.raises(RedditAPIError, match="bad config"):
                    await get_reddit_client()


class TestGetUserComments:
    """Test fetching a user's comments."""

    def test_is_a_comment_source(self):
        assert isinstance(AsyncPrawCommentSource(MagicMock()), CommentSource)

    @pytest.mark.asyncio
    async def test_maps_listing_to_comments_in_order(self):
        mock_reddit, _ = _mock_reddit([
            _mock_comment("AskPhysics", "Entropy always wins.", "/r/AskPhysics/c/1", 12),
            _mock_comment("webdev", "Just use a <table>.", "/r/webdev/c/2", -3),
        ])
        source = AsyncPrawCommentSource(mock_reddit)

        comments = await source.get_user_comments("some_user", limit=200)

        assert comments == (
            Comment("AskPhysics", "Entropy always wins.", "/r/AskPhysics/c/1", 12),
            Comment("webdev", "Just use a <table>.", "/r/webdev/c/2", -3),
        )
        mock_reddit.redditor.assert_awaited_once_with("some_user")

    @pytest.mark.asyncio
    async def test_passes_limit_to_listing(self):
        mock_reddit, mock_redditor = _mock_reddit([_mock_comment("s", str(i)) for i in range(10)])
        source = AsyncPrawCommentSource(mock_reddit)

        comments = await source.get_user_comments("some_user", limit=3)

        assert len(comments) == 3
        mock_redditor.comments.new.assert_called_once_with(limit=3)

    @pytest.mark.asyncio
    async def test_user_with_no_comments_returns_empty_batch(self):
        mock_reddit, _ = _mock_reddit([])
        source = AsyncPrawCommentSource(mock_reddit)

        assert await source.get_user_comments("lurker", limit=200) == ()

    @pytest.mark.asyncio
    async def test_listing_failure_raises_reddit_api_error(self):
        """Any failure mid-listing is a RedditAPIError; no partial batch."""
        mock_reddit, _ = _mock_reddit([_mock_comment("s", "a"), _mock_comment("s", "b")], fail_after=1)
        source = AsyncPrawCommentSource(mock_reddit)

        with pytest.raises(RedditAPIError, match="ghost_user_404"):
            await source.get_user_comments("ghost_user_404", limit=200)

    @pytest.mark.asyncio
    async def test_redditor_lookup_failure_raises_reddit_api_error(self):
        mock_reddit = MagicMock()
        mock_reddit.redditor = AsyncMock(side_effect=Exception("received 404 HTTP response"))
        source = AsyncPrawCommentSource(mock_reddit)

        with pytest.raises(RedditAPIError, match="received 404 HTTP response"):
            await source.get_user_comments("ghost_user_404", limit=200)

    @pytest.mark.asyncio
    async def test_close_closes_reddit_client(self):
        mock_reddit, _ = _mock_reddit([])
        source = AsyncPrawCommentSource(mock_reddit)

        await source.close()

        mock_reddit.close.assert_awaited_once()
