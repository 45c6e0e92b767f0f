"""
Shared pytest fixtures for Reddit Psychiatrist tests.

These fixtures provide in-memory stand-ins for the two external collaborators
(comment source and text-generation client) plus sample comment data. The
fakes record every call so tests can verify what was (and was not) requested.
"""

import asyncio

import pytest

from reddit_psychiatrist.analyzer import RedditPsychoanalyzer
from reddit_psychiatrist.config import AnalyzerConfig
from reddit_psychiatrist.integrations.openai_client import TextGenerationClient
from reddit_psychiatrist.integrations.reddit import CommentSource
from reddit_psychiatrist.models.analysis_models import ChatResponse, Comment


class FakeCommentSource(CommentSource):
    """Comment source returning canned comments, or raising a canned error."""

    def __init__(self, comments=(), error=None, delay=0.0):
        self.comments = tuple(comments)
        self.error = error
        self.delay = delay
        self.calls = []
        self.closed = False

    async def get_user_comments(self, username, limit):
        self.calls.append((username, limit))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.comments

    async def close(self):
        self.closed = True


class FakeTextClient(TextGenerationClient):
    """Text client answering each call with the next canned response.

    Each entry of `responses` is a ChatResponse, a plain string (wrapped as a
    single-choice response) or an exception instance to raise. `delays` gives an
    optional sleep per call.
    """

    def __init__(self, responses=(), delays=()):
        self.responses = list(responses)
        self.delays = list(delays)
        self.requests = []
        self.closed = False

    async def chat(self, request):
        index = len(self.requests)
        self.requests.append(request)
        if index < len(self.delays) and self.delays[index]:
            await asyncio.sleep(self.delays[index])
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return ChatResponse(choices=(response,))
        return response

    async def close(self):
        self.closed = True


@pytest.fixture
def sample_comments():
    """Three comments from different subreddits, in retrieval order."""
    return (
        Comment(subreddit="AskPhysics", body="Entropy always wins.", permalink="/r/AskPhysics/c/1", score=12),
        Comment(subreddit="webdev", body="Just use a <table>.", permalink="/r/webdev/c/2", score=-3),
        Comment(subreddit="slowcooking", body="Low and slow\nfor 8 hours.", permalink="/r/slowcooking/c/3", score=40),
    )


@pytest.fixture
def config():
    """Default analysis config with no deadline."""
    return AnalyzerConfig(timeout_seconds=None)


@pytest.fixture
def make_analyzer(config):
    """Factory building an analyzer around fake collaborators.

    Returns (analyzer, source, text_client).
    """
    def _make(comments=(), source_error=None, responses=(), delays=(), source_delay=0.0, analyzer_config=None):
        source = FakeCommentSource(comments, error=source_error, delay=source_delay)
        text_client = FakeTextClient(responses, delays=delays)
        analyzer = RedditPsychoanalyzer(source, text_client, analyzer_config or config)
        return analyzer, source, text_client

    return _make
