"""
External integrations for Reddit Psychiatrist.

This module provides interfaces to external services:
- Reddit API (Async PRAW for a user's public comment history)
- OpenAI API (chat completions for interests and personality summary)
"""
