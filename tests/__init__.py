"""
Test Suite for Reddit Psychiatrist

Test Organization:
- test_prompts.py: System prompts and transcript serialization
- test_ai_parsing.py: Interest and summary response parsing
- test_analyzer.py: Analysis orchestration, failure propagation, deadlines
- test_reddit_client.py: Async PRAW comment source
- test_ai_client.py: OpenAI chat client and cost tracking
- test_config.py: AnalyzerConfig defaults, env overrides, .env loading
- test_api.py: JSON endpoint, HTML form, health check, lifespan
- test_cli.py: Command-line entry point
- utils/test_errors.py: Error taxonomy
- utils/test_logging_config.py: structlog JSON logging

Run all tests:
    python -m pytest tests/ -v

Run specific test file:
    python -m pytest tests/test_analyzer.py -v
"""
