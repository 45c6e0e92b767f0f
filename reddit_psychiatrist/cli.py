#!/usr/bin/env python3
"""Analyze a Reddit user from the command line.

Fetches the user's recent public comments, infers their interests, and prints
a personality summary.

Usage:
    reddit-psychiatrist -u <username> [-k OPENAI_KEY] [-t 60] [--json]

Requires env vars: REDDIT_CLIENT_ID, REDDIT_CLIENT_SECRET
Also requires OPENAI_API_KEY unless -k is given.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

from reddit_psychiatrist.analyzer import create_analyzer
from reddit_psychiatrist.config import AnalyzerConfig, load_dotenv
from reddit_psychiatrist.integrations.reddit import RedditAPIError
from reddit_psychiatrist.models.analysis_models import AnalysisResult
from reddit_psychiatrist.utils.errors import AnalysisError
from reddit_psychiatrist.utils.logging_config import setup_logging


def check_env_vars(api_key: Optional[str]) -> List[str]:
    """Check required environment variables and return list of missing ones."""
    required = ["REDDIT_CLIENT_ID", "REDDIT_CLIENT_SECRET"]
    if not api_key:
        required.append("OPENAI_API_KEY")
    return [v for v in required if not os.environ.get(v, "").strip()]


def format_result(result: AnalysisResult) -> str:
    """Render a result the way it is printed to the terminal."""
    lines = ["", "Personality Summary:", result.summary, "", "Inferred Interests:"]
    lines.extend(f"- {interest}" for interest in result.interests)
    return "\n".join(lines)


async def run_analysis(username: str, api_key: Optional[str], timeout: float) -> AnalysisResult:
    """Build an analyzer, run one analysis under `timeout`, and close the clients."""
    analyzer = await create_analyzer(openai_api_key=api_key, config=AnalyzerConfig.from_env())
    try:
        return await analyzer.analyze(username, timeout=timeout)
    finally:
        await analyzer.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Infer interests and a personality summary from a Reddit user's comments"
    )
    parser.add_argument("-u", "--username", default="", help="Reddit username to analyze (required)")
    parser.add_argument("-k", "--api-key", default="", help="OpenAI API key (can also set OPENAI_API_KEY env var)")
    parser.add_argument("-t", "--timeout", type=float, default=60.0, help="Timeout in seconds for the analysis (default: 60)")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username:
        print("Error: -u <username> is required")
        return 1

    if args.timeout <= 0:
        print("Error: -t <timeout> must be greater than zero")
        return 1

    load_dotenv()
    missing = check_env_vars(args.api_key)
    if missing:
        print(f"Error: Missing environment variables: {', '.join(missing)}")
        print("Set them in your .env file or export them in your shell.")
        return 1

    # Log lines go to logs/psyche.log; the terminal only shows the printed analysis
    setup_logging(log_dir="logs", log_filename="psyche.log", console_level=logging.CRITICAL)

    if not args.json:
        print(f"Analyzing Reddit user: u/{username}")

    try:
        result = asyncio.run(run_analysis(username, args.api_key or None, args.timeout))
    except (AnalysisError, RedditAPIError, ValueError) as e:
        print(f"Analysis failed: {e}")
        return 1

    if args.json:
        print(json.dumps({"username": username, **result.to_dict()}, indent=2))
    else:
        print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
