"""CLI entrypoint: run a strategy, inspect collected data, or serve the API."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from aggregator import print_summary
from config import get_settings
from models import StrategyRequest
from orchestrator.service import build_orchestrator
from utils.exceptions import ConfigurationError, GenerationError
from utils.logger import setup_logger


logger = logging.getLogger(__name__)


def _add_request_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--audience", required=True, help="Target audience description")
    parser.add_argument("--goal", required=True, help="Primary goal")
    parser.add_argument(
        "--channel",
        dest="channels",
        action="append",
        default=[],
        help="Competitor YouTube channel (repeatable)",
    )
    parser.add_argument(
        "--subreddit",
        dest="subreddits",
        action="append",
        default=[],
        help="Relevant subreddit without r/ (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Content Strategy Engine CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    strategy = sub.add_parser("strategy", help="Collect data and generate a strategy")
    _add_request_args(strategy)
    strategy.add_argument(
        "--prompt-only",
        action="store_true",
        help="Print the assembled prompt instead of calling the generator",
    )

    collect = sub.add_parser("collect", help="Collect data only and print a summary")
    _add_request_args(collect)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind host")
    serve.add_argument("--port", type=int, default=8765, help="Bind port")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload")

    return parser


def _request_from_args(args: argparse.Namespace) -> StrategyRequest:
    return StrategyRequest(
        audience=args.audience,
        goal=args.goal,
        competitor_channels=list(args.channels),
        communities=list(args.subreddits),
    )


async def _run(args: argparse.Namespace) -> str:
    request = _request_from_args(args)
    async with build_orchestrator(get_settings()) as orchestrator:
        if args.command == "collect":
            collected = await orchestrator.collect(request)
            print_summary(collected)
            return ""
        if args.prompt_only:
            return await orchestrator.build_prompt(request)
        return await orchestrator.run(request)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=get_settings().log_level)

    if args.command == "serve":
        uvicorn.run("webapp.app:app", host=args.host, port=args.port, reload=args.reload)
        return 0

    try:
        output = asyncio.run(_run(args))
    except ConfigurationError as exc:
        logger.error(f"{exc.message} Missing: {', '.join(exc.missing)}")
        return 2
    except ValidationError as exc:
        logger.error(f"Invalid strategy request: {exc}")
        return 2
    except GenerationError as exc:
        logger.error(str(exc))
        return 1

    if output:
        sys.stdout.write(output.rstrip("\n") + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
