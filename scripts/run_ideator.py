# scripts/run_ideator.py
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Iterable

from rich.console import Console

from fair_project_ideator.core.controller import IdeatorController
from fair_project_ideator.core.store import StateStore
from fair_project_ideator.llm_providers import create_service
from fair_project_ideator.ui import ConsoleRenderer, InteractiveSession
from fair_project_ideator.utils import configure_logging, get_logger


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Brainstorm science fair projects for a topic and plan the one you pick.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--topic",
        help="Start brainstorming this topic right away instead of prompting for one.",
    )
    source.add_argument(
        "--load",
        type=Path,
        help="Open a previously saved project file instead of brainstorming.",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Override the Gemini model used for every request.",
    )
    parser.add_argument(
        "--no-grounding",
        action="store_true",
        help="Disable Google Search grounding for the brainstorm request.",
    )
    parser.add_argument(
        "--export-dir",
        type=Path,
        default=None,
        help="Directory where ':save' writes project files.",
    )
    return parser.parse_args(list(argv))


async def run(args: argparse.Namespace) -> int:
    console = Console()
    store = StateStore()
    service = create_service(
        "gemini",
        model=args.model,
        enable_search_grounding=False if args.no_grounding else None,
    )
    controller = IdeatorController(store, service, exports_dir=args.export_dir)
    store.set_renderer(ConsoleRenderer(console))
    store.merge()

    session = InteractiveSession(controller, console=console)
    return await session.run(topic=args.topic, load=args.load)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging()
    logger = get_logger(__name__)

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130
    except Exception as exc:  # pragma: no cover - top-level guard
        logger.error("ideator.cli.runtime_error", error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
