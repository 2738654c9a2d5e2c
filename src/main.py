# src/main.py - v3
"""CLI entry point.

Usage:
    creatorlens analyze <image> --platform instagram --username handle [options]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from creatorlens.analysis.orchestrator import create_analyzer
from creatorlens.config.settings import ConfigurationError, Settings, load_settings
from creatorlens.core.models import ProfileHints
from creatorlens.logging.logger import setup_logging
from creatorlens.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except (ConfigurationError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        stream=sys.stderr,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def cli() -> None:
    """Console script wrapper."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="creatorlens",
        description=f"creatorlens v{__version__} - cost-aware creator profile analysis",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_analyze = subparsers.add_parser(
        "analyze", help="Analyze a captured profile image",
    )
    p_analyze.add_argument("image", type=Path, help="Path to profile screenshot")
    p_analyze.add_argument("--platform", required=True, help="instagram, tiktok, youtube, ...")
    p_analyze.add_argument("--username", required=True, help="Profile handle")
    p_analyze.add_argument(
        "--followers", type=int, default=0,
        help="Follower count (default: 0)",
    )
    p_analyze.add_argument(
        "--verified", action="store_true",
        help="Profile carries a verification badge",
    )
    p_analyze.add_argument("--website", default=None, help="Website linked from the profile")
    p_analyze.set_defaults(func=_cmd_analyze)

    return parser


async def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    """Run one analysis and print the outcome as JSON."""
    image_path: Path = args.image
    if not image_path.is_file():
        logger.error("Image not found: %s", image_path)
        return 1
    if args.followers < 0:
        logger.error("--followers must be >= 0")
        return 1

    analyzer = create_analyzer(settings)
    outcome = await analyzer.analyze(
        image_path.read_bytes(),
        platform=args.platform,
        username=args.username,
        hints=ProfileHints(
            follower_count=args.followers,
            is_verified=args.verified,
            website=args.website,
        ),
    )
    print(outcome.model_dump_json(indent=2))
    return 0 if outcome.success else 1


if __name__ == "__main__":
    sys.exit(main())
