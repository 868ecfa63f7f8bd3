"""
Command-line check of Phi credential reward tiers.

Usage:
    phi-rewards <address>
    python cli.py <address> [-v]

The RPC endpoint comes from CYBER_RPC (a .env file is honoured).
"""
import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from config import load_config
from credentials import CredentialChecker, normalize_address
from rewards import classify, format_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phi-rewards",
        description="Check which Phi credential reward tiers an address qualifies for.",
    )
    parser.add_argument("address", help="account address to check (0x...)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def resolve_log_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    # getLevelName maps known names to ints and anything else to a string
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "WARNING").strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=resolve_log_level(verbose),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    requested = os.getenv("LOG_LEVEL")
    if requested and not isinstance(logging.getLevelName(requested.strip().upper()), int):
        logger.warning("Unknown LOG_LEVEL %r, using WARNING", requested)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        address = normalize_address(args.address)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    checker = CredentialChecker(load_config())
    try:
        report = asyncio.run(classify(address, checker))
    except Exception as e:
        logger.debug("Classification failed", exc_info=True)
        print(f"Error checking credentials: {e}", file=sys.stderr)
        return 1

    print(format_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
