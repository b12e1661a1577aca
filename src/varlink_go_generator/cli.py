"""Command-line interface for generating Go bindings for *.varlink interface descriptions.

Notes:
    - The outputs of this generator import github.com/varlink/go/varlink.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from varlink_go_generator.run import run

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(description="Generate Go bindings for a varlink interface description.")

    parser.add_argument(
        "file",
        type=str,
        help="path to the *.varlink file; the Go file is written next to it and named after the interface.",
    )

    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default="",
        help="directory to write the generated Go file to; defaults to alongside the interface file if omitted.",
    )

    parser.add_argument(
        "--no-gofmt",
        dest="skip_gofmt",
        default=False,
        action="store_true",
        help="write the generated source without passing it through gofmt.",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the binding generator.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    logging.basicConfig(level=logging.INFO)

    parser = setup_parser()
    args = parser.parse_args(argv)

    logger.debug("Generating bindings for '%s'", args.file)
    return run(args)
