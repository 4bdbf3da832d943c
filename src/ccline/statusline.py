#!/usr/bin/env python3

import argparse
import json
import sys

from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .config.defaults import get_default_config
from .config.loader import dump_config, load_config
from .renderer import StatusLineGenerator
from .segments.collector import collect_all
from .types import InputData
from .utils.debug import debug_log


class InputError(Exception):
    """Raised when the stdin payload is not a valid statusline input."""


def parse_input_data(raw: Optional[str] = None) -> InputData:
    """Parse the JSON payload from stdin.

    Args:
        raw: Payload text; read from stdin when None

    Returns:
        Validated InputData

    Raises:
        InputError: If the payload is not valid JSON or is missing fields
    """
    if raw is None:
        raw = sys.stdin.read()

    try:
        return InputData.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise InputError(f"invalid JSON input: {e}") from e
    except ValidationError as e:
        raise InputError(f"invalid statusline input: {e}") from e


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured argument parser
    """
    from . import __version__

    parser = argparse.ArgumentParser(
        prog="ccline",
        description="Claude Code statusline - model, directory, git and context usage",
        epilog="When no arguments are provided, reads JSON from stdin and outputs the statusline.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="PATH",
        help="Read configuration from PATH instead of the default location",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the default configuration as YAML and exit",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point: stdin JSON in, one status line out."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.print_config:
        print(dump_config(get_default_config()), end="")
        return

    try:
        input_data = parse_input_data()
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    transcript_path = input_data.transcript_path
    debug_log("=== SESSION START ===", transcript_path=transcript_path)
    debug_log(
        f"Working Directory: {input_data.workspace.current_dir}",
        transcript_path=transcript_path,
    )
    debug_log(f"Model ID: {input_data.model.id}", transcript_path=transcript_path)

    config = load_config(args.config)
    segments = collect_all(config, input_data)

    debug_log(
        f"Collected segments: {[c.id.value for c, _ in segments]}",
        transcript_path=transcript_path,
    )

    print(StatusLineGenerator(config).generate(segments))


if __name__ == "__main__":
    main()
