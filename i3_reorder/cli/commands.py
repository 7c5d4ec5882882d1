"""CLI for i3-reorder.

Examples:
    i3-reorder --next                 # focus next workspace on this output
    i3-reorder --previous --window    # carry the focused window one workspace left
    i3-reorder --next --workspace     # swap this workspace with the next one
    i3-reorder --start --workspace    # make this workspace the first one
    i3-reorder --monitor              # focus the visible workspace of the other output
    i3-reorder --collapse             # renumber every output densely from 0
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..core.config import load_config
from ..core.i3_client import I3Client
from ..errors import ErrorCode, InvalidIntentError, ReorderError
from ..models import Intent, ReorderRequest
from ..services.reorder import WorkspaceReorderer
from .dryrun import DryRunResult
from .logging_config import LOGGER_NAME, setup_logging

logger = logging.getLogger(LOGGER_NAME)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="i3-reorder",
        description="Navigate and reorder i3/sway workspaces without id collisions",
    )

    direction_group = parser.add_argument_group("direction (pick one)")
    direction_group.add_argument(
        "-n",
        "--next",
        action="store_true",
        help="Go to the next workspace on this output",
    )
    direction_group.add_argument(
        "-p",
        "--previous",
        action="store_true",
        help="Go to the previous workspace on this output",
    )
    direction_group.add_argument(
        "--start",
        action="store_true",
        help="Prepend to the start",
    )
    direction_group.add_argument(
        "--end",
        action="store_true",
        help="Append to the end",
    )

    parser.add_argument(
        "-m",
        "--monitor",
        action="store_true",
        help="Move between monitors rather than between workspaces",
    )
    parser.add_argument(
        "--window",
        action="store_true",
        help="Move the focused window instead of just the focus",
    )
    parser.add_argument(
        "--workspace",
        action="store_true",
        help="Move the active workspace",
    )
    parser.add_argument(
        "--collapse",
        action="store_true",
        help="Re-order all existing workspaces, starting at 0. Maintains relative positions",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the commands that would be sent without sending them",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    parser.add_argument(
        "-s",
        "--socket",
        metavar="PATH",
        help="i3/sway IPC socket path (default: auto-detect)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="FILE",
        help="Config file (default: ~/.config/i3-reorder/config.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug output, including every IPC command",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug output with source line numbers",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"i3-reorder {__version__}",
    )

    return parser


def build_request(args: argparse.Namespace) -> ReorderRequest:
    """Turn parsed flags into a ReorderRequest.

    Raises:
        InvalidIntentError: More than one direction, or nothing to do
    """
    selected = [
        intent
        for intent, flag in (
            (Intent.NEXT, args.next),
            (Intent.PREVIOUS, args.previous),
            (Intent.JUMP_TO_START, args.start),
            (Intent.JUMP_TO_END, args.end),
        )
        if flag
    ]

    if len(selected) > 1:
        raise InvalidIntentError(
            "Can't combine 'next', 'previous', 'start', or 'end' in the same command"
        )

    if not selected and not args.monitor and not args.collapse:
        raise InvalidIntentError(
            "Must select either 'next', 'previous', 'start', or 'end'",
            code=ErrorCode.MISSING_INTENT,
        )

    return ReorderRequest(
        direction=selected[0] if selected else None,
        monitor=args.monitor,
        window=args.window,
        workspace=args.workspace,
        collapse=args.collapse,
        dry_run=args.dry_run,
    )


def cli_main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run one request.

    Returns:
        Exit code (0 success, 1 runtime error, 2 invalid flags)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, debug=args.debug)

    try:
        request = build_request(args)
    except InvalidIntentError as e:
        logger.error(e.message)
        return EXIT_USAGE

    try:
        config = load_config(args.config)
        socket_path = args.socket or config.socket_path

        with I3Client(socket_path=socket_path) as client:
            result = WorkspaceReorderer(client, request, config).run()
    except ReorderError as e:
        logger.error(e.describe())
        return EXIT_ERROR
    except ValueError as e:
        # Workspace list from the window manager broke a snapshot invariant
        logger.error(f"Invalid workspace state: {e}")
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif request.dry_run:
        print(DryRunResult.from_result(result).format())

    return EXIT_OK


def main() -> None:
    """Console script entry point."""
    sys.exit(cli_main())
