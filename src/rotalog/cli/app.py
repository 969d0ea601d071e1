from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Bootstraps diagnostics, builds the configured handler and pipes stdin into
it one record per line. The handler is always destroyed on exit so that
every line read is on disk before the process returns.
"""

import logging
import sys
from typing import Iterable, List, Optional

from rotalog.cli import args as cli_args
from rotalog.config import create_handler
from rotalog.diagnostics import configure_diagnostics
from rotalog.errors import ConfigurationError, InvalidLevelError
from rotalog.levels import resolve_level
from rotalog.record import LogRecord

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SETUP_ERROR = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, stdin: Optional[Iterable[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.
        stdin: Optional line source. Defaults to sys.stdin.

    Returns:
        int: Process exit code (0 success, 2 setup error, 130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Diagnostics bootstrap
    configure_diagnostics("DEBUG" if args.debug else "WARNING")

    # 3. Handler construction and setup
    try:
        record_level = resolve_level(args.record_level)
        handler = create_handler(cli_args.args_to_config(args))
        handler.setup()
    except (ConfigurationError, InvalidLevelError, OSError) as e:
        logger.debug("Handler setup failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR

    logger.debug(f"Piping stdin into {handler!r}")

    # 4. Streaming phase
    source = stdin if stdin is not None else sys.stdin
    count = 0
    try:
        for line in source:
            handler.handle(
                LogRecord(line.rstrip("\r\n"), level=record_level, logger_name=args.logger_name)
            )
            count += 1
    except KeyboardInterrupt:
        print("Interrupted; flushing pending records.", file=sys.stderr)
        return EXIT_INTERRUPTED
    finally:
        handler.destroy()
        logger.debug(f"Processed {count} lines; dropped={handler.dropped_records}")

    if handler.last_error is not None:
        print(f"WARNING: last write error: {handler.last_error}", file=sys.stderr)
    return EXIT_OK
