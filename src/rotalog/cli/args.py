from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the rotalog tool and translates the
parsed namespace into a HandlerConfig.
"""

import argparse
from typing import Any, Dict

from rotalog.config import DEFAULT_MAX_BACKUP_COUNT, HandlerConfig, build_config_from_dict
from rotalog.handlers.writer import OPEN_MODES
from rotalog.levels import LEVEL_NAMES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the rotalog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="rotalog",
        description="Append lines read from stdin to a log file, rotating it by size.",
    )

    # --- Target ---
    p.add_argument(
        "-f", "--file",
        dest="filename",
        required=True,
        help="Path of the live log file.",
    )
    p.add_argument(
        "--mode",
        choices=OPEN_MODES,
        default="a",
        help="Open mode: append (a), truncate (w) or exclusive create (x).",
    )

    # --- Rotation ---
    p.add_argument(
        "--max-bytes",
        dest="max_bytes",
        type=int,
        default=None,
        help="Rotate before the live file would exceed this size. Disabled if omitted.",
    )
    p.add_argument(
        "--backups",
        dest="max_backup_count",
        type=int,
        default=DEFAULT_MAX_BACKUP_COUNT,
        help="Number of numbered backups to keep when rotating.",
    )

    # --- Records ---
    p.add_argument(
        "--level",
        default="DEBUG",
        help=f"Handler threshold, one of {', '.join(LEVEL_NAMES)}.",
    )
    p.add_argument(
        "--record-level",
        dest="record_level",
        default="INFO",
        help="Level assigned to every line read from stdin.",
    )
    p.add_argument(
        "--format",
        dest="formatter",
        default=None,
        help="Template such as '{datetime} {levelName} {msg}'.",
    )
    p.add_argument(
        "--name",
        dest="logger_name",
        default="",
        help="Value of the {loggerName} placeholder.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Print rotalog's own diagnostics at DEBUG level.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_config(args: argparse.Namespace) -> HandlerConfig:
    """
    Translate the argparse Namespace into a handler configuration.

    Args:
        args: Parsed command-line arguments.

    Returns:
        HandlerConfig: Configuration for the target handler.
    """
    raw: Dict[str, Any] = {
        "filename": args.filename,
        "level": args.level,
        "mode": args.mode,
        "formatter": args.formatter,
        "max_bytes": args.max_bytes,
        "max_backup_count": args.max_backup_count,
    }
    return build_config_from_dict(raw)
