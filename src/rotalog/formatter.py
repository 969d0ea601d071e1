from __future__ import annotations

"""
Record Formatting.

A Formatter turns a LogRecord into its display string, either from a
template with {placeholder} fields or from a caller-supplied callable.
Formatting never raises: unresolved placeholders are left literal and a
failing callable degrades to the default template.
"""

import logging
import re
from typing import Any, Callable, Dict, Optional, Union

from rotalog.record import LogRecord

logger = logging.getLogger(__name__)

FormatterFn = Callable[[LogRecord], str]
FormatterLike = Union[str, FormatterFn, "Formatter", None]

DEFAULT_FORMAT: str = "{levelName} {msg}"

_PLACEHOLDER_RE = re.compile(r"{(\S+?)}")


class Formatter:
    """
    Render records through a template string or a callable.

    Template placeholders resolve against the record fields (msg, args,
    level, levelName, datetime, loggerName) and then against record.extra.
    """

    def __init__(self, fmt: Union[str, FormatterFn, None] = None) -> None:
        if fmt is None:
            fmt = DEFAULT_FORMAT
        if not isinstance(fmt, str) and not callable(fmt):
            raise TypeError(
                f"Formatter expects a template string or a callable, got {type(fmt).__name__}."
            )
        self._fmt = fmt

    @property
    def fmt(self) -> Union[str, FormatterFn]:
        return self._fmt

    def format(self, record: LogRecord) -> str:
        """
        Produce the display string for a record.

        Args:
            record: The record to render.

        Returns:
            str: Formatted message without a line terminator.
        """
        if isinstance(self._fmt, str):
            return render_template(self._fmt, record)

        try:
            return str(self._fmt(record))
        except Exception as e:
            logger.warning(f"Formatter callable failed ({e!r}); using default template.")
            return render_template(DEFAULT_FORMAT, record)


# -----------------------------------------------------------------------------
# PUBLIC HELPERS
# -----------------------------------------------------------------------------

def as_formatter(fmt: FormatterLike) -> Formatter:
    """Coerce a template, callable, Formatter or None into a Formatter."""
    if isinstance(fmt, Formatter):
        return fmt
    return Formatter(fmt)


def render_template(template: str, record: LogRecord) -> str:
    """
    Substitute {placeholder} fields of a template from a record.

    Missing or None values leave the placeholder untouched.
    """
    values = _template_values(record)

    def _substitute(match: "re.Match[str]") -> str:
        value = values.get(match.group(1))
        if value is None:
            return match.group(0)
        try:
            return str(value)
        except Exception:
            return match.group(0)

    return _PLACEHOLDER_RE.sub(_substitute, template)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _template_values(record: LogRecord) -> Dict[str, Optional[Any]]:
    values: Dict[str, Optional[Any]] = dict(record.extra)
    values.update({
        "msg": record.msg,
        "args": list(record.args) if record.args else None,
        "level": int(record.level),
        "levelName": record.level_name,
        "datetime": record.datetime,
        "loggerName": record.logger_name or None,
    })
    return values
