from __future__ import annotations

"""
Error Taxonomy.

Exceptions raised synchronously at construction or setup time. Steady-state
logging calls never raise; background write failures are reported through
the handler's error callback instead. An already existing target under
mode "x" is signalled with the builtin FileExistsError.
"""


class InvalidLevelError(ValueError):
    """Raised when a level name or rank is not one of the registered levels."""


class ConfigurationError(ValueError):
    """Raised when a handler configuration cannot be honoured."""
