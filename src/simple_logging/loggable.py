"""
Conversion of arbitrary values into log text.

Anything can be logged. Types that want control over their log text
implement the ``Loggable`` protocol; exceptions can mix in
``LoggableError`` to expose a description and a recovery suggestion.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Loggable(Protocol):
    """Something with its own log text.

    ``log_text`` should not include metadata like the timestamp,
    code location or severity; rendering adds those.
    """

    @property
    def log_text(self) -> str: ...


class LoggableError(Exception):
    """An exception designed to be logged.

    Subclasses set ``error_description`` and/or ``recovery_suggestion``
    (as class attributes or in ``__init__``).
    """
    error_description: Optional[str] = None
    recovery_suggestion: Optional[str] = None

    @property
    def log_text(self) -> str:
        text = self.error_description or ''
        if self.recovery_suggestion:
            text += f"\t-\t{self.recovery_suggestion}"
        return text or str(self)


def to_log_text(value: Any) -> str:
    """Return the text that represents ``value`` in a log line."""
    if isinstance(value, str):
        return value
    if isinstance(value, Loggable):
        return value.log_text
    if isinstance(value, BaseException):
        return str(value) or type(value).__name__
    return str(value)


def combine_text(first: Any, second: Any, separator: str) -> str:
    """Join two loggables; ``first`` always comes before ``second``."""
    return to_log_text(first) + separator + to_log_text(second)
