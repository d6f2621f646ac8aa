"""Convenience log functions.

One call per severity, plus scope entry/exit and error forwarding. Each
captures the code location of its caller and routes through
``LogManager.log`` (the only code path that dispatches).

Every function accepts:
    channels:   explicit channel list (default: the manager's defaults)
    manager:    LogManager to use (default: ``get_manager()``)
    stacklevel: which caller's location to record; raise it by one for
                every wrapper you put around these functions
"""

from typing import Any, Callable, Mapping, Optional, TypeVar

from .loggable import combine_text, to_log_text
from .manager import get_manager
from .message import CodeLocation, CodeLogMessage, RawLogMessage
from .severity import DEBUG, ERROR, FATAL, INFO, VERBOSE, WARNING, Severity

T = TypeVar('T')

# Between an error's text and the note attached to it
ERROR_NOTE_SEPARATOR = " \t"


def log_message(message, channels=None, manager=None):
    """Log a ready-made message. Returns the message."""
    if manager is None:
        manager = get_manager()
    return manager.log(message, channels)


def log(severity: Severity, loggable: Any, *, channels=None, manager=None,
        stacklevel: int = 1):
    """Log ``loggable`` at ``severity``, with the caller's code location."""
    message = CodeLogMessage(
        severity=severity,
        body=to_log_text(loggable),
        code_location=CodeLocation.capture(stacklevel + 1),
    )
    return log_message(message, channels, manager)


def log_verbose(loggable, *, channels=None, manager=None, stacklevel=1):
    return log(VERBOSE, loggable, channels=channels, manager=manager,
               stacklevel=stacklevel + 1)


def log_debug(loggable, *, channels=None, manager=None, stacklevel=1):
    return log(DEBUG, loggable, channels=channels, manager=manager,
               stacklevel=stacklevel + 1)


def log_info(loggable, *, channels=None, manager=None, stacklevel=1):
    return log(INFO, loggable, channels=channels, manager=manager,
               stacklevel=stacklevel + 1)


def log_warning(loggable, *, channels=None, manager=None, stacklevel=1):
    return log(WARNING, loggable, channels=channels, manager=manager,
               stacklevel=stacklevel + 1)


def log_fatal(loggable, *, channels=None, manager=None, stacklevel=1):
    return log(FATAL, loggable, channels=channels, manager=manager,
               stacklevel=stacklevel + 1)


def log_error(loggable, note: Any = None, *, channels=None, manager=None,
              stacklevel=1):
    """Log at ERROR severity.

    ``loggable`` is usually an exception. A ``note`` is appended after
    its text, separated by ERROR_NOTE_SEPARATOR.
    """
    text = to_log_text(loggable)
    if note is not None:
        text = combine_text(text, note, ERROR_NOTE_SEPARATOR)
    return log(ERROR, text, channels=channels, manager=manager,
               stacklevel=stacklevel + 1)


def log_raw(severity: Severity, loggable: Any,
            additional_parameters: Optional[Mapping[str, Any]] = None, *,
            channels=None, manager=None, stacklevel=1):
    """Log a RawLogMessage, the shape custom raw sinks accept."""
    message = RawLogMessage(
        severity=severity,
        body=to_log_text(loggable),
        code_location=CodeLocation.capture(stacklevel + 1),
        additional_parameters=additional_parameters,
    )
    return log_message(message, channels, manager)


def log_entry(*, channels=None, manager=None, stacklevel=1):
    """Log that the current scope was entered (VERBOSE)."""
    return log(VERBOSE, "Entry", channels=channels, manager=manager,
               stacklevel=stacklevel + 1)


def log_exit(*, channels=None, manager=None, stacklevel=1):
    """Log that the current scope was exited (VERBOSE)."""
    return log(VERBOSE, "Exit", channels=channels, manager=manager,
               stacklevel=stacklevel + 1)


def log_error_if_raises(operation: Callable[[], T], backup: T, *,
                        note: Any = None, channels=None, manager=None,
                        stacklevel=1) -> T:
    """Run ``operation``; if it raises, log the error and return ``backup``.

    Only ``Exception`` is caught; KeyboardInterrupt and SystemExit
    still propagate.

    Usage::

        port = log_error_if_raises(lambda: int(raw_port), 8080,
                                   note="bad PORT setting, using 8080")
    """
    try:
        return operation()
    except Exception as error:
        log_error(error, note, channels=channels, manager=manager,
                  stacklevel=stacklevel + 1)
        return backup
