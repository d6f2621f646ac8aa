"""
Function tracing decorator.

Logs scope entry and exit (VERBOSE, bodies "Entry"/"Exit") around each
call of the decorated function, through the same dispatch path as every
other log call. The recorded code location is the decorated function's
own definition, not the wrapper.
"""

import functools

from .facade import log_message
from .message import CodeLocation, CodeLogMessage
from .severity import VERBOSE


def traced(func=None, *, channels=None, manager=None):
    """Decorator to log entry to and exit from a function.

    Usable bare (``@traced``) or with arguments
    (``@traced(channels=[...])``). Exit is logged even when the call
    raises; the exception still propagates.
    """
    if func is None:
        return functools.partial(traced, channels=channels, manager=manager)

    code = func.__code__
    location = CodeLocation.from_path(code.co_filename, func.__qualname__,
                                      code.co_firstlineno)

    def _log(body):
        log_message(CodeLogMessage(VERBOSE, body, location), channels, manager)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        _log("Entry")
        try:
            return func(*args, **kwargs)
        finally:
            _log("Exit")

    return wrapper
