"""
Exceptions raised by simple_logging.

Only construction of a sink can fail in a way the caller must handle
(``LocationCreateError``). Append-time failures are raised by locations
but always caught by the owning channel, which reports them instead of
letting them reach the code that called ``log``.
"""


class SimpleLoggingError(Exception):
    """Base class for all simple_logging errors."""


class LocationCreateError(SimpleLoggingError):
    """A file sink could not be created; the channel is not created either."""

    def __init__(self, message, path):
        super().__init__(message)
        self.path = path


class DirectoryCreateError(LocationCreateError):
    """The log file's parent directory could not be created."""


class FileCreateError(LocationCreateError):
    """The log file did not exist and could not be created."""


class FileOpenError(LocationCreateError):
    """The log file exists but could not be opened for appending."""


class LocationAppendError(SimpleLoggingError):
    """A sink failed to accept a rendered line after construction."""


class LocationClosedError(LocationAppendError):
    """Append was attempted on a location that has been closed."""
