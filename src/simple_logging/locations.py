"""
Channel locations: the sinks a channel writes to.

The set of locations is closed:

    ConsoleLocation               print()'s default destination (stdout)
    StandardOutLocation           sys.stdout
    StandardErrorLocation         sys.stderr
    StandardOutAndErrorLocation   stderr, then stdout
    FileLocation                  a text file, appended to
    CustomLocation                a callback taking the rendered line
    CustomRawLocation             a callback taking the RawLogMessage

Locations never filter; that is the channel's job and happens before a
location is invoked. Writes are serialized (one lock shared by the
console streams, one per file) so that concurrent messages never
interleave within a line.
"""

import sys
import threading
import weakref
from pathlib import Path
from typing import Callable, Optional

from .errors import (
    DirectoryCreateError, FileCreateError, FileOpenError,
    LocationAppendError, LocationClosedError,
)
from .message import (
    DEFAULT_OPTIONS, CodeLocation, RawLogMessage, RenderOptions,
)
from .severity import ERROR

# stdout and stderr usually share one terminal
_console_lock = threading.Lock()

NON_RAW_MESSAGE_MARKER = (
    "<<simple_logging: Attempted to log non-raw message to raw location>>")

# Stands in for the code location of a message that never had one
ERROR_CODE_LOCATION = CodeLocation('error', 'error', 0xBADC0DE)


class ChannelLocation:
    """Base class for every location."""

    def append(self, message, options: RenderOptions = DEFAULT_OPTIONS) -> None:
        """Deliver ``message`` to this sink.

        Raises:
            LocationAppendError: if the sink could not accept the line
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release any resource held by this location. Idempotent."""


def write_console(stream_name: str, line: str) -> None:
    """Write one line to sys.<stream_name> under the console lock."""
    # Resolved at write time so redirected/captured streams are honoured
    stream = getattr(sys, stream_name, None)
    if stream is None:
        # pythonw and detached daemons run without console streams
        raise LocationAppendError(f"No {stream_name} stream to write to")
    try:
        with _console_lock:
            stream.write(line + "\n")
            stream.flush()
    except (OSError, ValueError, AttributeError) as e:
        raise LocationAppendError(f"Could not write to {stream_name}: {e}") from e


class ConsoleLocation(ChannelLocation):
    """The default place print() goes to."""

    def append(self, message, options=DEFAULT_OPTIONS):
        write_console('stdout', message.render(options))

    def __eq__(self, other):
        return type(other) is type(self)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"


class StandardOutLocation(ConsoleLocation):
    """Standard output."""


class StandardErrorLocation(ConsoleLocation):
    """Standard error."""

    def append(self, message, options=DEFAULT_OPTIONS):
        write_console('stderr', message.render(options))


class StandardOutAndErrorLocation(ConsoleLocation):
    """Standard error and standard output, the same line to each."""

    def append(self, message, options=DEFAULT_OPTIONS):
        line = message.render(options)
        write_console('stderr', line)
        write_console('stdout', line)


class FileLocation(ChannelLocation):
    """A text file that receives one rendered line per message.

    Construction makes sure the file can be written: the parent
    directory is created (with intermediates unless
    ``create_intermediates`` is False), the file is created if absent,
    and a handle is opened for appending. Any failure raises a
    ``LocationCreateError`` subclass.

    The handle is released by ``close()``, on leaving a ``with`` block,
    or when the location is garbage collected.
    """

    def __init__(self, path, create_intermediates: bool = True):
        self.path = Path(path)
        self._lock = threading.Lock()

        parent = self.path.parent
        try:
            parent.mkdir(parents=create_intermediates, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(
                f"Could not create log directory {parent}: {e}", self.path) from e

        try:
            self.path.touch(exist_ok=True)
        except OSError as e:
            raise FileCreateError(
                f"Could not create log file {self.path}: {e}", self.path) from e

        try:
            self._file = open(self.path, "a", encoding="utf-8")
        except OSError as e:
            raise FileOpenError(
                f"Could not open log file {self.path} for appending: {e}",
                self.path) from e

        self._finalizer = weakref.finalize(self, self._file.close)

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def append(self, message, options=DEFAULT_OPTIONS):
        line = message.render(options) + "\n"
        with self._lock:
            if self.closed:
                raise LocationClosedError(f"Log file {self.path} is closed")
            try:
                self._file.write(line)
                self._file.flush()
            except OSError as e:
                raise LocationAppendError(
                    f"Could not write to log file {self.path}: {e}") from e

    def close(self):
        """Flush and release the file handle (only the first call does anything)."""
        with self._lock:
            self._finalizer()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self):
        return f"FileLocation({str(self.path)!r})"


class CustomLocation(ChannelLocation):
    """Log to a function, passed the fully-rendered line.

    e.g. ``"2020-11-20 05:26:49.178+0000 ⚠️ This message is a warning"``
    """

    def __init__(self, callback: Callable[[str], object]):
        self.callback = callback

    def append(self, message, options=DEFAULT_OPTIONS):
        self.callback(message.render(options))


class CustomRawLocation(ChannelLocation):
    """Log to a function, passed the RawLogMessage itself.

    Only RawLogMessage carries what a raw sink needs. Any other message
    is a caller mistake that must not crash the caller: a substitute
    RawLogMessage at ERROR severity, with ``ERROR_CODE_LOCATION`` and a
    body holding ``NON_RAW_MESSAGE_MARKER`` plus the original rendered
    line, is sent to ``fallback`` (the console by default) instead.
    """

    def __init__(self, callback: Callable[[RawLogMessage], object],
                 fallback: Optional[ChannelLocation] = None):
        self.callback = callback
        self.fallback = fallback if fallback is not None else ConsoleLocation()

    def append(self, message, options=DEFAULT_OPTIONS):
        if isinstance(message, RawLogMessage):
            self.callback(message)
            return
        substitute = RawLogMessage(
            severity=ERROR,
            body=f"\t {NON_RAW_MESSAGE_MARKER}\t {message.render(options)}",
            code_location=ERROR_CODE_LOCATION,
            timestamp=message.timestamp,
        )
        self.fallback.append(substitute, options)
