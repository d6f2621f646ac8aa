"""
Log messages and their rendering.

A message is created fresh for every log call and never changes
afterwards. Three shapes share one rendering path:

    LogMessage       severity + body
    CodeLogMessage   ... + the code location of the log call
    RawLogMessage    ... + code location + optional named parameters,
                     handed as-is to custom raw sinks

Rendered line format:

    <timestamp> <severity-name> [<file>:<line> <function>\\t]<body>

e.g. ``2020-11-20 05:26:49.178+0000 ⚠️ This message is a warning``.
Rendering never performs I/O and is deterministic for a given message
and RenderOptions.
"""

import inspect
import os
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .loggable import to_log_text
from .severity import DEFAULT, Severity, SeverityNameStyle


def now() -> datetime:
    """The current moment as a timezone-aware local datetime."""
    return datetime.now().astimezone()


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` as ``YYYY-MM-DD HH:MM:SS.mmm+HHMM``.

    Naive datetimes are taken to be local time.
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return (moment.strftime('%Y-%m-%d %H:%M:%S')
            + f".{moment.microsecond // 1000:03d}"
            + moment.strftime('%z'))


@dataclass(frozen=True)
class RenderOptions:
    """How a channel renders messages into text.

    Attributes:
        severity_style: Which severity name to print
        show_location: Prefix code-located messages with their location.
            Raw messages always show theirs; plain messages have none.
    """
    severity_style: SeverityNameStyle = SeverityNameStyle.EMOJI
    show_location: bool = False


DEFAULT_OPTIONS = RenderOptions()


@dataclass(frozen=True)
class CodeLocation:
    """A line of code: file base name, function identifier, line number."""
    file_name: str
    function: str
    line: int

    def __str__(self):
        return f"{self.file_name}:{self.line} {self.function}"

    @classmethod
    def from_path(cls, path: str, function: str, line: int) -> 'CodeLocation':
        """Build a location from a full file path, keeping only its base name."""
        return cls(os.path.basename(path), function, line)

    @classmethod
    def capture(cls, stacklevel: int = 1) -> 'CodeLocation':
        """Capture the location of a caller on the current stack.

        ``stacklevel=1`` is the function that called ``capture()``,
        2 is its caller, and so on (same convention as ``warnings.warn``).
        """
        frame = inspect.currentframe()
        try:
            for _ in range(stacklevel):
                if frame.f_back is None:
                    break
                frame = frame.f_back
            code = frame.f_code
            function = getattr(code, 'co_qualname', code.co_name)
            return cls.from_path(code.co_filename, function, frame.f_lineno)
        finally:
            del frame


class _MessageBase:
    """Rendering and combination shared by every message shape."""

    def log_line(self, options: RenderOptions = DEFAULT_OPTIONS) -> str:
        """The message part of the rendered line (after the severity)."""
        return self.body

    def render(self, options: RenderOptions = DEFAULT_OPTIONS) -> str:
        """The entire rendered line, without a trailing newline."""
        return render(self, options)

    def combined_with(self, other, separator: str) -> 'LogMessage':
        """Combine with another message; see ``combine_messages``."""
        return combine_messages(self, other, separator)


@dataclass(frozen=True)
class LogMessage(_MessageBase):
    """A plain message: severity, body and the moment it was logged."""
    severity: Severity
    body: str
    timestamp: datetime = field(default_factory=now)

    @classmethod
    def from_loggable(cls, value: Any, severity: Severity = DEFAULT) -> 'LogMessage':
        return cls(severity, to_log_text(value))


@dataclass(frozen=True)
class CodeLogMessage(_MessageBase):
    """A message about the code, carrying the location of the log call.

    This is what most log calls produce.
    """
    severity: Severity
    body: str
    code_location: CodeLocation
    timestamp: datetime = field(default_factory=now)

    def log_line(self, options=DEFAULT_OPTIONS):
        if options.show_location:
            return f"{self.code_location}\t{self.body}"
        return self.body


@dataclass(frozen=True)
class RawLogMessage(_MessageBase):
    """The structured message handed to custom raw sinks.

    ``additional_parameters`` is for custom sinks that want fine-grained
    data; it is stored as a read-only mapping.
    """
    severity: Severity
    body: str
    code_location: CodeLocation
    timestamp: datetime = field(default_factory=now)
    additional_parameters: Optional[Mapping[str, Any]] = None

    def __post_init__(self):
        if self.additional_parameters is not None:
            object.__setattr__(self, 'additional_parameters',
                               MappingProxyType(dict(self.additional_parameters)))

    def log_line(self, options=DEFAULT_OPTIONS):
        return f"{self.code_location}\t{self.body}"


def render(message, options: RenderOptions = DEFAULT_OPTIONS) -> str:
    """Render ``message`` into a single log line (no trailing newline)."""
    return (f"{format_timestamp(message.timestamp)} "
            f"{message.severity.name(options.severity_style)} "
            f"{message.log_line(options)}")


def combine_messages(first, second, separator: str) -> LogMessage:
    """Eagerly combine two messages into one.

    The log lines (body, plus the code location for raw messages) are
    joined with ``separator`` (first before second), the
    severity is the worse of the two and the timestamp the earlier one,
    so the result reads as "first occurrence, worst case".
    """
    return LogMessage(
        severity=max(first.severity, second.severity),
        body=first.log_line() + separator + second.log_line(),
        timestamp=min(first.timestamp, second.timestamp),
    )
