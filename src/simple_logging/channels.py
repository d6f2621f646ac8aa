"""
Log channels and channel spec parsing.

A channel binds a location (sink) to a severity filter and a name. It
is the only place filtering happens: a message the filter rejects never
reaches the location and is never rendered.

Channel spec syntax (compact, positional):
    NAME:FILTER:DEST:LOCATION:STYLE

    Examples:
        console                         # All defaults (info+, console)
        audit:warning                   # Warning and above
        app::file:logs/app.log          # Default filter, file dest
        errs:error:stderr::full         # Error+, stderr, full names
        trace:all:file:C:\\logs\\t.log  # Everything, Windows path
"""

import sys
import threading
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import LocationAppendError
from .filters import DEFAULT_FILTER, PII_FILTER, AllowAtOrAbove, filter_named
from .locations import (
    ConsoleLocation, CustomLocation, CustomRawLocation, FileLocation,
    StandardErrorLocation, StandardOutAndErrorLocation, StandardOutLocation,
    write_console,
)
from .message import RenderOptions
from .severity import SeverityNameStyle


class LogChannel:
    """A named pairing of a location and a severity filter.

    Args:
        name: Human-readable name, used in failure diagnostics
        location: Where rendered (or raw) messages go
        severity_filter: Decides which messages pass. Defaults to
            DEFAULT_FILTER (info and above).
        lowest_allowed_severity: Shorthand for
            ``AllowAtOrAbove(lowest_allowed_severity)``; cannot be
            combined with ``severity_filter``
        severity_style: Which severity name rendered lines use
        show_location: Render the code location of code-located messages
    """

    def __init__(self, name, location, severity_filter=None, *,
                 lowest_allowed_severity=None,
                 severity_style=SeverityNameStyle.EMOJI,
                 show_location=False):
        if severity_filter is not None and lowest_allowed_severity is not None:
            raise ValueError(
                "Pass either severity_filter or lowest_allowed_severity, not both")
        if lowest_allowed_severity is not None:
            severity_filter = AllowAtOrAbove(lowest_allowed_severity)
        self.name = name
        self.location = location
        if severity_filter is None:
            severity_filter = DEFAULT_FILTER
        self._severity_filter = severity_filter
        self._filter_lock = threading.Lock()
        self.options = RenderOptions(severity_style=severity_style,
                                     show_location=show_location)

    @property
    def severity_filter(self):
        return self._severity_filter

    @severity_filter.setter
    def severity_filter(self, value):
        with self._filter_lock:
            self._severity_filter = value

    def append(self, message) -> None:
        """Push ``message`` through the filter and on to the location.

        A location failure never propagates: it is reported to the
        console along with the message that could not be logged.
        """
        if not self._severity_filter.allows(message.severity):
            return
        try:
            self.location.append(message, self.options)
        except Exception as error:
            report_append_failure(self, message, error)

    def close(self) -> None:
        """Release the location's resources (file handles)."""
        self.location.close()

    def __repr__(self):
        return (f"LogChannel(name={self.name!r}, location={self.location!r}, "
                f"severity_filter={self._severity_filter!r})")

    # -- Factories ----------------------------------------------------------

    @classmethod
    def console(cls, name='console', **options):
        """A channel to print()'s default destination."""
        return cls(name, ConsoleLocation(), **options)

    @classmethod
    def standard_out(cls, name='stdout', **options):
        return cls(name, StandardOutLocation(), **options)

    @classmethod
    def standard_error(cls, name='stderr', **options):
        return cls(name, StandardErrorLocation(), **options)

    @classmethod
    def standard_out_and_error(cls, name='stdout & stderr', **options):
        return cls(name, StandardOutAndErrorLocation(), **options)

    @classmethod
    def file(cls, path, name=None, create_intermediates=True, **options):
        """A channel appending to the file at ``path``.

        The name defaults to the file's base name.

        Raises:
            LocationCreateError: if the file cannot be prepared for writing
        """
        location = FileLocation(path, create_intermediates=create_intermediates)
        return cls(name or Path(path).name, location, **options)

    @classmethod
    def custom(cls, callback, name='custom', **options):
        """A channel passing each fully-rendered line to ``callback``."""
        return cls(name, CustomLocation(callback), **options)

    @classmethod
    def custom_raw(cls, callback, name='custom raw', fallback=None, **options):
        """A channel passing each RawLogMessage to ``callback``."""
        return cls(name, CustomRawLocation(callback, fallback=fallback), **options)

    @classmethod
    def pii(cls, name='PII', **options):
        """A console channel for personally-identifiable information.

        Lines only appear in non-optimized (``__debug__``) runs, i.e.
        developers testing locally; ``python -O`` drops them all.
        """
        return cls(name, ConsoleLocation(), PII_FILTER, **options)


def report_append_failure(channel, message, error) -> None:
    """Tell the operator that ``channel`` could not log ``message``.

    Written to the console default (stdout), falling back to the
    interpreter's original stderr when stdout itself is broken.
    """
    text = (f'FAILED TO APPEND LOG MESSAGE TO CHANNEL "{channel.name}" - {error}:\n'
            f'{message.render(channel.options)}')
    try:
        write_console('stdout', text)
    except Exception:
        with suppress(OSError, ValueError, AttributeError):
            sys.__stderr__.write(text + "\n")


# =============================================================================
# Channel specs
# =============================================================================

DESTINATIONS = {
    'console': ConsoleLocation,
    'stdout': StandardOutLocation,
    'stderr': StandardErrorLocation,
    'both': StandardOutAndErrorLocation,
    'file': FileLocation,
}

STYLES = {
    'short': SeverityNameStyle.SHORT,
    'full': SeverityNameStyle.FULL,
    'emoji': SeverityNameStyle.EMOJI,
}


@dataclass
class ChannelConfig:
    """Configuration for a single channel, as parsed from a spec string."""
    name: str
    filter: str = ''                      # '', 'all', 'none' or a severity name
    destination: Optional[str] = None     # key of DESTINATIONS; None = console
    location: Optional[str] = None        # File path for file dest
    style: Optional[str] = None           # key of STYLES; None = emoji

    def build(self) -> LogChannel:
        """Create the channel this config describes.

        Raises:
            ValueError: unknown destination/style/severity, or a file
                destination without a path
            LocationCreateError: if a file destination cannot be prepared
        """
        dest = (self.destination or 'console').lower()
        if dest not in DESTINATIONS:
            raise ValueError(
                f"Unknown channel destination {self.destination!r} "
                f"(expected one of: {', '.join(sorted(DESTINATIONS))})")
        style_key = (self.style or 'emoji').lower()
        if style_key not in STYLES:
            raise ValueError(
                f"Unknown severity style {self.style!r} "
                f"(expected one of: {', '.join(sorted(STYLES))})")

        severity_filter = filter_named(self.filter)
        style = STYLES[style_key]

        if dest == 'file':
            if not self.location:
                raise ValueError(f"Channel {self.name!r}: file destination needs a path")
            return LogChannel.file(self.location, name=self.name or None,
                                   severity_filter=severity_filter,
                                   severity_style=style)
        return LogChannel(self.name or dest, DESTINATIONS[dest](),
                          severity_filter, severity_style=style)


def parse_channel_spec(spec: str) -> ChannelConfig:
    """Parse a channel spec string into a ChannelConfig.

    Handles the compact positional syntax:
        NAME:FILTER:DEST:LOCATION:STYLE

    Empty slots use :: (empty between colons).
    Windows drive letters (e.g., C:\\path) are detected and rejoined.

    Args:
        spec: Channel spec string like "audit:warning" or
            "app::file:C:\\logs\\app.log"

    Returns:
        ChannelConfig with parsed values
    """
    parts = spec.split(':')

    # Handle Windows drive letters: rejoin 'C' + 'path' into 'C:path'
    rejoined = []
    i = 0
    while i < len(parts):
        if (len(parts[i]) == 1 and parts[i].isalpha()
                and i + 1 < len(parts)
                and len(rejoined) == 3):  # Only in LOCATION slot
            rejoined.append(f"{parts[i]}:{parts[i+1]}")
            i += 2
        else:
            rejoined.append(parts[i])
            i += 1
    parts = rejoined

    name = parts[0] if len(parts) > 0 else ''
    filter_text = parts[1] if len(parts) > 1 else ''
    dest = location = style = None

    if len(parts) > 2 and parts[2]:
        dest = parts[2]
    if len(parts) > 3 and parts[3]:
        location = parts[3]
    if len(parts) > 4 and parts[4]:
        style = parts[4]

    return ChannelConfig(name=name, filter=filter_text, destination=dest,
                         location=location, style=style)

