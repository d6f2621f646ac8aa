"""
Severity levels for log messages.

A severity is an ordered value: comparison uses the numeric rank only,
never the display names. The emit rule applied by channel filters is
simply a comparison between ranks:

    ←── quieter ──────────────────────────── louder ──→
    1        2      3     4        5      ...   1000
    verbose  debug  info  warning  error        fatal

FATAL is pinned far above the others so it stays the most severe level
even when consumers insert their own severities between the built-ins.
"""

import enum
import functools
from dataclasses import dataclass


class SeverityNameStyle(enum.Enum):
    """Which display name a rendered log line uses for its severity."""
    SHORT = 'short'     # One character: "w"
    FULL = 'full'       # Unpadded full word: "Warning"
    EMOJI = 'emoji'     # One emoji: "⚠️"


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Severity:
    """How severe a log message is.

    Attributes:
        rank: Comparable value; equal ranks mean equal severities
        short: One-character name for truncated logs
        full: Human-readable name for long-form logs
        emoji: Emoji name, for colour-ish output in plain text
    """
    rank: float
    short: str
    full: str
    emoji: str = ''

    def name(self, style: SeverityNameStyle = SeverityNameStyle.EMOJI) -> str:
        """Return the display name for the given style."""
        if style is SeverityNameStyle.SHORT:
            return self.short
        if style is SeverityNameStyle.FULL:
            return self.full
        return self.emoji or self.short

    def __eq__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank == other.rank

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __hash__(self):
        return hash(self.rank)

    def __str__(self):
        return self.full


# Built-in severities
VERBOSE = Severity(1, 'v', 'Verbose', '🗣')         # Anything and everything
DEBUG = Severity(2, 'd', 'Debug', '👩🏾‍💻')          # Field debugging, not in user logs
INFO = Severity(3, 'i', 'Info', 'ℹ️')               # Lowest level power-users read
WARNING = Severity(4, 'w', 'Warning', '⚠️')         # Potential future problems
ERROR = Severity(5, 'e', 'Error', '🆘')             # Problems that just happened
FATAL = Severity(1000, 'f', 'Fatal', '🚨')          # Last lines before a crash

BUILTIN_SEVERITIES = (VERBOSE, DEBUG, INFO, WARNING, ERROR, FATAL)

# Alternative semantics (same objects, not new levels)
DEFAULT = VERBOSE
TRACE = VERBOSE
CRITICAL = ERROR

_BY_NAME = {
    'verbose': VERBOSE,
    'debug': DEBUG,
    'info': INFO,
    'warning': WARNING,
    'warn': WARNING,
    'error': ERROR,
    'fatal': FATAL,
    'default': DEFAULT,
    'trace': TRACE,
    'critical': CRITICAL,
}


def severity_named(name: str) -> Severity:
    """Look up a built-in severity (or alias) by case-insensitive name.

    Raises:
        ValueError: if the name is not a known severity
    """
    try:
        return _BY_NAME[name.strip().lower()]
    except KeyError:
        known = ', '.join(sorted(_BY_NAME))
        raise ValueError(f"Unknown severity {name!r} (expected one of: {known})") from None
