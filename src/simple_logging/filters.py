"""
Severity filters: per-channel predicates deciding which messages pass.

Every variant is an immutable value object; ``allows()`` is a pure
function of the variant and the severity it is given.
"""

from dataclasses import dataclass

from .severity import INFO, Severity, severity_named


class SeverityFilter:
    """Base class for the closed set of filter variants."""

    def allows(self, severity_or_message) -> bool:
        """Whether a severity (or a message's severity) passes this filter."""
        severity = getattr(severity_or_message, 'severity', severity_or_message)
        return self._allows(severity)

    def _allows(self, severity: Severity) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class AllowAll(SeverityFilter):
    """All messages are allowed."""

    def _allows(self, severity):
        return True


@dataclass(frozen=True)
class AllowNone(SeverityFilter):
    """No messages are allowed."""

    def _allows(self, severity):
        return False


@dataclass(frozen=True)
class AllowExactly(SeverityFilter):
    """Only messages of exactly this severity (by rank)."""
    severity: Severity

    def _allows(self, severity):
        return severity == self.severity


@dataclass(frozen=True)
class AllowRange(SeverityFilter):
    """Messages whose severity lies in the closed range [lowest, highest]."""
    lowest: Severity
    highest: Severity

    def __post_init__(self):
        if self.highest < self.lowest:
            raise ValueError(
                f"Empty severity range: {self.lowest} is above {self.highest}")

    def _allows(self, severity):
        return self.lowest <= severity <= self.highest


@dataclass(frozen=True)
class AllowAtOrAbove(SeverityFilter):
    """Messages with this severity and higher."""
    lowest: Severity

    def _allows(self, severity):
        return self.lowest <= severity


# Used whenever a channel is built without an explicit filter: the lowest
# built-in level users care about when reading logs rather than debugging.
DEFAULT_FILTER = AllowAtOrAbove(INFO)

# Personally-identifiable information only reaches developer consoles;
# optimized (-O) runs drop it entirely.
PII_FILTER = AllowAll() if __debug__ else AllowNone()


def filter_named(text: str) -> SeverityFilter:
    """Parse a filter from config text.

    "all" and "none" map to AllowAll/AllowNone; anything else is taken
    as a severity name meaning "this severity and higher". An empty
    string gives DEFAULT_FILTER.
    """
    key = text.strip().lower()
    if not key:
        return DEFAULT_FILTER
    if key == 'all':
        return AllowAll()
    if key == 'none':
        return AllowNone()
    return AllowAtOrAbove(severity_named(key))
