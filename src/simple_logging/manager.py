"""
LogManager: the default channel registry and the one dispatch path.

Every log call ends up in ``LogManager.log``, which pushes a single
message to each channel of a list, in list order. Order matters: two
channels may share one sink, and their lines must appear in the same
order as the list.

The default channel list is shared mutable state. It is stored as an
immutable tuple and replaced wholesale under a lock, so a concurrent
``log`` call sees either the old list or the new one in full.

A module-level default manager keeps call sites short:

    init_logging(specs=['app::file:logs/app.log'])
    get_manager().log(message)
"""

import threading
from typing import Iterable, Optional, Sequence

from .channels import LogChannel, parse_channel_spec


def original_channels() -> tuple:
    """The configuration a manager starts with: one console channel."""
    return (LogChannel.console(),)


class LogManager:
    """Holds the default channels and dispatches messages to channels.

    Usage::

        manager = LogManager()
        manager.append_default_channel(LogChannel.file('app.log'))
        manager.log(LogMessage(WARNING, "disk almost full"))
        manager.reset_default_channels()
    """

    def __init__(self, channels: Optional[Iterable[LogChannel]] = None):
        self._lock = threading.Lock()
        self._original = tuple(channels) if channels is not None else original_channels()
        self._channels = self._original

    @property
    def default_channels(self) -> tuple:
        """Snapshot of the current default channels."""
        with self._lock:
            return self._channels

    @property
    def original_channels(self) -> tuple:
        """The channels this manager was constructed with."""
        return self._original

    def set_default_channels(self, channels: Iterable[LogChannel]) -> None:
        """Replace the default channels in one step."""
        new_channels = tuple(channels)
        with self._lock:
            self._channels = new_channels

    def append_default_channel(self, channel: LogChannel) -> None:
        """Add a channel to the end of the default channels."""
        with self._lock:
            self._channels = self._channels + (channel,)

    def reset_default_channels(self) -> None:
        """Restore the channels this manager was constructed with."""
        with self._lock:
            self._channels = self._original

    def log(self, message, channels: Optional[Sequence[LogChannel]] = None):
        """Push ``message`` to each channel, in order, and return it.

        Args:
            message: The message to log
            channels: Channels to log to; None means the default channels

        Returns:
            The message, for chaining and tests
        """
        if channels is None:
            channels = self.default_channels
        for channel in channels:
            channel.append(message)
        return message


# =============================================================================
# Module-level default instance
# =============================================================================

_manager: Optional[LogManager] = None
_manager_lock = threading.Lock()


def init_logging(channels: Optional[Iterable[LogChannel]] = None,
                 specs: Optional[Iterable[str]] = None) -> LogManager:
    """Initialize the module-level LogManager.

    Call once at program startup. ``channels`` and ``specs`` are
    combined (explicit channels first, then one channel per spec
    string); with neither, the manager gets one console channel.

    Args:
        channels: Ready-made channels
        specs: Channel spec strings (e.g., ['app::file:logs/app.log'])

    Returns:
        The initialized LogManager instance

    Raises:
        ValueError: for a malformed spec string
        LocationCreateError: if a file channel cannot be created
    """
    global _manager

    configured = list(channels or [])
    for spec in specs or []:
        configured.append(parse_channel_spec(spec).build())

    manager = LogManager(configured if configured else None)
    with _manager_lock:
        _manager = manager
    return manager


def get_manager() -> LogManager:
    """Get the module-level LogManager, creating a default if needed."""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = LogManager()
        return _manager


def set_manager(manager: Optional[LogManager]) -> Optional[LogManager]:
    """Swap the module-level LogManager, returning the previous one.

    Mainly for tests; None makes the next ``get_manager()`` build a
    fresh default manager.
    """
    global _manager
    with _manager_lock:
        previous, _manager = _manager, manager
    return previous
