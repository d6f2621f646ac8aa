"""
simple_logging — severity-filtered logging to named channels.

Application code emits severity-tagged, timestamped messages; each
channel pairs a location (console, file or callback) with a severity
filter and receives the messages its filter allows.

Public API:
    log, log_verbose ... log_fatal — log at a severity, capturing call site
    log_raw          — log a RawLogMessage (for custom raw sinks)
    log_entry/exit   — scope entry/exit at VERBOSE
    log_error_if_raises — run an operation, log its failure, return a backup
    LogChannel       — location + filter + name
    LogManager       — default channel registry and dispatch
    init_logging     — default manager initialization
    get_manager      — access the default manager
    parse_channel_spec — parse a NAME:FILTER:DEST:LOCATION:STYLE spec
    traced           — entry/exit tracing decorator
"""

from ._version import __version__, __app_name__
from .severity import (
    Severity, SeverityNameStyle, severity_named, BUILTIN_SEVERITIES,
    VERBOSE, DEBUG, INFO, WARNING, ERROR, FATAL, DEFAULT, TRACE, CRITICAL,
)
from .filters import (
    SeverityFilter, AllowAll, AllowNone, AllowExactly, AllowRange,
    AllowAtOrAbove, DEFAULT_FILTER, PII_FILTER, filter_named,
)
from .loggable import Loggable, LoggableError, to_log_text, combine_text
from .message import (
    CodeLocation, LogMessage, CodeLogMessage, RawLogMessage,
    RenderOptions, render, combine_messages, format_timestamp,
)
from .errors import (
    SimpleLoggingError, LocationCreateError, DirectoryCreateError,
    FileCreateError, FileOpenError, LocationAppendError, LocationClosedError,
)
from .locations import (
    ChannelLocation, ConsoleLocation, StandardOutLocation,
    StandardErrorLocation, StandardOutAndErrorLocation, FileLocation,
    CustomLocation, CustomRawLocation,
)
from .channels import LogChannel, ChannelConfig, parse_channel_spec
from .manager import LogManager, init_logging, get_manager, set_manager
from .facade import (
    log_message, log, log_verbose, log_debug, log_info, log_warning,
    log_error, log_fatal, log_raw, log_entry, log_exit, log_error_if_raises,
)
from .trace import traced

__all__ = [
    '__version__', '__app_name__',
    'Severity', 'SeverityNameStyle', 'severity_named', 'BUILTIN_SEVERITIES',
    'VERBOSE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'FATAL',
    'DEFAULT', 'TRACE', 'CRITICAL',
    'SeverityFilter', 'AllowAll', 'AllowNone', 'AllowExactly', 'AllowRange',
    'AllowAtOrAbove', 'DEFAULT_FILTER', 'PII_FILTER', 'filter_named',
    'Loggable', 'LoggableError', 'to_log_text', 'combine_text',
    'CodeLocation', 'LogMessage', 'CodeLogMessage', 'RawLogMessage',
    'RenderOptions', 'render', 'combine_messages', 'format_timestamp',
    'SimpleLoggingError', 'LocationCreateError', 'DirectoryCreateError',
    'FileCreateError', 'FileOpenError', 'LocationAppendError',
    'LocationClosedError',
    'ChannelLocation', 'ConsoleLocation', 'StandardOutLocation',
    'StandardErrorLocation', 'StandardOutAndErrorLocation', 'FileLocation',
    'CustomLocation', 'CustomRawLocation',
    'LogChannel', 'ChannelConfig', 'parse_channel_spec',
    'LogManager', 'init_logging', 'get_manager', 'set_manager',
    'log_message', 'log', 'log_verbose', 'log_debug', 'log_info',
    'log_warning', 'log_error', 'log_fatal', 'log_raw', 'log_entry',
    'log_exit', 'log_error_if_raises',
    'traced',
]
