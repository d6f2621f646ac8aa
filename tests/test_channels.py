"""Tests for simple_logging.channels — filtering, failure reporting, specs."""

import io
import sys
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from simple_logging.channels import (
    ChannelConfig, LogChannel, parse_channel_spec,
)
from simple_logging.errors import LocationAppendError, LocationCreateError
from simple_logging.filters import (
    DEFAULT_FILTER, PII_FILTER, AllowAll, AllowAtOrAbove, AllowExactly,
    AllowNone,
)
from simple_logging.locations import (
    ChannelLocation, ConsoleLocation, CustomRawLocation, FileLocation,
    StandardErrorLocation, StandardOutAndErrorLocation, StandardOutLocation,
)
from simple_logging.message import LogMessage, RenderOptions
from simple_logging.severity import (
    DEBUG, ERROR, FATAL, INFO, VERBOSE, WARNING, SeverityNameStyle,
)

MOMENT = datetime(2020, 11, 20, 5, 26, 49, 178000, tzinfo=timezone.utc)


@pytest.fixture
def location():
    return Mock(spec=ChannelLocation)


# ---------------------------------------------------------------------------
# Filtering and delegation
# ---------------------------------------------------------------------------
class TestChannelAppend:

    def test_default_filter(self, location):
        channel = LogChannel("test", location)
        assert channel.severity_filter == DEFAULT_FILTER

    def test_rejected_message_never_reaches_location(self, location):
        channel = LogChannel("test", location)
        channel.append(LogMessage(DEBUG, "too quiet"))
        location.append.assert_not_called()

    def test_rejected_message_is_not_rendered(self, location):
        message = Mock()
        message.severity = VERBOSE
        LogChannel("test", location).append(message)
        message.render.assert_not_called()

    def test_allowed_message_gets_channel_options(self, location):
        channel = LogChannel("test", location, severity_style=SeverityNameStyle.SHORT,
                             show_location=True)
        message = LogMessage(WARNING, "loud enough")
        channel.append(message)
        location.append.assert_called_once_with(
            message, RenderOptions(SeverityNameStyle.SHORT, show_location=True))

    def test_lowest_allowed_severity(self, location):
        channel = LogChannel("test", location, lowest_allowed_severity=ERROR)
        assert channel.severity_filter == AllowAtOrAbove(ERROR)
        channel.append(LogMessage(WARNING, "no"))
        channel.append(LogMessage(ERROR, "yes"))
        assert location.append.call_count == 1

    def test_filter_and_lowest_are_exclusive(self, location):
        with pytest.raises(ValueError):
            LogChannel("test", location, AllowAll(), lowest_allowed_severity=INFO)

    def test_filter_can_be_reassigned(self, location):
        channel = LogChannel("test", location, AllowNone())
        channel.append(LogMessage(ERROR, "dropped"))
        channel.severity_filter = AllowExactly(ERROR)
        channel.append(LogMessage(ERROR, "kept"))
        assert location.append.call_count == 1

    def test_close_releases_location(self, location):
        LogChannel("test", location).close()
        location.close.assert_called_once_with()


class TestChannelFailures:
    """A failing location is reported, never raised."""

    def test_append_error_is_reported(self, capsys, location):
        location.append.side_effect = LocationAppendError("disk full")
        channel = LogChannel("broken", location)
        channel.append(LogMessage(WARNING, "lost?", MOMENT))
        out = capsys.readouterr().out
        assert out == ('FAILED TO APPEND LOG MESSAGE TO CHANNEL "broken" - disk full:\n'
                       '2020-11-20 05:26:49.178+0000 ⚠️ lost?\n')

    def test_callback_exception_is_reported(self, capsys):
        def explode(line):
            raise RuntimeError("callback blew up")
        LogChannel.custom(explode, name="exploding").append(LogMessage(ERROR, "boom"))
        out = capsys.readouterr().out
        assert 'CHANNEL "exploding" - callback blew up:' in out
        assert "🆘 boom" in out

    def test_report_uses_channel_style(self, capsys, location):
        location.append.side_effect = LocationAppendError("nope")
        channel = LogChannel("styled", location, severity_style=SeverityNameStyle.FULL)
        channel.append(LogMessage(INFO, "text"))
        assert "Info text" in capsys.readouterr().out

    def test_closed_file_is_reported(self, capsys, log_path):
        channel = LogChannel.file(log_path)
        channel.close()
        channel.append(LogMessage(ERROR, "after close"))
        out = capsys.readouterr().out
        assert 'CHANNEL "test.log"' in out
        assert "after close" in out

    def test_missing_stdout_falls_back_to_stderr(self, monkeypatch):
        original_stderr = io.StringIO()
        monkeypatch.setattr(sys, "stdout", None)
        monkeypatch.setattr(sys, "__stderr__", original_stderr)
        LogChannel.console(name="headless").append(LogMessage(WARNING, "hello", MOMENT))
        text = original_stderr.getvalue()
        assert 'FAILED TO APPEND LOG MESSAGE TO CHANNEL "headless" - ' in text
        assert text.endswith("2020-11-20 05:26:49.178+0000 ⚠️ hello\n")

    def test_raw_fallback_without_stdout(self, monkeypatch):
        original_stderr = io.StringIO()
        monkeypatch.setattr(sys, "stdout", None)
        monkeypatch.setattr(sys, "__stderr__", original_stderr)
        received = []
        LogChannel.custom_raw(received.append).append(LogMessage(ERROR, "plain"))
        assert received == []
        assert "plain" in original_stderr.getvalue()

    def test_no_console_streams_at_all(self, monkeypatch):
        monkeypatch.setattr(sys, "stdout", None)
        monkeypatch.setattr(sys, "__stderr__", None)
        LogChannel.console().append(LogMessage(FATAL, "nowhere to go"))


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
class TestFactories:

    @pytest.mark.parametrize("factory, location_type, name", [
        (LogChannel.console, ConsoleLocation, 'console'),
        (LogChannel.standard_out, StandardOutLocation, 'stdout'),
        (LogChannel.standard_error, StandardErrorLocation, 'stderr'),
        (LogChannel.standard_out_and_error, StandardOutAndErrorLocation, 'stdout & stderr'),
    ])
    def test_console_factories(self, factory, location_type, name):
        channel = factory()
        assert type(channel.location) is location_type
        assert channel.name == name
        assert channel.severity_filter == DEFAULT_FILTER

    def test_factory_options_pass_through(self):
        channel = LogChannel.console(lowest_allowed_severity=VERBOSE,
                                     severity_style=SeverityNameStyle.SHORT)
        assert channel.severity_filter == AllowAtOrAbove(VERBOSE)
        assert channel.options.severity_style is SeverityNameStyle.SHORT

    def test_file_name_defaults_to_base_name(self, log_path):
        channel = LogChannel.file(log_path)
        assert channel.name == "test.log"
        assert isinstance(channel.location, FileLocation)
        channel.close()

    def test_file_failure_creates_no_channel(self, log_path):
        with pytest.raises(LocationCreateError):
            LogChannel.file(log_path, create_intermediates=False)

    def test_custom_raw(self):
        channel = LogChannel.custom_raw(lambda m: None, severity_filter=AllowAll())
        assert isinstance(channel.location, CustomRawLocation)
        assert channel.severity_filter == AllowAll()

    def test_pii(self, capsys):
        channel = LogChannel.pii()
        assert channel.name == 'PII'
        assert channel.severity_filter == PII_FILTER
        channel.append(LogMessage(VERBOSE, "user@example.com signed in"))
        shown = "user@example.com" in capsys.readouterr().out
        assert shown == __debug__


# ---------------------------------------------------------------------------
# Channel specs
# ---------------------------------------------------------------------------
class TestParseChannelSpec:
    """NAME:FILTER:DEST:LOCATION:STYLE parsing."""

    def test_name_only(self):
        assert parse_channel_spec("console") == ChannelConfig(name="console")

    def test_name_and_filter(self):
        cfg = parse_channel_spec("audit:warning")
        assert cfg.name == "audit"
        assert cfg.filter == "warning"
        assert cfg.destination is None

    def test_file_destination(self):
        cfg = parse_channel_spec("app::file:logs/app.log")
        assert cfg.filter == ""
        assert cfg.destination == "file"
        assert cfg.location == "logs/app.log"

    def test_style_with_empty_location(self):
        cfg = parse_channel_spec("errs:error:stderr::full")
        assert cfg.destination == "stderr"
        assert cfg.location is None
        assert cfg.style == "full"

    def test_windows_drive_letter(self):
        cfg = parse_channel_spec("trace:all:file:C:\\logs\\trace.log:short")
        assert cfg.location == "C:\\logs\\trace.log"
        assert cfg.style == "short"

    def test_drive_letter_only_in_location_slot(self):
        cfg = parse_channel_spec("a:b:c")
        assert (cfg.name, cfg.filter, cfg.destination) == ("a", "b", "c")


class TestChannelConfigBuild:

    def test_defaults_build_console(self):
        channel = ChannelConfig(name="").build()
        assert type(channel.location) is ConsoleLocation
        assert channel.name == "console"
        assert channel.severity_filter == DEFAULT_FILTER

    def test_filter_and_style(self):
        channel = parse_channel_spec("errs:error:stderr::full").build()
        assert channel.name == "errs"
        assert type(channel.location) is StandardErrorLocation
        assert channel.severity_filter == AllowAtOrAbove(ERROR)
        assert channel.options.severity_style is SeverityNameStyle.FULL

    def test_file(self, tmp_path):
        path = tmp_path / "spec" / "app.log"
        channel = parse_channel_spec(f"app:all:file:{path}").build()
        assert isinstance(channel.location, FileLocation)
        assert channel.severity_filter == AllowAll()
        assert path.is_file()
        channel.close()

    @pytest.mark.parametrize("spec, match", [
        ("x::pigeon", "Unknown channel destination"),
        ("x::file", "needs a path"),
        ("x::stdout::loud", "Unknown severity style"),
        ("x:chatty", "Unknown severity"),
    ])
    def test_invalid(self, spec, match):
        with pytest.raises(ValueError, match=match):
            parse_channel_spec(spec).build()
