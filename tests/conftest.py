"""Shared test fixtures for simple_logging test suite."""

import pytest

from simple_logging import AllowAll, LogChannel, LogManager, set_manager


# Rendered timestamp, e.g. 2020-11-20 05:26:49.178+0000
TIMESTAMP = r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}[+-]\d{4}"


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded stress tests")


# ---------------------------------------------------------------------------
# Manager fixtures
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def manager():
    """A fresh default LogManager per test; the previous one is restored after."""
    fresh = LogManager()
    previous = set_manager(fresh)
    yield fresh
    set_manager(previous)


# ---------------------------------------------------------------------------
# Capture fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def lines():
    """Rendered lines collected by the ``capture`` channel."""
    return []


@pytest.fixture
def capture(lines):
    """A custom channel that allows every severity and collects its lines."""
    return LogChannel.custom(lines.append, name='capture',
                             severity_filter=AllowAll())


@pytest.fixture
def log_path(tmp_path):
    """Path for a log file inside a not-yet-existing directory."""
    return tmp_path / "Logs" / "run" / "test.log"
