"""
Shared fixtures for unit and integration tests.

Provides:
- Raw access log record and line builders
- Recording and failing notifiers
"""

import json

import pytest

from access_log_loader.config import clear_settings_cache
from access_log_loader.notifications import NotificationError, Notifier

# =============================================================================
# SAMPLE DATA
# =============================================================================

CHROME_WINDOWS_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def make_record(**overrides) -> dict:
    """Build a valid raw record, with fields replaced by ``overrides``."""
    record = {
        "host": "203.0.113.7",
        "user": "-",
        "time": "2024-01-15T10:30:00+00:00",
        "method": "GET",
        "path": "/wiki/Main_Page",
        "query": "action=view",
        "status": "200",
        "responseSize": "5120",
        "processTime": "0.042",
        "referer": "https://example.org/",
        "userAgent": CHROME_WINDOWS_UA,
        "country": "us",
    }
    record.update(overrides)
    return record


def make_line(**overrides) -> str:
    """Build a valid raw access log line."""
    return json.dumps(make_record(**overrides))


@pytest.fixture
def build_record():
    """Builder for raw records: ``build_record(status="404")``."""
    return make_record


@pytest.fixture
def build_line():
    """Builder for raw lines: ``build_line(method="-")``."""
    return make_line


@pytest.fixture
def valid_line() -> str:
    """A single valid access log line."""
    return make_line()


@pytest.fixture
def write_log(tmp_path):
    """
    Factory writing lines to an access log file.

    Returns the path of the written file.
    """

    def _write(lines: list[str], name: str = "access.log", newline: str = "\n"):
        path = tmp_path / name
        path.write_bytes("".join(line + newline for line in lines).encode("utf-8"))
        return path

    return _write


# =============================================================================
# NOTIFIERS
# =============================================================================


class RecordingNotifier(Notifier):
    """Notifier keeping every delivered message."""

    def __init__(self):
        self.messages: list[str] = []
        self.closed = False

    async def announce(self, message: str) -> None:
        self.messages.append(message)

    async def close(self) -> None:
        self.closed = True


class FailingNotifier(Notifier):
    """Notifier whose deliveries always fail."""

    def __init__(self):
        self.attempts = 0

    async def announce(self, message: str) -> None:
        self.attempts += 1
        raise NotificationError("webhook unreachable")


@pytest.fixture
def recording_notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> FailingNotifier:
    return FailingNotifier()


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per config path; start every test fresh."""
    clear_settings_cache()
    yield
    clear_settings_cache()
