"""
Data models for validated and rejected access log entries.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple, Optional, Union

Number = Union[int, float]


@dataclass
class ValidatedEntry:
    """
    Normalized access log entry, ready to be stored.

    Fields mirror the ``logs`` table. Optional fields are ``None`` when
    the upstream log had no value for them.
    """

    host: str
    user: Optional[str]
    time: datetime
    method: Optional[str]
    path: Optional[str]
    query: Optional[str]
    status: int
    response_size: Number
    process_time: Number
    referer: str
    user_agent: Optional[str]
    bot: bool
    browser: Optional[str]
    device_type: str
    os: Optional[str]
    country: Optional[str]

    def to_row(self) -> tuple:
        """Return the entry as a row in ``LOG_COLUMNS`` order."""
        return (
            self.host,
            self.user,
            self.time,
            self.method,
            self.path,
            self.query,
            self.status,
            self.response_size,
            self.process_time,
            self.referer,
            self.user_agent,
            self.bot,
            self.browser,
            self.device_type,
            self.os,
            self.country,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "host": self.host,
            "user": self.user,
            "time": self.time.isoformat(),
            "method": self.method,
            "path": self.path,
            "query": self.query,
            "status": self.status,
            "response_size": self.response_size,
            "process_time": self.process_time,
            "referer": self.referer,
            "user_agent": self.user_agent,
            "is_bot": self.bot,
            "browser": self.browser,
            "device_type": self.device_type,
            "os": self.os,
            "country": self.country,
        }


@dataclass(frozen=True)
class FailedEntry:
    """A raw line that failed validation, with the reason."""

    line: str
    error: str

    def format(self, index: int) -> str:
        """Render as a numbered block for failure reports."""
        return f"{index}. Error: {self.error}, line:\n```json\n{self.line}```"


class LoadedEntries(NamedTuple):
    """Accepted and rejected entries of one source file, in input order."""

    accepted: list[ValidatedEntry]
    rejected: list[FailedEntry]

    @property
    def total(self) -> int:
        """Number of non-blank lines read."""
        return len(self.accepted) + len(self.rejected)
