"""
Access log transfer.

Moves the entries of an access log into the store:

1. Announce start
2. Back up the source log (when truncating)
3. Parse and validate every line
4. Truncate the source log (when truncating)
5. Report rejected entries
6. Insert accepted entries (when inserting)
7. Announce the number of transferred entries

The source is only truncated once parsing has completed, so a failed run
can be repeated without losing entries that were never stored. Reports are
best effort; any other failure ends the run with a failure report.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config.settings import Settings
from ..ingestion import backup_file, load_entries, truncate_file
from ..notifications import Reporter
from ..storage import backend_from_settings
from .batch_loader import BackendFactory, insert_entries

logger = logging.getLogger(__name__)


class TransferFailed(Exception):
    """Raised when a transfer step fails. Carries the partial result."""

    def __init__(self, message: str, result: "TransferResult"):
        self.result = result
        super().__init__(message)


@dataclass
class TransferResult:
    """Result of a transfer run."""

    success: bool = False
    started_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
    completed_at: Optional[datetime] = None
    # Stats
    accepted: int = 0
    rejected: int = 0
    inserted: int = 0
    # Steps that ran to completion, in order
    steps: list[str] = field(default_factory=list)
    # Errors
    errors: list[str] = field(default_factory=list)

    @property
    def duration_seconds(self) -> Optional[float]:
        """Get transfer duration in seconds."""
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "success": self.success,
            "started_at": self.started_at.isoformat(),
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
            "duration_seconds": self.duration_seconds,
            "accepted": self.accepted,
            "rejected": self.rejected,
            "inserted": self.inserted,
            "steps": self.steps,
            "errors": self.errors,
        }


class LogTransfer:
    """
    Runs one access log transfer.

    Configuration, notifier and store are passed in, so a transfer holds no
    global state and each run gets its own store connection.
    """

    def __init__(
        self,
        settings: Settings,
        reporter: Reporter,
        backend_factory: Optional[BackendFactory] = None,
    ):
        """
        Args:
            settings: Paths and store configuration for this run
            reporter: Status reporter for start, failure and success messages
            backend_factory: Callable creating the store backend. Defaults to
                the backend named in settings.
        """
        self.settings = settings
        self.reporter = reporter
        self.backend_factory = backend_factory or (
            lambda: backend_from_settings(self.settings)
        )

    async def run(self, truncate: bool = True, insert: bool = True) -> TransferResult:
        """
        Run the transfer.

        Args:
            truncate: Back up and truncate the source log
            insert: Insert accepted entries into the store

        Returns:
            TransferResult of the successful run

        Raises:
            TransferFailed: If any step other than a report fails, after the
                failure has been reported
        """
        result = TransferResult()
        source = Path(self.settings.source_path)

        await self.reporter.report("Log transfer started.")
        result.steps.append("announce")

        try:
            if truncate:
                await backup_file(source, self.settings.backup_path)
                result.steps.append("backup")

            entries = await load_entries(source)
            result.accepted = len(entries.accepted)
            result.rejected = len(entries.rejected)
            result.steps.append("parse")

            if truncate:
                await truncate_file(source)
                result.steps.append("truncate")

            await self.reporter.report_failed_entries(entries.rejected)
            result.steps.append("report_failures")

            if insert:
                result.inserted = await insert_entries(
                    self.backend_factory, entries.accepted
                )
                result.steps.append("load")

            await self.reporter.report(
                f"{len(entries.accepted)} entries successfully transferred."
            )
            result.steps.append("report_success")
            result.success = True

        except Exception as e:
            result.errors.append(str(e))
            result.completed_at = datetime.now().astimezone()
            await self.reporter.report(f"Log transfer failed: {e}")
            logger.exception(f"Full error: {e}")
            raise TransferFailed(str(e), result) from e

        result.completed_at = datetime.now().astimezone()
        logger.info(
            f"Transfer completed in {result.duration_seconds:.1f}s: {result.to_dict()}"
        )
        return result
