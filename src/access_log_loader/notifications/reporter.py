"""
Best-effort status reporting.

Wraps a Notifier so that delivery problems are logged and never
interrupt the transfer they are reporting on.
"""

import logging
from typing import Sequence

from ..config.constants import FAILED_ENTRIES_DISPLAYED, MAX_MESSAGE_LENGTH
from ..ingestion.base import FailedEntry
from .base import Notifier

logger = logging.getLogger(__name__)


def format_failed_entries(
    entries: Sequence[FailedEntry],
    limit: int = FAILED_ENTRIES_DISPLAYED,
) -> str:
    """
    Build the failure summary message.

    Lists the first ``limit`` entries, numbered from 1, after a header
    with the total count.
    """
    blocks = "".join(
        entry.format(index) for index, entry in enumerate(entries[:limit], start=1)
    )
    return f"{len(entries)} entries failed, first {limit} are displayed:\n{blocks}"


class Reporter:
    """Sends status messages through a notifier, swallowing delivery errors."""

    def __init__(self, notifier: Notifier, max_length: int = MAX_MESSAGE_LENGTH):
        self.notifier = notifier
        self.max_length = max_length

    async def report(self, message: str) -> bool:
        """
        Log a message and deliver it, truncated to ``max_length``.

        Returns:
            True if the message was delivered
        """
        logger.info(message)
        try:
            await self.notifier.announce(message[: self.max_length])
            return True
        except Exception as e:
            logger.error(f"Notification error: {e}", exc_info=True)
            return False

    async def report_failed_entries(self, entries: Sequence[FailedEntry]) -> bool:
        """
        Report rejected entries, if any.

        The notification quotes the first few; the complete list always goes
        to the debug log.

        Returns:
            True if a report was delivered, False if delivery failed or
            there was nothing to report
        """
        if not entries:
            return False

        logger.debug(
            "All failed entries:\n"
            + "\n".join(f"{entry.error}: {entry.line}" for entry in entries)
        )
        return await self.report(format_failed_entries(entries))
