"""
Notifier interface for transfer status messages.
"""

from abc import ABC, abstractmethod


class NotificationError(Exception):
    """Raised when a message cannot be delivered."""

    pass


class Notifier(ABC):
    """
    Outbound text channel for status messages.

    Implementations deliver or raise; they never decide whether a failed
    delivery matters. That is left to the caller (see Reporter).
    """

    @abstractmethod
    async def announce(self, message: str) -> None:
        """
        Deliver a message.

        Raises:
            NotificationError: If delivery fails
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the notifier."""
        pass

    async def __aenter__(self) -> "Notifier":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class NullNotifier(Notifier):
    """Notifier that drops every message. Used when no channel is configured."""

    async def announce(self, message: str) -> None:
        pass
