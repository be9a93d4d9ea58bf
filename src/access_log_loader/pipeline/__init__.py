"""Transfer pipeline: chunked loading and the transfer run itself."""

from .batch_loader import chunked, insert_entries
from .logging_config import setup_logging
from .transfer import LogTransfer, TransferFailed, TransferResult

__all__ = [
    # Transfer
    "LogTransfer",
    "TransferResult",
    "TransferFailed",
    # Batch loading
    "insert_entries",
    "chunked",
    # Logging
    "setup_logging",
]
