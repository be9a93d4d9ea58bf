#!/usr/bin/env python3
"""
Transfer the access log into the database.

Backs up and truncates the access log, validates every entry, reports
rejected entries to Discord and inserts the rest into the logs table.
Meant to run from cron.

Usage:
    # Transfer using config.yaml in the working directory
    python scripts/transfer_logs.py

    # Explicit config file
    python scripts/transfer_logs.py --config config.enc.yaml

    # Keep the access log, skip the database
    python scripts/transfer_logs.py --no-truncate --no-insert

Exit status is 0 on success and 1 on failure.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from access_log_loader.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
