"""
Constants for access log validation, storage and reporting.
"""

# =============================================================================
# Field Validation
# =============================================================================

VALID_HTTP_METHODS = frozenset(
    [
        "GET",
        "HEAD",
        "POST",
        "PUT",
        "DELETE",
        "CONNECT",
        "OPTIONS",
        "TRACE",
        "PATCH",
    ]
)

# Apache's way of saying "no value" for a field
NO_VALUE = "-"

# 444, 497, 498, 499 are Nginx-specific
VALID_HTTP_STATUSES = frozenset(
    [
        100, 101, 102, 103,
        200, 201, 202, 203, 204, 206, 207, 208, 226,
        300, 301, 302, 303, 304, 307, 308,
        400, 401, 402, 403, 404, 405, 406, 407, 408, 409, 410, 411, 412, 413,
        414, 415, 416, 417, 418, 421, 422, 423, 424, 425, 426, 428, 429, 431,
        444, 450, 451, 497, 498, 499,
        500, 501, 502, 503, 504, 505, 506, 507, 508, 510, 511,
    ]
)  # fmt: skip

# Column widths of the logs table
MAX_FIELD_LENGTH = 255
MAX_COUNTRY_LENGTH = 8

REQUIRED_FIELDS = (
    "host",
    "user",
    "time",
    "method",
    "path",
    "query",
    "status",
    "responseSize",
    "processTime",
    "referer",
    "userAgent",
    "country",
)

# =============================================================================
# User-Agent Classification
# =============================================================================

DEVICE_TYPES = frozenset(
    [
        "other",
        "mobile",
        "unknown",
        "console",
        "tablet",
        "smarttv",
        "wearable",
        "embedded",
    ]
)

# =============================================================================
# Storage
# =============================================================================

TABLE_LOGS = "logs"

# Rows per bulk insert
CHUNK_SIZE = 20000

# Store column order, matches ValidatedEntry.to_row()
LOG_COLUMNS = (
    "host",
    "user",
    "time",
    "method",
    "path",
    "query",
    "status",
    "response_size",
    "process_time",
    "referer",
    "user_agent",
    "is_bot",
    "browser",
    "device_type",
    "os",
    "country",
)

# =============================================================================
# Notifications
# =============================================================================

# Discord rejects messages longer than this
MAX_MESSAGE_LENGTH = 2000

# Failed entries quoted in the failure report
FAILED_ENTRIES_DISPLAYED = 5
