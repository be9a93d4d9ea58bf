"""
Exceptions raised while turning raw access log lines into entries.
"""


class IngestionError(Exception):
    """Base class for errors of the ingestion layer."""

    pass


class ValidationError(IngestionError):
    """
    Raised when a field of a raw record fails validation.

    The string form is the plain message (e.g. ``Invalid IP address: x``)
    since it is what gets reported back for the rejected line.

    Attributes:
        field: Name of the offending field, when there is one
        value: The rejected value, when there is one
        message: Human-readable reason
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object | None = None,
    ):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(message)


class ParseError(ValidationError):
    """Raised when a line is not a JSON object."""

    def __init__(self, message: str = "Invalid JSON.", line_content: str | None = None):
        self.line_content = line_content
        super().__init__(message)
