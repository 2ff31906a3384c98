"""Exceptions for tzdef library."""


class TimeZoneError(Exception):
    """Base exception for all tzdef errors."""


class TimeZoneParseError(TimeZoneError):
    """Exception raised when parsing time zone wire data.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the underlying xml or validation
    error, useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the TimeZoneParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class InvalidTimeZoneDefinitionError(TimeZoneParseError):
    """Exception raised for an invalid or unsupported time zone definition.

    The wire data was well formed but describes a set of periods and
    transitions that can't be used, for example a transition group with
    the wrong number of transitions. The whole definition should be rejected
    rather than partially applied.
    """


class MissingPeriodError(InvalidTimeZoneDefinitionError):
    """Exception raised when a transition references an unknown period."""

    def __init__(self, period_id: str) -> None:
        """Initialize MissingPeriodError."""
        super().__init__(f"Transition references unknown period: {period_id}")
        self.period_id = period_id
