"""Errors raised while ingesting NUnit report fragments."""


class ReportError(Exception):
    """Base class for rejected report fragments."""


class MalformedReportError(ReportError):
    """Raised when a report fragment is not well-formed XML."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Error parsing XML test event report: {reason}")
        self.reason = reason


class DurationParseError(ReportError):
    """Raised when a test case has a missing or non-numeric duration."""

    def __init__(self, value: str | None) -> None:
        if value is None:
            message = "Test case report has no duration attribute"
        else:
            message = f"Test case report has invalid duration: {value!r}"
        super().__init__(message)
        self.value = value


class MissingTestNameError(ReportError):
    """Raised when a test case carries no name, fullname or id."""
