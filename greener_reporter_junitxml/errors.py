"""Errors raised by the reporting pipeline, labeled with the failing stage."""


class ReporterError(Exception):
    """Base error for a reporting run.

    Every subclass names the pipeline stage that produced it, and the stage
    label prefixes the rendered message (e.g. ``create session: ...``).
    """

    stage = "report"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class InputError(ReporterError):
    """Raised when the report cannot be read from a file or stdin."""

    stage = "read input"


class ParseError(ReporterError):
    """Raised when the report is not well-formed JUnit XML."""

    stage = "parse XML"


class ConfigError(ReporterError):
    """Raised when configuration values are malformed."""

    stage = "configuration"


class IngressError(ReporterError):
    """Base error for requests sent to the ingress API.

    Carries the HTTP status and raw response body when a response was received.
    """

    def __init__(
        self, message: str, *, status: int | None = None, body: str | None = None
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class SessionError(IngressError):
    """Raised when the session cannot be created."""

    stage = "create session"


class SubmissionError(IngressError):
    """Raised when the test case batch is rejected or cannot be sent."""

    stage = "submit results"
