"""Exception hierarchy for examprep.

The pure calculators never raise these; they are used at the I/O
boundary (repository adapters, service, CLI).
"""


class ExamPrepError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, *, context: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class StatsRepositoryError(ExamPrepError):
    """Fetching records from a stats repository failed."""


class ConfigurationError(ExamPrepError):
    """Invalid or missing configuration."""
