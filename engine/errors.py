"""Error taxonomy for the analysis pipeline."""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class; every failure carries a stable ``kind`` and a readable message."""

    kind = "analysis_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class InvalidInput(AnalysisError):
    """Required text is empty or missing. User-correctable."""

    kind = "invalid_input"


class CollaboratorUnavailable(AnalysisError):
    """An optional network collaborator could not be reached or failed."""

    kind = "collaborator_unavailable"


class ConfigurationMissing(CollaboratorUnavailable):
    """Credentials or endpoint for an optional collaborator are not configured."""

    kind = "configuration_missing"


class MalformedJudgment(AnalysisError):
    """The narrative-judgment reply did not parse into the expected schema."""

    kind = "malformed_judgment"
