"""Exceptions raised by the research service."""


class ResearchError(Exception):
    """Base class for research failures."""


class ResearchValidationError(ResearchError, ValueError):
    """A required research argument is missing or empty."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class ModelUnavailableError(ResearchError):
    """No online client exists for the configured model."""


class GenerationError(ResearchError):
    """The chat request failed while generating research."""
