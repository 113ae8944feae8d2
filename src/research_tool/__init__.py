"""
Research tool package.

Sends a topic and a question to a web-search-capable chat model and returns
the generated research, as a structured tool result or as plain text.
"""

from .config import ResearchServiceConfig, Settings
from .errors import GenerationError, ModelUnavailableError, ResearchError, ResearchValidationError
from .service import ResearchService

__all__ = [
    "GenerationError",
    "ModelUnavailableError",
    "ResearchError",
    "ResearchService",
    "ResearchServiceConfig",
    "ResearchValidationError",
    "Settings",
]
