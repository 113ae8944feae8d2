"""
Host output channel: status lines, generated text and persisted artifacts.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .protocols import OutputSink
from .schemas import Artifact, ChatResponse


logger = logging.getLogger(__name__)


@dataclass
class InMemoryArtifactStore:
    """Simple in-memory store for generated artifacts. Not for production use."""

    artifacts: Dict[str, Artifact] = field(default_factory=dict)

    def save(self, artifact: Artifact) -> Artifact:
        self.artifacts[artifact.name] = artifact
        return artifact

    def get(self, name: str) -> Optional[Artifact]:
        return self.artifacts.get(name)

    def list(self) -> List[Artifact]:
        return list(self.artifacts.values())


class LoggingOutputChannel:
    """Writes status lines to the log and keeps artifacts in a store."""

    def __init__(self, artifact_store: Optional[InMemoryArtifactStore] = None) -> None:
        self.artifact_store = artifact_store or InMemoryArtifactStore()

    def system_line(self, message: str) -> None:
        logger.info(message)

    def out(self, text: str) -> None:
        logger.debug(text)

    def output_artifact(self, artifact: Artifact) -> None:
        self.artifact_store.save(artifact)
        logger.info("Stored artifact %r (%s)", artifact.name, artifact.mime_type)


def output_chat_analytics(response: ChatResponse, output: OutputSink, name: str) -> None:
    """Report token usage for a chat response, if the provider returned any."""
    if response.usage is None:
        return
    usage = response.usage
    output.system_line(
        f"[{name}] Token usage - promptTokens: {usage.prompt_tokens}, "
        f"completionTokens: {usage.completion_tokens}, cost: {usage.cost:.4f}"
    )
