"""Protocols for the collaborators the research service depends on."""

from typing import Protocol, Tuple

from .schemas import Artifact, ChatRequest, ChatResponse


class ChatClient(Protocol):
    """Protocol for a chat-capable model client."""

    async def text_chat(self, request: ChatRequest) -> Tuple[str, ChatResponse]:
        """
        Send a chat request and wait for the full reply.

        Returns:
            The generated text and the response metadata (token usage).
        """
        ...


class ModelRegistry(Protocol):
    """Protocol for resolving a model identifier to a live client."""

    async def get_client(self, model_id: str) -> ChatClient:
        """Return an online client for ``model_id`` or raise if there is none."""
        ...


class OutputSink(Protocol):
    """Protocol for the host output channel."""

    def system_line(self, message: str) -> None:
        ...

    def out(self, text: str) -> None:
        ...

    def output_artifact(self, artifact: Artifact) -> None:
        ...
