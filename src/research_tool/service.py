"""
Research service: forwards a topic and prompt to a web-search-capable model.

The service:
- Validates the topic and prompt before anything is sent.
- Resolves a chat client for the configured model through the registry.
- Sends a system + user chat request and returns the generated research.
- Reports progress, the research text and token usage on the output channel,
  and stores the research as a markdown artifact.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Type

from .config import ResearchServiceConfig
from .errors import GenerationError, ModelUnavailableError, ResearchError, ResearchValidationError
from .output import output_chat_analytics
from .protocols import ModelRegistry, OutputSink
from .schemas import (
    Artifact,
    ChatMessage,
    ChatRequest,
    ResearchErrorResult,
    ResearchResult,
    ResearchSuccessResult,
)


logger = logging.getLogger(__name__)

TOOL_NAME = "research/run"

SYSTEM_PROMPT = (
    "You are a research assistant, tasked with researching a topic for the user, using web search. "
    "The user is going to ask you a question, and you will research that using the web search tool, "
    "and return detailed and comprehensive research on the topic."
)


def build_research_request(topic: str, prompt: str) -> ChatRequest:
    return ChatRequest(
        messages=[
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(
                role="user",
                content=f"Research the following topic: {topic}, focusing on the following question: {prompt}",
            ),
        ],
        tools={},
    )


def validate_research_args(topic: Optional[str], prompt: Optional[str]) -> None:
    if not topic:
        raise ResearchValidationError("topic", f"[{TOOL_NAME}] Error: Topic is required")
    if not prompt:
        raise ResearchValidationError("prompt", f"[{TOOL_NAME}] Error: Prompt is required")


def describe_error(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


@contextmanager
def collaborator_errors(error_cls: Type[ResearchError]) -> Iterator[None]:
    """Re-raise any non-research failure of a collaborator as ``error_cls``."""
    try:
        yield
    except ResearchError:
        raise
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Research collaborator failed: %s", describe_error(exc), exc_info=True)
        raise error_cls(describe_error(exc)) from exc


class ResearchService:
    """
    Dispatches research requests to the configured model.

    Holds only the read-only configuration and the injected collaborators, so
    concurrent calls are independent of each other.
    """

    name = "ResearchService"
    description = "Provides Research functionality"

    def __init__(
        self,
        config: ResearchServiceConfig,
        model_registry: ModelRegistry,
        output: OutputSink,
    ) -> None:
        self.config = config
        self._model_registry = model_registry
        self._output = output

    @property
    def research_model(self) -> str:
        return self.config.research_model

    async def run(self, topic: Optional[str], prompt: Optional[str]) -> ResearchResult:
        """
        Run a research request and return a structured result.

        Missing arguments raise ``ResearchValidationError``. Failures of the
        model registry, the chat client or the output channel are reported in
        a ``ResearchErrorResult`` instead of being raised.
        """
        validate_research_args(topic, prompt)

        try:
            research = await self._generate(topic, prompt)
        except ResearchError as exc:
            error = describe_error(exc)
            try:
                self._output.system_line(f"[{TOOL_NAME}] Error generating research: {error}")
            except Exception:  # pylint: disable=broad-except
                logger.warning("Could not report research failure for %r", topic, exc_info=True)
            return ResearchErrorResult(
                topic=topic,
                error=error,
                message=f"Failed to generate research for topic: {topic}",
            )

        return ResearchSuccessResult(
            topic=topic,
            research=research,
            message=f"Research completed successfully for topic: {topic}",
        )

    async def research(self, topic: Optional[str], prompt: Optional[str]) -> str:
        """Run a research request and return the text, raising on any failure."""
        validate_research_args(topic, prompt)
        return await self._generate(topic, prompt)

    async def _generate(self, topic: str, prompt: str) -> str:
        with collaborator_errors(GenerationError):
            self._output.system_line(
                f'[{TOOL_NAME}] Dispatching research request for "{topic}" to {self.research_model}'
            )

        with collaborator_errors(ModelUnavailableError):
            client = await self._model_registry.get_client(self.research_model)

        with collaborator_errors(GenerationError):
            research, response = await client.text_chat(build_research_request(topic, prompt))
        if not isinstance(research, str):
            raise GenerationError(
                f"Model returned {type(research).__name__} instead of research text"
            )

        with collaborator_errors(GenerationError):
            self._output.system_line(f'[{TOOL_NAME}] Successfully generated research for "{topic}"')
            self._output.out(f"Research: \n{research}")
            self._output.output_artifact(
                Artifact(
                    name=f"Research: {topic}",
                    encoding="text",
                    mime_type="text/markdown",
                    body=research,
                )
            )
            output_chat_analytics(response, self._output, TOOL_NAME)

        return research
