"""Tests for the research service."""

import asyncio

import pytest

from research_tool.config import ResearchServiceConfig
from research_tool.errors import GenerationError, ModelUnavailableError, ResearchValidationError
from research_tool.schemas import ResearchErrorResult, ResearchSuccessResult
from research_tool.service import SYSTEM_PROMPT, ResearchService

from fakes import RESEARCH_MODEL, EchoChatClient, FailingOutput, FakeChatClient, FakeModelRegistry


@pytest.mark.parametrize("topic", [None, ""])
def test_missing_topic_rejected_before_model_call(service, model_registry, chat_client, topic):
    with pytest.raises(ResearchValidationError) as excinfo:
        asyncio.run(service.run(topic, "latest breakthroughs"))

    assert excinfo.value.field == "topic"
    assert str(excinfo.value) == "[research/run] Error: Topic is required"
    assert model_registry.requested == []
    assert chat_client.requests == []


@pytest.mark.parametrize("prompt", [None, ""])
def test_missing_prompt_rejected_before_model_call(service, model_registry, chat_client, prompt):
    with pytest.raises(ResearchValidationError) as excinfo:
        asyncio.run(service.run("Quantum Computing", prompt))

    assert excinfo.value.field == "prompt"
    assert str(excinfo.value) == "[research/run] Error: Prompt is required"
    assert model_registry.requested == []
    assert chat_client.requests == []


def test_whitespace_is_not_trimmed(service, chat_client):
    result = asyncio.run(service.run(" ", " "))

    assert result.status == "completed"
    assert len(chat_client.requests) == 1


def test_successful_research(service):
    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result == ResearchSuccessResult(
        topic="Quantum Computing",
        research="R",
        message="Research completed successfully for topic: Quantum Computing",
    )
    assert result.model_dump() == {
        "status": "completed",
        "topic": "Quantum Computing",
        "research": "R",
        "message": "Research completed successfully for topic: Quantum Computing",
    }


def test_example_scenario(research_config, output):
    client = FakeChatClient(text="Qubits improved.")
    service = ResearchService(research_config, FakeModelRegistry(client), output)

    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result.status == "completed"
    assert result.research == "Qubits improved."
    assert result.topic == "Quantum Computing"


def test_progress_output_and_artifact(service, output):
    asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert output.lines == [
        f'[research/run] Dispatching research request for "Quantum Computing" to {RESEARCH_MODEL}',
        '[research/run] Successfully generated research for "Quantum Computing"',
        "[research/run] Token usage - promptTokens: 10, completionTokens: 5, cost: 0.0010",
    ]
    assert output.texts == ["Research: \nR"]

    [artifact] = output.artifacts
    assert artifact.name == "Research: Quantum Computing"
    assert artifact.encoding == "text"
    assert artifact.mime_type == "text/markdown"
    assert artifact.body == "R"


def test_no_usage_line_without_usage(research_config, output):
    service = ResearchService(research_config, FakeModelRegistry(FakeChatClient()), output)

    asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert not any("Token usage" in line for line in output.lines)


def test_chat_failure_returns_error_result(research_config, output):
    client = FakeChatClient(error=RuntimeError("provider exploded"))
    service = ResearchService(research_config, FakeModelRegistry(client), output)

    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result == ResearchErrorResult(
        topic="Quantum Computing",
        error="provider exploded",
        message="Failed to generate research for topic: Quantum Computing",
    )
    assert output.lines[-1] == "[research/run] Error generating research: provider exploded"
    assert output.artifacts == []


def test_unavailable_model_returns_error_result(research_config, output):
    registry = FakeModelRegistry(error=ModelUnavailableError("no online client"))
    service = ResearchService(research_config, registry, output)

    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result.status == "error"
    assert result.error == "no online client"
    assert registry.requested == [RESEARCH_MODEL]


def test_registry_failures_are_reported_as_unavailable(research_config, output):
    registry = FakeModelRegistry(error=LookupError("registry down"))
    service = ResearchService(research_config, registry, output)

    with pytest.raises(ModelUnavailableError, match="registry down"):
        asyncio.run(service.research("Quantum Computing", "latest breakthroughs"))


def test_research_returns_text(service):
    assert asyncio.run(service.research("Quantum Computing", "latest breakthroughs")) == "R"


def test_research_raises_on_generation_failure(research_config, output):
    client = FakeChatClient(error=ConnectionError("network down"))
    service = ResearchService(research_config, FakeModelRegistry(client), output)

    with pytest.raises(GenerationError, match="network down"):
        asyncio.run(service.research("Quantum Computing", "latest breakthroughs"))


@pytest.mark.parametrize(
    "topic,prompt",
    [
        ("Quantum Computing", "latest breakthroughs"),
        ('C++ & "templates" <T>', "What's {new} in ${version}? 100% sure\n\ttabs"),
        ("Ünïcödé 量子", "%s %(name)s {0}"),
    ],
)
def test_user_message_is_interpolated_verbatim(service, chat_client, topic, prompt):
    asyncio.run(service.run(topic, prompt))

    [request] = chat_client.requests
    system, user = request.messages
    assert system.role == "system"
    assert system.content == SYSTEM_PROMPT
    assert user.role == "user"
    assert user.content == (
        "Research the following topic: " + topic + ", focusing on the following question: " + prompt
    )
    assert request.tools == {}


def test_model_id_passed_unchanged(output, chat_client):
    model_id = "  provider/Model-X:web-search  "
    registry = FakeModelRegistry(chat_client)
    service = ResearchService(ResearchServiceConfig(researchModel=model_id), registry, output)

    asyncio.run(service.run("topic", "prompt"))

    assert registry.requested == [model_id]


def test_concurrent_calls_do_not_interfere(research_config, output):
    service = ResearchService(research_config, FakeModelRegistry(EchoChatClient()), output)
    topics = [f"topic-{i}" for i in range(20)]

    async def run_all():
        return await asyncio.gather(*(service.run(t, f"question about {t}") for t in topics))

    results = asyncio.run(run_all())

    for topic, result in zip(topics, results):
        assert result.topic == topic
        assert result.research == (
            f"Research the following topic: {topic}, "
            f"focusing on the following question: question about {topic}"
        )


@pytest.mark.parametrize("reply", [None, 42, ["R"]])
def test_malformed_reply_returns_error_result(research_config, output, reply):
    service = ResearchService(research_config, FakeModelRegistry(FakeChatClient(text=reply)), output)

    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result.status == "error"
    assert type(reply).__name__ in result.error
    assert result.message == "Failed to generate research for topic: Quantum Computing"
    assert output.artifacts == []


@pytest.mark.parametrize("method", ["out", "output_artifact"])
def test_output_failure_returns_error_result(research_config, chat_client, method):
    output = FailingOutput(method, OSError("disk full"))
    service = ResearchService(research_config, FakeModelRegistry(chat_client), output)

    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result == ResearchErrorResult(
        topic="Quantum Computing",
        error="disk full",
        message="Failed to generate research for topic: Quantum Computing",
    )
    assert output.lines[-1] == "[research/run] Error generating research: disk full"


def test_status_line_failure_returns_error_result(research_config, model_registry):
    output = FailingOutput("system_line", OSError("channel closed"))
    service = ResearchService(research_config, model_registry, output)

    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result.status == "error"
    assert result.error == "channel closed"
    assert model_registry.requested == []


def test_output_failure_raises_from_research(research_config, chat_client):
    output = FailingOutput("output_artifact", OSError("disk full"))
    service = ResearchService(research_config, FakeModelRegistry(chat_client), output)

    with pytest.raises(GenerationError, match="disk full"):
        asyncio.run(service.research("Quantum Computing", "latest breakthroughs"))


def test_error_without_message_uses_exception_name(research_config, output):
    client = FakeChatClient(error=asyncio.TimeoutError())
    service = ResearchService(research_config, FakeModelRegistry(client), output)

    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result.error == "TimeoutError"
    assert output.lines[-1] == "[research/run] Error generating research: TimeoutError"


def test_unavailable_model_without_message_uses_exception_name(research_config, output):
    registry = FakeModelRegistry(error=ModelUnavailableError())
    service = ResearchService(research_config, registry, output)

    result = asyncio.run(service.run("Quantum Computing", "latest breakthroughs"))

    assert result.error == "ModelUnavailableError"
