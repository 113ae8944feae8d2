"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from research_tool.backend import create_app
from research_tool.config import ResearchServiceConfig, Settings
from research_tool.output import InMemoryArtifactStore
from research_tool.schemas import TokenUsage
from research_tool.service import ResearchService

from fakes import RESEARCH_MODEL, FakeChatClient, FakeModelRegistry, RecordingOutput


@pytest.fixture
def chat_client():
    return FakeChatClient(
        text="R", usage=TokenUsage(prompt_tokens=10, completion_tokens=5, cost=0.001)
    )


@pytest.fixture
def model_registry(chat_client):
    return FakeModelRegistry(chat_client)


@pytest.fixture
def output():
    return RecordingOutput()


@pytest.fixture
def research_config():
    return ResearchServiceConfig(researchModel=RESEARCH_MODEL)


@pytest.fixture
def service(research_config, model_registry, output):
    return ResearchService(research_config, model_registry, output)


@pytest.fixture
def artifact_store():
    return InMemoryArtifactStore()


@pytest.fixture
def test_client(research_config, model_registry, artifact_store):
    """Create a test client for an app with the research service configured."""
    app = create_app(Settings(research=research_config), model_registry, artifact_store)
    return TestClient(app)
