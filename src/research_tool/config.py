"""
Configuration utilities for the research tool.

Central place to configure:
- The research service slice (which web-search-capable model to use)
- Models known to the bundled model registry
- HTTP host settings for the API and the Streamlit UI
"""

import os
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


CONFIG_ENV_VAR = "RESEARCH_TOOL_CONFIG"


class ResearchServiceConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Identifier of a model known to the registry to support web search.
    research_model: str = Field(alias="researchModel", min_length=1)


class ModelEndpoint(BaseModel):
    base_url: str = "http://localhost:11434"
    # Provider-side model name
    model: str = "llama3"

    # Used to price token usage; local models cost nothing.
    prompt_token_price: float = 0.0
    completion_token_price: float = 0.0


class Settings(BaseModel):
    # Base URL where the FastAPI app is running (used by the UI).
    api_base_url: str = "http://localhost:8000"
    host: str = "0.0.0.0"
    port: int = 8000

    log_level: str = "INFO"
    http_timeout: float = 120.0

    # The research service is only installed when this slice is present.
    research: Optional[ResearchServiceConfig] = None

    models: Dict[str, ModelEndpoint] = Field(default_factory=dict)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from a JSON file.

    The path defaults to the ``RESEARCH_TOOL_CONFIG`` environment variable.
    Without either, the built-in defaults are returned.
    """
    path = path or os.getenv(CONFIG_ENV_VAR)
    if not path:
        return Settings()
    return Settings.model_validate_json(Path(path).read_text(encoding="utf-8"))


settings = load_settings()
