"""
FastAPI backend for the research tool.

Exposes:
- Tool endpoints (structured research results)
- Scripting function endpoints (research text)
- Stored research artifacts
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import plugin
from .config import Settings, settings as default_settings
from .model_registry import StaticModelRegistry
from .output import InMemoryArtifactStore, LoggingOutputChannel
from .protocols import ModelRegistry
from .tool_server import artifacts_router, functions_router, router as tools_router


def create_app(
    settings: Optional[Settings] = None,
    model_registry: Optional[ModelRegistry] = None,
    artifact_store: Optional[InMemoryArtifactStore] = None,
) -> FastAPI:
    settings = settings or default_settings
    owned_registry: Optional[StaticModelRegistry] = None
    if model_registry is None:
        model_registry = owned_registry = StaticModelRegistry.from_settings(settings)
    artifact_store = artifact_store or InMemoryArtifactStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        yield
        # Injected registries belong to the caller.
        if owned_registry is not None:
            await owned_registry.aclose()

    app = FastAPI(title="Research Tool", version=plugin.version, lifespan=lifespan)

    # Allow local UIs (Streamlit) to talk to the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    app.state.artifact_store = artifact_store
    app.state.model_registry = model_registry
    plugin.install(app, settings, model_registry, LoggingOutputChannel(artifact_store))

    app.include_router(tools_router)
    app.include_router(functions_router)
    app.include_router(artifacts_router)

    return app


app = create_app()
