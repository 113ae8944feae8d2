"""
Registers the research tool, the scripting function and (when configured)
the research service on a FastAPI application.
"""

import logging

from fastapi import FastAPI

from .config import Settings
from .protocols import ModelRegistry, OutputSink
from .service import ResearchService
from .tools import FUNCTIONS, TOOLS, FunctionRegistry, ToolRegistry


logger = logging.getLogger(__name__)

name = "research-tool"
version = "0.1.0"
description = "Research tool backed by a web-search-capable chat model"


def install(
    app: FastAPI,
    settings: Settings,
    model_registry: ModelRegistry,
    output: OutputSink,
) -> None:
    app.state.tool_registry = ToolRegistry()
    app.state.tool_registry.add_tools(TOOLS)

    app.state.function_registry = FunctionRegistry()
    for function in FUNCTIONS:
        app.state.function_registry.register_function(function)

    app.state.research_service = None
    if settings.research is not None:
        app.state.research_service = ResearchService(settings.research, model_registry, output)
        logger.info("Research service using model %s", settings.research.research_model)
    else:
        logger.warning("No research configuration found; research tools are unavailable")
