"""
Tool and scripting-function definitions exposed by the research package.

Tools take a validated input object and return a structured result.
Scripting functions take positional string arguments and return text.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel

from .schemas import ResearchArgs, ResearchResult
from .service import TOOL_NAME, ResearchService


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Type[BaseModel]
    execute: Callable[[BaseModel, ResearchService], Awaitable[BaseModel]]


@dataclass(frozen=True)
class ScriptingFunction:
    name: str
    params: List[str]
    execute: Callable[..., Awaitable[str]]


@dataclass
class ToolRegistry:
    tools: Dict[str, ToolDefinition] = field(default_factory=dict)

    def add_tools(self, tools: Iterable[ToolDefinition]) -> None:
        for tool in tools:
            self.tools[tool.name] = tool

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self.tools.get(name)

    def list(self) -> List[ToolDefinition]:
        return list(self.tools.values())


@dataclass
class FunctionRegistry:
    functions: Dict[str, ScriptingFunction] = field(default_factory=dict)

    def register_function(self, function: ScriptingFunction) -> None:
        self.functions[function.name] = function

    def get(self, name: str) -> Optional[ScriptingFunction]:
        return self.functions.get(name)

    def list(self) -> List[ScriptingFunction]:
        return list(self.functions.values())


async def _execute_research(args: ResearchArgs, service: ResearchService) -> ResearchResult:
    return await service.run(args.topic, args.prompt)


async def _research_function(service: ResearchService, topic: str, prompt: str) -> str:
    return await service.research(topic, prompt)


research_tool = ToolDefinition(
    name=TOOL_NAME,
    description="Dispatches a research request to an AI agent, and returns the generated research content.",
    input_schema=ResearchArgs,
    execute=_execute_research,
)

research_function = ScriptingFunction(
    name="research",
    params=["topic", "prompt"],
    execute=_research_function,
)

TOOLS = [research_tool]
FUNCTIONS = [research_function]
