"""
HTTP surface for the registered tools, scripting functions and artifacts.

Tools take a JSON object validated against the tool's input schema and return
a structured result. Scripting functions take positional arguments and return
text directly, failing the request when the model fails.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import BaseModel, ValidationError

from .errors import ResearchError, ResearchValidationError
from .output import InMemoryArtifactStore
from .schemas import Artifact
from .service import ResearchService
from .tools import FunctionRegistry, ToolRegistry


router = APIRouter(prefix="/tools", tags=["tools"])
functions_router = APIRouter(prefix="/functions", tags=["functions"])
artifacts_router = APIRouter(prefix="/artifacts", tags=["artifacts"])


def get_tool_registry(request: Request) -> ToolRegistry:
    return request.app.state.tool_registry


def get_function_registry(request: Request) -> FunctionRegistry:
    return request.app.state.function_registry


def get_artifact_store(request: Request) -> InMemoryArtifactStore:
    return request.app.state.artifact_store


def get_research_service(request: Request) -> ResearchService:
    service = request.app.state.research_service
    if service is None:
        raise HTTPException(status_code=503, detail="Research service is not configured.")
    return service


class HealthResponse(BaseModel):
    status: str


@router.get("/health", response_model=HealthResponse)
def tools_health() -> HealthResponse:
    """Simple connectivity check for the tool server."""
    return HealthResponse(status="ok")


class ToolInfo(BaseModel):
    name: str
    description: str
    input_schema: Dict[str, Any]


@router.get("", response_model=List[ToolInfo])
def list_tools(registry: ToolRegistry = Depends(get_tool_registry)) -> List[ToolInfo]:
    return [
        ToolInfo(
            name=tool.name,
            description=tool.description,
            input_schema=tool.input_schema.model_json_schema(),
        )
        for tool in registry.list()
    ]


@router.post("/{tool_name:path}", response_model=None)
async def run_tool(
    request: Request,
    tool_name: str,
    payload: Dict[str, Any] = Body(...),
    registry: ToolRegistry = Depends(get_tool_registry),
) -> Any:
    """Validate the payload against the tool's input schema and execute it."""
    tool = registry.get(tool_name)
    if tool is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")
    service = get_research_service(request)

    try:
        args = tool.input_schema.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False)) from exc

    try:
        return await tool.execute(args, service)
    except ResearchValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


class FunctionInfo(BaseModel):
    name: str
    params: List[str]


class FunctionCall(BaseModel):
    args: List[str]


class FunctionResult(BaseModel):
    result: str


@functions_router.get("", response_model=List[FunctionInfo])
def list_functions(
    registry: FunctionRegistry = Depends(get_function_registry),
) -> List[FunctionInfo]:
    return [FunctionInfo(name=f.name, params=f.params) for f in registry.list()]


@functions_router.post("/{name}", response_model=FunctionResult)
async def call_function(
    request: Request,
    name: str,
    call: FunctionCall,
    registry: FunctionRegistry = Depends(get_function_registry),
) -> FunctionResult:
    function = registry.get(name)
    if function is None:
        raise HTTPException(status_code=404, detail=f"Unknown function: {name}")
    if len(call.args) != len(function.params):
        raise HTTPException(
            status_code=400,
            detail=f"{name}() expects {len(function.params)} arguments "
            f"({', '.join(function.params)}), got {len(call.args)}",
        )
    service = get_research_service(request)

    try:
        result = await function.execute(service, *call.args)
    except ResearchValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ResearchError as exc:
        raise HTTPException(status_code=502, detail=f"Research failed: {exc}") from exc

    return FunctionResult(result=result)


@artifacts_router.get("", response_model=List[Artifact])
def list_artifacts(store: InMemoryArtifactStore = Depends(get_artifact_store)) -> List[Artifact]:
    return store.list()


@artifacts_router.get("/{name:path}", response_model=Artifact)
def get_artifact(
    name: str, store: InMemoryArtifactStore = Depends(get_artifact_store)
) -> Artifact:
    artifact = store.get(name)
    if artifact is None:
        raise HTTPException(status_code=404, detail=f"Unknown artifact: {name}")
    return artifact
