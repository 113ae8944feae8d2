"""
Pydantic models shared by the research service, the model clients and the
HTTP surface.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage]
    tools: Dict[str, Any] = Field(default_factory=dict)


class TokenUsage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt_tokens: int = Field(0, alias="promptTokens")
    completion_tokens: int = Field(0, alias="completionTokens")
    cost: float = 0.0


class ChatResponse(BaseModel):
    usage: Optional[TokenUsage] = None


class ResearchArgs(BaseModel):
    topic: str = Field(description="The main topic or subject to research")
    prompt: str = Field(
        description="The detailed research prompt or specific questions to investigate about the topic"
    )


class ResearchSuccessResult(BaseModel):
    status: Literal["completed"] = "completed"
    topic: str
    research: str
    message: str


class ResearchErrorResult(BaseModel):
    status: Literal["error"] = "error"
    topic: str
    error: str
    message: str


ResearchResult = Annotated[
    Union[ResearchSuccessResult, ResearchErrorResult], Field(discriminator="status")
]


class Artifact(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    encoding: Literal["text", "base64"] = "text"
    mime_type: str = Field("text/markdown", alias="mimeType")
    body: str
