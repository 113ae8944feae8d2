"""
Default model registry backed by Ollama-compatible chat endpoints.

The research service only needs ``get_client(model_id)`` and
``ChatClient.text_chat(request)``; any registry satisfying the protocols in
``protocols.py`` can replace this one.
"""

import logging
from typing import Dict, Optional, Tuple

import httpx

from .config import ModelEndpoint, Settings
from .errors import ModelUnavailableError
from .schemas import ChatRequest, ChatResponse, TokenUsage


logger = logging.getLogger(__name__)


class OllamaChatClient:
    """Chat client for a single model served by an Ollama `/api/chat` endpoint."""

    def __init__(self, endpoint: ModelEndpoint, http_client: httpx.AsyncClient) -> None:
        self.endpoint = endpoint
        self._client = http_client

    async def is_online(self) -> bool:
        try:
            resp = await self._client.get(f"{self.endpoint.base_url}/api/tags")
        except httpx.HTTPError as exc:
            logger.warning("Model endpoint %s unreachable: %s", self.endpoint.base_url, exc)
            return False
        return resp.status_code == 200

    async def text_chat(self, request: ChatRequest) -> Tuple[str, ChatResponse]:
        payload = {
            "model": self.endpoint.model,
            "messages": [m.model_dump() for m in request.messages],
            "stream": False,
        }
        resp = await self._client.post(f"{self.endpoint.base_url}/api/chat", json=payload)
        resp.raise_for_status()
        data = resp.json()

        # Non-streaming Ollama chat returns a single 'message'
        text = data["message"]["content"]
        return text, ChatResponse(usage=self._usage(data))

    def _usage(self, data: dict) -> Optional[TokenUsage]:
        if "prompt_eval_count" not in data and "eval_count" not in data:
            return None
        prompt_tokens = data.get("prompt_eval_count", 0)
        completion_tokens = data.get("eval_count", 0)
        cost = (
            prompt_tokens * self.endpoint.prompt_token_price
            + completion_tokens * self.endpoint.completion_token_price
        )
        return TokenUsage(
            prompt_tokens=prompt_tokens, completion_tokens=completion_tokens, cost=cost
        )


class StaticModelRegistry:
    """Resolves model identifiers to a fixed set of chat clients."""

    def __init__(self, owned_http_client: Optional[httpx.AsyncClient] = None) -> None:
        self._clients: Dict[str, OllamaChatClient] = {}
        # Only set when the registry created the HTTP client itself.
        self._owned_http_client = owned_http_client

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: Optional[httpx.AsyncClient] = None
    ) -> "StaticModelRegistry":
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=settings.http_timeout)
            registry = cls(http_client)
        else:
            registry = cls()
        for model_id, endpoint in settings.models.items():
            registry.register(model_id, OllamaChatClient(endpoint, http_client))
        return registry

    def register(self, model_id: str, client: OllamaChatClient) -> None:
        self._clients[model_id] = client

    async def get_client(self, model_id: str) -> OllamaChatClient:
        client = self._clients.get(model_id)
        if client is None:
            raise ModelUnavailableError(f"No model registered with id {model_id!r}")
        if not await client.is_online():
            raise ModelUnavailableError(f"No online client available for model {model_id!r}")
        return client

    async def aclose(self) -> None:
        if self._owned_http_client is not None:
            await self._owned_http_client.aclose()
