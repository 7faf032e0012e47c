"""Async HTTP client for the hosted agent API."""

import uuid
from types import TracebackType
from typing import Any, Optional, Type

import httpx
from pydantic import ValidationError

from hosted_agent_lib.agent_core import (
    AgentApiError,
    AgentConfig,
    AgentResponseError,
    ClientSettings,
    GenericAgentClient,
    InvokeRequest,
    InvokeResult,
    LLMConfig,
    Resource,
    ToolConfig,
)
from hosted_agent_lib.agent_core.logger import get_logger

logger = get_logger(__name__)

API_PREFIX = "/api/v1"
IDEMPOTENT_METHODS = frozenset({"GET", "DELETE"})


class HostedAgentClient(GenericAgentClient):
    """
    Client for the hosted agent API.

    Creates LLM, agent and tool resources, links them together and invokes
    agents. Every response arrives in a ``{"success": ..., "data": ...}``
    envelope which is unwrapped here.
    """

    def __init__(self, settings: ClientSettings, http_client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            settings: Connection and retry settings.
            http_client: Optional pre-configured client. When omitted one is created
                from the settings and closed by `aclose`.
        """
        super().__init__(max_retries=settings.max_retries, base_retry_delay=settings.base_retry_delay)
        self.settings = settings
        self._owns_client = http_client is None
        self._http: httpx.AsyncClient = http_client or httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
        )
        self._headers = {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
        }

    async def __aenter__(self) -> "HostedAgentClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    async def create_llm(self, config: LLMConfig) -> Resource:
        data = await self._call("POST", "/llms", json=config.to_payload())
        return self._resource(data, "LLM")

    async def create_agent(self, config: AgentConfig) -> Resource:
        data = await self._call("POST", "/agents", json=config.to_payload())
        return self._resource(data, "agent")

    async def get_agent(self, agent_id: str) -> Resource:
        data = await self._call("GET", f"/agents/{agent_id}")
        return self._resource(data, "agent")

    async def delete_agent(self, agent_id: str) -> None:
        await self._call("DELETE", f"/agents/{agent_id}", require_data=False)
        logger.info(f"Deleted agent '{agent_id}'.")

    async def add_llm(self, agent_id: str, llm_id: str) -> None:
        await self._call("POST", f"/agents/{agent_id}/llms", json={"llmId": llm_id}, require_data=False)
        logger.debug(f"Attached LLM '{llm_id}' to agent '{agent_id}'.")

    async def create_tool(self, config: ToolConfig) -> Resource:
        data = await self._call("POST", "/tools", json=config.to_payload())
        return self._resource(data, "tool")

    async def delete_tool(self, tool_id: str) -> None:
        await self._call("DELETE", f"/tools/{tool_id}", require_data=False)
        logger.info(f"Deleted tool '{tool_id}'.")

    async def add_tool(self, agent_id: str, tool_id: str) -> None:
        await self._call("POST", f"/agents/{agent_id}/tools", json={"toolId": tool_id}, require_data=False)
        logger.debug(f"Attached tool '{tool_id}' to agent '{agent_id}'.")

    async def invoke(self, agent_id: str, input: str, session_id: Optional[str] = None) -> InvokeResult:
        session_id = session_id or uuid.uuid4().hex
        request = InvokeRequest(input=input, session_id=session_id)
        data = await self._call("POST", f"/agents/{agent_id}/invoke", json=request.to_payload())

        if not isinstance(data, dict):
            raise AgentResponseError(f"Invoke response data must be an object, got {type(data).__name__}.")
        try:
            result = InvokeResult.model_validate({**data, "session_id": session_id})
        except ValidationError as e:
            raise AgentResponseError(f"Invalid invoke response: {e}") from e

        logger.info(
            f"Agent '{agent_id}' answered in session '{session_id}' "
            f"with {len(result.intermediate_steps)} intermediate step(s): {result.tool_names}"
        )
        return result

    async def _call(self, method: str, path: str, *, json: Any = None, require_data: bool = True) -> Any:
        # POSTs create resources or start a run, so they are only resent when the server never took them
        return await self._execute_with_retry(
            self._request,
            method,
            path,
            idempotent=method in IDEMPOTENT_METHODS,
            json=json,
            require_data=require_data,
        )

    async def _request(self, method: str, path: str, *, json: Any = None, require_data: bool = True) -> Any:
        """
        Sends a single request and unwraps the response envelope.

        Raises:
            AgentApiError: On transport failures and HTTP error statuses.
            AgentResponseError: On malformed or unsuccessful envelopes.
        """
        url = f"{API_PREFIX}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = await self._http.request(method, url, json=json, headers=self._headers)
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            raise AgentApiError(f"Cannot connect to {self.settings.base_url}: {e}", connect_failed=True) from e
        except httpx.TimeoutException as e:
            raise AgentApiError(f"Request to {url} timed out") from e
        except httpx.TransportError as e:
            raise AgentApiError(f"Request to {url} failed: {e}") from e

        if response.status_code >= 400:
            raise AgentApiError(
                f"{method} {url} failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        if not response.content:
            if require_data:
                raise AgentResponseError(f"{method} {url} returned an empty body.")
            return None

        try:
            payload = response.json()
        except ValueError as e:
            raise AgentResponseError(f"{method} {url} returned invalid JSON: {e}") from e

        return self._unwrap(payload, f"{method} {url}", require_data)

    @staticmethod
    def _unwrap(payload: Any, context: str, require_data: bool) -> Any:
        if not isinstance(payload, dict):
            raise AgentResponseError(f"{context} returned a non-object body.")
        if payload.get("success") is False:
            raise AgentResponseError(f"{context} was not successful: {payload.get('error') or payload}")
        data = payload.get("data")
        if data is None and require_data:
            raise AgentResponseError(f"{context} returned no data.")
        return data

    @staticmethod
    def _resource(data: Any, kind: str) -> Resource:
        if not isinstance(data, dict) or not data.get("id"):
            raise AgentResponseError(f"Created {kind} has no id.")
        resource = Resource.model_validate(data)
        logger.debug(f"Received {kind} '{resource.id}'.")
        return resource
