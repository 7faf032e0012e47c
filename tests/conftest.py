import json
from typing import Annotated, Any, Callable, Dict

import httpx
import pytest
from pydantic import Field

from hosted_agent_lib import ClientSettings, HostedAgentClient, HostedToolRegistry

Handler = Callable[[httpx.Request], httpx.Response]


def envelope(data: Any, status_code: int = 200) -> httpx.Response:
    """Build a response in the hosted API's success envelope."""
    return httpx.Response(status_code, json={"success": True, "data": data})


def request_json(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content) if request.content else {}


@pytest.fixture
def settings() -> ClientSettings:
    # No backoff in tests
    return ClientSettings(api_key="test-key", base_url="https://agents.test", max_retries=2, base_retry_delay=0.0)


@pytest.fixture
def make_client(settings: ClientSettings) -> Callable[[Handler], HostedAgentClient]:
    """Factory for clients whose HTTP traffic goes to an in-memory handler."""

    def factory(handler: Handler) -> HostedAgentClient:
        http_client = httpx.AsyncClient(base_url=settings.base_url, transport=httpx.MockTransport(handler))
        return HostedAgentClient(settings, http_client=http_client)

    return factory


@pytest.fixture
def weather_registry() -> HostedToolRegistry:
    registry = HostedToolRegistry()

    @registry.tool
    def get_weather(
        city: Annotated[str, Field(description="City to look up")],
        unit: Annotated[str, Field(description="celsius or fahrenheit")] = "celsius",
    ) -> str:
        """Returns the current weather for a city."""
        return f"Sunny in {city}, 21 degrees {unit}"

    return registry
