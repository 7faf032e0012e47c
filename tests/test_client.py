from typing import List

import httpx
import pytest

from hosted_agent_lib import AgentConfig, ClientSettings, HostedAgentClient, LLMConfig, ToolConfig
from hosted_agent_lib.agent_core import AgentApiError, AgentResponseError
from conftest import envelope, request_json


@pytest.mark.asyncio
async def test_create_llm_sends_authenticated_camel_case_payload(make_client) -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return envelope({"id": "llm_1", "provider": "OPENAI"})

    client = make_client(handler)
    resource = await client.create_llm(LLMConfig(provider="OPENAI", api_key="sk-test"))

    assert resource.id == "llm_1"
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/api/v1/llms"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request_json(request) == {"provider": "OPENAI", "apiKey": "sk-test", "options": {}}


@pytest.mark.asyncio
async def test_agent_and_tool_lifecycle_endpoints(make_client) -> None:
    calls: List[tuple] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path, request_json(request)))
        if request.method == "DELETE":
            return httpx.Response(204)
        if request.url.path in ("/api/v1/agents", "/api/v1/agents/agent_1") and request.method in ("POST", "GET"):
            return envelope({"id": "agent_1", "name": "bot"})
        if request.url.path == "/api/v1/tools":
            return envelope({"id": "tool_1"})
        return httpx.Response(200, json={"success": True})

    client = make_client(handler)
    agent = await client.create_agent(AgentConfig(name="bot"))
    fetched = await client.get_agent(agent.id)
    await client.add_llm(agent.id, "llm_1")
    tool = await client.create_tool(ToolConfig.for_function("ping", "Ping.", None))
    await client.add_tool(agent.id, tool.id)
    await client.delete_tool(tool.id)
    await client.delete_agent(agent.id)

    assert fetched.model_extra == {"name": "bot"}
    assert [(method, path) for method, path, _ in calls] == [
        ("POST", "/api/v1/agents"),
        ("GET", "/api/v1/agents/agent_1"),
        ("POST", "/api/v1/agents/agent_1/llms"),
        ("POST", "/api/v1/tools"),
        ("POST", "/api/v1/agents/agent_1/tools"),
        ("DELETE", "/api/v1/tools/tool_1"),
        ("DELETE", "/api/v1/agents/agent_1"),
    ]
    assert calls[2][2] == {"llmId": "llm_1"}
    assert calls[4][2] == {"toolId": "tool_1"}
    assert calls[3][2]["type"] == "FUNCTION"


@pytest.mark.asyncio
async def test_invoke_parses_output_and_steps(make_client) -> None:
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request_json(request))
        return envelope(
            {
                "input": "Weather in Oslo?",
                "output": "Let me check.",
                "intermediate_steps": [[{"tool": "get_weather", "tool_input": {"city": "Oslo"}, "log": ""}, ""]],
            }
        )

    client = make_client(handler)
    result = await client.invoke("agent_1", "Weather in Oslo?", session_id="session-42")

    assert bodies[0] == {"input": "Weather in Oslo?", "sessionId": "session-42", "enableStreaming": False}
    assert result.output == "Let me check."
    assert result.session_id == "session-42"
    assert result.intermediate_steps[0].action.tool == "get_weather"
    assert result.intermediate_steps[0].action.tool_input == {"city": "Oslo"}


@pytest.mark.asyncio
async def test_invoke_generates_session_id(make_client) -> None:
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request_json(request))
        return envelope({"output": "hi"})

    result = await make_client(handler).invoke("agent_1", "hello")

    assert result.session_id
    assert len(result.session_id) == 32
    assert bodies[0]["sessionId"] == result.session_id


@pytest.mark.asyncio
async def test_client_error_is_not_retried(make_client) -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        return httpx.Response(404, text="not found")

    with pytest.raises(AgentApiError) as excinfo:
        await make_client(handler).get_agent("missing")

    assert excinfo.value.status_code == 404
    assert excinfo.value.body == "not found"
    assert not excinfo.value.retryable
    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_server_error_is_retried_until_success(make_client) -> None:
    responses = [httpx.Response(502, text="bad gateway"), httpx.Response(429), envelope({"id": "agent_1"})]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    agent = await make_client(handler).get_agent("agent_1")

    assert agent.id == "agent_1"
    assert responses == []


@pytest.mark.asyncio
async def test_server_error_raises_after_max_retries(make_client) -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        return httpx.Response(500, text="boom")

    with pytest.raises(AgentApiError, match="status 500"):
        await make_client(handler).get_agent("agent_1")

    # Initial call + 2 retries
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_transport_error_is_wrapped_and_retried(make_client) -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(AgentApiError, match="Cannot connect") as excinfo:
        await make_client(handler).get_agent("agent_1")

    assert excinfo.value.status_code is None
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_timeout_is_wrapped(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(AgentApiError, match="timed out"):
        await make_client(handler).get_agent("agent_1")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"success": False, "error": "invalid key"}),
        httpx.Response(200, json={"success": True}),
        httpx.Response(200, json={"success": True, "data": {"name": "no id"}}),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, text="<html>"),
        httpx.Response(200),
    ],
)
async def test_malformed_responses(make_client, response: httpx.Response) -> None:
    client = make_client(lambda request: response)
    with pytest.raises(AgentResponseError):
        await client.get_agent("agent_1")


@pytest.mark.asyncio
async def test_invoke_rejects_invalid_steps(make_client) -> None:
    client = make_client(lambda request: envelope({"output": "x", "intermediate_steps": [["only-one-element"]]}))
    with pytest.raises(AgentResponseError, match="Invalid invoke response"):
        await client.invoke("agent_1", "hi")


@pytest.mark.asyncio
async def test_context_manager_closes_owned_client(settings: ClientSettings) -> None:
    async with HostedAgentClient(settings) as client:
        http_client = client._http
        assert not http_client.is_closed
    assert http_client.is_closed


@pytest.mark.asyncio
async def test_context_manager_leaves_injected_client_open(settings: ClientSettings) -> None:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: envelope({})))
    async with HostedAgentClient(settings, http_client=http_client):
        pass
    assert not http_client.is_closed
    await http_client.aclose()


@pytest.mark.asyncio
async def test_read_timeout_on_create_is_not_resent(make_client) -> None:
    attempts: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(AgentApiError, match="timed out") as excinfo:
        await make_client(handler).create_agent(AgentConfig(name="Weather"))

    assert not excinfo.value.resend_safe
    assert [request.method for request in attempts] == ["POST"]


@pytest.mark.asyncio
async def test_connect_error_on_create_is_resent(make_client) -> None:
    attempts: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ConnectError("refused", request=request)
        return envelope({"id": "agent_1"})

    agent = await make_client(handler).create_agent(AgentConfig(name="Weather"))

    assert agent.id == "agent_1"
    assert len(attempts) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code, expected_attempts", [(503, 2), (429, 2), (500, 1), (502, 1)])
async def test_invoke_resends_only_refused_requests(make_client, status_code: int, expected_attempts: int) -> None:
    attempts: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) == 1:
            return httpx.Response(status_code, text="unavailable")
        return envelope({"output": "done", "intermediate_steps": []})

    client = make_client(handler)
    if expected_attempts == 1:
        with pytest.raises(AgentApiError) as excinfo:
            await client.invoke("agent_1", "hi", session_id="s1")
        assert excinfo.value.status_code == status_code
    else:
        result = await client.invoke("agent_1", "hi", session_id="s1")
        assert result.output == "done"

    assert len(attempts) == expected_attempts
