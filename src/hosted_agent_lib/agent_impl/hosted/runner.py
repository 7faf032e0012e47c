"""Provision an agent with client-side tools and run it end to end."""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from hosted_agent_lib.agent_core import (
    AgentConfig,
    GenericAgentClient,
    HostedAgentError,
    IntermediateStep,
    LLMConfig,
    ToolCallResult,
    ToolDispatcher,
)
from hosted_agent_lib.agent_core.logger import get_logger
from .registry import HostedToolRegistry

logger = get_logger(__name__)


class RunResult(BaseModel):
    """
    Outcome of `AgentRunner.run`.

    Attributes:
        output: The agent's final text answer.
        session_id: Session the run took place in.
        steps: Every intermediate step reported across all invocations.
        tool_results: Local results, aligned with ``steps``.
    """

    output: str
    session_id: str
    steps: List[IntermediateStep] = Field(default_factory=list)
    tool_results: List[ToolCallResult] = Field(default_factory=list)


class AgentRunner:
    """
    Wires a tool registry to a hosted agent.

    `provision` publishes the registry's tools to a new agent, `run` invokes it
    and executes the tools it selects locally, `teardown` removes what
    `provision` created.
    """

    def __init__(
        self,
        client: GenericAgentClient,
        registry: Optional[HostedToolRegistry] = None,
        max_function_loops: int = 1,
        tool_timeout: float = 180.0,
        agent_id: Optional[str] = None,
    ):
        """
        Args:
            client: The hosted API client.
            registry: Local tools. An empty registry is used when omitted.
            max_function_loops: Maximum number of invocations per run. With more than one,
                local tool results are sent back to the agent as the next input.
            tool_timeout: Timeout in seconds for a single tool execution.
            agent_id: An existing agent to run instead of provisioning a new one.
        """
        if max_function_loops < 1:
            raise ValueError("max_function_loops must be at least 1.")

        self.client = client
        self.registry = registry if registry is not None else HostedToolRegistry()
        self.max_function_loops = max_function_loops
        self.agent_id = agent_id
        self.llm_id: Optional[str] = None
        self.tool_ids: Dict[str, str] = {}
        self._owns_agent = False
        self._dispatcher = ToolDispatcher(registry=self.registry, tool_timeout=tool_timeout)

    async def provision(self, llm: LLMConfig, agent: AgentConfig) -> str:
        """
        Create the LLM, the agent and one hosted tool per registered function.

        Returns:
            The id of the created agent.

        Raises:
            RuntimeError: If resources from an earlier `provision` were not torn down.
        """
        if self._owns_agent or self.tool_ids:
            raise RuntimeError(f"Agent '{self.agent_id}' is already provisioned. Call teardown() first.")

        llm_resource = await self.client.create_llm(llm)
        agent_resource = await self.client.create_agent(agent)
        self.llm_id = llm_resource.id
        self.agent_id = agent_resource.id
        self._owns_agent = True
        await self.client.add_llm(self.agent_id, self.llm_id)

        for tool_config in self.registry.tool_object:
            tool_resource = await self.client.create_tool(tool_config)
            self.tool_ids[tool_config.name] = tool_resource.id
            await self.client.add_tool(self.agent_id, tool_resource.id)

        logger.info(f"Provisioned agent '{self.agent_id}' with {len(self.tool_ids)} tool(s).")
        return self.agent_id

    async def run(self, input: str, session_id: Optional[str] = None) -> RunResult:
        """
        Invoke the agent and execute the tools it selected.

        Args:
            input: The user's message.
            session_id: Conversation session; generated by the client when omitted.

        Returns:
            The final output together with every step and its local result.

        Raises:
            RuntimeError: If no agent has been provisioned or given.
        """
        if self.agent_id is None:
            raise RuntimeError("No agent available. Call provision() or pass agent_id.")

        steps: List[IntermediateStep] = []
        tool_results: List[ToolCallResult] = []
        next_input = input

        for loop_index in range(self.max_function_loops):
            result = await self.client.invoke(self.agent_id, next_input, session_id=session_id)
            session_id = result.session_id

            if not result.intermediate_steps:
                logger.debug("No intermediate steps in response. Run finished.")
                return RunResult(output=result.output, session_id=session_id or "", steps=steps, tool_results=tool_results)

            logger.info(
                f"Loop {loop_index + 1}/{self.max_function_loops}: "
                f"agent selected {len(result.intermediate_steps)} tool(s)."
            )
            results = await self._dispatcher.dispatch(result.intermediate_steps)
            steps.extend(result.intermediate_steps)
            tool_results.extend(results)
            next_input = self.format_tool_results(results)
        else:
            if self.max_function_loops > 1:
                logger.warning(f"Max tool loops ({self.max_function_loops}) reached. Stopping execution.")

        return RunResult(output=result.output, session_id=session_id or "", steps=steps, tool_results=tool_results)

    async def teardown(self) -> None:
        """Delete the tools and agent created by `provision`. Failures are logged."""
        for name, tool_id in list(self.tool_ids.items()):
            try:
                await self.client.delete_tool(tool_id)
            except HostedAgentError as e:
                logger.error(f"Could not delete tool '{name}' ({tool_id}): {e}")
        self.tool_ids.clear()

        if self._owns_agent and self.agent_id is not None:
            try:
                await self.client.delete_agent(self.agent_id)
            except HostedAgentError as e:
                logger.error(f"Could not delete agent '{self.agent_id}': {e}")
            self.agent_id = None
            self.llm_id = None
            self._owns_agent = False

    @staticmethod
    def format_tool_results(results: List[ToolCallResult]) -> str:
        """Render local tool results as the JSON input of a follow-up invocation."""
        payload: List[Dict[str, Any]] = [{"tool": r.name, **r.response} for r in results]
        return json.dumps({"tool_results": payload}, default=str)
