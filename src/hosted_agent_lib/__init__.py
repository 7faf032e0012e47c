"""Hosted Agent Library - run client-side tool functions for agents on a hosted agent API."""

from .agent_core import (
    ClientSettings,
    GenericAgentClient,
    LLMConfig,
    AgentConfig,
    ToolConfig,
    InvokeResult,
    IntermediateStep,
    ToolRegistry,
    ToolDefinition,
    ToolDispatcher,
    setup_logging,
)
from .agent_impl import HostedAgentClient, HostedToolRegistry, AgentRunner, RunResult

__version__ = "0.1.0"

__all__ = [
    "ClientSettings",
    "GenericAgentClient",
    "LLMConfig",
    "AgentConfig",
    "ToolConfig",
    "InvokeResult",
    "IntermediateStep",
    "ToolRegistry",
    "ToolDefinition",
    "ToolDispatcher",
    "setup_logging",
    "HostedAgentClient",
    "HostedToolRegistry",
    "AgentRunner",
    "RunResult",
]
