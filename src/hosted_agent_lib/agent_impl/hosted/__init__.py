"""Expose the hosted agent API client, its tool registry and the agent runner."""

from .client import HostedAgentClient
from .registry import HostedToolRegistry
from .runner import AgentRunner, RunResult

__all__ = ["HostedAgentClient", "HostedToolRegistry", "AgentRunner", "RunResult"]
