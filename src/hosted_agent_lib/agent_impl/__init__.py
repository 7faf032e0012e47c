"""Collect concrete hosted API implementations."""

from .hosted import HostedAgentClient, HostedToolRegistry, AgentRunner, RunResult

__all__ = ["HostedAgentClient", "HostedToolRegistry", "AgentRunner", "RunResult"]
