"""Export the exception hierarchy used by tool execution and the hosted API client."""

from .exceptions import (
    AgentToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    HostedAgentError,
    AgentApiError,
    AgentResponseError,
)

__all__ = [
    "AgentToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "HostedAgentError",
    "AgentApiError",
    "AgentResponseError",
]
