"""Public exports for the core agent abstractions and utilities."""

from .base import GenericAgentClient
from .config import ClientSettings
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
from .logger import get_logger, setup_logging
from .models import (
    LLMConfig,
    AgentConfig,
    ToolConfig,
    Resource,
    InvokeRequest,
    AgentAction,
    IntermediateStep,
    InvokeResult,
)
from .tools import (
    ToolDefinition,
    ToolCallRequest,
    ToolCallResult,
    ToolRegistry,
    ToolDispatcher,
    SchemaValidator,
)

__all__ = [
    "GenericAgentClient",
    "ClientSettings",
    "AgentToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "HostedAgentError",
    "AgentApiError",
    "AgentResponseError",
    "get_logger",
    "setup_logging",
    "LLMConfig",
    "AgentConfig",
    "ToolConfig",
    "Resource",
    "InvokeRequest",
    "AgentAction",
    "IntermediateStep",
    "InvokeResult",
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "ToolDispatcher",
    "SchemaValidator",
]
