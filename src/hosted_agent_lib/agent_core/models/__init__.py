"""Wire models for hosted resources and agent invocations."""

from .resources import ApiModel, LLMConfig, AgentConfig, ToolConfig, Resource
from .invocation import InvokeRequest, AgentAction, IntermediateStep, InvokeResult

__all__ = [
    "ApiModel",
    "LLMConfig",
    "AgentConfig",
    "ToolConfig",
    "Resource",
    "InvokeRequest",
    "AgentAction",
    "IntermediateStep",
    "InvokeResult",
]
