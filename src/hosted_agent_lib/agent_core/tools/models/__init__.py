"""Tool-related data models."""

from .models import ToolDefinition
from .tool_call import ToolCallRequest, ToolCallResult

__all__ = ["ToolDefinition", "ToolCallRequest", "ToolCallResult"]
