from .models import ToolDefinition, ToolCallRequest, ToolCallResult
from .registry import ToolRegistry
from .execution import ToolDispatcher
from .schema import SchemaValidator, ToolParameterFactory

__all__ = [
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "ToolDispatcher",
    "SchemaValidator",
    "ToolParameterFactory",
]
