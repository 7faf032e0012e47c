"""Tool registry abstraction."""

from .base import ToolRegistry

__all__ = ["ToolRegistry"]
