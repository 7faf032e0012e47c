"""Tool dispatch."""

from .dispatcher import ToolDispatcher

__all__ = ["ToolDispatcher"]
