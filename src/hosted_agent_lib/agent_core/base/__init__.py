"""Re-export the base client interface shared by hosted API implementations."""

from .base import GenericAgentClient

__all__ = ["GenericAgentClient"]
