"""
Custom exception classes for the hosted agent library.

Two families live here: errors raised while registering, validating and
executing local tool functions, and errors raised while talking to the
hosted agent API.
"""

from typing import Any, Optional


class AgentToolError(Exception):
    """Base exception for all local tool-related errors."""

    pass


class ToolRegistrationError(AgentToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(AgentToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolExecutionError(AgentToolError):
    """Raised when a tool fails during execution."""

    pass


class ToolValidationError(AgentToolError):
    """Raised when tool parameters or definition are invalid."""

    pass


class HostedAgentError(Exception):
    """Base exception for errors coming from the hosted agent API."""

    pass


class AgentApiError(HostedAgentError):
    """Raised when a request to the hosted API fails.

    Attributes:
        status_code: HTTP status of the failed response, or None for transport failures.
        body: Raw response body, if any.
        connect_failed: True when the connection was never established.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[Any] = None,
        connect_failed: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.connect_failed = connect_failed

    @property
    def retryable(self) -> bool:
        """Whether repeating the same request may succeed."""
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500

    @property
    def resend_safe(self) -> bool:
        """Whether a non-idempotent request can be sent again.

        True only if the server never saw the request or refused it outright (429, 503).
        """
        if self.status_code is None:
            return self.connect_failed
        return self.status_code in (429, 503)


class AgentResponseError(HostedAgentError):
    """Raised when a successful HTTP response does not have the expected shape."""

    pass
