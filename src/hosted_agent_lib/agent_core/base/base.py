"""Core abstraction for hosted agent API clients."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Coroutine, Optional, TypeVar

from ..exceptions import AgentApiError
from ..logger import get_logger
from ..models import AgentConfig, InvokeResult, LLMConfig, Resource, ToolConfig

logger = get_logger(__name__)

T = TypeVar("T")


class GenericAgentClient(ABC):
    """Abstract base class for hosted agent API clients.

    Implementations provide the resource and invocation calls; this class
    supplies the shared retry policy.
    """

    def __init__(self, max_retries: int = 3, base_retry_delay: float = 1.0):
        self.max_retries = max_retries
        self.base_retry_delay = base_retry_delay

    async def _execute_with_retry(
        self,
        func: Callable[..., Coroutine[Any, Any, T]],
        *args: Any,
        idempotent: bool = True,
        **kwargs: Any,
    ) -> T:
        """
        Executes a coroutine function, retrying retryable API errors.

        Idempotent calls are retried on any ``retryable`` error (transport failures, 429, 5xx).
        Other calls are retried only when ``resend_safe`` is set (connection never
        established, 429, 503), so a request the server may have acted on is never sent twice.
        Retries use exponential backoff. Anything else is raised immediately.

        Args:
            func: The asynchronous function to execute.
            *args: Positional arguments for the function.
            idempotent: Whether repeating the call cannot duplicate its effect.
            **kwargs: Keyword arguments for the function.

        Returns:
            The result of the function call.

        Raises:
            AgentApiError: The last encountered error if all retries fail, or a non-retryable error.
        """
        delay = self.base_retry_delay
        for attempt in range(self.max_retries + 1):
            try:
                return await func(*args, **kwargs)
            except AgentApiError as e:
                can_retry = e.retryable if idempotent else e.resend_safe
                if not can_retry or attempt == self.max_retries:
                    raise

                logger.warning(f"API Error (Retry: {attempt + 1}/{self.max_retries}): {e}. Waiting {delay}s...")
                await asyncio.sleep(delay)
                delay *= 2

        msg = f"Failed to get response after {self.max_retries} retries."
        logger.error(msg)
        raise AgentApiError(msg)

    @abstractmethod
    async def create_llm(self, config: LLMConfig) -> Resource:
        pass

    @abstractmethod
    async def create_agent(self, config: AgentConfig) -> Resource:
        pass

    @abstractmethod
    async def get_agent(self, agent_id: str) -> Resource:
        pass

    @abstractmethod
    async def delete_agent(self, agent_id: str) -> None:
        pass

    @abstractmethod
    async def add_llm(self, agent_id: str, llm_id: str) -> None:
        pass

    @abstractmethod
    async def create_tool(self, config: ToolConfig) -> Resource:
        pass

    @abstractmethod
    async def delete_tool(self, tool_id: str) -> None:
        pass

    @abstractmethod
    async def add_tool(self, agent_id: str, tool_id: str) -> None:
        pass

    @abstractmethod
    async def invoke(self, agent_id: str, input: str, session_id: Optional[str] = None) -> InvokeResult:
        """
        Invokes an agent with free-text input.

        Args:
            agent_id: The agent to invoke.
            input: The user's message.
            session_id: Conversation session. A new one is generated when omitted.

        Returns:
            The agent's output and the intermediate steps it took.
        """
        pass
