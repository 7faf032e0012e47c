"""Local execution of the tool calls an agent reports in its intermediate steps."""

from __future__ import annotations

import asyncio
import inspect
import json
from typing import Any, Dict, Iterable, List, Optional

from ...exceptions import ToolExecutionError
from ...logger import get_logger
from ...models import IntermediateStep
from ..models import ToolCallRequest, ToolCallResult
from ..registry import ToolRegistry

logger = get_logger(__name__)


class ToolDispatcher:
    """Runs intermediate steps against the local functions of a registry.

    Every step is resolved by tool name. Unknown names, bad arguments and
    recoverable tool failures are turned into error results instead of
    exceptions so one bad step does not hide the results of the others.
    """

    # System errors (ConnectionError, MemoryError, ...) are not listed and propagate.
    RECOVERABLE_ERRORS = (
        ToolExecutionError,
        FileNotFoundError,
        FileExistsError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
        ValueError,
        TypeError,
    )

    def __init__(self, registry: Optional[ToolRegistry], tool_timeout: float = 180.0) -> None:
        """
        Args:
            registry: Registry used to resolve tool names to functions.
            tool_timeout: Timeout in seconds for a single tool execution.
        """
        self._registry = registry
        self._tool_timeout = tool_timeout

    @staticmethod
    def requests_from_steps(steps: Iterable[IntermediateStep]) -> List[ToolCallRequest]:
        """Convert intermediate steps into tool call requests, keeping their order.

        The step index is used as call id.
        """
        return [
            ToolCallRequest(name=step.action.tool, arguments=step.action.tool_input, call_id=str(index))
            for index, step in enumerate(steps)
        ]

    async def dispatch(self, steps: Iterable[IntermediateStep]) -> List[ToolCallResult]:
        """Execute every step's tool locally.

        Args:
            steps: Intermediate steps from an invocation response.

        Returns:
            One result per step, in step order.

        Raises:
            Exception: The first unrecoverable tool error. Calls still pending are cancelled.
        """
        requests = self.requests_from_steps(steps)
        if not requests:
            logger.debug("No intermediate steps to dispatch.")
            return []

        logger.info(f"Dispatching {len(requests)} tool call(s).")
        tasks = [asyncio.ensure_future(self.handle(request)) for request in requests]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # An unrecoverable error in one call stops the others; threaded sync tools still run to completion
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def handle(self, tool_call: ToolCallRequest) -> ToolCallResult:
        """Resolve, validate and execute a single tool call.

        Args:
            tool_call: The tool call request containing name, ID, and arguments.

        Returns:
            The result of the tool execution, or an error result.
        """
        logger.debug(f"Handling tool call: {tool_call.name} (ID: {tool_call.call_id})")

        if self._registry is None or tool_call.name not in self._registry:
            msg = f"No local function found for tool '{tool_call.name}'"
            logger.warning(msg)
            return self._error(tool_call, msg)

        tool_def = self._registry.get(tool_call.name)

        try:
            function_args = self._normalize_function_args(tool_call.name, tool_call.arguments)
        except ToolExecutionError as exc:
            logger.warning(f"Argument normalization failed for '{tool_call.name}': {exc}")
            return self._error(tool_call, str(exc))

        if tool_def.args_model:
            try:
                validated = tool_def.args_model(**function_args)
            except Exception as validation_error:
                msg = f"Argument validation failed: {validation_error}"
                logger.warning(f"Validation error for '{tool_call.name}': {msg}")
                return self._error(tool_call, msg)
            # Keep nested models as instances, the function signature expects them
            function_args = {name: getattr(validated, name) for name in tool_def.args_model.model_fields}

        try:
            logger.info(f"Executing tool '{tool_call.name}'...")
            function_result = await self._execute_tool(tool_def.func, function_args)
            logger.info(f"Tool '{tool_call.name}' executed successfully.")
        except self.RECOVERABLE_ERRORS as exc:
            logger.warning(f"Recoverable error in '{tool_call.name}': {exc} ({type(exc).__name__})")
            return self._error(tool_call, str(exc))

        return ToolCallResult(name=tool_call.name, response={"result": function_result}, call_id=tool_call.call_id)

    @staticmethod
    def _error(tool_call: ToolCallRequest, msg: str) -> ToolCallResult:
        return ToolCallResult(name=tool_call.name, response={"error": msg}, call_id=tool_call.call_id)

    @staticmethod
    def _normalize_function_args(tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Accepts a mapping, a JSON object string, or an empty value.

        Raises:
            ToolExecutionError: If arguments cannot be parsed or are not an object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                raise ToolExecutionError(f"Failed to parse arguments for tool '{tool_name}': {exc}") from exc

            if parsed is None:
                return {}
            if not isinstance(parsed, dict):
                raise ToolExecutionError(
                    f"Failed to parse arguments for tool '{tool_name}': arguments must decode to a JSON object."
                )
            return parsed

        try:
            return dict(raw_args)
        except (TypeError, ValueError) as exc:
            raise ToolExecutionError(f"Failed to parse arguments for tool '{tool_name}': {exc}") from exc

    async def _execute_tool(self, tool_function: Any, function_args: Dict[str, Any]) -> Any:
        """Execute the tool function, awaiting coroutines and threading sync functions.

        Raises:
            ToolExecutionError: If execution times out.
        """
        try:
            if inspect.iscoroutinefunction(tool_function):
                return await asyncio.wait_for(tool_function(**function_args), timeout=self._tool_timeout)

            return await asyncio.wait_for(
                asyncio.to_thread(tool_function, **function_args),
                timeout=self._tool_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ToolExecutionError(f"Tool execution timed out after {self._tool_timeout} seconds.") from exc
