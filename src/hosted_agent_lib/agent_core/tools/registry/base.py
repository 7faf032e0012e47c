"""Tool registry abstraction: the mapping from tool names to local functions."""

import inspect
from abc import abstractmethod, ABC
from typing import Callable, Dict, Any, Union, Optional, cast

from pydantic import ConfigDict, create_model

from ..models import ToolDefinition
from ..schema import SchemaValidator, ToolParameterFactory
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry(ABC):
    """
    A central registry of client-side tools.

    The registry holds the definitions that are published to the hosted agent
    and maps every tool name to the Python function that runs locally when the
    agent selects it.
    """

    def __init__(self) -> None:
        """Initialize an empty ToolRegistry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition, Callable],
        description: Optional[str] = None,
        func: Optional[Callable] = None,
        parameters: Optional[Any] = None,
    ) -> None:
        """
        Register a new tool.

        A tool can be given as a `ToolDefinition`, as a function (the definition is
        generated from its signature and docstring) or as a name plus function, with
        an optional explicit parameters schema.

        Args:
            name_or_tool: Either a `ToolDefinition` object, the name of the tool (str), or a Callable.
            description: A brief description of what the tool does. Required if `name_or_tool` is a string and parameters are provided.
            func: The callable function implementing the tool's logic. Required if `name_or_tool` is a string.
            parameters: A JSON schema for the tool's input parameters. If None, it is inferred from `func`.

        Raises:
            ToolRegistrationError: If required arguments are missing or the tool already exists.
            ToolValidationError: If the function lacks a docstring or parameter descriptions.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        elif callable(name_or_tool):
            tool = self._generate_tool_definition(name_or_tool, description=description)
        else:
            if func is None:
                raise ToolRegistrationError("If passing name as string, func is required.")

            if parameters is None:
                tool = self._generate_tool_definition(func, name=name_or_tool, description=description)
            else:
                if description is None:
                    raise ToolRegistrationError("If passing name and parameters, description is required.")
                tool = ToolDefinition(name=name_or_tool, description=description, func=func, parameters=parameters)

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.info(f"Successfully registered tool: '{tool.name}'")

    def unregister(self, tool_name: str) -> None:
        """Unregister a tool from the registry.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        if tool_name not in self.tools:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.")
        del self.tools[tool_name]
        logger.info(f"Successfully unregistered tool: '{tool_name}'")

    def tool(self, func: Callable) -> Callable:
        """A decorator that registers a function as a tool and returns it unchanged."""
        self.register(func)
        return func

    def get(self, tool_name: str) -> ToolDefinition:
        """Look up a tool definition by name.

        Raises:
            ToolNotFoundError: If no tool with that name is registered.
        """
        try:
            return self.tools[tool_name]
        except KeyError:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.") from None

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self.tools

    @property
    @abstractmethod
    def tool_object(self) -> Any:
        """The tool representation expected by the remote service."""
        pass

    @property
    def implementations(self) -> Dict[str, Callable]:
        """Returns a dictionary mapping tool names to their local callables."""
        return {name: tool.func for name, tool in self.tools.items()}

    def _generate_tool_definition(
        self, func: Callable, name: Optional[str] = None, description: Optional[str] = None
    ) -> ToolDefinition:
        """Generate a ToolDefinition from a callable function.

        Args:
            func: The function to generate a definition for.
            name: Optional name override for the tool.
            description: Optional description override for the tool.

        Returns:
            A ToolDefinition object containing the tool's metadata and schema.

        Raises:
            ToolValidationError: If the function is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        fields = self._build_fields(inspect.signature(func), tool_name)

        # create_model expects **field_definitions: Any
        args_model = create_model(
            f"{tool_name}Params",
            __config__=ConfigDict(extra="forbid"),
            **cast(Dict[str, Any], fields),
        )

        return ToolDefinition(
            name=tool_name,
            description=description,
            func=func,
            parameters=SchemaValidator.parameters_schema(args_model),
            args_model=args_model,
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. The agent needs a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    @staticmethod
    def _build_fields(signature: inspect.Signature, tool_name: str) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue
            ft = ToolParameterFactory.build_field_tuple(param_name=param_name, param=param, tool_name=tool_name)
            fields[param_name] = (ft.annotation, ft.field)
        return fields
