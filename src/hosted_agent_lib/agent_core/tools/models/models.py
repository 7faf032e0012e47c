from typing import Optional, Any, Callable, Type
from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    Represents a local tool function that the hosted agent can select.

    Attributes:
        name: The unique name of the tool. It doubles as the hosted ``functionName``.
        description: A brief description of what the tool does.
        func: The callable Python function that implements the tool's logic.
        parameters: A JSON schema defining the input parameters for the tool's function.
        args_model: Optional Pydantic model used for validating and coercing arguments.
    """

    name: str
    description: str
    func: Callable
    parameters: Optional[Any] = None
    args_model: Optional[Type[BaseModel]] = None
