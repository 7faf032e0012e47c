"""Models describing an agent invocation and its response."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .resources import ApiModel


class InvokeRequest(ApiModel):
    """Body of an invoke call: free-text input bound to a session."""

    input: str
    session_id: str
    enable_streaming: bool = False


class AgentAction(BaseModel):
    """
    The tool invocation descriptor of an intermediate step.

    Attributes:
        tool: Name of the tool the agent selected.
        tool_input: Arguments for the tool, either a mapping or a raw string.
        log: The agent's reasoning text, when the service includes it.
    """

    model_config = ConfigDict(extra="allow")

    tool: str
    tool_input: Any = Field(default_factory=dict)
    log: Optional[str] = None


class IntermediateStep(BaseModel):
    """An intermediate step pairing an agent action with its associated value."""

    action: AgentAction
    observation: Any = None

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        # The service sends steps as [action, observation] pairs.
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"Intermediate step must have 2 elements, got {len(data)}.")
            return {"action": data[0], "observation": data[1]}
        return data


class InvokeResult(BaseModel):
    """
    Normalized response of an agent invocation.

    Attributes:
        input: The input echoed back by the service.
        output: The agent's final text answer.
        intermediate_steps: Tool selections made while producing the output.
        session_id: The session the invocation ran in.
    """

    input: Optional[str] = None
    output: str = ""
    intermediate_steps: List[IntermediateStep] = Field(default_factory=list)
    session_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if data.get("output") is None:
                data.pop("output", None)
            if data.get("intermediate_steps") is None:
                data.pop("intermediate_steps", None)
        return data

    @property
    def tool_names(self) -> List[str]:
        """Names of the tools selected, in step order."""
        return [step.action.tool for step in self.intermediate_steps]
