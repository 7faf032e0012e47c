"""Request and resource models for the hosted agent API."""

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serialized with the camelCase keys the hosted API expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Dump the model as a JSON-ready request body."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class LLMConfig(ApiModel):
    """
    Payload for creating an LLM resource.

    Attributes:
        provider: Provider identifier, e.g. ``OPENAI``.
        api_key: The provider key the hosted service uses on the caller's behalf.
        options: Provider-specific extra options.
    """

    provider: str
    api_key: str
    options: Dict[str, Any] = Field(default_factory=dict)


class AgentConfig(ApiModel):
    """
    Payload for creating an agent.

    Attributes:
        name: Display name of the agent.
        description: Short description of the agent's purpose.
        prompt: System prompt the agent runs with.
        llm_model: Hosted model identifier, e.g. ``GPT_3_5_TURBO_16K_0613``.
        is_active: Whether the agent accepts invocations.
    """

    name: str
    description: str = ""
    prompt: str = ""
    llm_model: str = "GPT_3_5_TURBO_16K_0613"
    is_active: bool = True


class ToolConfig(ApiModel):
    """
    Payload for creating a client-side function tool.

    The hosted agent only sees the name and the argument schema in ``metadata``;
    the function itself runs locally.
    """

    name: str
    description: str
    type: Literal["FUNCTION"] = "FUNCTION"
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_function(cls, name: str, description: str, parameters: Dict[str, Any] | None) -> "ToolConfig":
        """Build a function tool payload from a name, description and JSON schema."""
        return cls(
            name=name,
            description=description,
            metadata={
                "functionName": name,
                "parameters": parameters or {"type": "object", "properties": {}},
            },
        )


class Resource(BaseModel):
    """A resource returned by the hosted API. Only ``id`` is guaranteed."""

    model_config = ConfigDict(extra="allow")

    id: str
