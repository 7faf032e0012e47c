"""Publish registered local tools as hosted function tool payloads."""

from typing import List

from hosted_agent_lib.agent_core import ToolRegistry, ToolConfig


class HostedToolRegistry(ToolRegistry):
    """
    A ToolRegistry whose tool object is the list of ``FUNCTION`` tool payloads
    the hosted API needs to let an agent select the registered functions.
    """

    @property
    def tool_object(self) -> List[ToolConfig]:
        """
        One `ToolConfig` per registered tool, in registration order.

        Returns:
            The tool payloads, or an empty list if no tools are registered.
        """
        return [
            ToolConfig.for_function(name=tool.name, description=tool.description, parameters=tool.parameters)
            for tool in self.tools.values()
        ]
