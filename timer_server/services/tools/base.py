"""Base classes for the MCP tool layer."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Type
from pydantic import BaseModel

from timer_server.services.timer.results import CommandResult

WIDGET_TEMPLATE_URI = "ui://widget/timer.html"


class BaseTool(ABC):
    """
    Base class for all tools.
    One tool = one class. args_schema is only used to advertise the input
    schema in tools/list; validation happens in the command service.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool identifier used by tools/call"""

    @property
    @abstractmethod
    def title(self) -> str:
        """Human-readable tool title"""

    @property
    @abstractmethod
    def description(self) -> str:
        """Description shown to the MCP client when selecting tools"""

    @property
    @abstractmethod
    def args_schema(self) -> Type[BaseModel]:
        """Pydantic model describing the tool arguments"""

    @property
    def invoking_message(self) -> str:
        return "Working…"

    @property
    def invoked_message(self) -> str:
        return "Done."

    @abstractmethod
    async def execute(self, args: Dict[str, Any]) -> CommandResult:
        """Execute the tool and return result"""

    def to_mcp_tool(self) -> Dict[str, Any]:
        """tools/list entry"""
        schema = self.args_schema.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.pop("description", None)
        schema.setdefault("properties", {})
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": schema,
            "_meta": {
                "openai/outputTemplate": WIDGET_TEMPLATE_URI,
                "openai/toolInvocation/invoking": self.invoking_message,
                "openai/toolInvocation/invoked": self.invoked_message,
                "openai/widgetAccessible": True,
            },
        }
