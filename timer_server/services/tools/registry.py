"""Tool Registry - manages tool registration and retrieval."""
import logging
from typing import Any, Dict, List, Optional
from .base import BaseTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Manages registration and retrieval of tools."""

    def __init__(self):
        self._tools: Dict[str, BaseTool] = {}

    def register(self, tool: BaseTool):
        """Register a tool."""
        self._tools[tool.name] = tool
        logger.info(f"Tool registered: {tool.name}")

    def get_tool(self, name: str) -> Optional[BaseTool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_mcp_tools(self) -> List[Dict[str, Any]]:
        """Return tool descriptors for tools/list."""
        return [t.to_mcp_tool() for t in self._tools.values()]
