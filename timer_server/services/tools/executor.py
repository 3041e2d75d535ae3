"""Tool Executor - dispatches tools/call requests to the matching Tool.execute()."""
import logging
from typing import Any, Dict, Optional
from timer_server.services.timer.results import CommandResult, ErrorKind
from .registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolExecutor:
    """Looks up a tool by name and runs it, turning crashes into failed results."""

    def __init__(self, registry: ToolRegistry):
        self._registry = registry

    async def execute(self, name: str, args: Optional[Dict[str, Any]] = None) -> Optional[CommandResult]:
        """
        Run one tool.

        Returns:
            The tool's CommandResult, or None if no tool has that name
        """
        tool = self._registry.get_tool(name)
        if tool is None:
            logger.debug(f"No handler for tool: {name}")
            return None
        try:
            result = await tool.execute(args or {})
            logger.info(f"Tool executed: {name}, success={result.success}")
            return result
        except Exception as e:
            logger.error(f"Tool execution failed: {name}, error={e}", exc_info=True)
            return CommandResult.fail(name, ErrorKind.INTERNAL_ERROR, str(e) or "Internal server error")
