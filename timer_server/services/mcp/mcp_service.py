"""
MCP JSON-RPC handler
Reference: https://modelcontextprotocol.io/specification/2024-11-05
"""
import logging
from typing import Any, Dict, Optional

from timer_server.config import MCP_CONFIG, SERVER_INFO
from timer_server.services.tools.base import WIDGET_TEMPLATE_URI
from timer_server.services.tools.executor import ToolExecutor
from timer_server.services.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601

WIDGET_MIME_TYPE = "text/html+skybridge"
WIDGET_HTML = '<div id="timer-root"></div><script type="module" src="/web/dist/timer-widget.js"></script>'

WIDGET_RESOURCE = {
    "uri": WIDGET_TEMPLATE_URI,
    "name": "timer-widget",
    "description": "Advanced multi-timer widget with controls and history",
    "mimeType": WIDGET_MIME_TYPE,
}


def jsonrpc_result(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def jsonrpc_error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": {"code": code, "message": message}}


class McpService:
    """
    Answers MCP JSON-RPC requests.

    Errors are reported in the JSON-RPC body; the HTTP layer always answers
    200 unless something unexpected escapes.
    """

    def __init__(self, registry: ToolRegistry):
        self._registry = registry
        self._executor = ToolExecutor(registry)

    async def handle(self, body: Any) -> Dict[str, Any]:
        """
        Dispatch one JSON-RPC request.

        Args:
            body: Decoded JSON request body

        Returns:
            JSON-RPC response object
        """
        if not isinstance(body, dict):
            return jsonrpc_error(None, INVALID_REQUEST, "Invalid Request")

        request_id = body.get("id")
        method = body.get("method")
        params = body.get("params")
        if not isinstance(params, dict):
            params = {}
        logger.debug(f"MCP request: method={method} id={request_id}")

        if method == "initialize":
            return jsonrpc_result(request_id, {
                "protocolVersion": MCP_CONFIG["protocolVersion"],
                "capabilities": MCP_CONFIG["capabilities"],
                "serverInfo": SERVER_INFO,
            })

        if method in ("ping", "notifications/initialized"):
            return jsonrpc_result(request_id, {})

        if method == "tools/list":
            return jsonrpc_result(request_id, {"tools": self._registry.list_mcp_tools()})

        if method == "resources/list":
            return jsonrpc_result(request_id, {"resources": [WIDGET_RESOURCE]})

        if method == "resources/read":
            resource = self._read_resource(params.get("uri"))
            if resource is not None:
                return jsonrpc_result(request_id, {"contents": [resource]})

        if method == "tools/call":
            name = params.get("name")
            arguments = params.get("arguments")
            result = None
            if isinstance(name, str):
                result = await self._executor.execute(name, arguments if isinstance(arguments, dict) else None)
            if result is not None:
                return jsonrpc_result(request_id, result.to_envelope())
            logger.warning(f"MCP tools/call for unknown tool: {name}")

        return jsonrpc_error(request_id, METHOD_NOT_FOUND, "Method not found")

    def _read_resource(self, uri: Optional[str]) -> Optional[Dict[str, Any]]:
        if uri != WIDGET_TEMPLATE_URI:
            return None
        return {
            "uri": WIDGET_TEMPLATE_URI,
            "mimeType": WIDGET_MIME_TYPE,
            "text": WIDGET_HTML,
            "_meta": {
                "openai/widgetDescription": (
                    "Advanced timer widget with multiple timers, pause/resume controls, "
                    "custom names, presets, and history tracking."
                ),
                "openai/widgetPrefersBorder": True,
            },
        }
