"""MCP JSON-RPC endpoint"""
import json
import logging
from fastapi import APIRouter, Depends, Request

from timer_server.api.deps import get_mcp_service
from timer_server.api.errors import internal_error_response
from timer_server.services.mcp.mcp_service import PARSE_ERROR, McpService, jsonrpc_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mcp"])


@router.post("/mcp")
async def handle_mcp(request: Request, mcp_service: McpService = Depends(get_mcp_service)):
    """
    Handle one MCP JSON-RPC 2.0 request.

    Protocol-level errors (unknown method, unparsable body) answer 200 with a
    JSON-RPC error object.
    """
    try:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("MCP request body is not valid JSON")
            return jsonrpc_error(None, PARSE_ERROR, "Parse error")
        return await mcp_service.handle(body)
    except Exception as e:
        return internal_error_response(e, "MCP JSON-RPC")
