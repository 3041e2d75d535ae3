from .mcp_service import McpService, jsonrpc_error, jsonrpc_result, PARSE_ERROR, METHOD_NOT_FOUND

__all__ = ["McpService", "jsonrpc_error", "jsonrpc_result", "PARSE_ERROR", "METHOD_NOT_FOUND"]
