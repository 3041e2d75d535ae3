# API module exports
from timer_server.api import health, mcp, timers, tools
from timer_server.api.base import api_router

__all__ = ["health", "mcp", "timers", "tools", "api_router"]
