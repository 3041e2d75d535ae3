"""FastAPI dependencies resolving the per-app timer services"""
from fastapi import Request

from timer_server.services.mcp.mcp_service import McpService
from timer_server.services.timer.command_service import TimerCommandService
from timer_server.services.timer.store import TimerStore


def get_timer_store(request: Request) -> TimerStore:
    return request.app.state.timer_store


def get_command_service(request: Request) -> TimerCommandService:
    return request.app.state.command_service


def get_mcp_service(request: Request) -> McpService:
    return request.app.state.mcp_service
