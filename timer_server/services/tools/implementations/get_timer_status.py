"""GetTimerStatus Tool - active timers, presets and recent history."""
from typing import Any, Dict, Type
from pydantic import BaseModel
from timer_server.services.timer.command_service import TimerCommandService
from timer_server.services.timer.results import CommandResult
from timer_server.services.tools.base import BaseTool


class GetTimerStatusArgs(BaseModel):
    """Get status of all active timers, presets, and history."""


class GetTimerStatusTool(BaseTool):
    def __init__(self, service: TimerCommandService):
        self._service = service

    @property
    def name(self) -> str:
        return "getTimerStatus"

    @property
    def title(self) -> str:
        return "Get Timer Status"

    @property
    def description(self) -> str:
        return "Get status of all active timers, presets, and history."

    @property
    def args_schema(self) -> Type[BaseModel]:
        return GetTimerStatusArgs

    @property
    def invoking_message(self) -> str:
        return "Fetching timer status…"

    @property
    def invoked_message(self) -> str:
        return "Timer status retrieved."

    async def execute(self, args: Dict[str, Any]) -> CommandResult:
        return self._service.get_timer_status()
