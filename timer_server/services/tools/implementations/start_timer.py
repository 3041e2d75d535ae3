"""StartTimer Tool - starts a named countdown."""
from typing import Any, Dict, Type
from pydantic import BaseModel, Field
from timer_server.config import TIMER_LIMITS
from timer_server.services.timer.command_service import TimerCommandService
from timer_server.services.timer.results import CommandResult
from timer_server.services.tools.base import BaseTool


class StartTimerArgs(BaseModel):
    """Start a new countdown timer."""
    name: str = Field("Timer", description="Custom name for the timer")
    duration_seconds: int = Field(
        alias="durationSeconds",
        ge=TIMER_LIMITS["MIN_DURATION"],
        le=TIMER_LIMITS["MAX_DURATION"],
        description="Duration in seconds (1-7200)",
    )


class StartTimerTool(BaseTool):
    def __init__(self, service: TimerCommandService):
        self._service = service

    @property
    def name(self) -> str:
        return "startTimer"

    @property
    def title(self) -> str:
        return "Start Timer"

    @property
    def description(self) -> str:
        return "Start a new countdown timer with custom name and duration."

    @property
    def args_schema(self) -> Type[BaseModel]:
        return StartTimerArgs

    @property
    def invoking_message(self) -> str:
        return "Starting timer…"

    @property
    def invoked_message(self) -> str:
        return "Timer started successfully."

    async def execute(self, args: Dict[str, Any]) -> CommandResult:
        return self._service.start_timer(args.get("name"), args.get("durationSeconds"))
