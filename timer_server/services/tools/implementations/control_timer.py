"""ControlTimer Tool - pause, resume or stop a timer."""
from typing import Any, Dict, Literal, Type
from pydantic import BaseModel, Field
from timer_server.services.timer.command_service import TimerCommandService
from timer_server.services.timer.results import CommandResult
from timer_server.services.tools.base import BaseTool


class ControlTimerArgs(BaseModel):
    """Pause, resume, or stop an active timer."""
    timer_id: str = Field(alias="timerId", description="ID of the timer to control")
    action: Literal["pause", "resume", "stop"] = Field(description="Action to perform on the timer")


class ControlTimerTool(BaseTool):
    def __init__(self, service: TimerCommandService):
        self._service = service

    @property
    def name(self) -> str:
        return "controlTimer"

    @property
    def title(self) -> str:
        return "Control Timer"

    @property
    def description(self) -> str:
        return "Pause, resume, or stop an active timer."

    @property
    def args_schema(self) -> Type[BaseModel]:
        return ControlTimerArgs

    @property
    def invoking_message(self) -> str:
        return "Controlling timer…"

    @property
    def invoked_message(self) -> str:
        return "Timer control executed."

    async def execute(self, args: Dict[str, Any]) -> CommandResult:
        return self._service.control_timer(args.get("timerId"), args.get("action"))
