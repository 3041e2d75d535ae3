"""Frontend sync endpoints polled by the timer widget"""
import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from timer_server.api.deps import get_command_service
from timer_server.api.errors import command_response, internal_error_response
from timer_server.api.tools import START_EXAMPLE
from timer_server.services.timer.command_service import TimerCommandService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timers", tags=["timers"])


class CreateTimerRequest(BaseModel):
    name: Optional[str] = None
    duration_seconds: Any = Field(None, alias="durationSeconds")


class TimerControlRequest(BaseModel):
    action: Any = None


@router.get("")
async def list_timers(service: TimerCommandService = Depends(get_command_service)):
    """
    Current timer state for polling clients.

    Same shape as getTimerStatus' structuredContent plus polling hints.
    """
    try:
        result = service.get_timer_status_with_polling()
        return result.to_envelope()["structuredContent"]
    except Exception as e:
        return internal_error_response(e, "API")


@router.post("")
async def create_timer(
    request: CreateTimerRequest,
    service: TimerCommandService = Depends(get_command_service),
):
    """Start a timer from the widget"""
    try:
        result = service.start_timer(request.name, request.duration_seconds)
        return command_response(result, example=START_EXAMPLE)
    except Exception as e:
        return internal_error_response(e, "API")


@router.post("/{timer_id}/control")
async def control_timer(
    timer_id: str,
    request: TimerControlRequest,
    service: TimerCommandService = Depends(get_command_service),
):
    """Pause, resume or stop a timer from the widget"""
    try:
        result = service.control_timer(timer_id, request.action)
        return command_response(result)
    except Exception as e:
        return internal_error_response(e, "API")
