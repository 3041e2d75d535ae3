"""REST tool endpoints (MCP-compatible envelopes)"""
import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from timer_server.api.deps import get_command_service
from timer_server.api.errors import command_response, internal_error_response
from timer_server.services.timer.command_service import TimerCommandService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])

START_EXAMPLE = {"name": "Coffee Break", "durationSeconds": 300}
CONTROL_EXAMPLE = {"timerId": "timer_123", "action": "pause"}


class StartTimerRequest(BaseModel):
    name: Optional[str] = None
    # Left untyped so the command service reports InvalidDuration instead of a 422
    duration_seconds: Any = Field(None, alias="durationSeconds")


class ControlTimerRequest(BaseModel):
    timer_id: Any = Field(None, alias="timerId")
    action: Any = None


@router.post("/startTimer")
async def start_timer(
    request: StartTimerRequest,
    service: TimerCommandService = Depends(get_command_service),
):
    """Start a new countdown timer"""
    try:
        result = service.start_timer(request.name, request.duration_seconds)
        return command_response(result, example=START_EXAMPLE)
    except Exception as e:
        return internal_error_response(e, "REST API")


@router.post("/controlTimer")
async def control_timer(
    request: ControlTimerRequest,
    service: TimerCommandService = Depends(get_command_service),
):
    """Pause, resume or stop a timer"""
    try:
        result = service.control_timer(request.timer_id, request.action)
        return command_response(result, example=CONTROL_EXAMPLE)
    except Exception as e:
        return internal_error_response(e, "REST API")


@router.get("/getTimerStatus")
async def get_timer_status(service: TimerCommandService = Depends(get_command_service)):
    """Active timers, presets and recent history"""
    try:
        return command_response(service.get_timer_status())
    except Exception as e:
        return internal_error_response(e, "REST API")
