"""Shared HTTP error responses"""
import logging
from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse

from timer_server.services.timer.results import CommandResult
from timer_server.utils.datetime_helper import utc_now_iso

logger = logging.getLogger(__name__)


def internal_error_response(e: Exception, context: str) -> JSONResponse:
    """Log an unexpected exception and answer 500 with a timestamped body"""
    logger.error(f"{context} error: {e}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": str(e) or "Internal server error",
            "timestamp": utc_now_iso(),
        },
    )


def command_response(
    result: CommandResult,
    example: Optional[Dict[str, Any]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """200 with the envelope on success, 400 with the failure envelope otherwise"""
    envelope = result.to_envelope()
    if result.success:
        return JSONResponse(content=envelope)
    envelope["error"] = result.error.message
    envelope["timestamp"] = envelope["structuredContent"]["timestamp"]
    if example is not None:
        envelope["example"] = example
    if extra:
        envelope.update(extra)
    return JSONResponse(status_code=400, content=envelope)
