"""Tagged command results and the response envelope they render to."""
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from timer_server.utils.datetime_helper import utc_now_iso

ENVELOPE_META = {
    "source": "advanced-timer-server",
    "widgetType": "multi-timer",
}


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers"""
    INVALID_DURATION = "InvalidDuration"
    INVALID_ACTION = "InvalidAction"
    INVALID_TIMER_ID = "InvalidTimerId"
    INVALID_REQUEST = "InvalidRequest"
    # Control target absent or in the wrong state. Reported as success=false, not as a failed command.
    NOT_FOUND_OR_WRONG_STATE = "NotFoundOrWrongState"
    INTERNAL_ERROR = "InternalError"


class CommandError(BaseModel):
    kind: ErrorKind
    message: str


class CommandResult(BaseModel):
    """Either a success payload or a structured error. Never both."""
    operation: str
    success: bool
    text: str = ""
    payload: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[CommandError] = None

    @classmethod
    def ok(cls, operation: str, text: str, payload: Dict[str, Any]) -> "CommandResult":
        return cls(operation=operation, success=True, text=text, payload=payload)

    @classmethod
    def fail(cls, operation: str, kind: ErrorKind, message: str) -> "CommandResult":
        return cls(
            operation=operation,
            success=False,
            text=f"❌ Error: {message}",
            error=CommandError(kind=kind, message=message),
        )

    def to_envelope(self) -> Dict[str, Any]:
        """
        Render as the MCP tool-result shape every transport returns.

        structuredContent always carries a timestamp, on success and failure.
        """
        if self.error is not None:
            structured = {
                "error": self.error.message,
                "errorKind": self.error.kind.value,
                "timestamp": utc_now_iso(),
            }
        else:
            structured = dict(self.payload)
            structured.setdefault("timestamp", utc_now_iso())

        envelope: Dict[str, Any] = {
            "content": [{"type": "text", "text": self.text}],
            "structuredContent": structured,
            "isError": not self.success,
        }
        if self.success:
            envelope["_meta"] = dict(ENVELOPE_META)
        return envelope
