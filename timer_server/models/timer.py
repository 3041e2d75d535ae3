"""Timer domain models"""
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class TimerStatus(str, Enum):
    """Timer status"""
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"
    COMPLETED = "completed"

    @property
    def is_active(self) -> bool:
        return self in (TimerStatus.RUNNING, TimerStatus.PAUSED)


class TimerAction(str, Enum):
    """Operator actions accepted by controlTimer"""
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"


def split_seconds(total_seconds: int) -> tuple[int, int]:
    """Break a second count into (minutes, seconds)"""
    return total_seconds // 60, total_seconds % 60


class Timer(BaseModel):
    """A countdown owned by the timer store"""
    id: str
    name: str
    duration_seconds: int = Field(alias="durationSeconds")
    remaining_seconds: int = Field(alias="remainingSeconds")
    status: TimerStatus = TimerStatus.RUNNING
    created_at: str = Field(alias="createdAt")  # ISO format datetime
    completed_at: Optional[str] = Field(None, alias="completedAt")  # Set once, on leaving the active set

    class Config:
        populate_by_name = True

    @property
    def minutes_left(self) -> int:
        return split_seconds(self.remaining_seconds)[0]

    @property
    def seconds_left(self) -> int:
        return split_seconds(self.remaining_seconds)[1]

    def to_active_view(self) -> Dict[str, Any]:
        """JSON shape of an active-set entry"""
        return {
            "id": self.id,
            "name": self.name,
            "remainingSeconds": self.remaining_seconds,
            "minutesLeft": self.minutes_left,
            "secondsLeft": self.seconds_left,
            "status": self.status.value,
            "originalDuration": self.duration_seconds,
            "createdAt": self.created_at,
        }

    def to_history_view(self) -> Dict[str, Any]:
        """JSON shape of a history entry"""
        return self.model_dump(mode="json", by_alias=True)


class TimerPreset(BaseModel):
    """Named duration template"""
    name: str
    duration_seconds: int = Field(alias="durationSeconds")
    label: str

    class Config:
        populate_by_name = True
        frozen = True
