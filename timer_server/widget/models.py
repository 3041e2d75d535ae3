"""Widget-side views of server state"""
from typing import List, Optional
from pydantic import BaseModel, Field

from timer_server.models.timer import TimerPreset, TimerStatus, split_seconds


class WidgetTimer(BaseModel):
    """A timer as the widget knows it (server copy or local simulation)"""
    id: str
    name: str = "Timer"
    remaining_seconds: int = Field(0, alias="remainingSeconds")
    status: TimerStatus = TimerStatus.RUNNING
    original_duration: Optional[int] = Field(None, alias="originalDuration")
    created_at: Optional[str] = Field(None, alias="createdAt")

    class Config:
        populate_by_name = True

    @property
    def minutes_left(self) -> int:
        return split_seconds(self.remaining_seconds)[0]

    @property
    def seconds_left(self) -> int:
        return split_seconds(self.remaining_seconds)[1]

    def differs_from(self, other: "WidgetTimer") -> bool:
        return self.remaining_seconds != other.remaining_seconds or self.status != other.status


class HistoryEntry(BaseModel):
    id: str
    name: str = "Timer"
    duration_seconds: Optional[int] = Field(None, alias="durationSeconds")
    remaining_seconds: int = Field(0, alias="remainingSeconds")
    status: TimerStatus = TimerStatus.COMPLETED
    created_at: Optional[str] = Field(None, alias="createdAt")
    completed_at: Optional[str] = Field(None, alias="completedAt")

    class Config:
        populate_by_name = True


class StatusSnapshot(BaseModel):
    """Body of GET /api/timers"""
    active_timers: List[WidgetTimer] = Field(default_factory=list, alias="activeTimers")
    presets: List[TimerPreset] = Field(default_factory=list)
    history: List[HistoryEntry] = Field(default_factory=list)
    timestamp: Optional[str] = None
    polling_enabled: bool = Field(False, alias="_pollingEnabled")
    polling_interval: Optional[int] = Field(None, alias="_pollingInterval")

    class Config:
        populate_by_name = True
