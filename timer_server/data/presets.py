"""Built-in timer presets"""
from typing import Any, Dict, List

from timer_server.models.timer import TimerPreset

TIMER_PRESETS: tuple[TimerPreset, ...] = (
    TimerPreset(name="Quick Break", duration_seconds=60, label="1min"),
    TimerPreset(name="Coffee Break", duration_seconds=300, label="5min"),
    TimerPreset(name="Work Session", duration_seconds=1500, label="25min"),
    TimerPreset(name="Long Break", duration_seconds=900, label="15min"),
    TimerPreset(name="Exercise", duration_seconds=1800, label="30min"),
    TimerPreset(name="Deep Work", duration_seconds=3600, label="1hr"),
)


def presets_as_json(presets=TIMER_PRESETS) -> List[Dict[str, Any]]:
    return [p.model_dump(by_alias=True) for p in presets]
