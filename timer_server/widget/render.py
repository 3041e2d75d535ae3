"""Plain-text dashboard for the console widget"""
from datetime import datetime
from typing import List, Optional

from timer_server.models.timer import TimerStatus, split_seconds
from .sync import TimerWidget

STATUS_ICONS = {
    TimerStatus.RUNNING: "▶️",
    TimerStatus.PAUSED: "⏸️",
    TimerStatus.STOPPED: "⏹️",
    TimerStatus.COMPLETED: "✅",
}

HISTORY_ROWS = 10


def format_clock(seconds: int) -> str:
    """mm:ss"""
    minutes, secs = split_seconds(max(seconds, 0))
    return f"{minutes:02d}:{secs:02d}"


def _format_completed_at(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return value


def render_text(widget: TimerWidget) -> str:
    """Render the widget's current state as a multi-line string"""
    active = widget.active_timers
    history = widget.history
    lines: List[str] = [
        "⏰ Advanced Timer Dashboard",
        f"{len(active)} active timers • {len(history)} completed",
        "",
        "⚡ Quick Presets",
        "  " + "  ".join(f"[{p.label} - {p.name}]" for p in widget.presets),
        "",
        f"🔄 Active Timers ({len(active)})",
    ]

    if not active:
        lines.append("  No active timers. Start one above!")
    for timer in active:
        lines.append(f"  {STATUS_ICONS.get(timer.status, '')} {timer.name:<24} {timer.minutes_left:02d}:{timer.seconds_left:02d}  ({timer.id})")

    lines += ["", f"📊 Recent History ({len(history)})"]
    if not history:
        lines.append("  No completed timers yet.")
    for entry in history[-HISTORY_ROWS:]:
        duration = format_clock(entry.duration_seconds) if entry.duration_seconds is not None else "--:--"
        lines.append(
            f"  {STATUS_ICONS.get(entry.status, '')} {entry.name:<24} {duration}  {_format_completed_at(entry.completed_at)}"
        )

    return "\n".join(lines)
