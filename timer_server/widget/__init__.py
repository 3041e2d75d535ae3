"""Async client that mirrors server timers and falls back to local simulation"""
from .client import TimerApiClient, TimerApiError
from .models import HistoryEntry, StatusSnapshot, WidgetTimer
from .notifier import BellNotifier, CompletionNotifier
from .render import format_clock, render_text
from .sync import TimerWidget

__all__ = [
    "TimerApiClient",
    "TimerApiError",
    "HistoryEntry",
    "StatusSnapshot",
    "WidgetTimer",
    "BellNotifier",
    "CompletionNotifier",
    "format_clock",
    "render_text",
    "TimerWidget",
]
