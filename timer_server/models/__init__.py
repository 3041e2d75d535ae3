"""Domain models for the timer server"""
from .timer import Timer, TimerAction, TimerPreset, TimerStatus, split_seconds

__all__ = [
    'Timer', 'TimerAction', 'TimerPreset', 'TimerStatus', 'split_seconds',
]
