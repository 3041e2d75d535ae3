"""Completion notifiers"""
import logging
import sys
from typing import Protocol, TextIO

from .models import WidgetTimer

logger = logging.getLogger(__name__)


class CompletionNotifier(Protocol):
    def __call__(self, timer: WidgetTimer) -> None: ...


class BellNotifier:
    """Rings the terminal bell when a timer completes"""

    def __init__(self, stream: TextIO = sys.stdout):
        self._stream = stream

    def __call__(self, timer: WidgetTimer) -> None:
        self._stream.write("\a")
        self._stream.flush()
        logger.info(f"🔔 Timer '{timer.name}' completed")
