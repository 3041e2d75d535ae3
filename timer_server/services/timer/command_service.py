"""Timer Command Service - validates requests, drives the store, shapes envelopes"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from timer_server.config import HISTORY_LIMIT, POLLING_INTERVAL_MS, TIMER_LIMITS
from timer_server.data.presets import TIMER_PRESETS, presets_as_json
from timer_server.models.timer import TimerAction, TimerPreset, split_seconds
from timer_server.utils.datetime_helper import utc_now_iso
from .results import CommandResult, ErrorKind
from .store import TimerStore

logger = logging.getLogger(__name__)

MIN_DURATION = TIMER_LIMITS["MIN_DURATION"]
MAX_DURATION = TIMER_LIMITS["MAX_DURATION"]

_CONTROL_MESSAGES = {
    TimerAction.PAUSE: ("⏸️ Timer paused", "❌ Timer not found or not running"),
    TimerAction.RESUME: ("▶️ Timer resumed", "❌ Timer not found or not paused"),
    TimerAction.STOP: ("⏹️ Timer stopped", "❌ Timer not found"),
}


def parse_duration(value: Any) -> Optional[int]:
    """
    Coerce a raw duration to an int, or None if it is not a whole number.

    bool is rejected even though it subclasses int. Integral floats (300.0)
    are accepted since JSON clients cannot always tell the difference.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class TimerCommandService:
    """
    Stateless translation layer between transports and the timer store.

    Every operation returns a CommandResult; validation problems come back as
    failed results rather than exceptions.
    """

    def __init__(
        self,
        store: TimerStore,
        presets: Iterable[TimerPreset] = TIMER_PRESETS,
        history_limit: int = HISTORY_LIMIT,
    ):
        self._store = store
        self._presets = tuple(presets)
        self._history_limit = history_limit

    @property
    def store(self) -> TimerStore:
        return self._store

    # ── snapshots ────────────────────────────────────────────────────────

    def _active_views(self) -> List[Dict[str, Any]]:
        return [t.to_active_view() for t in self._store.list_active()]

    def _history_views(self) -> List[Dict[str, Any]]:
        return [t.to_history_view() for t in self._store.list_history(self._history_limit)]

    # ── operations ───────────────────────────────────────────────────────

    def start_timer(self, name: Optional[str] = None, duration_seconds: Any = None) -> CommandResult:
        """
        Start a new countdown.

        Args:
            name: Display label. Blank or missing falls back to "Timer N"
            duration_seconds: Whole seconds in [1, 7200]

        Returns:
            CommandResult with the new timer, active set, history tail and presets
        """
        duration = parse_duration(duration_seconds)
        if duration is None:
            logger.warning(f"Timer start rejected: invalid duration {duration_seconds!r}")
            return CommandResult.fail(
                "startTimer",
                ErrorKind.INVALID_DURATION,
                "durationSeconds is required and must be a whole number of seconds",
            )
        if duration < MIN_DURATION:
            logger.warning(f"Timer start rejected: duration {duration} below minimum")
            return CommandResult.fail(
                "startTimer", ErrorKind.INVALID_DURATION, "Duration must be greater than 0"
            )
        if duration > MAX_DURATION:
            logger.warning(f"Timer start rejected: duration {duration} above maximum")
            return CommandResult.fail(
                "startTimer",
                ErrorKind.INVALID_DURATION,
                f"Duration cannot exceed {MAX_DURATION} seconds (2 hours)",
            )

        label = name.strip() if isinstance(name, str) else ""
        if not label:
            label = f"Timer {self._store.active_count + 1}"

        timer = self._store.create(label, duration)
        minutes_left, seconds_left = split_seconds(timer.remaining_seconds)

        return CommandResult.ok(
            "startTimer",
            f'⏰ Timer "{timer.name}" started for {minutes_left}m {seconds_left}s! (ID: {timer.id})',
            {
                "timer": {
                    "id": timer.id,
                    "name": timer.name,
                    "minutesLeft": minutes_left,
                    "secondsLeft": seconds_left,
                    "totalDuration": timer.duration_seconds,
                    "status": timer.status.value,
                },
                "activeTimers": self._active_views(),
                "presets": presets_as_json(self._presets),
                "history": self._history_views(),
                "timestamp": utc_now_iso(),
                "_refreshRequired": True,
                "_newTimerId": timer.id,
            },
        )

    def control_timer(self, timer_id: Any, action: Any) -> CommandResult:
        """
        Pause, resume or stop a timer.

        An unknown id and a timer in the wrong state both yield a successful
        command whose payload has success=false; the two are not told apart.
        """
        try:
            verb = TimerAction(action)
        except ValueError:
            logger.warning(f"Timer control rejected: invalid action {action!r}")
            return CommandResult.fail(
                "controlTimer",
                ErrorKind.INVALID_ACTION,
                "action parameter is required and must be 'pause', 'resume', or 'stop'",
            )
        if not isinstance(timer_id, str) or not timer_id.strip():
            logger.warning(f"Timer control rejected: invalid timer id {timer_id!r}")
            return CommandResult.fail(
                "controlTimer", ErrorKind.INVALID_TIMER_ID, "timerId parameter is required"
            )

        if verb == TimerAction.PAUSE:
            success = self._store.pause(timer_id)
        elif verb == TimerAction.RESUME:
            success = self._store.resume(timer_id)
        else:
            success = self._store.stop(timer_id)

        ok_message, fail_message = _CONTROL_MESSAGES[verb]
        message = ok_message if success else fail_message
        logger.info(f"Timer control: {verb.value} {timer_id} success={success}")

        payload = {
            "success": success,
            "action": verb.value,
            "timerId": timer_id,
            "message": message,
            "activeTimers": self._active_views(),
            "history": self._history_views(),
            "timestamp": utc_now_iso(),
            "_refreshRequired": True,
            "_affectedTimerId": timer_id,
        }
        if not success:
            payload["errorKind"] = ErrorKind.NOT_FOUND_OR_WRONG_STATE.value
        return CommandResult.ok("controlTimer", message, payload)

    def get_timer_status(self) -> CommandResult:
        """Snapshot of the active set, history tail and presets. Never fails."""
        return CommandResult.ok(
            "getTimerStatus",
            f"📊 {self._store.active_count} active timers, {self._store.history_count} completed",
            {
                "activeTimers": self._active_views(),
                "presets": presets_as_json(self._presets),
                "history": self._history_views(),
                "timestamp": utc_now_iso(),
            },
        )

    def get_timer_status_with_polling(self, polling_interval_ms: int = POLLING_INTERVAL_MS) -> CommandResult:
        """Status snapshot plus the polling hints the widget reads"""
        result = self.get_timer_status()
        result.payload.update({
            "_pollingEnabled": True,
            "_pollingInterval": polling_interval_ms,
            "_lastUpdate": utc_now_iso(),
        })
        return result
