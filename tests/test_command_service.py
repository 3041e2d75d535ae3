"""Tests for request validation and envelope shaping in the command service."""

import pytest

from timer_server.data.presets import TIMER_PRESETS
from timer_server.models.timer import TimerStatus
from timer_server.services.timer.command_service import TimerCommandService, parse_duration
from timer_server.services.timer.results import ErrorKind


# ═══════════════════════════════════════════════════════════════════════════
#  START
# ═══════════════════════════════════════════════════════════════════════════


class TestStartTimer:

    @pytest.mark.parametrize("duration", [1, 2, 300, 7199, 7200])
    def test_valid_durations(self, service, store, duration):
        result = service.start_timer("Focus", duration)
        assert result.success
        timer = store.get(result.payload["timer"]["id"])
        assert timer.remaining_seconds == duration
        assert timer.status == TimerStatus.RUNNING

    @pytest.mark.parametrize("duration", [0, -1, 7201, None, "300", 12.5, True, [60]])
    def test_invalid_durations(self, service, store, duration):
        result = service.start_timer("Focus", duration)
        assert not result.success
        assert result.error.kind == ErrorKind.INVALID_DURATION
        assert store.active_count == 0

    def test_integral_float_is_accepted(self, service):
        result = service.start_timer("Focus", 300.0)
        assert result.success
        assert result.payload["timer"]["totalDuration"] == 300

    def test_coffee_break_breakdown(self, service):
        result = service.start_timer("Coffee Break", 300)
        timer = result.payload["timer"]
        assert timer["name"] == "Coffee Break"
        assert timer["minutesLeft"] == 5
        assert timer["secondsLeft"] == 0
        assert timer["status"] == "running"
        assert result.payload["_newTimerId"] == timer["id"]
        assert 'Timer "Coffee Break" started for 5m 0s!' in result.text

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name_uses_active_count(self, service, name):
        service.start_timer("Other", 60)
        result = service.start_timer(name, 60)
        assert result.payload["timer"]["name"] == "Timer 2"

    def test_name_is_trimmed(self, service):
        result = service.start_timer("  Tea  ", 60)
        assert result.payload["timer"]["name"] == "Tea"

    def test_payload_includes_snapshot_and_presets(self, service):
        service.start_timer("a", 60)
        result = service.start_timer("b", 90)
        payload = result.payload
        assert [t["name"] for t in payload["activeTimers"]] == ["a", "b"]
        assert len(payload["presets"]) == len(TIMER_PRESETS)
        assert payload["presets"][1] == {"name": "Coffee Break", "durationSeconds": 300, "label": "5min"}
        assert payload["history"] == []
        assert payload["timestamp"].endswith("Z")


# ═══════════════════════════════════════════════════════════════════════════
#  CONTROL
# ═══════════════════════════════════════════════════════════════════════════


class TestControlTimer:

    def _start(self, service, duration=60):
        return service.start_timer("t", duration).payload["timer"]["id"]

    def test_pause_then_resume(self, service, store):
        timer_id = self._start(service)
        result = service.control_timer(timer_id, "pause")
        assert result.success
        assert result.payload["success"] is True
        assert result.payload["action"] == "pause"
        assert "errorKind" not in result.payload
        assert result.text == "⏸️ Timer paused"
        assert store.get(timer_id).status == TimerStatus.PAUSED

        result = service.control_timer(timer_id, "resume")
        assert result.payload["success"] is True
        assert store.get(timer_id).status == TimerStatus.RUNNING

    def test_stop_returns_history(self, service):
        timer_id = self._start(service)
        result = service.control_timer(timer_id, "stop")
        assert result.payload["success"] is True
        assert result.payload["activeTimers"] == []
        assert [h["id"] for h in result.payload["history"]] == [timer_id]
        assert result.payload["history"][0]["status"] == "stopped"

    @pytest.mark.parametrize("action,message", [
        ("pause", "❌ Timer not found or not running"),
        ("resume", "❌ Timer not found or not paused"),
        ("stop", "❌ Timer not found"),
    ])
    def test_unknown_timer_is_not_a_command_failure(self, service, action, message):
        result = service.control_timer("timer_nope", action)
        assert result.success
        assert result.payload["success"] is False
        assert result.payload["message"] == message
        assert result.payload["errorKind"] == "NotFoundOrWrongState"

    def test_wrong_state_looks_like_unknown(self, service):
        timer_id = self._start(service)
        result = service.control_timer(timer_id, "resume")
        assert result.payload["success"] is False
        assert result.payload["errorKind"] == "NotFoundOrWrongState"
        assert result.text == "❌ Timer not found or not paused"

    @pytest.mark.parametrize("action", ["reset", "", None, "PAUSE"])
    def test_invalid_action(self, service, action):
        timer_id = self._start(service)
        result = service.control_timer(timer_id, action)
        assert not result.success
        assert result.error.kind == ErrorKind.INVALID_ACTION

    @pytest.mark.parametrize("timer_id", [None, "", "  ", 42])
    def test_invalid_timer_id(self, service, timer_id):
        result = service.control_timer(timer_id, "pause")
        assert not result.success
        assert result.error.kind == ErrorKind.INVALID_TIMER_ID


# ═══════════════════════════════════════════════════════════════════════════
#  STATUS
# ═══════════════════════════════════════════════════════════════════════════


class TestStatus:

    def test_two_timers_one_paused(self, service):
        first = service.start_timer("one", 60).payload["timer"]["id"]
        service.start_timer("two", 60)
        service.control_timer(first, "pause")

        payload = service.get_timer_status().payload
        statuses = sorted(t["status"] for t in payload["activeTimers"])
        assert statuses == ["paused", "running"]
        assert payload["history"] == []

    def test_active_entries_are_enriched(self, service):
        service.start_timer("Tea", 125)
        [entry] = service.get_timer_status().payload["activeTimers"]
        assert entry["remainingSeconds"] == 125
        assert entry["minutesLeft"] == 2
        assert entry["secondsLeft"] == 5
        assert entry["originalDuration"] == 125
        assert entry["createdAt"].endswith("Z")

    def test_status_text_counts(self, service):
        timer_id = service.start_timer("a", 60).payload["timer"]["id"]
        service.start_timer("b", 60)
        service.control_timer(timer_id, "stop")
        assert service.get_timer_status().text == "📊 1 active timers, 1 completed"

    def test_history_tail_is_bounded(self, store):
        service = TimerCommandService(store, history_limit=3)
        for i in range(5):
            timer_id = service.start_timer(f"t{i}", 60).payload["timer"]["id"]
            service.control_timer(timer_id, "stop")
        history = service.get_timer_status().payload["history"]
        assert [h["name"] for h in history] == ["t2", "t3", "t4"]
        assert store.history_count == 5

    def test_polling_metadata(self, service):
        payload = service.get_timer_status_with_polling(polling_interval_ms=1000).payload
        assert payload["_pollingEnabled"] is True
        assert payload["_pollingInterval"] == 1000
        assert "_lastUpdate" in payload
        assert "activeTimers" in payload


# ═══════════════════════════════════════════════════════════════════════════
#  END TO END WITH TICKS
# ═══════════════════════════════════════════════════════════════════════════


class TestLifecycle:

    def test_coffee_break_runs_to_completion(self, service, engine):
        timer_id = service.start_timer("Coffee Break", 300).payload["timer"]["id"]
        for _ in range(299):
            engine.tick_once()
        active = service.get_timer_status().payload["activeTimers"]
        assert active[0]["remainingSeconds"] == 1

        engine.tick_once()

        payload = service.get_timer_status().payload
        assert timer_id not in [t["id"] for t in payload["activeTimers"]]
        [done] = payload["history"]
        assert done["id"] == timer_id
        assert done["status"] == "completed"
        assert done["remainingSeconds"] == 0


# ═══════════════════════════════════════════════════════════════════════════
#  ENVELOPE
# ═══════════════════════════════════════════════════════════════════════════


class TestEnvelope:

    def test_success_envelope(self, service):
        envelope = service.get_timer_status().to_envelope()
        assert envelope["isError"] is False
        assert envelope["content"][0]["type"] == "text"
        assert envelope["_meta"]["widgetType"] == "multi-timer"
        assert "timestamp" in envelope["structuredContent"]

    def test_failure_envelope(self, service):
        envelope = service.start_timer("x", 0).to_envelope()
        assert envelope["isError"] is True
        assert envelope["content"][0]["text"] == "❌ Error: Duration must be greater than 0"
        assert envelope["structuredContent"]["errorKind"] == "InvalidDuration"
        assert envelope["structuredContent"]["timestamp"].endswith("Z")


def test_parse_duration():
    assert parse_duration(5) == 5
    assert parse_duration(5.0) == 5
    assert parse_duration(5.5) is None
    assert parse_duration(False) is None
    assert parse_duration("5") is None
