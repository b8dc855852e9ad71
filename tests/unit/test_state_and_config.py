from __future__ import annotations

import pytest

from sortviz.core.config.settings import EngineSettings
from sortviz.core.engine.errors import InvalidArray
from sortviz.core.engine.state import EngineState
from sortviz.core.events.bus import ALL_EVENTS, EventBus
from sortviz.core.events.system import RunPaused, RunResumed
from sortviz.core.run.spec import ExecutionConfig


def test_phase_follows_flags() -> None:
    s = EngineState(run_id="r")
    assert s.phase == "idle"

    s.running = True
    assert s.phase == "running"

    s.paused = True
    assert s.phase == "paused"

    s.stopped = True
    assert s.phase == "stopped"


def test_next_sequence_requires_run_id() -> None:
    with pytest.raises(RuntimeError):
        EngineState().next_sequence()

    s = EngineState(run_id="r")
    assert [s.next_sequence() for _ in range(3)] == [1, 2, 3]


def test_snapshot_is_detached_from_state() -> None:
    s = EngineState(run_id="r", array=[3, 1])
    snap = s.snapshot()
    s.array[0] = 99

    assert snap.array == (3, 1)


def test_execution_config_clamps_speed() -> None:
    assert ExecutionConfig(speed=42).speed == 10
    assert ExecutionConfig(speed=-1).speed == 1


def test_execution_config_rejects_non_numbers() -> None:
    with pytest.raises(InvalidArray):
        ExecutionConfig(input_array=[1, "x"])
    with pytest.raises(InvalidArray):
        ExecutionConfig(input_array=[1, True])


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SORTVIZ_MAX_ARRAY_SIZE", "64")
    monkeypatch.setenv("SORTVIZ_DEFAULT_SPEED", "9")

    s = EngineSettings()

    assert s.max_array_size == 64
    assert s.default_speed == 9


def test_bus_dispatches_typed_then_wildcard_handlers() -> None:
    bus = EventBus()
    seen: list[str] = []

    bus.subscribe(event_type=ALL_EVENTS, handler=lambda e: seen.append(f"*:{e.event_type}"))
    sub = bus.subscribe(event_type="engine.run_paused", handler=lambda e: seen.append("paused"))

    bus.publish(RunPaused.create(run_id="r", sequence=1))
    bus.unsubscribe(sub)
    bus.publish(RunPaused.create(run_id="r", sequence=2))
    bus.publish(RunResumed.create(run_id="r", sequence=3))

    assert seen == [
        "paused",
        "*:engine.run_paused",
        "*:engine.run_paused",
        "*:engine.run_resumed",
    ]
