import pytest

from fatigue_engine.data_structures import EngineStatus
from fatigue_engine.errors import (
    EngineStoppedError,
    SessionExistsError,
    SessionNotFoundError,
)
from fatigue_engine.sessions import SessionRegistry


def test_sessions_are_independent(clock, frame_factory):
    registry = SessionRegistry()
    a = registry.start("driver-a", clock=clock)
    b = registry.start("driver-b", clock=clock)

    a.process(frame_factory(ear=0.1, mar=0.3))
    assert b.windows.ear_history == ()
    assert a is not b
    assert len(registry) == 2
    assert "driver-a" in registry


def test_start_twice_fails(clock):
    registry = SessionRegistry()
    registry.start("s1", clock=clock)
    with pytest.raises(SessionExistsError):
        registry.start("s1", clock=clock)


def test_unknown_session(clock):
    registry = SessionRegistry()
    with pytest.raises(SessionNotFoundError):
        registry.get("nope")
    with pytest.raises(KeyError):
        registry.end("nope")


def test_end_stops_engine(clock, frame_factory):
    registry = SessionRegistry()
    engine = registry.start("s1", clock=clock)
    registry.end("s1")

    assert engine.status == EngineStatus.STOPPED
    assert "s1" not in registry
    with pytest.raises(EngineStoppedError):
        engine.process(frame_factory())


def test_reset_and_end_all(clock, frame_factory):
    registry = SessionRegistry()
    engine = registry.start("s1", clock=clock)
    registry.start("s2", clock=clock)
    engine.process(frame_factory(ear=0.1))

    registry.reset("s1")
    assert engine.windows.blink_timestamps == ()

    registry.end_all()
    assert len(registry) == 0
