"""
Tests for the AnimationState playback state machine.

All times are caller-supplied whole-number units; the timelines below
run 1000 units per cycle unless noted.
"""

import pytest

from keyframe_engine.engine import AnimationState
from keyframe_engine.models import (
    INFINITE,
    Direction,
    Keyframe,
    LoopMode,
    PlaybackSnapshot,
    PlaybackStatus,
    Timeline,
)


def kf(time, **properties):
    return Keyframe.new_or_raise(time=time, properties=properties)


def x_timeline(**options):
    return Timeline.new_or_raise(duration=1000, keyframes=[kf(0.0, x=0), kf(1.0, x=100)], **options)


class TestLifecycle:

    def test_initial_state(self, simple_timeline):
        state = AnimationState(simple_timeline)

        assert state.status == PlaybackStatus.IDLE
        assert state.current_loop == 0
        assert state.current_direction == Direction.FORWARD
        assert state.current_values == {}

    def test_update_while_idle_returns_nothing(self, simple_timeline):
        state = AnimationState(simple_timeline)
        assert state.update(500) == {}
        assert state.status == PlaybackStatus.IDLE

    def test_start_returns_self(self, simple_timeline):
        state = AnimationState(simple_timeline)
        assert state.start(0) is state
        assert state.is_playing

    def test_pause_only_while_playing(self, simple_timeline):
        state = AnimationState(simple_timeline)
        state.pause(100)
        assert state.status == PlaybackStatus.IDLE

    def test_stop_resets(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        state.update(600)
        state.stop()

        assert state.status == PlaybackStatus.IDLE
        assert state.elapsed_time == 0
        assert state.start_time is None
        assert state.current_values == {}

    def test_restart_after_stop(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        state.update(900)
        state.stop().start(5000)

        assert state.update(5250)["x"] == pytest.approx(25)


class TestLinearPlayback:

    def test_midpoint(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        values = state.update(500)

        assert values["x"] == pytest.approx(50)
        assert state.progress == pytest.approx(0.5)
        assert state.status == PlaybackStatus.PLAYING

    def test_completes_on_final_values(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        values = state.update(1000)

        assert state.is_completed
        assert values["x"] == 100

    def test_past_the_end(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        assert state.update(5000)["x"] == 100
        assert state.is_completed

    def test_update_after_completion_keeps_values(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        state.update(1200)
        assert state.update(9999) == {"x": 100}

    def test_returned_values_are_a_copy(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        values = state.update(500)
        values["x"] = -1
        assert state.current_values["x"] == pytest.approx(50)

    def test_start_offset(self, simple_timeline):
        state = AnimationState(simple_timeline).start(2000)
        assert state.update(2100)["x"] == pytest.approx(10)

    def test_time_before_start_clamps(self, simple_timeline):
        state = AnimationState(simple_timeline).start(1000)
        assert state.update(500)["x"] == 0

    def test_multi_property(self, complex_timeline):
        state = AnimationState(complex_timeline).start(0)
        values = state.update(1500)

        assert values["x"] == pytest.approx(75)
        assert values["opacity"] == pytest.approx(0.75)


class TestLooping:

    def test_restart_second_loop(self):
        state = AnimationState(x_timeline(loop_mode=LoopMode.RESTART, loop_count=2)).start(0)
        values = state.update(1500)

        assert state.current_loop == 1
        assert state.current_direction == Direction.FORWARD
        assert values["x"] == pytest.approx(50)

    def test_restart_completes_after_count(self):
        state = AnimationState(x_timeline(loop_mode=LoopMode.RESTART, loop_count=2)).start(0)
        values = state.update(2000)

        assert state.is_completed
        assert state.current_loop == 1
        assert values["x"] == 100

    def test_alternate_runs_backward_on_odd_loops(self):
        state = AnimationState(x_timeline(loop_mode=LoopMode.ALTERNATE, loop_count=3)).start(0)

        assert state.update(250)["x"] == pytest.approx(25)
        assert state.current_direction == Direction.FORWARD

        assert state.update(1250)["x"] == pytest.approx(75)
        assert state.current_direction == Direction.BACKWARD

        assert state.update(2250)["x"] == pytest.approx(25)
        assert state.current_direction == Direction.FORWARD

    def test_reverse_mode_matches_alternate(self):
        state = AnimationState(x_timeline(loop_mode=LoopMode.REVERSE, loop_count=2)).start(0)
        assert state.update(1100)["x"] == pytest.approx(90)
        assert state.current_direction == Direction.BACKWARD

    def test_infinite_never_completes(self):
        state = AnimationState(x_timeline(loop_mode=LoopMode.RESTART, loop_count=INFINITE)).start(0)
        values = state.update(1_000_250)

        assert state.is_playing
        assert state.current_loop == 1000
        assert values["x"] == pytest.approx(25)

    def test_zero_loop_count_completes_immediately(self):
        state = AnimationState(x_timeline(loop_mode=LoopMode.RESTART, loop_count=0)).start(0)
        state.update(0)
        assert state.is_completed

    def test_loop_mode_none_ignores_loop_count(self):
        state = AnimationState(x_timeline(loop_count=5)).start(0)
        state.update(1000)
        assert state.is_completed


class TestPauseAndDelay:

    def test_pause_freezes_values(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        state.update(300)
        state.pause(300)

        assert state.update(900)["x"] == pytest.approx(30)
        assert state.status == PlaybackStatus.PAUSED

    def test_resume_shifts_start(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        state.update(300)
        state.pause(300)
        state.start(800)

        assert state.update(1000)["x"] == pytest.approx(50)

    def test_delay_holds_first_values(self):
        state = AnimationState(x_timeline(delay=200)).start(0)

        assert state.update(100)["x"] == 0
        assert state.update(700)["x"] == pytest.approx(50)
        state.update(1200)
        assert state.is_completed


class TestEdgeTimelines:

    def test_no_keyframes(self):
        state = AnimationState(Timeline.new_or_raise(duration=100)).start(0)
        assert state.update(50) == {}

    def test_single_keyframe(self):
        timeline = Timeline.new_or_raise(duration=100, keyframes=[kf(0.5, x=7)])
        state = AnimationState(timeline).start(0)
        assert state.update(10) == {"x": 7}

    def test_shared_timeline(self, simple_timeline):
        first = AnimationState(simple_timeline).start(0)
        second = AnimationState(simple_timeline).start(500)

        assert first.update(600)["x"] == pytest.approx(60)
        assert second.update(600)["x"] == pytest.approx(10)

    def test_failed_interpolation_is_logged(self, log_records):
        """A custom easing that raises must not escape update()."""

        def broken(progress):
            raise RuntimeError("boom")

        timeline = x_timeline(easing=broken)
        state = AnimationState(timeline).start(0)
        values = state.update(500)

        assert values == {}
        assert state.is_playing
        assert any(level == "ERROR" and category == "PLAYBACK" for level, category, _, _ in log_records)


class TestSnapshot:

    def test_snapshot_fields(self, vector_timeline):
        state = AnimationState(vector_timeline).start(0)
        state.update(500)
        snapshot = state.snapshot()

        assert isinstance(snapshot, PlaybackSnapshot)
        assert snapshot.status == "PLAYING"
        assert snapshot.progress == pytest.approx(0.5)
        assert snapshot.elapsed_time == 500
        assert snapshot.direction == "FORWARD"
        assert snapshot.values["position"] == pytest.approx([50, 25])

    def test_snapshot_dump_is_plain(self, simple_timeline):
        state = AnimationState(simple_timeline).start(0)
        state.update(1000)
        dumped = state.snapshot().model_dump()

        assert dumped["timeline_id"] == "simple"
        assert dumped["status"] == "COMPLETED"
        assert dumped["values"] == {"x": 100}
