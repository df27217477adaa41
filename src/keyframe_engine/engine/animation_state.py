"""
Animation State

Per-playback state machine that converts caller-supplied time into
loop-adjusted progress and interpolated property values for one Timeline.

    IDLE ──start──▶ PLAYING ──pause──▶ PAUSED
                      │   ◀──start───
                      └──update (loops exhausted)──▶ COMPLETED
    stop() from any state ──▶ IDLE

All timestamps come from the caller; nothing here reads a clock.
One AnimationState must be driven by one actor at a time. Any number of
states may share the same (immutable) Timeline.
"""

from typing import Optional, Tuple

from keyframe_engine.engine.interpolator import PropertyMap, sample
from keyframe_engine.models.enums import Direction, LogCategory, LoopMode, PlaybackStatus
from keyframe_engine.models.snapshot import PlaybackSnapshot
from keyframe_engine.models.timeline import Timeline
from keyframe_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.PLAYBACK)


class AnimationState:
    """
    Mutable playback tracker for a single Timeline

    Attributes:
        timeline: Timeline being played (read-only)
        status: IDLE, PLAYING, PAUSED or COMPLETED
        elapsed_time: Loop-adjusted elapsed time of the last update
        start_time: Time at which the first cycle begins (includes delay)
        pause_time: Time pause() was called, while PAUSED
        current_loop: Completed loop iterations
        current_direction: FORWARD or BACKWARD
        last_frame_time: Time passed to the last start()/update()
        current_values: Property mapping computed by the last update()
    """

    def __init__(self, timeline: Timeline):
        self.timeline = timeline
        self.status = PlaybackStatus.IDLE
        self.elapsed_time = 0
        self.start_time: Optional[int] = None
        self.pause_time: Optional[int] = None
        self.current_loop = 0
        self.current_direction = Direction.FORWARD
        self.last_frame_time: Optional[int] = None
        self.current_values: PropertyMap = {}

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------

    def start(self, current_time: int) -> "AnimationState":
        """
        Begin playback (from IDLE) or resume it (from PAUSED).

        Resuming shifts start_time by the time spent paused so progress
        carries on where it stopped. No-op in other states.
        """
        if self.status == PlaybackStatus.IDLE:
            self.start_time = current_time + self.timeline.delay
            self.status = PlaybackStatus.PLAYING
            self.last_frame_time = current_time
            log.debug("Playback started", timeline=self.timeline.id, start_time=self.start_time)

        elif self.status == PlaybackStatus.PAUSED:
            paused_for = current_time - self.pause_time
            self.start_time += paused_for
            self.pause_time = None
            self.status = PlaybackStatus.PLAYING
            self.last_frame_time = current_time
            log.debug("Playback resumed", timeline=self.timeline.id, paused_for=paused_for)

        return self

    def pause(self, current_time: int) -> "AnimationState":
        """Freeze playback; only valid while PLAYING"""
        if self.status == PlaybackStatus.PLAYING:
            self.pause_time = current_time
            self.status = PlaybackStatus.PAUSED
            log.debug("Playback paused", timeline=self.timeline.id, at=current_time)
        return self

    def stop(self) -> "AnimationState":
        """Reset all progress and return to IDLE"""
        self.status = PlaybackStatus.IDLE
        self.elapsed_time = 0
        self.start_time = None
        self.pause_time = None
        self.current_loop = 0
        self.current_direction = Direction.FORWARD
        self.last_frame_time = None
        self.current_values = {}
        return self

    # ------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------

    def update(self, current_time: int) -> PropertyMap:
        """
        Advance to current_time and compute property values.

        Only does work while PLAYING; otherwise returns the last known
        values. Never raises: a failing interpolation is logged and the
        previous values are kept.

        Returns:
            Property name → current value
        """
        if self.status != PlaybackStatus.PLAYING:
            return dict(self.current_values)

        timeline = self.timeline
        if self.start_time is None:
            elapsed = 0
        else:
            elapsed = max(0, current_time - self.start_time)

        status, loop, loop_elapsed, direction = self._resolve_loop(elapsed)

        progress = min(1.0, loop_elapsed / timeline.duration)
        if direction == Direction.BACKWARD:
            progress = 1.0 - progress

        try:
            values = sample(timeline.keyframes, progress, timeline.easing)
        except Exception as e:
            log.error("Interpolation failed, keeping previous values",
                      timeline=timeline.id, progress=progress, error=str(e))
            values = dict(self.current_values)

        self.status = status
        self.elapsed_time = loop_elapsed
        self.current_loop = loop
        self.current_direction = direction
        self.last_frame_time = current_time
        self.current_values = values

        if status == PlaybackStatus.COMPLETED:
            log.info("Animation completed", timeline=timeline.id, loops=loop + 1)

        return dict(values)

    def _resolve_loop(self, elapsed: int) -> Tuple[PlaybackStatus, int, int, Direction]:
        """
        Apply the loop policy to raw elapsed time.

        Returns:
            (status, current_loop, loop_elapsed, direction)
        """
        timeline = self.timeline
        duration = timeline.duration
        loops_completed = elapsed // duration

        if timeline.loop_mode == LoopMode.NONE and elapsed >= duration:
            return PlaybackStatus.COMPLETED, 0, duration, Direction.FORWARD

        if not timeline.is_infinite and loops_completed >= timeline.loop_count:
            return (PlaybackStatus.COMPLETED, max(0, timeline.loop_count - 1),
                    duration, self.current_direction)

        if timeline.loop_mode == LoopMode.NONE:
            return PlaybackStatus.PLAYING, self.current_loop, min(elapsed, duration), Direction.FORWARD

        loop_elapsed = elapsed % duration
        if timeline.loop_mode == LoopMode.RESTART:
            direction = Direction.FORWARD
        else:
            # REVERSE and ALTERNATE: odd loops run backward
            direction = Direction.FORWARD if loops_completed % 2 == 0 else Direction.BACKWARD

        return PlaybackStatus.PLAYING, loops_completed, loop_elapsed, direction

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    @property
    def progress(self) -> float:
        """Elapsed fraction of the current cycle (0.0-1.0)"""
        return min(1.0, self.elapsed_time / self.timeline.duration)

    @property
    def is_completed(self) -> bool:
        return self.status == PlaybackStatus.COMPLETED

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING

    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot.from_state(self)

    def __repr__(self):
        return (f"AnimationState({self.status.name}, loop={self.current_loop}, "
                f"{self.current_direction.name}, progress={self.progress:.3f})")
