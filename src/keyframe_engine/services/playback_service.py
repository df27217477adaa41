"""
Playback Service

Drives many independent AnimationStates from one tick source. Each key
(an element reference, a zone, anything hashable) owns exactly one state;
states may share timelines.

tick(now) updates every playing state and returns their values.
frames() is an async generator that ticks at a fixed rate from an
injected clock until nothing is left playing.
"""

import asyncio
from typing import Callable, Dict, Hashable, List, Optional

from keyframe_engine.engine.animation_state import AnimationState
from keyframe_engine.engine.interpolator import PropertyMap
from keyframe_engine.models.enums import LogCategory, PlaybackStatus
from keyframe_engine.models.snapshot import PlaybackSnapshot
from keyframe_engine.models.timeline import Timeline
from keyframe_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.PLAYBACK)


class PlaybackService:
    """
    Registry of per-key AnimationStates

    Example:
        service = PlaybackService()
        service.add("logo", fade_in)
        service.start("logo", now=0)

        values = service.tick(500)   # {"logo": {"opacity": 0.5}}
    """

    def __init__(self, fps: int = 60):
        self.fps = fps
        self.states: Dict[Hashable, AnimationState] = {}

    # ============================================================
    # Registration
    # ============================================================

    def add(self, key: Hashable, timeline: Timeline) -> AnimationState:
        """Create a fresh IDLE state for key, replacing any previous one"""
        if key in self.states:
            log.warn(f"Replacing animation state for {key!r}")
        state = AnimationState(timeline)
        self.states[key] = state
        return state

    def remove(self, key: Hashable) -> Optional[AnimationState]:
        state = self.states.pop(key, None)
        if state is not None:
            log.debug(f"Removed animation state for {key!r}")
        return state

    def get(self, key: Hashable) -> Optional[AnimationState]:
        return self.states.get(key)

    # ============================================================
    # Control
    # ============================================================

    def start(self, key: Hashable, now: int) -> AnimationState:
        return self._require(key).start(now)

    def pause(self, key: Hashable, now: int) -> AnimationState:
        return self._require(key).pause(now)

    def stop(self, key: Hashable) -> AnimationState:
        return self._require(key).stop()

    def start_all(self, now: int):
        for state in self.states.values():
            state.start(now)
        log.info("Started all animations", count=len(self.states))

    def stop_all(self):
        for state in self.states.values():
            state.stop()
        log.info("Stopped all animations", count=len(self.states))

    def _require(self, key: Hashable) -> AnimationState:
        try:
            return self.states[key]
        except KeyError:
            raise KeyError(f"No animation registered for {key!r}") from None

    # ============================================================
    # Ticking
    # ============================================================

    def tick(self, now: int) -> Dict[Hashable, PropertyMap]:
        """
        Update every PLAYING state.

        Returns:
            key → property values, for the states that were playing
        """
        frame = {}
        for key, state in self.states.items():
            if state.status == PlaybackStatus.PLAYING:
                frame[key] = state.update(now)
        return frame

    def active_keys(self) -> List[Hashable]:
        """Keys whose state is PLAYING or PAUSED"""
        return [
            key for key, state in self.states.items()
            if state.status in (PlaybackStatus.PLAYING, PlaybackStatus.PAUSED)
        ]

    def snapshot(self) -> Dict[Hashable, PlaybackSnapshot]:
        return {key: state.snapshot() for key, state in self.states.items()}

    async def frames(self, clock: Callable[[], int], fps: Optional[int] = None):
        """
        Yield tick(clock()) at roughly fps frames per second.

        Stops once no state is PLAYING or PAUSED. The clock supplies
        whole-number time units; the sleep between frames uses real time.
        """
        fps = self.fps if fps is None else fps
        interval = 1.0 / fps if fps > 0 else 0
        frame_count = 0
        try:
            while self.active_keys():
                yield self.tick(clock())
                frame_count += 1
                await asyncio.sleep(interval)
        finally:
            log.debug(f"Frame loop finished after {frame_count} frames")
