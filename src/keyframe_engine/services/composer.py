"""
Timeline Composer

Derives new timelines from existing ones: merge, sequence, parallel,
reverse, scale and repeat. Inputs are never mutated; every operation
returns a Result holding a freshly constructed Timeline.

Keyframe times are fractions of their own timeline's duration, so any
operation that changes the duration a keyframe lives in rescales it:

    merge/parallel:  new_time = time * own_duration / common_duration
    sequence:        new_time = (time * own_duration + offset) / total_duration
"""

import math
from numbers import Real
from typing import Any, Dict, List, Sequence

from keyframe_engine.models.easing import LINEAR, reverse_easing
from keyframe_engine.models.enums import (
    CompositionMode,
    ErrorCode,
    LogCategory,
    LoopMode,
    MergeStrategy,
)
from keyframe_engine.models.errors import Result
from keyframe_engine.models.keyframe import Keyframe
from keyframe_engine.models.timeline import Timeline, parse_loop_count
from keyframe_engine.services.validator import TimelineValidator
from keyframe_engine.utils.enum_helper import EnumHelper
from keyframe_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.COMPOSER)


class TimelineComposer:
    """
    Combines timelines into new timelines

    Composition options (merge, sequence, parallel):
        easing: Easing of the result (merge: first timeline's; others: linear)
        loop_mode: Loop mode of the result (default NONE)
        loop_count: Loop count of the result (default 1)
        merge_strategy: COMBINE (default), OVERRIDE or APPEND

    Example:
        composer = TimelineComposer()
        intro = composer.sequence([fade_in, slide]).unwrap()
        looped = composer.repeat(intro, 3).unwrap()
    """

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Deep-validate sequence inputs with inconsistent
                    property sets treated as errors
        """
        self.strict = strict

    # ------------------------------------------------------------
    # Multi-timeline composition
    # ------------------------------------------------------------

    def merge(
        self,
        first: Timeline,
        second: Timeline,
        easing: Any = None,
        loop_mode: Any = None,
        loop_count: Any = None,
        merge_strategy: Any = MergeStrategy.COMBINE,
    ) -> Result[Timeline]:
        """
        Overlay two timelines on a common duration (the longer one).

        Keyframes landing on identical times merge their properties; the
        second timeline wins key collisions and provides easing and
        interpolation mode.
        """
        check = TimelineValidator.validate_composition(first, second, CompositionMode.MERGE)
        if not check.ok:
            return Result.from_error(check.error)

        strategy = EnumHelper.coerce(MergeStrategy, merge_strategy)
        if strategy is None:
            return Result.failure(ErrorCode.INVALID_COMPOSITION_MODE, merge_strategy)

        duration = max(first.duration, second.duration)
        keyframes = self._merge_keyframes(
            self._rescale(first.keyframes, first.duration, duration),
            self._rescale(second.keyframes, second.duration, duration),
            strategy,
        )

        log.debug("Merged timelines", first=first.duration, second=second.duration,
                  duration=duration, keyframes=len(keyframes))
        return Timeline.new(
            duration=duration,
            keyframes=keyframes,
            easing=first.easing if easing is None else easing,
            loop_mode=loop_mode,
            loop_count=loop_count,
        )

    def sequence(
        self,
        timelines: Sequence[Timeline],
        easing: Any = None,
        loop_mode: Any = None,
        loop_count: Any = None,
    ) -> Result[Timeline]:
        """
        Play timelines one after another.

        Duration is the sum of all durations. A single timeline is returned
        unchanged. Every input is deep-validated first.

        Where one input ends and the next begins, both boundary keyframes
        are kept at the same time. Sequencing an already sequenced timeline
        therefore fails validation with DUPLICATE_KEYFRAME_TIMES.
        """
        timelines = list(timelines)
        if not timelines:
            return Result.failure(ErrorCode.EMPTY_TIMELINE_LIST)
        if len(timelines) == 1:
            return Result.success(timelines[0])

        for timeline in timelines:
            result = TimelineValidator.validate_timeline(timeline, strict=self.strict)
            if not result.ok:
                return Result.from_error(result.error)
        for first, second in zip(timelines, timelines[1:]):
            check = TimelineValidator.validate_composition(first, second, CompositionMode.SEQUENCE)
            if not check.ok:
                return Result.from_error(check.error)

        total = sum(t.duration for t in timelines)
        keyframes: List[Keyframe] = []
        offset = 0
        for timeline in timelines:
            keyframes.extend(
                kf.at_time((kf.time * timeline.duration + offset) / total)
                for kf in timeline.keyframes
            )
            offset += timeline.duration

        log.info("Sequenced timelines", count=len(timelines), duration=total)
        return Timeline.new(
            duration=total,
            keyframes=keyframes,
            easing=LINEAR if easing is None else easing,
            loop_mode=loop_mode,
            loop_count=loop_count,
        )

    def parallel(
        self,
        timelines: Sequence[Timeline],
        easing: Any = None,
        loop_mode: Any = None,
        loop_count: Any = None,
        merge_strategy: Any = MergeStrategy.COMBINE,
    ) -> Result[Timeline]:
        """
        Play timelines simultaneously on the longest duration.

        Each input is rescaled to the common duration, then folded left to
        right with the merge rule.
        """
        timelines = list(timelines)
        if not timelines:
            return Result.failure(ErrorCode.EMPTY_TIMELINE_LIST)
        if len(timelines) == 1:
            return Result.success(timelines[0])

        for first, second in zip(timelines, timelines[1:]):
            check = TimelineValidator.validate_composition(first, second, CompositionMode.PARALLEL)
            if not check.ok:
                return Result.from_error(check.error)

        strategy = EnumHelper.coerce(MergeStrategy, merge_strategy)
        if strategy is None:
            return Result.failure(ErrorCode.INVALID_COMPOSITION_MODE, merge_strategy)

        duration = max(t.duration for t in timelines)
        keyframes: List[Keyframe] = []
        for timeline in timelines:
            rescaled = self._rescale(timeline.keyframes, timeline.duration, duration)
            keyframes = self._merge_keyframes(keyframes, rescaled, strategy)

        log.info("Combined parallel timelines", count=len(timelines), duration=duration)
        return Timeline.new(
            duration=duration,
            keyframes=keyframes,
            easing=LINEAR if easing is None else easing,
            loop_mode=loop_mode,
            loop_count=loop_count,
        )

    # ------------------------------------------------------------
    # Single-timeline transforms
    # ------------------------------------------------------------

    def reverse(self, timeline: Timeline) -> Result[Timeline]:
        """
        Play a timeline backwards.

        Times become 1 - time (order restored by reversing), ease_in and
        ease_out swap. Duration, loop policy, delay and metadata are kept.
        """
        keyframes = [kf.at_time(1.0 - kf.time) for kf in reversed(timeline.keyframes)]
        return Timeline.new(
            duration=timeline.duration,
            keyframes=keyframes,
            easing=reverse_easing(timeline.easing),
            loop_mode=timeline.loop_mode,
            loop_count=timeline.loop_count,
            delay=timeline.delay,
            metadata=timeline.metadata,
            id=timeline.id,
        )

    def scale(self, timeline: Timeline, factor: Any) -> Result[Timeline]:
        """
        Stretch (factor > 1) or compress (factor < 1) a timeline.

        Keyframe times are relative and stay as they are. The new duration
        is rounded to a whole number, never below 1. Factors that are not
        finite, or that overflow the duration, are rejected.
        """
        if not isinstance(factor, Real) or isinstance(factor, bool) or not factor > 0:
            return Result.failure(ErrorCode.INVALID_SCALE_FACTOR, factor)
        if not math.isfinite(factor):
            return Result.failure(ErrorCode.INVALID_SCALE_FACTOR, factor)

        scaled = timeline.duration * factor
        if not math.isfinite(scaled):
            log.warn("Scale factor overflows the duration", factor=factor, duration=timeline.duration)
            return Result.failure(ErrorCode.INVALID_SCALE_FACTOR, factor)

        duration = max(1, round(scaled))
        log.debug("Scaled timeline", factor=factor, duration_from=timeline.duration, duration_to=duration)
        return Timeline.new(
            duration=duration,
            keyframes=timeline.keyframes,
            easing=timeline.easing,
            loop_mode=timeline.loop_mode,
            loop_count=timeline.loop_count,
            delay=timeline.delay,
            metadata=timeline.metadata,
            id=timeline.id,
        )

    def repeat(self, timeline: Timeline, count: Any) -> Result[Timeline]:
        """Loop a timeline count times (positive int or INFINITE) by restarting"""
        parsed = parse_loop_count(count, allow_zero=False)
        if parsed is None:
            return Result.failure(ErrorCode.INVALID_REPEAT_COUNT, count)
        return Result.success(timeline.evolve(loop_mode=LoopMode.RESTART, loop_count=parsed))

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    @staticmethod
    def _rescale(keyframes: Sequence[Keyframe], own_duration: int, target_duration: int) -> List[Keyframe]:
        ratio = own_duration / target_duration
        return [kf.at_time(kf.time * ratio) for kf in keyframes]

    @staticmethod
    def _merge_keyframes(first: Sequence[Keyframe], second: Sequence[Keyframe],
                         strategy: MergeStrategy) -> List[Keyframe]:
        if strategy == MergeStrategy.OVERRIDE:
            return list(second)
        if strategy == MergeStrategy.APPEND:
            return list(first) + list(second)

        groups: Dict[float, List[Keyframe]] = {}
        for kf in list(first) + list(second):
            groups.setdefault(kf.time, []).append(kf)

        merged = []
        for time, group in groups.items():
            properties = {}
            for kf in group:
                properties.update(kf.properties)
            # Last keyframe at this time supplies easing and interpolation mode
            merged.append(group[-1].at_time(time).with_properties(properties))

        return sorted(merged, key=lambda kf: kf.time)

