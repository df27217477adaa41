"""
Timeline Validator

Pure, stateless cross-keyframe checks. Timeline.new() only checks fields;
these are the deep checks, run explicitly by whoever needs them
(authoring-time verification, TimelineComposer.sequence, AnimationVerifier).

Batched checks collect every offending item into one error so the caller
can report all problems at once.
"""

from collections import Counter
from typing import Any, Iterable, List, Sequence, Tuple

from keyframe_engine.models.enums import CompositionMode, ErrorCode, LogCategory
from keyframe_engine.models.errors import Result, ValidationError
from keyframe_engine.models.keyframe import Keyframe
from keyframe_engine.models.property_value import interpolatable
from keyframe_engine.models.timeline import Timeline
from keyframe_engine.utils.enum_helper import EnumHelper
from keyframe_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.VALIDATION)

# (index, time, missing_keys)
Inconsistency = Tuple[int, float, List[str]]
# (key, from_time, to_time, from_value, to_value)
InterpolationIssue = Tuple[str, float, float, Any, Any]


class TimelineValidator:
    """
    Cross-keyframe validation

    Every check takes a keyframe sequence (or timelines) and returns a
    Result whose value is None on success.

    Example:
        result = TimelineValidator.validate_timeline(timeline)
        if not result.ok:
            print(result.error.message)
        for warning in result.warnings:
            print(warning.message)
    """

    @staticmethod
    def validate_keyframe_times(keyframes: Sequence[Keyframe]) -> Result[None]:
        """Every time must lie in [0.0, 1.0]; reports all offending times"""
        invalid = [kf.time for kf in keyframes if not 0.0 <= kf.time <= 1.0]
        if invalid:
            return Result.failure(ErrorCode.INVALID_KEYFRAME_TIMES, invalid)
        return Result.success()

    @staticmethod
    def validate_keyframe_ordering(keyframes: Sequence[Keyframe]) -> Result[None]:
        """
        Keyframes must already be ascending by time, with no shared times.

        Out-of-order input reports KEYFRAMES_NOT_ORDERED even if it also
        contains duplicates.
        """
        times = [kf.time for kf in keyframes]
        if times != sorted(times):
            return Result.failure(ErrorCode.KEYFRAMES_NOT_ORDERED, times)

        duplicates = sorted(t for t, n in Counter(times).items() if n > 1)
        if duplicates:
            return Result.failure(ErrorCode.DUPLICATE_KEYFRAME_TIMES, duplicates)
        return Result.success()

    @staticmethod
    def find_inconsistencies(keyframes: Sequence[Keyframe]) -> List[Inconsistency]:
        """Keyframes missing keys that other keyframes define"""
        if len(keyframes) < 2:
            return []

        all_keys = sorted({key for kf in keyframes for key in kf.properties})
        found = []
        for index, kf in enumerate(keyframes):
            missing = [key for key in all_keys if key not in kf.properties]
            if missing:
                found.append((index, kf.time, missing))
        return found

    @staticmethod
    def validate_property_consistency(keyframes: Sequence[Keyframe]) -> Result[None]:
        """
        Advisory: flag keyframes missing keys present elsewhere.

        Interpolation handles missing properties, so this never blocks
        construction; callers decide whether to treat it as fatal.
        """
        found = TimelineValidator.find_inconsistencies(keyframes)
        if found:
            return Result.failure(ErrorCode.INCONSISTENT_PROPERTIES, found)
        return Result.success()

    @staticmethod
    def find_interpolation_issues(keyframes: Sequence[Keyframe]) -> List[InterpolationIssue]:
        issues = []
        for from_kf, to_kf in zip(keyframes, keyframes[1:]):
            for key, from_value in from_kf.properties.items():
                if key not in to_kf.properties:
                    continue
                to_value = to_kf.properties[key]
                if not interpolatable(from_value, to_value):
                    issues.append((key, from_kf.time, to_kf.time, from_value, to_value))
        return issues

    @staticmethod
    def validate_property_interpolation(keyframes: Sequence[Keyframe]) -> Result[None]:
        """Every property shared by adjacent keyframes must be blendable"""
        issues = TimelineValidator.find_interpolation_issues(keyframes)
        if issues:
            return Result.failure(ErrorCode.INTERPOLATION_ERRORS, issues)
        return Result.success()

    @staticmethod
    def validate_composition(first: Timeline, second: Timeline, mode: Any) -> Result[None]:
        """
        Check two timelines can be composed with the given mode.

        Args:
            mode: CompositionMode or its name (merge, sequence, parallel)
        """
        parsed = EnumHelper.coerce(CompositionMode, mode)
        if parsed is None:
            return Result.failure(ErrorCode.INVALID_COMPOSITION_MODE, mode)

        for label, timeline in (("first", first), ("second", second)):
            if timeline.duration <= 0:
                return Result.failure(ErrorCode.INVALID_TIMELINE_DURATION, label)
        return Result.success()

    @staticmethod
    def validate_timeline(timeline: Timeline, strict: bool = False) -> Result[None]:
        """
        Run every deep check: times, ordering, consistency, interpolation.

        Args:
            strict: Treat inconsistent property sets as an error instead
                    of a warning

        Returns:
            Result; advisory findings are in result.warnings
        """
        keyframes = timeline.keyframes

        for check in (TimelineValidator.validate_keyframe_times,
                      TimelineValidator.validate_keyframe_ordering):
            result = check(keyframes)
            if not result.ok:
                return result

        warnings = ()
        consistency = TimelineValidator.validate_property_consistency(keyframes)
        if not consistency.ok:
            if strict:
                return consistency
            warnings = (consistency.error,)
            log.warn("Keyframes have inconsistent property sets",
                     timeline=timeline.id, missing=consistency.error.details)

        interpolation = TimelineValidator.validate_property_interpolation(keyframes)
        if not interpolation.ok:
            return interpolation

        return Result.success(warnings=warnings)

    @staticmethod
    def diagnostics(timeline: Timeline) -> List[ValidationError]:
        """Advisory findings only (currently: inconsistent property sets)"""
        consistency = TimelineValidator.validate_property_consistency(timeline.keyframes)
        return [] if consistency.ok else [consistency.error]


class AnimationVerifier:
    """
    Batch verification of named timelines

    Names must be unique and every timeline must pass
    TimelineValidator.validate_timeline. Errors carry the animation name
    as context.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def verify(self, animations: Iterable[Tuple[str, Timeline]]) -> Result[None]:
        animations = list(animations)

        names = [name for name, _ in animations]
        duplicates = sorted(name for name, n in Counter(names).items() if n > 1)
        if duplicates:
            log.error("Animation names must be unique", duplicates=duplicates)
            return Result.failure(ErrorCode.DUPLICATE_ANIMATION_NAMES, duplicates)

        warnings = []
        for name, timeline in animations:
            result = TimelineValidator.validate_timeline(timeline, strict=self.strict)
            if not result.ok:
                log.error(f"Animation {name!r} failed verification", error=result.error.message)
                return Result.from_error(result.error.with_context(name))
            warnings.extend(w.with_context(name) for w in result.warnings)

        log.debug("Verified animations", count=len(animations), warnings=len(warnings))
        return Result.success(warnings=tuple(warnings))
