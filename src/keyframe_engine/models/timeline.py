"""
Timeline model

A timeline is the immutable description of one animation: duration,
keyframes ordered by time, global easing, loop policy and start delay.

Timeline.new() performs the cheap structural checks (field types and
ranges). Cross-keyframe checks (bounds, ordering, interpolatability) live
in TimelineValidator and are invoked explicitly, so composition, which
constructs timelines often, does not pay for them on every call.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

from keyframe_engine.models.easing import LINEAR, Easing, parse_easing
from keyframe_engine.models.enums import INFINITE, ErrorCode, LogCategory, LoopMode
from keyframe_engine.models.errors import Result
from keyframe_engine.models.keyframe import Keyframe
from keyframe_engine.utils.enum_helper import EnumHelper
from keyframe_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.TIMELINE)

_MISSING = object()

LoopCount = Union[int, type(INFINITE)]


def _is_whole(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Timeline:
    """
    Immutable animation description

    Attributes:
        duration: Length of one playback cycle in time units (e.g. ms), > 0
        keyframes: Keyframes ascending by time
        easing: Global easing, used where a keyframe has no override
        loop_mode: NONE, RESTART, REVERSE or ALTERNATE
        loop_count: Number of loops, or INFINITE
        delay: Time units before playback begins
        metadata: Opaque auxiliary data (e.g. target element reference)
        id: Optional identifier
    """
    duration: int
    keyframes: Tuple[Keyframe, ...] = ()
    easing: Easing = LINEAR
    loop_mode: LoopMode = LoopMode.NONE
    loop_count: LoopCount = 1
    delay: int = 0
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    id: Optional[str] = None

    @classmethod
    def new(
        cls,
        duration: Any = _MISSING,
        keyframes: Any = None,
        easing: Any = None,
        loop_mode: Any = None,
        loop_count: Any = None,
        delay: Any = None,
        metadata: Any = None,
        id: Optional[str] = None,
    ) -> Result["Timeline"]:
        """
        Build a structurally validated timeline.

        Omitted (or None) options take defaults: keyframes=(), easing=linear,
        loop_mode=NONE, loop_count=1, delay=0, metadata={}.

        Returns:
            Result holding the Timeline or the first ValidationError
        """
        if duration is _MISSING or duration is None:
            return Result.failure(ErrorCode.DURATION_REQUIRED)
        if not _is_whole(duration) or duration <= 0:
            return Result.failure(ErrorCode.INVALID_DURATION, duration)

        keyframes = () if keyframes is None else keyframes
        if not isinstance(keyframes, (list, tuple)) or not all(isinstance(kf, Keyframe) for kf in keyframes):
            return Result.failure(ErrorCode.INVALID_KEYFRAMES, keyframes)

        parsed_easing = parse_easing(LINEAR if easing is None else easing)
        if parsed_easing is None:
            return Result.failure(ErrorCode.INVALID_EASING, easing)

        mode = EnumHelper.coerce(LoopMode, LoopMode.NONE if loop_mode is None else loop_mode)
        if mode is None:
            return Result.failure(ErrorCode.INVALID_LOOP_MODE, loop_mode)

        count = parse_loop_count(1 if loop_count is None else loop_count, allow_zero=True)
        if count is None:
            return Result.failure(ErrorCode.INVALID_LOOP_COUNT, loop_count)

        delay = 0 if delay is None else delay
        if not _is_whole(delay) or delay < 0:
            return Result.failure(ErrorCode.INVALID_DELAY, delay)

        metadata = {} if metadata is None else metadata
        if not isinstance(metadata, Mapping):
            return Result.failure(ErrorCode.INVALID_METADATA, metadata)

        return Result.success(cls(
            duration=duration,
            keyframes=tuple(keyframes),
            easing=parsed_easing,
            loop_mode=mode,
            loop_count=count,
            delay=delay,
            metadata=MappingProxyType(dict(metadata)),
            id=id,
        ))

    @classmethod
    def new_or_raise(cls, **kwargs) -> "Timeline":
        """Same as new(), raising TimelineError on invalid input"""
        return cls.new(**kwargs).unwrap("timeline")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> Result["Timeline"]:
        """Build from a plain options mapping; unknown keys are ignored"""
        known = ("duration", "keyframes", "easing", "loop_mode", "loop_count",
                 "delay", "metadata", "id")
        unknown = sorted(set(options) - set(known))
        if unknown:
            log.debug("Ignoring unknown timeline options", keys=unknown)
        return cls.new(**{k: options[k] for k in known if k in options})

    # ------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------

    @property
    def is_infinite(self) -> bool:
        return self.loop_count is INFINITE

    @property
    def property_names(self) -> Tuple[str, ...]:
        """Union of property keys across keyframes, first-seen order"""
        names = {}
        for kf in self.keyframes:
            for key in kf.properties:
                names.setdefault(key, None)
        return tuple(names)

    def evolve(self, **changes) -> "Timeline":
        """
        Copy with fields replaced, without re-running validation.

        Only for changes already known to be valid (e.g. forcing loop policy).
        """
        return replace(self, **changes)

    def __repr__(self):
        return (f"Timeline(id={self.id!r}, duration={self.duration}, "
                f"keyframes={len(self.keyframes)}, easing={self.easing!r}, "
                f"loop={self.loop_mode.name}x{self.loop_count!r}, delay={self.delay})")


def parse_loop_count(value: Any, allow_zero: bool = True) -> Optional[LoopCount]:
    """
    Accept a whole number or the INFINITE sentinel ("infinite" also works).

    Returns None for anything else.
    """
    if value is INFINITE:
        return INFINITE
    if isinstance(value, str) and value.lower() == "infinite":
        return INFINITE
    if _is_whole(value) and (value > 0 or (allow_zero and value == 0)):
        return value
    return None
