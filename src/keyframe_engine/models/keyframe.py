"""
Keyframe model

A keyframe pins a snapshot of property values to a fractional time
(0.0-1.0) within its owning timeline, plus local overrides for the
outgoing segment: an optional easing and an interpolation mode.

Constructing Keyframe(...) directly performs no checks; that form describes
raw input for TimelineValidator. Keyframe.new() is the validating factory.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from keyframe_engine.models.easing import Easing, parse_easing
from keyframe_engine.models.enums import ErrorCode, InterpolationMode, LogCategory
from keyframe_engine.models.errors import Result
from keyframe_engine.models.property_value import PropertyValue, is_number, normalize
from keyframe_engine.utils.enum_helper import EnumHelper
from keyframe_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.KEYFRAME)

_MISSING = object()


@dataclass(frozen=True)
class Keyframe:
    """
    Immutable property snapshot at a point in time

    Attributes:
        time: Position within the timeline (0.0 = start, 1.0 = end)
        properties: Property name → value
        easing: Easing for the segment starting here (None = timeline easing)
        interpolation_mode: How this keyframe morphs into the next one
    """
    time: float
    properties: Mapping[str, PropertyValue] = field(default_factory=dict)
    easing: Optional[Easing] = None
    interpolation_mode: InterpolationMode = InterpolationMode.LINEAR

    @classmethod
    def new(
        cls,
        time: Any = _MISSING,
        properties: Any = _MISSING,
        easing: Any = None,
        interpolation_mode: Any = InterpolationMode.LINEAR,
    ) -> Result["Keyframe"]:
        """
        Build a validated keyframe.

        Args:
            time: Float in [0.0, 1.0] (ints 0 and 1 accepted)
            properties: Mapping of str → number | str | 2/3/4-tuple of numbers
            easing: Optional easing override (see parse_easing)
            interpolation_mode: InterpolationMode or its name

        Returns:
            Result holding the Keyframe or the first ValidationError
        """
        if time is _MISSING or time is None:
            return Result.failure(ErrorCode.TIME_REQUIRED)
        if not is_number(time) or not 0.0 <= time <= 1.0:
            return Result.failure(ErrorCode.INVALID_TIME, time)

        if properties is _MISSING or properties is None:
            return Result.failure(ErrorCode.PROPERTIES_REQUIRED)
        normalized = _normalize_properties(properties)
        if normalized is None:
            return Result.failure(ErrorCode.INVALID_PROPERTIES, properties)

        parsed_easing = None
        if easing is not None:
            parsed_easing = parse_easing(easing)
            if parsed_easing is None:
                return Result.failure(ErrorCode.INVALID_EASING, easing)

        mode = EnumHelper.coerce(InterpolationMode, interpolation_mode or InterpolationMode.LINEAR)
        if mode is None:
            return Result.failure(ErrorCode.INVALID_INTERPOLATION_MODE, interpolation_mode)

        return Result.success(cls(
            time=float(time),
            properties=MappingProxyType(normalized),
            easing=parsed_easing,
            interpolation_mode=mode,
        ))

    @classmethod
    def new_or_raise(cls, **kwargs) -> "Keyframe":
        """Same as new(), raising TimelineError on invalid input"""
        return cls.new(**kwargs).unwrap("keyframe")

    def at_time(self, time: float) -> "Keyframe":
        """Copy of this keyframe moved to another time"""
        return replace(self, time=time)

    def with_properties(self, properties: Mapping[str, PropertyValue]) -> "Keyframe":
        return replace(self, properties=MappingProxyType(dict(properties)))

    def __repr__(self):
        return (f"Keyframe(t={self.time:g}, {dict(self.properties)}, "
                f"{self.interpolation_mode.name.lower()})")


def _normalize_properties(properties: Any) -> Optional[dict]:
    if not isinstance(properties, Mapping):
        return None

    normalized = {}
    for key, value in properties.items():
        if not isinstance(key, str):
            log.debug("Rejected property key", key=repr(key))
            return None
        clean = normalize(value)
        if clean is None:
            log.debug("Rejected property value", key=key, value=repr(value))
            return None
        normalized[key] = clean
    return normalized
