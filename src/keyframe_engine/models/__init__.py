"""
Models package - Timeline/Keyframe value objects, easing, property values, errors
"""

from .enums import (
    INFINITE,
    CompositionMode,
    Direction,
    EasingName,
    ErrorCode,
    InterpolationMode,
    LogCategory,
    LogLevel,
    LoopMode,
    MergeStrategy,
    PlaybackStatus,
    PropertyKind,
)
from .errors import Result, TimelineError, ValidationError
from .easing import (
    EASE_IN,
    EASE_IN_OUT,
    EASE_OUT,
    LINEAR,
    CubicBezierEasing,
    CustomEasing,
    Easing,
    NamedEasing,
    parse_easing,
    reverse_easing,
)
from .keyframe import Keyframe
from .timeline import Timeline, parse_loop_count
from .snapshot import PlaybackSnapshot

__all__ = [
    "INFINITE",
    "CompositionMode",
    "Direction",
    "EasingName",
    "ErrorCode",
    "InterpolationMode",
    "LogCategory",
    "LogLevel",
    "LoopMode",
    "MergeStrategy",
    "PlaybackStatus",
    "PropertyKind",
    "Result",
    "TimelineError",
    "ValidationError",
    "EASE_IN",
    "EASE_IN_OUT",
    "EASE_OUT",
    "LINEAR",
    "CubicBezierEasing",
    "CustomEasing",
    "Easing",
    "NamedEasing",
    "parse_easing",
    "reverse_easing",
    "Keyframe",
    "Timeline",
    "parse_loop_count",
    "PlaybackSnapshot",
]
