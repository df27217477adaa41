"""
Enums for the keyframe engine

Named easing curves, loop policies, playback state machine states,
composition modes and the log taxonomy.
"""

from enum import Enum, auto


class EasingName(Enum):
    """Built-in easing curves"""
    LINEAR = auto()
    EASE_IN = auto()
    EASE_OUT = auto()
    EASE_IN_OUT = auto()


class LoopMode(Enum):
    """
    What happens when elapsed time exceeds one full duration

    NONE: play once, then complete
    RESTART: jump back to the start every loop
    REVERSE: every odd loop plays backward
    ALTERNATE: ping-pong between forward and backward
    """
    NONE = auto()
    RESTART = auto()
    REVERSE = auto()
    ALTERNATE = auto()


class InterpolationMode(Enum):
    """How a keyframe's outgoing segment morphs into the next keyframe"""
    LINEAR = auto()
    DISCRETE = auto()     # Switch at 50% of the segment
    SPLINE = auto()       # Blends linearly for now
    HOLD = auto()         # Keep source value for the whole segment


class PlaybackStatus(Enum):
    """AnimationState lifecycle"""
    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()
    COMPLETED = auto()


class Direction(Enum):
    FORWARD = auto()
    BACKWARD = auto()


class CompositionMode(Enum):
    """Modes accepted by TimelineValidator.validate_composition"""
    MERGE = auto()
    SEQUENCE = auto()
    PARALLEL = auto()


class MergeStrategy(Enum):
    """
    How keyframes of two timelines are combined

    COMBINE: keyframes at identical times merge their properties
    OVERRIDE: second timeline's keyframes replace the first's
    APPEND: plain concatenation, no grouping
    """
    COMBINE = auto()
    OVERRIDE = auto()
    APPEND = auto()


class PropertyKind(Enum):
    """Tag of a property value shape"""
    NUMBER = auto()
    TEXT = auto()
    VEC2 = auto()
    VEC3 = auto()
    VEC4 = auto()     # Usually RGBA
    NONE = auto()     # Property absent on this side
    UNKNOWN = auto()


class ErrorCode(Enum):
    """Every validation failure the engine can report"""
    # Timeline construction
    DURATION_REQUIRED = auto()
    INVALID_DURATION = auto()
    INVALID_KEYFRAMES = auto()
    INVALID_EASING = auto()
    INVALID_LOOP_MODE = auto()
    INVALID_LOOP_COUNT = auto()
    INVALID_DELAY = auto()
    INVALID_METADATA = auto()

    # Keyframe construction
    TIME_REQUIRED = auto()
    INVALID_TIME = auto()
    PROPERTIES_REQUIRED = auto()
    INVALID_PROPERTIES = auto()
    INVALID_INTERPOLATION_MODE = auto()

    # Cross-keyframe validation (batched)
    INVALID_KEYFRAME_TIMES = auto()
    KEYFRAMES_NOT_ORDERED = auto()
    DUPLICATE_KEYFRAME_TIMES = auto()
    INCONSISTENT_PROPERTIES = auto()
    INTERPOLATION_ERRORS = auto()
    DUPLICATE_ANIMATION_NAMES = auto()

    # Composition
    EMPTY_TIMELINE_LIST = auto()
    INVALID_TIMELINE_DURATION = auto()
    INVALID_COMPOSITION_MODE = auto()
    INVALID_SCALE_FACTOR = auto()
    INVALID_REPEAT_COUNT = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading
    TIMELINE = auto()    # Timeline construction
    KEYFRAME = auto()    # Keyframe construction, interpolation
    VALIDATION = auto()  # Cross-keyframe checks, diagnostics
    COMPOSER = auto()    # merge/sequence/parallel/...
    PLAYBACK = auto()    # AnimationState transitions
    SYSTEM = auto()

    GENERAL = auto()    # Default general category


class _Infinite:
    """Sentinel for an unbounded loop count"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "INFINITE"

    def __reduce__(self):
        return (_Infinite, ())


INFINITE = _Infinite()
