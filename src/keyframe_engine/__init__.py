"""
Keyframe Engine

Keyframe/timeline interpolation: immutable Timeline and Keyframe
descriptions, a per-playback AnimationState driven by caller-supplied
time, deep validation and timeline composition.

Example:
    from keyframe_engine import Keyframe, Timeline, AnimationState

    fade = Timeline.new_or_raise(duration=1000, keyframes=[
        Keyframe.new_or_raise(time=0.0, properties={"opacity": 0.0}),
        Keyframe.new_or_raise(time=1.0, properties={"opacity": 1.0}),
    ])
    state = AnimationState(fade).start(0)
    state.update(500)       # {"opacity": 0.5}
"""

# Models first: the utils and engine modules import from them
from .models import *  # noqa: F401,F403
from .models import __all__ as _models_all
from .engine import AnimationState, find_segment, interpolate, sample
from .services import AnimationVerifier, PlaybackService, TimelineComposer, TimelineValidator
from .managers import ConfigManager, EngineConfig

__version__ = "0.1.0"

__all__ = list(_models_all) + [
    "AnimationState",
    "find_segment",
    "interpolate",
    "sample",
    "AnimationVerifier",
    "PlaybackService",
    "TimelineComposer",
    "TimelineValidator",
    "ConfigManager",
    "EngineConfig",
]
