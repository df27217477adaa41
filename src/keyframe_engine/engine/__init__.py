"""
Playback engine - interpolation and the per-playback state machine
"""

from .interpolator import find_segment, interpolate, sample
from .animation_state import AnimationState

__all__ = [
    "find_segment",
    "interpolate",
    "sample",
    "AnimationState",
]
