"""Services layer"""

from .validator import AnimationVerifier, TimelineValidator
from .composer import TimelineComposer
from .playback_service import PlaybackService

__all__ = [
    "AnimationVerifier",
    "TimelineValidator",
    "TimelineComposer",
    "PlaybackService",
]
