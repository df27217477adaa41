"""
Keyframe interpolator

Turns two keyframes and a progress fraction into a property mapping,
applying per-segment easing and the source keyframe's interpolation mode.
The interpolator assumes validated input: pairs the validator would reject
degrade to the source value instead of raising.
"""

from typing import Dict, Optional, Sequence, Tuple

from keyframe_engine.models.easing import LINEAR, Easing
from keyframe_engine.models.enums import InterpolationMode
from keyframe_engine.models.keyframe import Keyframe
from keyframe_engine.models.property_value import PropertyValue, blend

PropertyMap = Dict[str, PropertyValue]


def interpolate(
    from_kf: Keyframe,
    to_kf: Keyframe,
    progress: float,
    fallback_easing: Optional[Easing] = None,
) -> PropertyMap:
    """
    Interpolate every property between two keyframes.

    Args:
        from_kf: Segment start; its easing and interpolation mode apply
        to_kf: Segment end
        progress: Linear progress within the segment (0.0-1.0)
        fallback_easing: Timeline easing, used when from_kf has none

    Returns:
        Property name → interpolated value (union of both keyframes' keys)
    """
    easing = from_kf.easing or fallback_easing or LINEAR
    eased = easing.apply(progress)
    mode = from_kf.interpolation_mode

    keys = list(from_kf.properties)
    keys.extend(k for k in to_kf.properties if k not in from_kf.properties)

    values: PropertyMap = {}
    for key in keys:
        from_value = from_kf.properties.get(key)
        to_value = to_kf.properties.get(key)

        if from_value is None or to_value is None:
            values[key] = to_value if from_value is None else from_value
        elif mode == InterpolationMode.DISCRETE:
            values[key] = from_value if eased < 0.5 else to_value
        elif mode == InterpolationMode.HOLD:
            values[key] = from_value
        else:
            # LINEAR, and SPLINE until a spline solver exists
            values[key] = blend(from_value, to_value, eased)

    return values


def find_segment(keyframes: Sequence[Keyframe], progress: float) -> Tuple[Keyframe, Keyframe, float]:
    """
    Locate the keyframe pair whose times bracket progress.

    Picks the first adjacent pair with from.time <= progress <= to.time.
    Progress outside every pair clamps to the first/last segment.

    Args:
        keyframes: At least two keyframes
        progress: Cycle progress (0.0-1.0)

    Returns:
        (from_kf, to_kf, segment_progress)
    """
    ordered = sorted(keyframes, key=lambda kf: kf.time)

    segment = None
    for from_kf, to_kf in zip(ordered, ordered[1:]):
        if from_kf.time <= progress <= to_kf.time:
            segment = (from_kf, to_kf)
            break

    if segment is None:
        if progress < ordered[0].time:
            segment = (ordered[0], ordered[1])
        else:
            segment = (ordered[-2], ordered[-1])

    from_kf, to_kf = segment
    width = to_kf.time - from_kf.time
    if width > 0:
        segment_progress = (progress - from_kf.time) / width
    else:
        segment_progress = 0.0

    # Clamped segments would otherwise extrapolate
    segment_progress = min(1.0, max(0.0, segment_progress))
    return from_kf, to_kf, segment_progress


def sample(keyframes: Sequence[Keyframe], progress: float, easing: Optional[Easing] = None) -> PropertyMap:
    """
    Property values of a keyframe sequence at a cycle progress.

    No keyframes yield an empty mapping; a single keyframe yields its
    properties unchanged.
    """
    if not keyframes:
        return {}
    if len(keyframes) == 1:
        return dict(keyframes[0].properties)

    from_kf, to_kf, segment_progress = find_segment(keyframes, progress)
    return interpolate(from_kf, to_kf, segment_progress, easing)
