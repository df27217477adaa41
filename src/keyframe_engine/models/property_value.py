"""
Property values

A property value is a number, a text, or a 2/3/4-tuple of numbers
(4-tuples usually being RGBA). Values are classified into a PropertyKind
tag, and interpolation dispatches on the pair of tags.
"""

from numbers import Real
from typing import Any, Optional, Tuple, Union

from keyframe_engine.models.enums import PropertyKind

Number = Union[int, float]
PropertyValue = Union[Number, str, Tuple[Number, Number], Tuple[Number, Number, Number],
                      Tuple[Number, Number, Number, Number]]

_VECTOR_KINDS = {
    2: PropertyKind.VEC2,
    3: PropertyKind.VEC3,
    4: PropertyKind.VEC4,
}


def is_number(value: Any) -> bool:
    """Real number that is not a bool"""
    return isinstance(value, Real) and not isinstance(value, bool)


def classify(value: Any) -> PropertyKind:
    """Return the PropertyKind tag of a value"""
    if value is None:
        return PropertyKind.NONE
    if is_number(value):
        return PropertyKind.NUMBER
    if isinstance(value, str):
        return PropertyKind.TEXT
    if isinstance(value, tuple) and all(is_number(v) for v in value):
        return _VECTOR_KINDS.get(len(value), PropertyKind.UNKNOWN)
    return PropertyKind.UNKNOWN


def normalize(value: Any) -> Optional[PropertyValue]:
    """
    Coerce raw input into a property value.

    Lists of 2-4 numbers become tuples. Returns None when the value
    cannot be represented.
    """
    if isinstance(value, list):
        value = tuple(value)
    kind = classify(value)
    if kind in (PropertyKind.NONE, PropertyKind.UNKNOWN):
        return None
    return value


def interpolatable(a: Any, b: Any) -> bool:
    """
    True when a and b can be blended.

    Same numeric shape, text/text, or a missing side. Anything else
    (text vs number, mismatched tuple arity) is not interpolatable.
    """
    kind_a = classify(a)
    kind_b = classify(b)
    if PropertyKind.NONE in (kind_a, kind_b):
        return True
    if PropertyKind.UNKNOWN in (kind_a, kind_b):
        return False
    return kind_a == kind_b


def blend(a: Any, b: Any, progress: float) -> Any:
    """
    Blend two values at eased progress.

    Missing side yields the present side. Text switches at 0.5.
    Incompatible pairs degrade to the source value.
    """
    kind_a = classify(a)
    kind_b = classify(b)

    if kind_a == PropertyKind.NONE:
        return b
    if kind_b == PropertyKind.NONE:
        return a
    if kind_a != kind_b or kind_a == PropertyKind.UNKNOWN:
        return a

    if kind_a == PropertyKind.NUMBER:
        return _lerp(a, b, progress)
    if kind_a == PropertyKind.TEXT:
        return a if progress < 0.5 else b
    return tuple(_lerp(fa, fb, progress) for fa, fb in zip(a, b))


def _lerp(a: Number, b: Number, progress: float) -> float:
    # Weighted form of a + (b - a) * p; hits both endpoints exactly
    return a * (1.0 - progress) + b * progress
