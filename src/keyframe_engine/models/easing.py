"""
Easing functions

An easing maps linear progress (0.0-1.0) to eased progress. Every easing
implements the same small interface, apply(progress) -> progress:

- NamedEasing: one of the built-in curves (linear, ease_in, ease_out, ease_in_out)
- CubicBezierEasing: CSS-style cubic-bezier(x1, y1, x2, y2), solved numerically
- CustomEasing: wraps a caller-supplied one-argument function

parse_easing() accepts the loose forms callers hand in (enum, name string,
4-number tuple, callable) and returns an Easing or None.
"""

import inspect
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional

from keyframe_engine.models.enums import EasingName
from keyframe_engine.models.property_value import is_number
from keyframe_engine.utils.enum_helper import EnumHelper


# === Curves ===

def ease_linear(t: float) -> float:
    """Linear easing (constant speed)"""
    return t


def ease_in(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


def ease_out(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return t * (2 - t)


def ease_in_out(t: float) -> float:
    """Quadratic ease-in-out (slow start → fast middle → slow end)"""
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


EASING_FUNCTIONS: Dict[EasingName, Callable[[float], float]] = {
    EasingName.LINEAR: ease_linear,
    EasingName.EASE_IN: ease_in,
    EasingName.EASE_OUT: ease_out,
    EasingName.EASE_IN_OUT: ease_in_out,
}


# === Easing variants ===

class Easing:
    """Interface: map progress to eased progress"""

    def apply(self, progress: float) -> float:
        raise NotImplementedError

    def __call__(self, progress: float) -> float:
        return self.apply(progress)


@dataclass(frozen=True)
class NamedEasing(Easing):
    name: EasingName = EasingName.LINEAR

    def apply(self, progress: float) -> float:
        return EASING_FUNCTIONS[self.name](progress)

    def __repr__(self):
        return f"NamedEasing({self.name.name.lower()})"


@dataclass(frozen=True)
class CubicBezierEasing(Easing):
    """
    cubic-bezier(x1, y1, x2, y2) with implicit endpoints (0,0) and (1,1).

    apply(p) solves x(s) = p for the curve parameter s, then returns y(s).
    Newton-Raphson is tried first; steps that leave the current bracket
    fall back to bisection, so the solve always converges when x1 and x2
    are within [0, 1] (x is then monotonic).
    """
    x1: float
    y1: float
    x2: float
    y2: float

    # Solver settings; not part of the curve identity
    max_iterations: int = field(default=16, compare=False)
    tolerance: float = field(default=1e-7, compare=False)

    def with_solver(self, max_iterations: int, tolerance: float) -> "CubicBezierEasing":
        """Same curve solved with other iteration and tolerance limits"""
        return replace(self, max_iterations=max_iterations, tolerance=tolerance)

    @staticmethod
    def _curve(s: float, p1: float, p2: float) -> float:
        inv = 1.0 - s
        return 3.0 * inv * inv * s * p1 + 3.0 * inv * s * s * p2 + s * s * s

    @staticmethod
    def _curve_derivative(s: float, p1: float, p2: float) -> float:
        inv = 1.0 - s
        return 3.0 * inv * inv * p1 + 6.0 * inv * s * (p2 - p1) + 3.0 * s * s * (1.0 - p2)

    def solve_parameter(self, progress: float) -> float:
        """Find s in [0, 1] with x(s) == progress"""
        lo, hi = 0.0, 1.0
        s = progress
        for _ in range(self.max_iterations):
            x = self._curve(s, self.x1, self.x2)
            dx = x - progress
            if abs(dx) <= self.tolerance:
                return s
            if dx > 0:
                hi = s
            else:
                lo = s
            d = self._curve_derivative(s, self.x1, self.x2)
            if d > 1e-12:
                candidate = s - dx / d
                s = candidate if lo < candidate < hi else 0.5 * (lo + hi)
            else:
                s = 0.5 * (lo + hi)
        return s

    def apply(self, progress: float) -> float:
        if progress <= 0.0:
            return 0.0
        if progress >= 1.0:
            return 1.0
        s = self.solve_parameter(progress)
        return self._curve(s, self.y1, self.y2)


@dataclass(frozen=True)
class CustomEasing(Easing):
    func: Callable[[float], float]

    def apply(self, progress: float) -> float:
        return self.func(progress)


LINEAR = NamedEasing(EasingName.LINEAR)
EASE_IN = NamedEasing(EasingName.EASE_IN)
EASE_OUT = NamedEasing(EasingName.EASE_OUT)
EASE_IN_OUT = NamedEasing(EasingName.EASE_IN_OUT)


# === Parsing ===

def _accepts_single_argument(func: Callable) -> bool:
    """True if func can be called with exactly one positional argument"""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures
        return True

    positional = [
        p for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    required = [p for p in positional if p.default is p.empty]
    has_varargs = any(p.kind == p.VAR_POSITIONAL for p in signature.parameters.values())
    required_kwonly = [
        p for p in signature.parameters.values()
        if p.kind == p.KEYWORD_ONLY and p.default is p.empty
    ]

    if required_kwonly or len(required) > 1:
        return False
    return bool(positional) or has_varargs


def _parse_bezier(points) -> Optional[CubicBezierEasing]:
    if len(points) != 4 or not all(is_number(p) for p in points):
        return None
    x1, y1, x2, y2 = (float(p) for p in points)
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        return None
    return CubicBezierEasing(x1, y1, x2, y2)


def parse_easing(value: Any) -> Optional[Easing]:
    """
    Convert caller input into an Easing.

    Accepted forms:
        Easing instance
        EasingName or its name ("ease_in", "EASE_IN", "ease-in")
        (x1, y1, x2, y2) or ("cubic_bezier", x1, y1, x2, y2)
        one-argument callable or ("custom", callable)

    Returns:
        Easing, or None when the input is not a valid easing
    """
    if isinstance(value, Easing):
        return value
    if isinstance(value, EasingName):
        return NamedEasing(value)
    if isinstance(value, str):
        name = EnumHelper.coerce(EasingName, value.replace("-", "_"))
        return NamedEasing(name) if name else None
    if isinstance(value, (tuple, list)):
        if value and isinstance(value[0], str):
            tag = value[0].lower().replace("-", "_")
            if tag == "cubic_bezier":
                return _parse_bezier(value[1:])
            if tag == "custom" and len(value) == 2:
                func = value[1]
                if callable(func) and _accepts_single_argument(func):
                    return CustomEasing(func)
            return None
        return _parse_bezier(value)
    if callable(value) and _accepts_single_argument(value):
        return CustomEasing(value)
    return None


def reverse_easing(easing: Easing) -> Easing:
    """ease_in and ease_out swap; everything else is unchanged"""
    if easing == EASE_IN:
        return EASE_OUT
    if easing == EASE_OUT:
        return EASE_IN
    return easing
