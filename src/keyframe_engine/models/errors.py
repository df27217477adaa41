"""
Error values and result container

Construction and composition never raise as primary control flow: they
return a Result holding either the value or a ValidationError. Call sites
that treat bad input as a programming error use Result.unwrap(), which
raises TimelineError.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from keyframe_engine.models.enums import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationError:
    """
    A single local-validation failure

    Attributes:
        code: Error kind
        details: Offending items (batched validators put every offender here)
        context: Optional label such as an animation name
    """
    code: ErrorCode
    details: Any = None
    context: Optional[str] = None

    @property
    def message(self) -> str:
        text = self.code.name.lower()
        if self.context:
            text = f"{self.context}: {text}"
        if self.details is not None:
            text = f"{text} {self.details!r}"
        return text

    def with_context(self, context: str) -> "ValidationError":
        return ValidationError(self.code, self.details, context)

    def __str__(self):
        return self.message


class TimelineError(ValueError):
    """Raised by the or-raise wrappers when validation fails"""

    def __init__(self, error: ValidationError, subject: str = "timeline"):
        self.error = error
        self.code = error.code
        super().__init__(f"Invalid {subject}: {error.message}")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a ValidationError"""
    value: Optional[T] = None
    error: Optional[ValidationError] = None
    warnings: tuple = field(default_factory=tuple)

    @classmethod
    def success(cls, value: T = None, warnings: tuple = ()) -> "Result[T]":
        return cls(value=value, warnings=tuple(warnings))

    @classmethod
    def failure(cls, code: ErrorCode, details: Any = None, context: Optional[str] = None) -> "Result[T]":
        return cls(error=ValidationError(code, details, context))

    @classmethod
    def from_error(cls, error: ValidationError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def unwrap(self, subject: str = "timeline") -> T:
        """Return the value or raise TimelineError"""
        if self.error is not None:
            raise TimelineError(self.error, subject)
        return self.value

    def __bool__(self):
        return self.ok
