from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FormatKind(str, Enum):
    NONE = "none"
    TIME = "time"
    UNICODE = "unicode"
    CRONTAB = "crontab"
    BASE64 = "base64"


class TimeUnit(str, Enum):
    NANOSECONDS = "ns"
    MICROSECONDS = "us"
    MILLISECONDS = "ms"
    SECONDS = "s"


@dataclass(frozen=True)
class ClassificationResult:
    format_kind: FormatKind
    candidate_index: int = 0

    @property
    def recognized(self) -> bool:
        return self.format_kind is not FormatKind.NONE


@dataclass(frozen=True)
class DecodeOutcome(Generic[T]):
    """Either a decoded value or a failure.

    A failure may carry the exception that caused it and a partially filled
    value, so callers can still show what was cleaned before decoding gave up.
    """

    value: Optional[T] = None
    error: Optional[BaseException] = None
    partial: Optional[T] = None
    ok: bool = False

    @classmethod
    def success(cls, value: T) -> "DecodeOutcome[T]":
        return cls(value=value, ok=True)

    @classmethod
    def failure(
        cls, error: BaseException | None = None, partial: T | None = None
    ) -> "DecodeOutcome[T]":
        return cls(error=error, partial=partial, ok=False)

    def is_ok(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class TimestampDecoding:
    cleaned_input: str
    epoch_millis: str = ""
    unit: TimeUnit = TimeUnit.SECONDS
    was_hex: bool = False
    was_full_match: bool = True
    ambiguous_milliseconds_notice: bool = False
    pre_gregorian_notice: bool = False


@dataclass(frozen=True)
class CronOccurrences:
    expression: str
    occurrences: tuple[str, ...]


__all__ = [
    "ClassificationResult",
    "CronOccurrences",
    "DecodeOutcome",
    "FormatKind",
    "TimeUnit",
    "TimestampDecoding",
]
