from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Sequence

import pendulum

from ..base64_payload import decode_base64
from ..classifier import classify
from ..cron import CRON_TIMEZONE, decode_cron
from ..dates import DEFAULT_LOCALE, normalize_locale
from ..document import convert_document, convert_unicode_document
from ..timestamp import decode_timestamp
from ..types import ClassificationResult, FormatKind
from .hover import (
    HoverBlock,
    HoverResult,
    render_base64,
    render_cron,
    render_timestamp,
    render_unicode,
)

logger = logging.getLogger(__name__)

CONVERT_MODES = ("all", "unicode")


def order_candidates(word: str, line: str) -> list[str]:
    """Shortest candidate first; equal lengths keep word-before-line order."""
    return sorted([word or "", line or ""], key=len)


def _today() -> date:
    return pendulum.now(CRON_TIMEZONE).date()


@dataclass
class HoverService:
    locale: str = DEFAULT_LOCALE
    timezone: str | None = None
    clock: Callable[[], date | datetime] = field(default_factory=lambda: _today)

    def __post_init__(self) -> None:
        self.locale = normalize_locale(self.locale)

    def classify(self, candidates: Sequence[str]) -> ClassificationResult:
        return classify(list(candidates))

    def hover(
        self, word: str, line: str = "", locale: str | None = None
    ) -> HoverResult | None:
        candidates = order_candidates(word, line)
        result = classify(candidates)
        if not result.recognized:
            logger.debug("Hover found no recognised format word=%r", word)
            return None
        source = candidates[result.candidate_index]
        blocks = self.render(result.format_kind, source, locale)
        if not blocks:
            return None
        logger.info(
            "Hover rendered format=%s candidate=%d blocks=%d",
            result.format_kind.value,
            result.candidate_index,
            len(blocks),
        )
        return HoverResult(
            format_kind=result.format_kind,
            candidate_index=result.candidate_index,
            source=source,
            blocks=tuple(blocks),
        )

    def render(
        self, kind: FormatKind, source: str, locale: str | None = None
    ) -> list[HoverBlock]:
        active_locale = normalize_locale(locale or self.locale)
        if kind is FormatKind.TIME:
            outcome = decode_timestamp(source)
            if not outcome.is_ok():
                return []
            return render_timestamp(outcome.value, active_locale, self.timezone)
        if kind is FormatKind.UNICODE:
            return render_unicode(source, active_locale)
        if kind is FormatKind.CRONTAB:
            return render_cron(decode_cron(source, self.clock()), active_locale)
        if kind is FormatKind.BASE64:
            return render_base64(decode_base64(source), active_locale)
        return []

    def convert(self, text: str, mode: str = "all", locale: str | None = None) -> str:
        if mode not in CONVERT_MODES:
            raise ValueError(f"Unsupported convert mode {mode!r}; expected one of {CONVERT_MODES}")
        if mode == "unicode":
            return convert_unicode_document(text)
        return convert_document(text, normalize_locale(locale or self.locale), self.timezone)


__all__ = ["CONVERT_MODES", "HoverService", "order_candidates"]
