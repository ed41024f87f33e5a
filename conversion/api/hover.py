from __future__ import annotations

import html
from dataclasses import dataclass, field
from datetime import tzinfo
from enum import Enum
from typing import Sequence

from ..base64_payload import Base64Payload
from ..dates import format_date_by_locale, format_gmt, format_local, normalize_locale
from ..types import CronOccurrences, DecodeOutcome, FormatKind, TimestampDecoding, TimeUnit
from ..unicode_escape import decode_unicode, extract_json_fragment


class BlockKind(str, Enum):
    TEXT = "text"
    HEADING = "heading"
    BOLD = "bold"
    TABLE = "table"
    CODE = "code"
    IMAGE = "image"


@dataclass(frozen=True)
class HoverBlock:
    kind: BlockKind
    text: str = ""
    language: str | None = None
    rows: tuple[tuple[str, ...], ...] = ()

    def to_markdown(self) -> str:
        if self.kind is BlockKind.HEADING:
            return f"# {self.text}"
        if self.kind is BlockKind.BOLD:
            return f"**{self.text}**"
        if self.kind is BlockKind.CODE:
            return f"```{self.language or ''}\n{self.text}\n```"
        if self.kind is BlockKind.IMAGE:
            return f'<img src="{html.escape(self.text, quote=True)}" />'
        if self.kind is BlockKind.TABLE:
            return _table_markdown(self.rows)
        return self.text


@dataclass(frozen=True)
class HoverResult:
    format_kind: FormatKind
    candidate_index: int
    source: str
    blocks: tuple[HoverBlock, ...] = field(default_factory=tuple)

    def to_markdown(self) -> str:
        return "\n\n".join(block.to_markdown() for block in self.blocks)


def _table_markdown(rows: Sequence[Sequence[str]]) -> str:
    if not rows:
        return ""
    header, *body = rows
    lines = [
        "| " + " | ".join(header) + " |",
        "|" + "|".join(" --- " for _ in header) + "|",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in body)
    return "\n".join(lines)


MESSAGES: dict[str, dict[str, str]] = {
    "zh-CN": {
        "time.heading": "Conversion Timestamp",
        "time.converting": "Converting {value} :",
        "time.converting_hex": "Converting 0x{value} :",
        "time.unit": "检测到时间单位为{unit}:",
        "time.ambiguous": "如果您尝试转换毫秒，请删除最后 3 位数字。",
        "time.gmt": "GMT(标准时间)",
        "time.local": "Your time zone(当前时区)",
        "time.pre_gregorian": "1752 年 9 月 14 日（公历之前）之前的日期不准确。",
        "unit.ns": "纳秒（十亿分之一秒）",
        "unit.us": "微秒（百万分之一秒）",
        "unit.ms": "毫秒（千分之一秒）",
        "unit.s": "秒",
        "unicode.heading": "Conversion Unicode",
        "unicode.json_error": "JSON 解析失败: {error}",
        "cron.heading": "Crontab",
        "cron.index": "序号",
        "cron.time": "执行时间 (Asia/Shanghai)",
        "cron.error": "Cron 表达式无效: {error}",
        "base64.heading": "Base64",
        "base64.invalid": "不是有效的 Base64 编码",
        "base64.image": "图片: {format} {width}x{height} ({mode})",
        "base64.image_unreadable": "无法识别的图片数据",
        "base64.xml_error": "XML 解析失败: {error}",
    },
    "en-US": {
        "time.heading": "Conversion Timestamp",
        "time.converting": "Converting {value} :",
        "time.converting_hex": "Converting 0x{value} :",
        "time.unit": "Detected time unit: {unit}",
        "time.ambiguous": "If you are trying to convert milliseconds, remove the last 3 digits.",
        "time.gmt": "GMT",
        "time.local": "Your time zone",
        "time.pre_gregorian": "Dates before September 14, 1752 (pre-Gregorian calendar) are not accurate.",
        "unit.ns": "nanoseconds (billionths of a second)",
        "unit.us": "microseconds (millionths of a second)",
        "unit.ms": "milliseconds (thousandths of a second)",
        "unit.s": "seconds",
        "unicode.heading": "Conversion Unicode",
        "unicode.json_error": "Invalid JSON: {error}",
        "cron.heading": "Crontab",
        "cron.index": "#",
        "cron.time": "Fire time (Asia/Shanghai)",
        "cron.error": "Invalid cron expression: {error}",
        "base64.heading": "Base64",
        "base64.invalid": "Not valid Base64",
        "base64.image": "Image: {format} {width}x{height} ({mode})",
        "base64.image_unreadable": "Unrecognised image data",
        "base64.xml_error": "Invalid XML: {error}",
    },
}


def message(locale: str | None, key: str, **values: object) -> str:
    return MESSAGES[normalize_locale(locale)][key].format(**values)


def unit_name(unit: TimeUnit, locale: str | None = None) -> str:
    return message(locale, f"unit.{unit.value}")


def render_timestamp(
    decoding: TimestampDecoding, locale: str | None = None, tz: str | tzinfo | None = None
) -> list[HoverBlock]:
    blocks = [HoverBlock(BlockKind.HEADING, message(locale, "time.heading"))]
    if not decoding.was_full_match:
        blocks.append(
            HoverBlock(BlockKind.TEXT, message(locale, "time.converting", value=decoding.cleaned_input))
        )
    if decoding.was_hex:
        blocks.append(
            HoverBlock(BlockKind.TEXT, message(locale, "time.converting_hex", value=decoding.cleaned_input))
        )
    blocks.append(
        HoverBlock(BlockKind.TEXT, message(locale, "time.unit", unit=unit_name(decoding.unit, locale)))
    )
    if decoding.ambiguous_milliseconds_notice:
        blocks.append(HoverBlock(BlockKind.TEXT, message(locale, "time.ambiguous")))
    millis = decoding.epoch_millis
    blocks.extend(
        [
            HoverBlock(BlockKind.BOLD, message(locale, "time.gmt")),
            HoverBlock(BlockKind.TEXT, format_gmt(millis)),
            HoverBlock(BlockKind.BOLD, message(locale, "time.local")),
            HoverBlock(BlockKind.TEXT, format_local(millis, tz)),
            HoverBlock(BlockKind.TEXT, format_date_by_locale(millis, locale, tz)),
        ]
    )
    if decoding.pre_gregorian_notice:
        blocks.append(HoverBlock(BlockKind.TEXT, message(locale, "time.pre_gregorian")))
    return blocks


def render_unicode(source: str, locale: str | None = None) -> list[HoverBlock]:
    decoded = decode_unicode(source)
    blocks = [
        HoverBlock(BlockKind.HEADING, message(locale, "unicode.heading")),
        HoverBlock(BlockKind.TEXT, decoded),
    ]
    fragment = extract_json_fragment(decoded)
    if fragment is None:
        return blocks
    if fragment.is_ok():
        blocks.append(HoverBlock(BlockKind.CODE, fragment.value, language="json"))
    else:
        blocks.append(
            HoverBlock(BlockKind.TEXT, message(locale, "unicode.json_error", error=fragment.error))
        )
    return blocks


def render_cron(
    outcome: DecodeOutcome[CronOccurrences], locale: str | None = None
) -> list[HoverBlock]:
    blocks = [HoverBlock(BlockKind.HEADING, message(locale, "cron.heading"))]
    if not outcome.is_ok():
        blocks.append(HoverBlock(BlockKind.TEXT, message(locale, "cron.error", error=outcome.error)))
        return blocks
    rows = [(message(locale, "cron.index"), message(locale, "cron.time"))]
    rows.extend((str(index), when) for index, when in enumerate(outcome.value.occurrences, start=1))
    blocks.append(HoverBlock(BlockKind.TABLE, rows=tuple(rows)))
    return blocks


def render_base64(payload: Base64Payload, locale: str | None = None) -> list[HoverBlock]:
    blocks = [HoverBlock(BlockKind.HEADING, message(locale, "base64.heading"))]
    if not payload.is_base64():
        blocks.append(HoverBlock(BlockKind.TEXT, message(locale, "base64.invalid")))
        return blocks
    if payload.is_image():
        info = payload.image_info()
        if info is None:
            blocks.append(HoverBlock(BlockKind.TEXT, message(locale, "base64.image_unreadable")))
        else:
            blocks.append(
                HoverBlock(
                    BlockKind.TEXT,
                    message(
                        locale,
                        "base64.image",
                        format=info.format or "?",
                        width=info.width,
                        height=info.height,
                        mode=info.mode,
                    ),
                )
            )
        blocks.append(HoverBlock(BlockKind.IMAGE, payload.to_image()))
        return blocks
    if payload.is_xml():
        xml = payload.to_xml()
        if xml.is_ok():
            blocks.append(HoverBlock(BlockKind.CODE, xml.value, language="xml"))
        else:
            blocks.append(HoverBlock(BlockKind.TEXT, message(locale, "base64.xml_error", error=xml.error)))
        return blocks
    blocks.append(HoverBlock(BlockKind.CODE, payload.to_text()))
    return blocks


__all__ = [
    "BlockKind",
    "HoverBlock",
    "HoverResult",
    "MESSAGES",
    "message",
    "render_base64",
    "render_cron",
    "render_timestamp",
    "render_unicode",
    "unit_name",
]
