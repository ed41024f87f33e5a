from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass
from xml.etree import ElementTree as ET

from PIL import Image

from .types import DecodeOutcome

logger = logging.getLogger(__name__)

DATA_URI_HEADER = re.compile(r"^(?:data:[^,]*;base64,|base64,)")
BASE64_CODE = re.compile(
    r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?"
)
_TAG_BOUNDARY = re.compile(r">\s*<")


def is_base64_code(code: str) -> bool:
    return len(code) > 0 and len(code) % 4 == 0 and BASE64_CODE.fullmatch(code) is not None


@dataclass(frozen=True)
class ImageInfo:
    format: str | None
    width: int
    height: int
    mode: str


class Base64Payload:
    """Base64 text split into its data-URI header and code, plus the decoded bytes.

    The code and its bytes are only ever replaced together, through
    ``change_code``.
    """

    def __init__(self, raw: str) -> None:
        match = DATA_URI_HEADER.match(raw)
        self._header = match.group(0) if match else ""
        self._code = ""
        self._decoded = b""
        self.change_code(raw[len(self._header) :])

    @property
    def header(self) -> str:
        return self._header

    @property
    def code(self) -> str:
        return self._code

    @property
    def decoded_bytes(self) -> bytes:
        return self._decoded

    def change_code(self, code: str) -> None:
        try:
            decoded = base64.b64decode(code, validate=True)
        except (binascii.Error, ValueError):
            logger.debug("Base64 code could not be decoded length=%d", len(code))
            decoded = b""
        self._code, self._decoded = code, decoded

    def is_base64(self) -> bool:
        return is_base64_code(self._code)

    def is_image(self) -> bool:
        return "data:image" in self._header

    def is_xml(self) -> bool:
        return _TAG_BOUNDARY.search(self.to_text()) is not None

    def to_text(self) -> str:
        return self._decoded.decode("utf-8", errors="replace")

    def to_image(self) -> str:
        return f"{self._header}{self._code}"

    def image_info(self) -> ImageInfo | None:
        try:
            with Image.open(io.BytesIO(self._decoded)) as img:
                return ImageInfo(
                    format=img.format,
                    width=img.width,
                    height=img.height,
                    mode=img.mode,
                )
        except Exception:
            logger.debug("Failed to read embedded image", exc_info=True)
            return None

    def to_xml(self) -> DecodeOutcome[str]:
        try:
            root = ET.fromstring(self.to_text())
        except ET.ParseError as exc:
            return DecodeOutcome.failure(exc, partial=self.to_text())
        return DecodeOutcome.success(indent_xml(ET.tostring(root, encoding="unicode")))

    def __repr__(self) -> str:
        return (
            f"Base64Payload(header={self._header!r}, code_length={len(self._code)}, "
            f"decoded_bytes={len(self._decoded)})"
        )


def indent_xml(serialized: str, indent: str = "  ") -> str:
    """Put each tag on its own line, indented by how many tags are still open."""
    lines = _TAG_BOUNDARY.sub(">\n<", serialized.strip()).splitlines()
    depth = 0
    output: list[str] = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if line.startswith("</"):
            depth = max(0, depth - 1)
        output.append(f"{indent * depth}{line}")
        if _opens_element(line):
            depth += 1
    return "\n".join(output)


def _opens_element(line: str) -> bool:
    if not line.startswith("<") or line.startswith(("</", "<?", "<!")):
        return False
    if line.endswith("/>"):
        return False
    return "</" not in line


def decode_base64(raw: str) -> Base64Payload:
    return Base64Payload(raw)


__all__ = [
    "BASE64_CODE",
    "Base64Payload",
    "DATA_URI_HEADER",
    "ImageInfo",
    "decode_base64",
    "indent_xml",
    "is_base64_code",
]
