from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from ..types import FormatKind
from .hover import HoverResult


class ClassifyRequest(BaseModel):
    candidates: List[str] = Field(..., description="Candidate strings, tried in order")


class ClassifyResponse(BaseModel):
    format: str
    candidate_index: int


class HoverRequest(BaseModel):
    word: str = Field(default="", description="Text of the word under the cursor")
    line: str = Field(default="", description="Full text of the current line")
    locale: str | None = Field(default=None, description="Locale tag override")


class HoverBlockModel(BaseModel):
    kind: str
    text: str = ""
    language: str | None = None
    rows: List[List[str]] = Field(default_factory=list)


class HoverResponse(BaseModel):
    format: str
    candidate_index: int = 0
    source: str = ""
    blocks: List[HoverBlockModel] = Field(default_factory=list)
    markdown: str = ""

    @classmethod
    def from_result(cls, result: HoverResult | None) -> "HoverResponse":
        if result is None:
            return cls(format=FormatKind.NONE.value)
        return cls(
            format=result.format_kind.value,
            candidate_index=result.candidate_index,
            source=result.source,
            blocks=[
                HoverBlockModel(
                    kind=block.kind.value,
                    text=block.text,
                    language=block.language,
                    rows=[list(row) for row in block.rows],
                )
                for block in result.blocks
            ],
            markdown=result.to_markdown(),
        )


class ConvertRequest(BaseModel):
    text: str = Field(..., description="Full document text")
    mode: Literal["all", "unicode"] = "all"
    locale: str | None = None


class ConvertResponse(BaseModel):
    text: str


__all__ = [
    "ClassifyRequest",
    "ClassifyResponse",
    "ConvertRequest",
    "ConvertResponse",
    "HoverBlockModel",
    "HoverRequest",
    "HoverResponse",
]
