from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from .schemas import (
    ClassifyRequest,
    ClassifyResponse,
    ConvertRequest,
    ConvertResponse,
    HoverRequest,
    HoverResponse,
)
from .service import HoverService


logger = logging.getLogger(__name__)


def create_app(service: HoverService | None = None) -> FastAPI:
    selected_service = service or HoverService()

    app = FastAPI(title="Preview Conversion API", version="0.1.0")
    app.state.service = selected_service

    logger.info(
        "API server initialised locale=%s timezone=%s",
        selected_service.locale,
        selected_service.timezone or "local",
    )

    @app.get("/health", response_model=dict[str, str])
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/v1/classify", response_model=ClassifyResponse)
    def classify_candidates(request: ClassifyRequest) -> ClassifyResponse:
        result = selected_service.classify(request.candidates)
        return ClassifyResponse(
            format=result.format_kind.value, candidate_index=result.candidate_index
        )

    @app.post("/v1/hover", response_model=HoverResponse)
    def hover(request: HoverRequest) -> HoverResponse:
        logger.debug(
            "Hover request word_chars=%d line_chars=%d locale=%s",
            len(request.word),
            len(request.line),
            request.locale,
        )
        try:
            result = selected_service.hover(request.word, request.line, request.locale)
        except Exception as exc:  # pragma: no cover - surfaced via HTTP
            logger.exception("Hover failed word=%r error=%s", request.word, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return HoverResponse.from_result(result)

    @app.post("/v1/convert", response_model=ConvertResponse)
    def convert(request: ConvertRequest) -> ConvertResponse:
        logger.info(
            "Convert request mode=%s chars=%d", request.mode, len(request.text)
        )
        try:
            text = selected_service.convert(request.text, request.mode, request.locale)
        except Exception as exc:
            logger.exception("Convert failed mode=%s error=%s", request.mode, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ConvertResponse(text=text)

    return app


__all__ = ["create_app"]
