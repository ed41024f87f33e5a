from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Protocol

import requests

from conversion.api.schemas import HoverResponse
from conversion.api.service import HoverService


class ConversionClient(Protocol):
    def hover(self, word: str, line: str = "", locale: str | None = None) -> Dict[str, Any]:
        ...

    def convert(self, text: str, mode: str = "all", locale: str | None = None) -> str:
        ...


@dataclass
class ConversionHttpClient:
    base_url: str
    timeout: float = 10.0
    session: requests.Session = field(default_factory=requests.Session)

    def hover(self, word: str, line: str = "", locale: str | None = None) -> Dict[str, Any]:
        return self._post("/v1/hover", {"word": word, "line": line, "locale": locale})

    def convert(self, text: str, mode: str = "all", locale: str | None = None) -> str:
        data = self._post("/v1/convert", {"text": text, "mode": mode, "locale": locale})
        return str(data["text"])

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(
                f"{self.base_url.rstrip('/')}{path}",
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.Timeout as exc:  # pragma: no cover - network conditions
            raise RuntimeError(f"Timed out waiting for {path} response") from exc
        except requests.RequestException as exc:
            raise RuntimeError(f"Failed to call conversion API: {exc}") from exc


@dataclass
class LocalConversionClient:
    """Runs the conversion engine in-process with the same interface as the HTTP client."""

    service: HoverService = field(default_factory=HoverService)

    def hover(self, word: str, line: str = "", locale: str | None = None) -> Dict[str, Any]:
        result = self.service.hover(word, line, locale)
        return HoverResponse.from_result(result).model_dump()

    def convert(self, text: str, mode: str = "all", locale: str | None = None) -> str:
        return self.service.convert(text, mode, locale)


__all__ = ["ConversionClient", "ConversionHttpClient", "LocalConversionClient"]
