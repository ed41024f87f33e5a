from __future__ import annotations

from .service import HoverService

__all__ = ["HoverService", "create_app"]


def __getattr__(name: str):
    if name == "create_app":
        from .server import create_app

        return create_app
    raise AttributeError(f"module 'conversion.api' has no attribute {name!r}")
