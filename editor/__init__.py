from __future__ import annotations

from .client import ConversionClient, ConversionHttpClient, LocalConversionClient
from .message import MessageType, show_message

__all__ = [
    "ConversionClient",
    "ConversionHttpClient",
    "LocalConversionClient",
    "MessageType",
    "show_message",
]
