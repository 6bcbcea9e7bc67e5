"""Text extractor that treats the payload as plain UTF-8 text."""
from __future__ import annotations

from domain.interfaces import TextExtractor


class PlainTextExtractor(TextExtractor):
    """Decodes bytes as UTF-8, substituting U+FFFD for malformed sequences."""

    name = "plain"

    def extract(self, source: bytes | str) -> str:
        if isinstance(source, (bytes, bytearray, memoryview)):
            return bytes(source).decode("utf-8", errors="replace")
        return source


__all__ = ["PlainTextExtractor"]
