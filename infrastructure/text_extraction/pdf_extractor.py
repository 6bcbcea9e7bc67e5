"""Экстрактор PDF на базе pypdf."""
from __future__ import annotations

import logging
from io import BytesIO

from pypdf import PasswordType, PdfReader

from domain.interfaces import InvalidDocumentError, TextExtractor

logger = logging.getLogger(__name__)

# The header may be preceded by junk bytes; readers tolerate up to 1 KiB.
_HEADER_WINDOW = 1024


class PdfExtractor(TextExtractor):
    """Постранично извлекает текстовый слой PDF-документов."""

    name = "pdf"

    def extract(self, source: bytes) -> str:
        if not isinstance(source, (bytes, bytearray, memoryview)):
            raise InvalidDocumentError(f"expected a bytes buffer, got {type(source).__name__}")
        source = bytes(source)
        if b"%PDF" not in source[:_HEADER_WINDOW]:
            raise InvalidDocumentError("missing %PDF header")

        reader = PdfReader(BytesIO(source))
        # Защита только паролем владельца снимается пустым паролем пользователя.
        if reader.is_encrypted and reader.decrypt("") == PasswordType.NOT_DECRYPTED:
            raise InvalidDocumentError("PDF is password protected")

        pages: list[str] = []
        failed = 0
        for number, page in enumerate(reader.pages, start=1):
            try:
                text = page.extract_text() or ""
            except Exception as exc:  # noqa: BLE001
                failed += 1
                logger.debug("Skipping unreadable PDF page %d: %s", number, exc)
                continue
            pages.append(text.strip())

        if failed and not pages:
            raise InvalidDocumentError(f"none of {failed} pages could be read")
        return "\n".join(page for page in pages if page).strip()


__all__ = ["PdfExtractor"]
