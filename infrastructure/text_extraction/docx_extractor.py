"""Экстрактор DOCX на базе python-docx."""
from __future__ import annotations

import re
from io import BytesIO

from docx import Document as DocxDocument

from domain.interfaces import InvalidDocumentError, TextExtractor

_ZIP_SIGNATURES = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")
_BLANK_RUNS = re.compile(r"\n{3,}")
_INLINE_SPACE = re.compile(r"[ \t]+")


class DocxExtractor(TextExtractor):
    """Извлекает текст абзацев и таблиц из пакетов Word (.docx)."""

    name = "docx"

    def extract(self, source: bytes) -> str:
        if not isinstance(source, (bytes, bytearray, memoryview)):
            raise InvalidDocumentError(f"expected a bytes buffer, got {type(source).__name__}")
        source = bytes(source)
        if not source.startswith(_ZIP_SIGNATURES):
            raise InvalidDocumentError("not a ZIP package")
        doc = DocxDocument(BytesIO(source))
        return _normalise(_collect_docx_text(doc))


def _collect_docx_text(doc: DocxDocument) -> str:
    parts: list[str] = []
    parts.extend(paragraph.text for paragraph in doc.paragraphs if paragraph.text)
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def _normalise(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [_INLINE_SPACE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_RUNS.sub("\n\n", "\n".join(lines)).strip()


__all__ = ["DocxExtractor"]
