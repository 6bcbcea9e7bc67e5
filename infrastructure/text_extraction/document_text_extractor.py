"""Format-aware text extraction for uploaded documents.

Structured decoders are tried in priority order and the buffer is decoded as
UTF-8 when none of them applies or all of them fail. Hints come from the
filename extension and the declared MIME type; when the two disagree the
decoder named by the extension is tried first.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from domain.entities import DecoderAttempt, ExtractionRequest, ExtractionResult
from domain.interfaces import TextExtractor
from infrastructure.text_extraction.docx_extractor import DocxExtractor
from infrastructure.text_extraction.pdf_extractor import PdfExtractor
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@dataclass(frozen=True, slots=True)
class StructuredFormat:
    """A structured decoder and the hints that select it."""

    extractor: TextExtractor
    media_types: frozenset[str]
    extensions: frozenset[str]

    @property
    def name(self) -> str:
        return self.extractor.name


def default_formats() -> tuple[StructuredFormat, ...]:
    return (
        StructuredFormat(PdfExtractor(), frozenset({PDF_MEDIA_TYPE}), frozenset({".pdf"})),
        StructuredFormat(DocxExtractor(), frozenset({DOCX_MEDIA_TYPE}), frozenset({".docx"})),
    )


class DocumentTextExtractor:
    """Turns an upload into plain text without ever failing the caller."""

    def __init__(
        self,
        formats: tuple[StructuredFormat, ...] | None = None,
        fallback: TextExtractor | None = None,
    ) -> None:
        self._formats = formats if formats is not None else default_formats()
        self._fallback = fallback or PlainTextExtractor()

    def candidates(self, request: ExtractionRequest) -> list[StructuredFormat]:
        """Structured formats to try, extension hints before declared-type hints."""
        by_extension = [fmt for fmt in self._formats if request.extension in fmt.extensions]
        by_type: list[StructuredFormat] = []
        if not request.has_generic_type:
            by_type = [
                fmt
                for fmt in self._formats
                if request.media_type in fmt.media_types and fmt not in by_extension
            ]
        return by_extension + by_type

    def extract_document(self, request: ExtractionRequest) -> ExtractionResult:
        try:
            return self._extract(request)
        except Exception:  # pragma: no cover - the fallback decoder does not raise
            logger.exception("Text extraction failed for %r", request.filename)
            return ExtractionResult.empty()

    def extract(self, buffer: bytes | str, declared_type: str = "", filename: str = "") -> str:
        request = ExtractionRequest(buffer=_as_bytes(buffer), declared_type=declared_type or "", filename=filename or "")
        return self.extract_document(request).text

    def _extract(self, request: ExtractionRequest) -> ExtractionResult:
        attempts: list[DecoderAttempt] = []
        for fmt in self.candidates(request):
            try:
                text = fmt.extractor.extract(request.buffer)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "%s decoder failed for %r (%s), falling back: %s",
                    fmt.name,
                    request.filename,
                    request.media_type or "no type",
                    exc,
                )
                attempts.append(DecoderAttempt(decoder=fmt.name, error=f"{type(exc).__name__}: {exc}"))
                continue
            logger.debug("Extracted %d chars from %r with %s decoder", len(text), request.filename, fmt.name)
            return ExtractionResult(text=text, decoder=fmt.name, attempts=attempts)

        text = self._fallback.extract(request.buffer)
        logger.debug(
            "Decoded %r as %s text (%d structured attempts failed)",
            request.filename,
            self._fallback.name,
            len(attempts),
        )
        return ExtractionResult(text=text, decoder=self._fallback.name, attempts=attempts)


def _as_bytes(buffer: bytes | bytearray | memoryview | str) -> bytes:
    # Text is content, never a path to read from disk.
    if isinstance(buffer, str):
        return buffer.encode("utf-8")
    return bytes(buffer)


_default_extractor = DocumentTextExtractor()


def extract(buffer: bytes | str, declared_type: str = "", filename: str = "") -> str:
    """Best-effort plain text for an uploaded buffer."""
    return _default_extractor.extract(buffer, declared_type, filename)


__all__ = [
    "DOCX_MEDIA_TYPE",
    "PDF_MEDIA_TYPE",
    "DocumentTextExtractor",
    "StructuredFormat",
    "default_formats",
    "extract",
]
