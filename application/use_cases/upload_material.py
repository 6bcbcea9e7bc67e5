"""Use cases for turning uploads into stored materials."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from domain.entities import ExtractionRequest, Material
from domain.interfaces import MaterialRepository
from infrastructure.text_extraction.document_text_extractor import DocumentTextExtractor

logger = logging.getLogger(__name__)

# Length limit of the materials.file_type column.
MAX_FILE_TYPE_LENGTH = 20

_SHORT_FILE_TYPES = {
    ".pdf": "pdf",
    ".doc": "doc",
    ".docx": "docx",
    ".txt": "txt",
}


class EmptyExtractionError(ValueError):
    """The upload decoded to blank text, so there is nothing to store."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"No text could be extracted from {filename or 'the upload'}")
        self.filename = filename


class MaterialNotFoundError(LookupError):
    def __init__(self, material_id: str) -> None:
        super().__init__(f"Material {material_id} not found")
        self.material_id = material_id


def upload_material(
    request: ExtractionRequest,
    *,
    extractor: DocumentTextExtractor,
    repository: MaterialRepository,
    title: str | None = None,
) -> Material:
    """Extract the text of an upload and persist it as a material."""

    result = extractor.extract_document(request)
    if not result.text.strip():
        raise EmptyExtractionError(request.filename)

    material = Material(
        id="",
        title=(title or "").strip() or request.filename,
        content=result.text,
        file_type=short_file_type(request),
        file_path=request.filename or None,
        metadata={
            "original_name": request.filename,
            "size": len(request.buffer),
            "upload_time": datetime.now(timezone.utc).isoformat(),
            "original_mime_type": request.declared_type,
            "decoder": result.decoder,
            "fallbacks": [{"decoder": a.decoder, "error": a.error} for a in result.attempts],
        },
    )
    stored = repository.add(material)
    logger.info(
        "Stored material %s from %r: %d chars via %s decoder",
        stored.id,
        request.filename,
        len(result.text),
        result.decoder,
    )
    return stored


def short_file_type(request: ExtractionRequest) -> str:
    """Declared MIME type, or a short extension name when it would not fit."""
    declared = request.media_type
    if declared and len(declared) <= MAX_FILE_TYPE_LENGTH:
        return declared
    return _SHORT_FILE_TYPES.get(request.extension, "unknown")


def list_materials(repository: MaterialRepository) -> list[Material]:
    return repository.list()


def get_material(material_id: str, *, repository: MaterialRepository) -> Material:
    material = repository.get(material_id)
    if material is None:
        raise MaterialNotFoundError(material_id)
    return material


def delete_material(material_id: str, *, repository: MaterialRepository) -> None:
    if not repository.delete(material_id):
        raise MaterialNotFoundError(material_id)
    logger.info("Deleted material %s", material_id)


__all__ = [
    "EmptyExtractionError",
    "MaterialNotFoundError",
    "delete_material",
    "get_material",
    "list_materials",
    "short_file_type",
    "upload_material",
]
