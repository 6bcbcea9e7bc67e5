"""Domain entities for the materials intake toolkit."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePosixPath
from typing import Any


GENERIC_MEDIA_TYPES = frozenset({"", "application/octet-stream", "binary/octet-stream"})


@dataclass(frozen=True, slots=True)
class ExtractionRequest:
    """An uploaded buffer together with what the client claims it is."""

    buffer: bytes
    declared_type: str = ""
    filename: str = ""

    @property
    def media_type(self) -> str:
        """Declared MIME type without parameters, lowercased."""
        return (self.declared_type or "").split(";", 1)[0].strip().lower()

    @property
    def extension(self) -> str:
        # Browsers may send Windows paths as the filename.
        name = (self.filename or "").replace("\\", "/").strip()
        return PurePosixPath(name).suffix.lower()

    @property
    def has_generic_type(self) -> bool:
        return self.media_type in GENERIC_MEDIA_TYPES


@dataclass(frozen=True, slots=True)
class DecoderAttempt:
    """A structured decoder that was tried and did not produce the text."""

    decoder: str
    error: str


@dataclass(slots=True)
class ExtractionResult:
    """Text produced for a request and the decoder path that produced it."""

    text: str
    decoder: str = "plain"
    attempts: list[DecoderAttempt] = field(default_factory=list)

    @property
    def fell_back(self) -> bool:
        return bool(self.attempts)

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls(text="", decoder="none")


@dataclass(slots=True)
class Material:
    """A stored study material: extracted text plus upload metadata."""

    id: str
    title: str
    content: str
    file_type: str = "unknown"
    file_path: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


@dataclass(slots=True)
class Role:
    name: str
    description: str | None = None


@dataclass(slots=True)
class UserAccount:
    """An application user as stored in the ``users`` table."""

    id: str
    email: str
    name: str | None = None
    organization: str | None = None
    email_verified: bool = False
    created_at: datetime | None = None


__all__ = [
    "GENERIC_MEDIA_TYPES",
    "ExtractionRequest",
    "DecoderAttempt",
    "ExtractionResult",
    "Material",
    "Role",
    "UserAccount",
]
