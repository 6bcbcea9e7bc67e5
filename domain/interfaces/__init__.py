"""Abstract interfaces for the materials intake toolkit."""
from __future__ import annotations

from abc import ABC, abstractmethod

from domain.entities import Material, Role, UserAccount


class InvalidDocumentError(ValueError):
    """Raised by a structured decoder when the payload is not its format."""


class TextExtractor(ABC):
    """Decodes one document format into plain text."""

    name: str = "text"

    @abstractmethod
    def extract(self, source: bytes) -> str:
        """Return the textual representation of an in-memory buffer.

        Structured decoders raise when the buffer is not a valid document of
        their format. The buffer is never interpreted as a filesystem path.
        """


class MaterialRepository(ABC):
    """Persists uploaded materials."""

    @abstractmethod
    def add(self, material: Material) -> Material:
        """Store a material and return it with its id filled in."""

    @abstractmethod
    def list(self) -> list[Material]:
        """Return all stored materials, newest first."""

    @abstractmethod
    def get(self, material_id: str) -> Material | None:
        """Retrieve a material by id."""

    @abstractmethod
    def delete(self, material_id: str) -> bool:
        """Remove a material; return whether it existed."""


class AccountDirectory(ABC):
    """Read-only view over application accounts, roles and permissions."""

    @abstractmethod
    def find_by_email(self, email: str) -> UserAccount | None:
        """Return the account registered under ``email``."""

    @abstractmethod
    def roles_for(self, user_id: str) -> list[Role]:
        """Return the roles assigned to a user."""

    @abstractmethod
    def permissions_for(self, user_id: str) -> list[str]:
        """Return the effective permission names of a user."""


__all__ = [
    "InvalidDocumentError",
    "TextExtractor",
    "MaterialRepository",
    "AccountDirectory",
]
