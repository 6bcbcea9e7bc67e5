"""SQLite-репозиторий для учебных материалов."""
from __future__ import annotations

import json
import sqlite3
import uuid
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path

from domain.entities import Material
from domain.interfaces import MaterialRepository

_COLUMNS = "id, title, content, file_type, file_path, metadata, created_at"


class SqliteMaterialRepository(MaterialRepository):
    """Хранит материалы в лёгкой SQLite-базе."""

    def __init__(self, db_path: str | Path = "materials.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS materials (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    file_type VARCHAR(20),
                    file_path TEXT,
                    metadata TEXT NOT NULL DEFAULT '{}',
                    created_at TEXT NOT NULL
                )
                """
            )

    def add(self, material: Material) -> Material:
        if not material.id:
            material.id = str(uuid.uuid4())
        if material.created_at is None:
            material.created_at = datetime.now(timezone.utc)
        with closing(self._connect()) as conn, conn:
            conn.execute(
                f"REPLACE INTO materials ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    material.id,
                    material.title,
                    material.content,
                    material.file_type,
                    material.file_path,
                    json.dumps(material.metadata, ensure_ascii=False),
                    material.created_at.isoformat(),
                ),
            )
        return material

    def list(self) -> list[Material]:
        with closing(self._connect()) as conn, conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM materials ORDER BY created_at DESC"
            ).fetchall()
        return [_row_to_material(row) for row in rows]

    def get(self, material_id: str) -> Material | None:
        with closing(self._connect()) as conn, conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM materials WHERE id = ?",
                (material_id,),
            ).fetchone()
        if row is None:
            return None
        return _row_to_material(row)

    def delete(self, material_id: str) -> bool:
        with closing(self._connect()) as conn, conn:
            cursor = conn.execute("DELETE FROM materials WHERE id = ?", (material_id,))
        return cursor.rowcount > 0


def _row_to_material(row: tuple) -> Material:
    return Material(
        id=row[0],
        title=row[1],
        content=row[2] or "",
        file_type=row[3] or "unknown",
        file_path=row[4],
        metadata=json.loads(row[5]) if row[5] else {},
        created_at=datetime.fromisoformat(row[6]) if row[6] else None,
    )


__all__ = ["SqliteMaterialRepository"]
