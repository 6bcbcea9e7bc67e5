"""Tests for the material upload use case and the SQLite repository."""
from __future__ import annotations

import sqlite3
import tempfile
import unittest
from unittest import mock
from pathlib import Path

from document_builders import make_docx
from application.use_cases.upload_material import (
    EmptyExtractionError,
    MaterialNotFoundError,
    delete_material,
    get_material,
    list_materials,
    short_file_type,
    upload_material,
)
from domain.entities import ExtractionRequest, Material
from infrastructure.repositories.sqlite_material_repository import SqliteMaterialRepository
from infrastructure.text_extraction.document_text_extractor import DOCX_MEDIA_TYPE, DocumentTextExtractor


class SqliteRepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.repository = SqliteMaterialRepository(db_path=Path(self._tmp.name) / "materials.db")


class TestSqliteMaterialRepository(SqliteRepositoryTestCase):
    def test_add_assigns_id_and_roundtrips_metadata(self) -> None:
        stored = self.repository.add(
            Material(id="", title="Intro", content="текст", file_type="txt", metadata={"size": 5})
        )
        self.assertTrue(stored.id)
        loaded = self.repository.get(stored.id)
        self.assertIsNotNone(loaded)
        assert loaded is not None
        self.assertEqual(loaded.content, "текст")
        self.assertEqual(loaded.metadata, {"size": 5})
        self.assertIsNotNone(loaded.created_at)

    def test_delete_reports_whether_row_existed(self) -> None:
        stored = self.repository.add(Material(id="", title="t", content="c"))
        self.assertTrue(self.repository.delete(stored.id))
        self.assertFalse(self.repository.delete(stored.id))
        self.assertIsNone(self.repository.get(stored.id))

    def test_list_returns_all_rows(self) -> None:
        self.repository.add(Material(id="a", title="a", content="1"))
        self.repository.add(Material(id="b", title="b", content="2"))
        self.assertEqual({m.id for m in self.repository.list()}, {"a", "b"})

    def test_connections_are_closed_after_each_call(self) -> None:
        opened: list[sqlite3.Connection] = []
        connect = self.repository._connect

        def tracking_connect() -> sqlite3.Connection:
            conn = connect()
            opened.append(conn)
            return conn

        with mock.patch.object(self.repository, "_connect", side_effect=tracking_connect):
            stored = self.repository.add(Material(id="", title="t", content="c"))
            self.repository.get(stored.id)
            self.repository.list()
            self.repository.delete(stored.id)

        self.assertEqual(len(opened), 4)
        for conn in opened:
            with self.assertRaises(sqlite3.ProgrammingError):
                conn.execute("SELECT 1")


class TestUploadMaterial(SqliteRepositoryTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.extractor = DocumentTextExtractor()

    def _upload(self, request: ExtractionRequest, title: str | None = None) -> Material:
        return upload_material(request, title=title, extractor=self.extractor, repository=self.repository)

    def test_plain_text_upload_is_stored(self) -> None:
        material = self._upload(ExtractionRequest(b"Chapter 1\nBasics", "text/plain", "chapter.txt"))
        self.assertEqual(material.title, "chapter.txt")
        self.assertEqual(material.content, "Chapter 1\nBasics")
        self.assertEqual(material.file_type, "text/plain")
        self.assertEqual(material.metadata["decoder"], "plain")
        self.assertEqual(material.metadata["size"], 16)
        self.assertEqual(get_material(material.id, repository=self.repository).content, material.content)

    def test_explicit_title_is_trimmed(self) -> None:
        material = self._upload(ExtractionRequest(b"x", "text/plain", "a.txt"), title="  Week 1  ")
        self.assertEqual(material.title, "Week 1")

    def test_long_mime_type_is_shortened_from_extension(self) -> None:
        material = self._upload(ExtractionRequest(make_docx("Policies"), DOCX_MEDIA_TYPE, "hr.docx"))
        self.assertEqual(material.file_type, "docx")
        self.assertEqual(material.content, "Policies")
        self.assertEqual(material.metadata["original_mime_type"], DOCX_MEDIA_TYPE)

    def test_fallbacks_are_recorded(self) -> None:
        material = self._upload(ExtractionRequest(b"%PDF-1.7 text", "application/pdf", "fake.pdf"))
        self.assertEqual(material.metadata["decoder"], "plain")
        self.assertEqual([f["decoder"] for f in material.metadata["fallbacks"]], ["pdf"])

    def test_blank_text_is_rejected(self) -> None:
        with self.assertRaises(EmptyExtractionError):
            self._upload(ExtractionRequest(b"  \n\t", "text/plain", "blank.txt"))
        self.assertEqual(list_materials(self.repository), [])

    def test_unknown_material(self) -> None:
        with self.assertRaises(MaterialNotFoundError):
            get_material("missing", repository=self.repository)
        with self.assertRaises(MaterialNotFoundError):
            delete_material("missing", repository=self.repository)


class TestShortFileType(unittest.TestCase):
    def test_short_declared_type_is_kept(self) -> None:
        self.assertEqual(short_file_type(ExtractionRequest(b"", "application/pdf", "a.pdf")), "application/pdf")

    def test_long_or_missing_type_uses_extension(self) -> None:
        self.assertEqual(short_file_type(ExtractionRequest(b"", "application/msword-template-x", "a.doc")), "doc")
        self.assertEqual(short_file_type(ExtractionRequest(b"", "", "a.txt")), "txt")
        self.assertEqual(short_file_type(ExtractionRequest(b"", "", "a.xyz")), "unknown")


if __name__ == "__main__":
    unittest.main()
