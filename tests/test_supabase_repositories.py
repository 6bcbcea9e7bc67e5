import importlib.util
import unittest
from unittest import mock

from domain.entities import Material


@unittest.skipIf(importlib.util.find_spec("supabase") is None, "supabase not installed")
class TestSupabaseMaterialRepository(unittest.TestCase):
    def setUp(self):
        from infrastructure.repositories.supabase_repositories import SupabaseMaterialRepository

        self.client = mock.MagicMock()
        self.table = self.client.table.return_value
        self.repository = SupabaseMaterialRepository(self.client)

    def test_add_returns_stored_row(self):
        self.table.insert.return_value.execute.return_value.data = [
            {
                "id": 7,
                "title": "Intro",
                "content": "text",
                "file_type": "pdf",
                "file_path": "intro.pdf",
                "metadata": {"size": 4},
                "created_at": "2026-03-01T10:00:00.123456+00:00",
            }
        ]

        stored = self.repository.add(Material(id="", title="Intro", content="text", file_type="pdf"))

        self.client.table.assert_called_with("materials")
        row = self.table.insert.call_args.args[0]
        self.assertNotIn("id", row)
        self.assertEqual(row["file_type"], "pdf")
        self.assertEqual(stored.id, "7")
        self.assertEqual(stored.metadata, {"size": 4})
        self.assertEqual(stored.created_at.year, 2026)

    def test_get_missing_row(self):
        self.table.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = []

        self.assertIsNone(self.repository.get("missing"))
        self.table.select.return_value.eq.assert_called_with("id", "missing")

    def test_delete_reports_deleted_rows(self):
        self.table.delete.return_value.eq.return_value.execute.return_value.data = [{"id": "1"}]

        self.assertTrue(self.repository.delete("1"))


@unittest.skipIf(importlib.util.find_spec("supabase") is None, "supabase not installed")
class TestSupabaseAccountDirectory(unittest.TestCase):
    def setUp(self):
        from infrastructure.repositories.supabase_repositories import SupabaseAccountDirectory

        self.client = mock.MagicMock()
        self.directory = SupabaseAccountDirectory(self.client)

    def test_find_by_email_lowercases(self):
        query = self.client.table.return_value.select.return_value
        query.eq.return_value.limit.return_value.execute.return_value.data = [
            {"id": "u1", "email": "admin@example.com", "email_verified": True, "created_at": "2026-01-02T03:04:05Z"}
        ]

        account = self.directory.find_by_email(" Admin@Example.com")

        query.eq.assert_called_with("email", "admin@example.com")
        self.assertEqual(account.id, "u1")
        self.assertTrue(account.email_verified)
        self.assertEqual(account.created_at.day, 2)

    def test_roles_skip_rows_without_role(self):
        query = self.client.table.return_value.select.return_value
        query.eq.return_value.execute.return_value.data = [
            {"roles": {"name": "admin", "description": "All access"}},
            {"roles": None},
        ]

        roles = self.directory.roles_for("u1")

        self.assertEqual([r.name for r in roles], ["admin"])

    def test_permissions_accept_names_and_rows(self):
        self.client.rpc.return_value.execute.return_value.data = [
            "materials.upload",
            {"permission_name": "questions.generate"},
        ]

        permissions = self.directory.permissions_for("u1")

        self.client.rpc.assert_called_once_with("get_user_permissions", {"user_uuid": "u1"})
        self.assertEqual(permissions, ["materials.upload", "questions.generate"])


if __name__ == "__main__":
    unittest.main()
