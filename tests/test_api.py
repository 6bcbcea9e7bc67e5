import importlib.util
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from document_builders import make_pdf


@unittest.skipIf(
    importlib.util.find_spec("httpx") is None
    or (importlib.util.find_spec("python_multipart") is None and importlib.util.find_spec("multipart") is None),
    "httpx or python-multipart not installed",
)
class TestMaterialsApi(unittest.TestCase):
    def setUp(self):
        from fastapi.testclient import TestClient

        from infrastructure.config import ContainerConfig, build_default_container
        from ui.api.main import app, get_container

        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.container = build_default_container(
            ContainerConfig(db_path=str(Path(self._tmp.name) / "materials.db"), max_upload_bytes=4096)
        )
        app.dependency_overrides[get_container] = lambda: self.container
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_upload_pdf_and_fetch_it_back(self):
        response = self.client.post(
            "/materials/upload",
            files={"file": ("lesson.pdf", make_pdf("Job evaluation basics"), "application/pdf")},
            data={"title": "Lesson 1"},
        )

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["title"], "Lesson 1")
        self.assertEqual(body["file_type"], "application/pdf")
        self.assertIn("Job evaluation basics", body["content"])
        self.assertEqual(body["metadata"]["decoder"], "pdf")

        fetched = self.client.get(f"/materials/{body['id']}")
        self.assertEqual(fetched.json()["content"], body["content"])
        self.assertEqual(len(self.client.get("/materials").json()), 1)

    def test_mislabelled_text_upload_falls_back(self):
        response = self.client.post(
            "/materials/upload",
            files={"file": ("notes.pdf", "plain notes".encode("utf-8"), "application/pdf")},
        )

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["content"], "plain notes")
        self.assertEqual(response.json()["title"], "notes.pdf")

    def test_upload_without_file(self):
        response = self.client.post("/materials/upload", data={"title": "nothing"})

        self.assertEqual(response.status_code, 400)

    def test_upload_too_large(self):
        response = self.client.post(
            "/materials/upload",
            files={"file": ("big.txt", b"a" * 5000, "text/plain")},
        )

        self.assertEqual(response.status_code, 413)

    def test_blank_upload_is_unprocessable(self):
        response = self.client.post(
            "/materials/upload",
            files={"file": ("blank.txt", b"   ", "text/plain")},
        )

        self.assertEqual(response.status_code, 422)

    def test_unknown_material(self):
        self.assertEqual(self.client.get("/materials/missing").status_code, 404)
        self.assertEqual(self.client.delete("/materials/missing").status_code, 404)

    def test_delete_material(self):
        created = self.client.post(
            "/materials/upload",
            files={"file": ("a.txt", b"content", "text/plain")},
        ).json()

        self.assertEqual(self.client.delete(f"/materials/{created['id']}").json(), {"deleted": True})
        self.assertEqual(self.client.get(f"/materials/{created['id']}").status_code, 404)

    def test_env_check_flags_trailing_newline(self):
        env = {
            "SUPABASE_URL": "https://demo.supabase.co\n",
            "SUPABASE_ANON_KEY": "anon-key-0123456789",
            "SUPABASE_SERVICE_ROLE_KEY": "service-key-0123456789",
            "JWT_SECRET": "x" * 40,
        }
        with mock.patch.dict(os.environ, env):
            body = self.client.get("/env-check").json()

        self.assertFalse(body["ok"])
        self.assertIn("SUPABASE_URL ends with a newline character", body["issues"])
        self.assertNotIn("https://demo.supabase.co", [v["preview"] for v in body["variables"]])


if __name__ == "__main__":
    unittest.main()
