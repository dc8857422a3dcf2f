import os
import unittest
from unittest import mock

from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")

from app.core.templating import render
from app.main import app
from starlette.requests import Request


def _request(path: str = "/") -> Request:
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "headers": [],
        "client": ("127.0.0.1", 12345),
        "server": ("testserver", 80),
    }
    return Request(scope)


class HttpHardeningTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()

    def test_index_has_security_headers_and_request_id(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("Technical personnel", response.text)

        self.assertEqual(response.headers.get("x-content-type-options"), "nosniff")
        self.assertEqual(response.headers.get("x-frame-options"), "DENY")
        self.assertEqual(response.headers.get("cache-control"), "no-store")

        request_id = response.headers.get("x-request-id")
        self.assertIsNotNone(request_id)
        self.assertRegex(str(request_id), r"^[A-Za-z0-9._-]{1,128}$")

    def test_valid_request_id_is_preserved(self):
        external_request_id = "release-check-2026_10_18"
        response = self.client.get("/", headers={"X-Request-ID": external_request_id})
        self.assertEqual(response.headers.get("x-request-id"), external_request_id)

    def test_invalid_request_id_is_replaced(self):
        bad_request_id = "bad id with spaces"
        response = self.client.get("/", headers={"X-Request-ID": bad_request_id})
        response_request_id = response.headers.get("x-request-id")
        self.assertNotEqual(response_request_id, bad_request_id)
        self.assertRegex(str(response_request_id), r"^[A-Za-z0-9._-]{1,128}$")

    def test_unknown_page_renders_not_found_template(self):
        response = self.client.get("/no/such/page")
        self.assertEqual(response.status_code, 404)
        self.assertIn("Page not found", response.text)
        self.assertEqual(response.headers.get("x-frame-options"), "DENY")

    def test_unexpected_error_renders_error_page(self):
        client = TestClient(app, raise_server_exceptions=False)
        with mock.patch("app.api.general.render", side_effect=RuntimeError("boom")):
            response = client.get("/")
        client.close()
        self.assertEqual(response.status_code, 500)
        self.assertIn("Something went wrong", response.text)
        self.assertNotIn("boom", response.text)

    def test_template_failure_becomes_inline_error(self):
        response = render(_request(), "missing/template.html")
        self.assertEqual(response.status_code, 500)
        self.assertIn(b"Error rendering template", response.body)

    def test_notification_template_carries_result_and_redirect(self):
        from app.core.templating import render_notification
        from app.schemas.notification import Notification

        response = render_notification(_request(), Notification.error("Nope", "/areas"))
        body = response.body.decode()
        self.assertIn('data-result="error"', body)
        self.assertIn('data-redirect="/areas"', body)
        self.assertIn("Nope", body)
