import base64
import os
import unittest
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-key")
os.environ["API_KEY"] = "secret"

from fastapi.testclient import TestClient  # noqa: E402

from backend.app.config import Settings, get_image_studio, get_settings, get_supabase  # noqa: E402
from backend.app.main import create_app  # noqa: E402
from backend.app.routers.images import GENERATION_FAILED  # noqa: E402
from facturago.adapters.image_client import ImageStudioAdapter  # noqa: E402

from .fakes import FakeSupabase  # noqa: E402

HEADERS = {"X-API-Key": "secret"}

DOCUMENT = {
    "kind": "invoice",
    "documentId": "FAC/2026/00001",
    "date": "2026-01-15",
    "recipient": {"name": "Client Test"},
    "lineItems": [{"name": "Chair", "quantity": 1, "unitPrice": 100}],
}


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        get_settings.cache_clear()
        self.supabase = FakeSupabase()
        self.studio_client = MagicMock()
        self.app = create_app()
        self.app.dependency_overrides[get_supabase] = lambda: self.supabase
        self.app.dependency_overrides[get_image_studio] = lambda: ImageStudioAdapter(
            api_key=None, client=self.studio_client
        )
        self.client = TestClient(self.app)

    def store_settings(self, **values):
        self.supabase.tables["settings"] = [
            {"id": 1, "user_id": "u1", "created_at": "2026-01-01T00:00:00", **values}
        ]


class TestAuth(ApiTestCase):
    def test_health_is_public(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_missing_key(self):
        response = self.client.get("/api/settings", params={"userId": "u1"})
        self.assertEqual(response.status_code, 401)


class TestSettingsRoutes(ApiTestCase):
    def test_first_run_defaults(self):
        response = self.client.get("/api/settings", params={"userId": "u1"}, headers=HEADERS)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["settings"]["invoiceNumbering"]["prefix"], "FAC")
        self.assertEqual(body["settings"]["priceDisplayMode"], "HT")
        self.assertEqual(len(body["columns"]), 6)
        self.assertFalse(body["columns"][0]["visible"])

    def test_save(self):
        response = self.client.put(
            "/api/settings",
            json={"userId": "u1", "settings": {"companyName": "Atlas", "primaryColor": "#112233"}},
            headers=HEADERS,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["settings"]["companyName"], "Atlas")
        self.assertEqual(self.supabase.tables["settings"][0]["user_id"], "u1")

    def test_save_failure(self):
        self.supabase.error = RuntimeError("connection reset")
        response = self.client.put(
            "/api/settings", json={"userId": "u1", "settings": {"companyName": "Atlas"}}, headers=HEADERS
        )
        self.assertEqual(response.status_code, 502)
        self.assertTrue(response.json()["detail"].startswith("Erreur de sauvegarde"))

    def test_stored_numbering_preview(self):
        self.store_settings(quoteNumbering={"prefix": "Q", "yearFormat": "NONE", "separator": "-", "padding": 2})
        response = self.client.get("/api/settings/numbering/quote/preview", params={"userId": "u1"}, headers=HEADERS)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["preview"], "Q-01")

    def test_unknown_kind(self):
        response = self.client.get("/api/settings/numbering/receipt/preview", params={"userId": "u1"}, headers=HEADERS)
        self.assertEqual(response.status_code, 422)

    def test_unsaved_config_preview(self):
        config = {"prefix": "BC", "yearFormat": "NONE", "separator": "-", "padding": 3, "startNumber": 7}
        response = self.client.post("/api/settings/numbering/preview", json={"config": config}, headers=HEADERS)
        self.assertEqual(response.json()["preview"], "BC-007")

    def test_move_column(self):
        columns = self.client.get("/api/settings", params={"userId": "u1"}, headers=HEADERS).json()["columns"]
        response = self.client.patch(
            "/api/settings/columns/move",
            json={"columns": columns, "index": 2, "direction": "up"},
            headers=HEADERS,
        )
        moved = response.json()["columns"]
        self.assertEqual([column["id"] for column in moved][:3], ["reference", "quantity", "name"])
        self.assertEqual([column["order"] for column in moved], [1, 2, 3, 4, 5, 6])

    def test_move_out_of_range(self):
        columns = self.client.get("/api/settings", params={"userId": "u1"}, headers=HEADERS).json()["columns"]
        response = self.client.patch(
            "/api/settings/columns/move",
            json={"columns": columns, "index": 9, "direction": "down"},
            headers=HEADERS,
        )
        self.assertEqual(response.status_code, 400)


class TestDocumentRoutes(ApiTestCase):
    def test_next_number(self):
        response = self.client.post(
            "/api/documents/next-number",
            json={"userId": "u1", "kind": "invoice", "existingIds": ["FAC/2026/00004"], "year": 2026},
            headers=HEADERS,
        )
        self.assertEqual(response.json()["documentId"], "FAC/2026/00005")

    def test_next_code(self):
        response = self.client.post(
            "/api/documents/next-code", json={"prefix": "C", "codes": ["C001", "C004"]}, headers=HEADERS
        )
        self.assertEqual(response.json(), {"code": "C005"})

    def test_totals(self):
        response = self.client.post("/api/documents/totals", json={"lineItems": DOCUMENT["lineItems"]}, headers=HEADERS)
        body = response.json()
        self.assertEqual(body["totals"]["subTotal"], 100.0)
        self.assertEqual(body["totals"]["total"], 120.0)
        self.assertEqual(body["amountInWords"], "Cent vingt dirhams")
        self.assertEqual(body["formattedTotal"], "120,00 DH")

    def test_pdf(self):
        self.store_settings(companyName="Atlas SARL")
        response = self.client.post("/api/documents/pdf", json={"userId": "u1", "document": DOCUMENT}, headers=HEADERS)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], "application/pdf")
        self.assertTrue(response.content.startswith(b"%PDF"))
        self.assertIn("FAC-2026-00001.pdf", response.headers["content-disposition"])

    def test_pdf_without_company(self):
        response = self.client.post("/api/documents/pdf", json={"userId": "u1", "document": DOCUMENT}, headers=HEADERS)
        self.assertEqual(response.status_code, 400)


class TestPricingRoutes(ApiTestCase):
    def test_ttc_to_ht(self):
        response = self.client.post(
            "/api/pricing/convert", json={"value": 121, "vat": 20, "enteredAs": "TTC"}, headers=HEADERS
        )
        body = response.json()
        self.assertEqual(Decimal(str(body["ht"])), Decimal("100.83"))
        self.assertEqual(Decimal(str(body["ttc"])), Decimal("121.00"))

    def test_ht_to_ttc(self):
        response = self.client.post("/api/pricing/convert", json={"value": 100, "vat": 20}, headers=HEADERS)
        self.assertEqual(Decimal(str(response.json()["ttc"])), Decimal("120.00"))


class TestImageRoutes(ApiTestCase):
    def test_generate(self):
        part = SimpleNamespace(inline_data=SimpleNamespace(data=b"img"))
        self.studio_client.models.generate_content.return_value = SimpleNamespace(
            candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))]
        )
        response = self.client.post("/api/images/generate", json={"prompt": "stamp"}, headers=HEADERS)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["image"], "data:image/png;base64," + base64.b64encode(b"img").decode())

    def test_generate_failure(self):
        self.studio_client.models.generate_content.side_effect = RuntimeError("quota")
        response = self.client.post("/api/images/generate", json={"prompt": "stamp"}, headers=HEADERS)
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"], GENERATION_FAILED)

    def test_edit_invalid_payload(self):
        response = self.client.post(
            "/api/images/edit", json={"prompt": "crop", "imageBase64": "%%%"}, headers=HEADERS
        )
        self.assertEqual(response.status_code, 400)


class TestSettingsFromEnv(unittest.TestCase):
    def test_missing_required(self):
        with self.assertRaises(RuntimeError) as ctx:
            Settings.from_env({"SUPABASE_URL": "http://db"})
        self.assertIn("SUPABASE_KEY", str(ctx.exception))

    def test_origins_and_optional_keys(self):
        settings = Settings.from_env(
            {"SUPABASE_URL": "http://db", "SUPABASE_KEY": "k", "CORS_ALLOW_ORIGINS": " https://a.ma , ,", "API_KEY": ""}
        )
        self.assertEqual(settings.cors_origins, ["https://a.ma"])
        self.assertIsNone(settings.api_key)
        self.assertIsNone(settings.gemini_api_key)
