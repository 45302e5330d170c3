"""HTTP surface exercised through FastAPI's TestClient against a temp database."""

import json
import logging
import uuid

from ratecard.core.logging import JsonFormatter
from ratecard.db.dal import Database
from ratecard.models.constants import FALLBACK_RATES, QUOTE_KEY_PREFIX
from ratecard.routers.deps import get_db, get_mailer

SWAT_QUOTE = {
    "type": "swat",
    "configuration": {"role": "Frontend Specialist", "workload": "50", "duration": "3", "seniority": "Mid-Level"},
    "finalRate": 72,
    "currency": "AED",
}


class TestCatalogRoutes:
    def test_root(self, client):
        assert client.get("/").json()["message"] == "Rate Card Calculator API"

    def test_regions(self, client):
        regions = client.get("/api/regions").json()
        assert {"id": "middle-east", "name": "Middle East", "multiplier": 1.15} in regions
        assert len(regions) == 4

    def test_roles_by_category(self, client):
        custom = client.get("/api/roles/custom").json()
        swat = client.get("/api/roles/swat").json()
        assert len(custom) == 10 and len(swat) == 6
        assert {"id": "swat-frontend", "name": "Frontend Specialist", "category": "swat", "baseRate": 200} in swat

    def test_unknown_role_category(self, client):
        r = client.get("/api/roles/other")
        assert r.status_code == 422
        assert r.json()["error"] == "validation_error"

    def test_seniority_and_options(self, client):
        assert len(client.get("/api/seniority-levels").json()) == 5
        opts = client.get("/api/calculator-options").json()
        assert [o["value"] for o in opts["workloadOptions"]] == ["25", "50", "75", "100"]
        assert opts["durationOptions"][-1]["label"] == "4+ Months"

    def test_unknown_route(self, client):
        r = client.get("/api/nope")
        assert r.status_code == 404
        assert r.json()["error"] == "not_found"


class TestCurrencyRoutes:
    def test_list_currencies(self, client):
        body = client.get("/api/currencies").json()
        assert body["baseCurrency"] == "AED"
        assert [c["id"] for c in body["currencies"]][:3] == ["AED", "USD", "EUR"]
        assert body["version"] == 0

    def test_update_rates(self, client):
        r = client.post("/api/currencies/update-rates", json={"baseCurrency": "USD"})
        assert r.status_code == 200
        body = r.json()
        assert body["baseCurrency"] == "USD"
        assert body["rates"] == FALLBACK_RATES
        listed = client.get("/api/currencies").json()
        assert (listed["baseCurrency"], listed["version"]) == ("USD", 1)

    def test_update_rates_without_body(self, client):
        r = client.post("/api/currencies/update-rates")
        assert r.status_code == 200
        assert r.json()["baseCurrency"] == "AED"

    def test_update_rates_unsupported_base(self, client):
        r = client.post("/api/currencies/update-rates", json={"baseCurrency": "XYZ"})
        assert r.status_code == 400
        assert client.get("/api/currencies").json()["version"] == 0


class TestCalculateRoutes:
    def test_custom(self, client):
        r = client.post(
            "/api/calculate/custom",
            json={"regionId": "middle-east", "roleId": "frontend-developer", "seniorityId": "senior"},
        )
        body = r.json()
        assert body["breakdown"]["finalRate"] == 193
        assert body["breakdown"]["kind"] == "custom"
        assert (body["displayAmount"], body["symbol"]) == (193, "AED")
        assert body["quote"] == {
            "type": "custom",
            "configuration": {"region": "Middle East", "role": "Frontend Developer", "seniority": "Senior"},
            "finalRate": 193,
            "currency": "AED",
        }

    def test_custom_in_display_currency(self, client):
        r = client.post(
            "/api/calculate/custom",
            json={"regionId": "middle-east", "roleId": "frontend-developer", "seniorityId": "senior", "currency": "inr"},
        )
        body = r.json()
        assert body["breakdown"]["finalRate"] == 193
        assert (body["displayAmount"], body["currency"], body["exchangeRate"]) == (4343, "INR", 22.5)
        assert body["quote"]["finalRate"] == 4343

    def test_custom_nothing_selected(self, client):
        body = client.post("/api/calculate/custom", json={}).json()
        assert body["breakdown"] == {
            "baseRate": 0,
            "regionalMultiplier": 0,
            "seniorityMultiplier": 0,
            "finalRate": 0,
            "kind": "custom",
        }
        assert body["displayAmount"] == 0
        assert body["quote"] is None

    def test_swat(self, client):
        r = client.post(
            "/api/calculate/swat",
            json={"roleId": "swat-frontend", "workload": "50", "duration": "3", "seniorityId": "mid"},
        )
        body = r.json()
        assert body["breakdown"]["durationDiscount"] == 10
        assert body["breakdown"]["finalRate"] == 72
        assert body["quote"]["configuration"]["workload"] == "50"

    def test_bad_currency_code(self, client):
        r = client.post("/api/calculate/swat", json={"currency": "DOLLARS"})
        assert r.status_code == 422


class TestQuoteRoutes:
    def test_create_quote(self, client, settings):
        r = client.post("/api/quotes", json=SWAT_QUOTE)
        assert r.status_code == 201
        quote = r.json()
        uuid.UUID(quote["id"])
        assert quote["createdAt"]
        assert {k: quote[k] for k in SWAT_QUOTE} == SWAT_QUOTE
        stored = Database(settings.db_path).get_value(f"{QUOTE_KEY_PREFIX}{quote['id']}")
        assert stored == quote

    def test_each_quote_gets_its_own_id(self, client):
        a = client.post("/api/quotes", json=SWAT_QUOTE).json()
        b = client.post("/api/quotes", json=SWAT_QUOTE).json()
        assert a["id"] != b["id"]

    def test_create_quote_validation(self, client):
        for broken in (
            {k: v for k, v in SWAT_QUOTE.items() if k != "currency"},
            {**SWAT_QUOTE, "type": "retainer"},
            {**SWAT_QUOTE, "finalRate": -5},
            {k: v for k, v in SWAT_QUOTE.items() if k != "configuration"},
        ):
            r = client.post("/api/quotes", json=broken)
            assert r.status_code == 422, broken
            assert r.json()["error"] == "validation_error"

    def test_storage_failure(self, app, client, tmp_path):
        app.dependency_overrides[get_db] = lambda: Database(tmp_path)
        try:
            r = client.post("/api/quotes", json=SWAT_QUOTE)
        finally:
            app.dependency_overrides.clear()
        assert r.status_code == 503
        assert r.json()["error"] == "storage_error"

    def test_send_quote(self, client):
        r = client.post(
            "/api/send-quote",
            json={"recipientEmail": "client@example.com", "senderName": "Dana", "quoteData": SWAT_QUOTE},
        )
        assert r.status_code == 200
        assert r.json() == {"message": "Quote sent successfully"}

    def test_send_quote_requires_fields(self, client):
        full = {"recipientEmail": "client@example.com", "senderName": "Dana", "message": "hi", "quoteData": SWAT_QUOTE}
        for missing in ("recipientEmail", "senderName", "quoteData"):
            payload = {k: v for k, v in full.items() if k != missing}
            r = client.post("/api/send-quote", json=payload)
            assert r.status_code == 422, missing
        r = client.post("/api/send-quote", json={**full, "senderName": "  "})
        assert r.status_code == 422

    def test_send_quote_delivery_failure(self, app, client):
        class Down:
            def send(self, to, subject, html, text=None):
                return False

        app.dependency_overrides[get_mailer] = lambda: Down()
        try:
            r = client.post(
                "/api/send-quote",
                json={"recipientEmail": "client@example.com", "senderName": "Dana", "quoteData": SWAT_QUOTE},
            )
        finally:
            app.dependency_overrides.clear()
        assert r.status_code == 502

    def test_export_quote(self, client):
        r = client.post("/api/quotes/export", json={**SWAT_QUOTE, "finalRate": 12345, "currency": "USD"})
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/plain")
        assert 'filename="swat-team-quote-' in r.headers["content-disposition"]
        assert "Final Monthly Rate: 12,345 USD" in r.text
        assert "Workload: 50%" in r.text

    def test_export_with_calculated_breakdown(self, client):
        calc = client.post(
            "/api/calculate/swat",
            json={"roleId": "swat-frontend", "workload": "50", "duration": "3", "seniorityId": "mid"},
        ).json()
        r = client.post("/api/quotes/export", json={**calc["quote"], "breakdown": calc["breakdown"]})
        assert r.status_code == 200
        assert "Calculation Breakdown (AED):" in r.text
        assert "After Duration Discount: 90" in r.text
        assert "Final Monthly Rate: 72 AED" in r.text

    def test_export_rejects_mismatched_breakdown(self, client):
        r = client.post(
            "/api/quotes/export",
            json={**SWAT_QUOTE, "breakdown": {"kind": "custom", "baseRate": 120}},
        )
        assert r.status_code == 422

    def test_send_quote_rejects_malformed_recipient(self, client):
        for address in ("not an@email@x.y", "a@.com", "x@y.", "a@b..c"):
            r = client.post(
                "/api/send-quote",
                json={"recipientEmail": address, "senderName": "Dana", "quoteData": SWAT_QUOTE},
            )
            assert r.status_code == 422, address


class TestRequestLogging:
    def test_request_id_is_echoed(self, client):
        r = client.get("/api/regions", headers={"X-Request-ID": "abc-123"})
        assert r.headers["X-Request-ID"] == "abc-123"

    def test_request_id_is_generated(self, client):
        assert len(client.get("/").headers["X-Request-ID"]) == 32

    def test_access_line_carries_request_context(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="ratecard.access"):
            client.get("/api/seniority-levels", headers={"X-Request-ID": "rid-7"})
        record = next(r for r in caplog.records if r.name == "ratecard.access")
        assert (record.method, record.path, record.status) == ("GET", "/api/seniority-levels", 200)
        entry = json.loads(JsonFormatter().format(record))
        assert entry["status"] == 200
        assert entry["duration_ms"] >= 0
        assert entry["message"] == "GET /api/seniority-levels -> 200"
