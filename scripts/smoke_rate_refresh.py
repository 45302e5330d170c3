import os, sys, tempfile, json
from fastapi.testclient import TestClient
from ratecard.main import create_app
from ratecard.core.config import Settings

"""Smoke test for the rate refresh + display conversion flow.
Refreshes rates under the static provider and under the external-http provider
(which falls back to the fixed table when no API key or network is available),
re-anchors on USD and prices the same custom resource in EUR under both.
"""

CUSTOM = {
    "regionId": "middle-east",
    "roleId": "frontend-developer",
    "seniorityId": "senior",
    "currency": "EUR",
}


def _run_one(data_dir: str, provider: str) -> dict:
    s = Settings(data_dir=data_dir, exchange_rate_provider=provider)
    c = TestClient(create_app(settings_override=s))
    refreshed = c.post("/api/currencies/update-rates", json={"baseCurrency": "USD"})
    calc = c.post("/api/calculate/custom", json=CUSTOM)
    return {
        "refresh_status": refreshed.status_code,
        "base": refreshed.json().get("baseCurrency"),
        "calculation": calc.json(),
    }


def run():
    with tempfile.TemporaryDirectory() as d:
        out = {
            "static": _run_one(os.path.join(d, "static"), "static"),
            "external_http": _run_one(os.path.join(d, "http"), "external-http"),
        }
        print(json.dumps(out, indent=2))


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
