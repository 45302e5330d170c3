from __future__ import annotations

import copy
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from ratecard.core.config import Settings
from ratecard.db.dal import Database
from ratecard.db.migrate import apply_migrations
from ratecard.db.seed import default_catalog
from ratecard.main import create_app
from ratecard.models.constants import KEY_CURRENCIES, KEY_EXCHANGE_RATES
from ratecard.services.catalog_store import CatalogSnapshot, CatalogStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    s = Settings(
        data_dir=tmp_path,
        db_filename="test.sqlite3",
        exchange_rate_provider="static",
        mail_backend="log",
        debug=False,
    )
    s.init_post_load()
    return s


@pytest.fixture
def db(settings: Settings) -> Database:
    apply_migrations(settings.db_path)
    return Database(settings.db_path)


@pytest.fixture
def store(db: Database) -> CatalogStore:
    return CatalogStore(db)


@pytest.fixture
def catalog() -> CatalogSnapshot:
    return build_catalog()


@pytest.fixture
def app(settings: Settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def build_catalog(
    base_currency: str = "AED",
    rates: Optional[Dict[str, float]] = None,
    drop_currencies: tuple[str, ...] = (),
) -> CatalogSnapshot:
    """Seed catalog as a snapshot, optionally re-anchored on another base."""
    docs: Dict[str, Any] = copy.deepcopy(default_catalog())
    if rates is not None:
        docs[KEY_EXCHANGE_RATES].update(baseCurrency=base_currency, rates=rates)
    docs[KEY_CURRENCIES] = [c for c in docs[KEY_CURRENCIES] if c["id"] not in drop_currencies]
    return CatalogSnapshot.from_documents(docs)


@pytest.fixture
def make_catalog():
    return build_catalog
