"""Shared FastAPI dependencies.

Settings come from ``app.state.settings`` so an app built with
``create_app(settings_override=...)`` uses its own database and providers.
"""

from fastapi import Depends, Request

from ratecard.core.config import Settings, get_settings
from ratecard.db.dal import Database
from ratecard.services.catalog_store import CatalogSnapshot, CatalogStore
from ratecard.services.delivery import QuoteMailer, make_mailer
from ratecard.services.rates.providers import RateProvider, make_rate_provider


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_db(settings: Settings = Depends(get_app_settings)) -> Database:
    return Database(settings.db_path)


def get_catalog_store(db: Database = Depends(get_db)) -> CatalogStore:
    return CatalogStore(db)


def get_catalog(store: CatalogStore = Depends(get_catalog_store)) -> CatalogSnapshot:
    return store.snapshot()


def get_rate_provider(settings: Settings = Depends(get_app_settings)) -> RateProvider:
    return make_rate_provider(settings)


def get_mailer(settings: Settings = Depends(get_app_settings)) -> QuoteMailer:
    return make_mailer(settings)
