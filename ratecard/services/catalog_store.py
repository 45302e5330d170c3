from __future__ import annotations

"""Catalog Store.

Loads the reference data (regions, roles, seniority levels, currencies,
calculator options) and the current exchange-rate record from the key/value
store into an immutable, id-keyed `CatalogSnapshot`.

Design:
    - One snapshot per request; every catalog key is read in a single query so a
      concurrent rate refresh is seen either entirely or not at all.
    - Currency records carry the *effective* rate: the rate table entry when the
      last refresh provided one, otherwise the rate the currency was seeded with.
    - Writes are limited to `replace_rate_table`, which swaps the whole record.
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, TypeVar

from pydantic import BaseModel

from ratecard.db.dal import Database
from ratecard.models.catalog import (
    Currency,
    Option,
    RateTable,
    Region,
    Role,
    SeniorityLevel,
)
from ratecard.models.constants import (
    CATALOG_KEYS,
    KEY_CURRENCIES,
    KEY_DURATION_OPTIONS,
    KEY_EXCHANGE_RATES,
    KEY_REGIONS,
    KEY_ROLES,
    KEY_SENIORITY_LEVELS,
    KEY_WORKLOAD_OPTIONS,
)

logger = logging.getLogger("ratecard.catalog")

R = TypeVar("R", bound=BaseModel)


def _index(model: type[R], rows: Optional[List[Dict[str, Any]]]) -> Mapping[str, R]:
    records = [model.model_validate(r) for r in rows or []]
    return MappingProxyType({r.id: r for r in records})  # type: ignore[attr-defined]


@dataclass(frozen=True)
class CatalogSnapshot:
    regions: Mapping[str, Region] = field(default_factory=dict)
    roles: Mapping[str, Role] = field(default_factory=dict)
    seniority_levels: Mapping[str, SeniorityLevel] = field(default_factory=dict)
    currencies: Mapping[str, Currency] = field(default_factory=dict)
    rate_table: RateTable = field(default_factory=RateTable)
    workload_options: tuple[Option, ...] = ()
    duration_options: tuple[Option, ...] = ()

    @property
    def base_currency(self) -> str:
        return self.rate_table.base_currency

    def get_region(self, region_id: Optional[str]) -> Optional[Region]:
        return self.regions.get(region_id) if region_id else None

    def get_seniority(self, seniority_id: Optional[str]) -> Optional[SeniorityLevel]:
        return self.seniority_levels.get(seniority_id) if seniority_id else None

    def get_role(self, role_id: Optional[str], category: Optional[str] = None) -> Optional[Role]:
        role = self.roles.get(role_id) if role_id else None
        if role is not None and category is not None and role.category != category:
            return None
        return role

    def get_currency(self, currency_id: Optional[str]) -> Optional[Currency]:
        return self.currencies.get(currency_id.upper()) if currency_id else None

    def roles_by_category(self, category: str) -> List[Role]:
        return [r for r in self.roles.values() if r.category == category]

    @classmethod
    def from_documents(cls, docs: Mapping[str, Any]) -> "CatalogSnapshot":
        raw_table = docs.get(KEY_EXCHANGE_RATES)
        rate_table = RateTable.model_validate(raw_table) if raw_table else RateTable()
        currencies = {
            c.id: c.model_copy(update={"rate": rate_table.rates.get(c.id, c.rate)})
            for c in _index(Currency, docs.get(KEY_CURRENCIES)).values()
        }
        return cls(
            regions=_index(Region, docs.get(KEY_REGIONS)),
            roles=_index(Role, docs.get(KEY_ROLES)),
            seniority_levels=_index(SeniorityLevel, docs.get(KEY_SENIORITY_LEVELS)),
            currencies=MappingProxyType(currencies),
            rate_table=rate_table,
            workload_options=tuple(
                Option.model_validate(o) for o in docs.get(KEY_WORKLOAD_OPTIONS) or []
            ),
            duration_options=tuple(
                Option.model_validate(o) for o in docs.get(KEY_DURATION_OPTIONS) or []
            ),
        )


class CatalogStore:
    def __init__(self, db: Database):
        self._db = db

    def snapshot(self) -> CatalogSnapshot:
        docs = self._db.get_values(CATALOG_KEYS)
        missing = [k for k in CATALOG_KEYS if k not in docs]
        if missing:
            logger.warning("catalog keys missing from store: %s", ", ".join(missing))
        return CatalogSnapshot.from_documents(docs)

    def rate_table(self) -> RateTable:
        raw = self._db.get_value(KEY_EXCHANGE_RATES)
        return RateTable.model_validate(raw) if raw else RateTable()

    def replace_rate_table(self, table: RateTable) -> RateTable:
        self._db.set_value(KEY_EXCHANGE_RATES, table.model_dump(mode="json", by_alias=True))
        logger.info(
            "rate table replaced base=%s version=%d currencies=%d",
            table.base_currency,
            table.version,
            len(table.rates),
        )
        return table
