from typing import List, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ratecard.models.catalog import Option, Region, Role, SeniorityLevel
from ratecard.services.catalog_store import CatalogSnapshot

from .deps import get_catalog

router = APIRouter(prefix="/api", tags=["catalog"])


class CalculatorOptionsOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    workload_options: List[Option]
    duration_options: List[Option]


@router.get("/regions", response_model=List[Region], summary="List regions")
async def list_regions(catalog: CatalogSnapshot = Depends(get_catalog)):
    return list(catalog.regions.values())


@router.get(
    "/roles/{category}",
    response_model=List[Role],
    summary="List roles offered to one calculator",
)
async def list_roles(
    category: Literal["custom", "swat"],
    catalog: CatalogSnapshot = Depends(get_catalog),
):
    return catalog.roles_by_category(category)


@router.get(
    "/seniority-levels", response_model=List[SeniorityLevel], summary="List seniority levels"
)
async def list_seniority_levels(catalog: CatalogSnapshot = Depends(get_catalog)):
    return list(catalog.seniority_levels.values())


@router.get(
    "/calculator-options",
    response_model=CalculatorOptionsOut,
    summary="Workload and duration choices for the SWAT calculator",
)
async def calculator_options(catalog: CatalogSnapshot = Depends(get_catalog)):
    return CalculatorOptionsOut(
        workload_options=list(catalog.workload_options),
        duration_options=list(catalog.duration_options),
    )
