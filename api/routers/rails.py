"""
Rails router: GET /rails and GET /rails/{rail_id}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.auth import require_auth
from api.schemas import ErrorResponse, RailResponse

router = APIRouter(prefix="/rails", tags=["rails"])


@router.get("", response_model=list[RailResponse], dependencies=[Depends(require_auth)])
async def list_rails(request: Request) -> list[RailResponse]:
    catalog = request.app.state.simulator.catalog
    return [RailResponse.from_domain(r) for r in catalog]


@router.get(
    "/{rail_id}",
    response_model=RailResponse,
    responses={404: {"model": ErrorResponse}},
    dependencies=[Depends(require_auth)],
)
async def get_rail(rail_id: str, request: Request) -> RailResponse:
    catalog = request.app.state.simulator.catalog
    return RailResponse.from_domain(catalog.get(rail_id))
