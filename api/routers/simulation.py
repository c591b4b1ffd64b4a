"""
Simulation router: POST /simulate-payment
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from api.auth import require_auth
from api.schemas import ErrorResponse, SimulatePaymentRequest, SimulatePaymentResponse

router = APIRouter(tags=["simulation"])


@router.post(
    "/simulate-payment",
    response_model=SimulatePaymentResponse,
    responses={400: {"model": ErrorResponse}},
    dependencies=[Depends(require_auth)],
)
async def simulate_payment(
    request: Request,
    body: Optional[SimulatePaymentRequest] = Body(default=None),
) -> SimulatePaymentResponse:
    body = body or SimulatePaymentRequest()
    result = request.app.state.simulator.simulate(
        amount=body.amount,
        source_currency=body.source_currency,
        destination_currency=body.destination_currency,
        urgency_hours=body.urgency_hours,
        allow_crypto=body.allow_crypto,
        risk_tolerance=body.risk_tolerance,
        metadata=body.metadata if isinstance(body.metadata, dict) else None,
    )
    return SimulatePaymentResponse.from_domain(result)
