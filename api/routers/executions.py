"""
Executions router: POST /execute-payment and GET /payment-status/{execution_id}
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from api.auth import require_auth
from api.schemas import (
    ErrorResponse,
    ExecutePaymentRequest,
    ExecutePaymentResponse,
    ExecutionStatusResponse,
)

router = APIRouter(tags=["executions"])


@router.post(
    "/execute-payment",
    response_model=ExecutePaymentResponse,
    responses={400: {"model": ErrorResponse}},
    dependencies=[Depends(require_auth)],
)
async def execute_payment(
    request: Request,
    body: Optional[ExecutePaymentRequest] = Body(default=None),
) -> ExecutePaymentResponse:
    body = body or ExecutePaymentRequest()
    record = await request.app.state.executor.execute(
        payments=body.payments,
        simulate_only=bool(body.simulate_only),
        run_id=None if body.run_id is None else str(body.run_id),
    )
    return ExecutePaymentResponse.from_domain(record)


@router.get(
    "/payment-status/{execution_id}",
    response_model=ExecutionStatusResponse,
    responses={404: {"model": ErrorResponse}},
    dependencies=[Depends(require_auth)],
)
async def payment_status(execution_id: str, request: Request) -> ExecutionStatusResponse:
    record = await request.app.state.executor.status(execution_id)
    return ExecutionStatusResponse.from_domain(record)
