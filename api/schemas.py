"""
Pydantic request/response schemas for the rail router API.

JSON keys are camelCase on the wire; Python attributes stay snake_case.
Money is computed as Decimal in the domain layer and rendered as JSON
numbers here. Timestamps are ISO-8601 UTC strings.

Request fields that the service defaults rather than rejects are typed Any
and normalised in the domain layer, so a bad urgencyHours never fails a
request and a bad amount always yields the same error message.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.domain import (
    ExecutionRecord,
    PaymentSimulationResult,
    PaymentStatusEntry,
    RailDefinition,
    RailQuote,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _dt(dt: datetime | None) -> str | None:
    """Convert datetime | None → ISO-8601 UTC string or None."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def _num(d: Decimal) -> float:
    return float(d)


def _echo_number(value: Union[int, float]) -> Union[int, float]:
    """Echo an integral float as an int, so 100.0 goes back out as 100."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 2 ** 53:
        return int(value)
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Health ────────────────────────────────────────────────────────────────────

class HealthResponse(CamelModel):
    status: str
    service: str


class ErrorResponse(CamelModel):
    error: str


# ── Rail catalog ──────────────────────────────────────────────────────────────

class RailResponse(CamelModel):
    id: str
    display_name: str
    base_fee_aed: float = Field(alias="baseFeeAED")
    variable_fee_pct: float
    fx_spread_pct: float
    settlement_minutes: int
    risk_notes: str
    digital_asset: bool

    @classmethod
    def from_domain(cls, rail: RailDefinition) -> "RailResponse":
        return cls(
            id=rail.id,
            display_name=rail.display_name,
            base_fee_aed=_num(rail.base_fee_aed),
            variable_fee_pct=_num(rail.variable_fee_pct),
            fx_spread_pct=_num(rail.fx_spread_pct),
            settlement_minutes=rail.settlement_minutes,
            risk_notes=rail.risk_notes,
            digital_asset=rail.digital_asset,
        )


# ── Simulation ────────────────────────────────────────────────────────────────

class SimulatePaymentRequest(CamelModel):
    amount: Any = None
    source_currency: Any = "AED"
    destination_currency: Any = "SAR"
    urgency_hours: Any = None
    allow_crypto: Any = True
    risk_tolerance: Any = "medium"
    metadata: Any = None


class FeesBreakdownResponse(CamelModel):
    base_fee_aed: float = Field(alias="baseFeeAED")
    variable_fee_aed: float = Field(alias="variableFeeAED")
    fx_spread_aed: float = Field(alias="fxSpreadAED")


class RailQuoteResponse(CamelModel):
    id: str
    display_name: str
    total_cost: float
    total_cost_currency: str
    estimated_settlement_minutes: int
    meets_urgency: bool
    suits_risk_tolerance: bool
    fees_breakdown: FeesBreakdownResponse
    steps: list[str]
    risk_notes: str

    @classmethod
    def from_domain(cls, q: RailQuote) -> "RailQuoteResponse":
        return cls(
            id=q.id,
            display_name=q.display_name,
            total_cost=_num(q.total_cost),
            total_cost_currency=q.total_cost_currency,
            estimated_settlement_minutes=q.estimated_settlement_minutes,
            meets_urgency=q.meets_urgency,
            suits_risk_tolerance=q.suits_risk_tolerance,
            fees_breakdown=FeesBreakdownResponse(
                base_fee_aed=_num(q.fees_breakdown.base_fee_aed),
                variable_fee_aed=_num(q.fees_breakdown.variable_fee_aed),
                fx_spread_aed=_num(q.fees_breakdown.fx_spread_aed),
            ),
            steps=list(q.steps),
            risk_notes=q.risk_notes,
        )


class SimulatePaymentResponse(CamelModel):
    payment_id: str
    amount: Union[int, float]
    source_currency: str
    destination_currency: str
    summary: str
    assumptions: str
    selected_rail: RailQuoteResponse
    alternatives: list[RailQuoteResponse]

    @classmethod
    def from_domain(cls, r: PaymentSimulationResult) -> "SimulatePaymentResponse":
        return cls(
            payment_id=r.payment_id,
            amount=_echo_number(r.amount),
            source_currency=r.source_currency,
            destination_currency=r.destination_currency,
            summary=r.summary,
            assumptions=r.assumptions,
            selected_rail=RailQuoteResponse.from_domain(r.selected),
            alternatives=[RailQuoteResponse.from_domain(q) for q in r.alternatives],
        )


# ── Execution ─────────────────────────────────────────────────────────────────

class ExecutePaymentRequest(CamelModel):
    run_id: Optional[Any] = None
    simulate_only: Any = False
    payments: Any = None


class ExecutePaymentResponse(CamelModel):
    execution_id: str
    status: str
    summary: str
    created_at: str | None
    simulate_only: bool
    payments: list[Any]

    @classmethod
    def from_domain(cls, e: ExecutionRecord) -> "ExecutePaymentResponse":
        return cls(
            execution_id=e.execution_id,
            status=e.status.value,
            summary=e.summary,
            created_at=_dt(e.created_at),
            simulate_only=e.simulate_only,
            payments=list(e.payments),
        )


class PaymentStatusResponse(CamelModel):
    external_invoice_id: Any = None
    status: str
    message: str

    @classmethod
    def from_domain(cls, p: PaymentStatusEntry) -> "PaymentStatusResponse":
        return cls(
            external_invoice_id=p.external_invoice_id,
            status=p.status.value,
            message=p.message,
        )


class ExecutionStatusResponse(CamelModel):
    execution_id: str
    status: str
    summary: str
    created_at: str | None
    completed_at: str | None
    simulate_only: bool
    payments: list[PaymentStatusResponse]

    @classmethod
    def from_domain(cls, e: ExecutionRecord) -> "ExecutionStatusResponse":
        return cls(
            execution_id=e.execution_id,
            status=e.status.value,
            summary=e.summary,
            created_at=_dt(e.created_at),
            completed_at=_dt(e.completed_at),
            simulate_only=e.simulate_only,
            payments=[PaymentStatusResponse.from_domain(p) for p in e.payments_status],
        )
