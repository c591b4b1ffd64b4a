"""
Core domain models for the AiriPay rail router.

These are plain frozen dataclasses used by the routing engine and the
execution ledger. HTTP request/response shapes live in api/schemas.py.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


# ── Enums ─────────────────────────────────────────────────────────────────────

class RailKind(str, Enum):
    SWIFT_WIRE               = "swift_wire"
    LOCAL_RTP                = "local_rtp"
    STABLECOIN_PARTNER       = "stablecoin_partner"
    ORCHESTRATED_BANK_BUNDLE = "orchestrated_bank_bundle"


class RiskTolerance(str, Enum):
    LOW    = "low"
    MEDIUM = "medium"
    HIGH   = "high"


class ExecutionStatus(str, Enum):
    # Execution completes synchronously on creation, so this is the only
    # reachable state.
    COMPLETED = "completed"


# ── Rail / Quote models ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class RailDefinition:
    """Static cost and latency profile of one settlement rail."""
    kind: RailKind
    display_name: str
    base_fee_aed: Decimal
    variable_fee_pct: Decimal        # 0–100 scale
    fx_spread_pct: Decimal           # 0–100 scale
    settlement_minutes: int
    risk_notes: str
    digital_asset: bool = False      # excluded when crypto is disallowed

    @property
    def id(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class QuoteRequestContext:
    """Per-request inputs shared by every rail quote."""
    amount: Decimal                  # treated as AED for fee math
    urgency_hours: Optional[float] = None
    allow_crypto: bool = True
    risk_tolerance: RiskTolerance = RiskTolerance.MEDIUM


@dataclass(frozen=True)
class FeesBreakdown:
    base_fee_aed: Decimal
    variable_fee_aed: Decimal
    fx_spread_aed: Decimal


@dataclass(frozen=True)
class RailQuote:
    """Cost, time and risk profile of routing one amount over one rail."""
    id: str
    display_name: str
    total_cost: Decimal
    estimated_settlement_minutes: int
    meets_urgency: bool
    suits_risk_tolerance: bool
    fees_breakdown: FeesBreakdown
    steps: tuple[str, ...]
    risk_notes: str
    total_cost_currency: str = "AED"


@dataclass(frozen=True)
class PaymentSimulationResult:
    payment_id: str
    amount: float
    source_currency: str
    destination_currency: str
    summary: str
    assumptions: str
    selected: RailQuote
    alternatives: tuple[RailQuote, ...]
    quotes: tuple[RailQuote, ...] = ()


# ── Execution models ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PaymentStatusEntry:
    external_invoice_id: Optional[str]
    status: ExecutionStatus
    message: str


@dataclass(frozen=True)
class ExecutionRecord:
    """
    Ledger entry for one execute request.

    Written once by PaymentExecutor and never updated. created_at and
    completed_at are equal because completion is synchronous.
    """
    execution_id: str
    status: ExecutionStatus
    summary: str
    created_at: datetime
    completed_at: datetime
    simulate_only: bool
    payments_status: tuple[PaymentStatusEntry, ...]
    run_id: Optional[str] = None
    payments: tuple[Any, ...] = field(default=(), repr=False)
