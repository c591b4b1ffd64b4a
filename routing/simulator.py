"""
PaymentSimulator: quotes every eligible rail and recommends one.

This is the orchestration layer behind POST /simulate-payment:
  - validates the amount (the only input that can reject a request)
  - defaults everything else instead of rejecting it
  - quotes each eligible rail in catalog order
  - picks the recommendation and builds the human-readable summary

Nothing here touches the execution ledger; a simulation has no side effects.
"""

from __future__ import annotations

import logging
import math
import uuid
from decimal import Decimal
from typing import Any

from models.domain import (
    PaymentSimulationResult,
    QuoteRequestContext,
    RailQuote,
    RiskTolerance,
)
from models.errors import InvalidAmount
from routing.catalog import RailCatalog
from routing.quote_engine import compute_quote
from routing.selector import select_recommendation

logger = logging.getLogger("airipay.routing.simulator")

DEFAULT_SOURCE_CURRENCY      = "AED"
DEFAULT_DESTINATION_CURRENCY = "SAR"

# Quote totals are rendered as JSON doubles; larger amounts would overflow them
MAX_AMOUNT = Decimal("1E+300")


# ── Input normalisation ───────────────────────────────────────────────────────


def _is_real_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is never an amount
    if not isinstance(value, (int, float, Decimal)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # an int too large for a float is still a finite number
        return True


def validate_amount(amount: Any) -> Decimal:
    """Return amount as Decimal, or raise InvalidAmount."""
    if not _is_real_number(amount) or amount <= 0:
        raise InvalidAmount()
    value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    if value > MAX_AMOUNT:
        raise InvalidAmount(f"Invalid 'amount' (must be at most {MAX_AMOUNT})")
    return value


def normalize_urgency(urgency_hours: Any) -> float | None:
    """Anything that is not a finite number means no deadline."""
    if not _is_real_number(urgency_hours):
        return None
    try:
        return float(urgency_hours)
    except OverflowError:
        return math.inf if urgency_hours > 0 else -math.inf


def normalize_risk_tolerance(value: Any) -> RiskTolerance:
    if isinstance(value, RiskTolerance):
        return value
    if not isinstance(value, str):
        return RiskTolerance.MEDIUM
    try:
        return RiskTolerance(value)
    except ValueError:
        return RiskTolerance.MEDIUM


def normalize_currency(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def format_number(value: Any) -> str:
    """Render a number the way it reads in a sentence: 10000, 151.1, 0.5."""
    if isinstance(value, Decimal):
        text = format(value, "f")
        return text.rstrip("0").rstrip(".") if "." in text else text
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


# ── PaymentSimulator ──────────────────────────────────────────────────────────


class PaymentSimulator:
    """Stateless simulator over a rail catalog."""

    def __init__(self, catalog: RailCatalog | None = None) -> None:
        self._catalog = catalog or RailCatalog()

    @property
    def catalog(self) -> RailCatalog:
        return self._catalog

    def quote_all(self, ctx: QuoteRequestContext) -> list[RailQuote]:
        """One quote per eligible rail, in catalog order."""
        return [compute_quote(rail, ctx) for rail in self._catalog.eligible(ctx.allow_crypto)]

    def simulate(
        self,
        amount: Any,
        source_currency: Any = DEFAULT_SOURCE_CURRENCY,
        destination_currency: Any = DEFAULT_DESTINATION_CURRENCY,
        urgency_hours: Any = None,
        allow_crypto: bool = True,
        risk_tolerance: Any = RiskTolerance.MEDIUM,
        metadata: dict[str, Any] | None = None,
    ) -> PaymentSimulationResult:
        source_currency = normalize_currency(source_currency, DEFAULT_SOURCE_CURRENCY)
        destination_currency = normalize_currency(
            destination_currency, DEFAULT_DESTINATION_CURRENCY
        )
        ctx = QuoteRequestContext(
            amount=validate_amount(amount),
            urgency_hours=normalize_urgency(urgency_hours),
            allow_crypto=bool(allow_crypto),
            risk_tolerance=normalize_risk_tolerance(risk_tolerance),
        )

        quotes = self.quote_all(ctx)
        selected, alternatives = select_recommendation(quotes)

        summary = (
            f"Simulated {len(quotes)} rails for {format_number(amount)} "
            f"{source_currency}->{destination_currency}. "
            f"Recommended {selected.display_name} with estimated cost "
            f"{format_number(selected.total_cost)} AED and settlement in "
            f"~{selected.estimated_settlement_minutes} minutes."
        )
        assumptions = self._assumptions(
            ctx, quotes, source_currency, destination_currency
        )

        payment_id = f"pay_sim_{uuid.uuid4().hex}"
        logger.info(
            "simulation %s: selected=%s cost=%s candidates=%d metadata_keys=%d",
            payment_id,
            selected.id,
            selected.total_cost,
            len(quotes),
            len(metadata) if isinstance(metadata, dict) else 0,
        )

        return PaymentSimulationResult(
            payment_id=payment_id,
            amount=amount,
            source_currency=source_currency,
            destination_currency=destination_currency,
            summary=summary,
            assumptions=assumptions,
            selected=selected,
            alternatives=tuple(alternatives),
            quotes=tuple(quotes),
        )

    # ── Internal ──────────────────────────────────────────────────────────

    @staticmethod
    def _assumptions(
        ctx: QuoteRequestContext,
        quotes: list[RailQuote],
        source_currency: str,
        destination_currency: str,
    ) -> str:
        notes: list[str] = []
        if ctx.urgency_hours is None:
            notes.append("No 'urgencyHours' provided; used default settlement expectations.")
        elif not any(q.meets_urgency for q in quotes):
            notes.append(
                f"No rail settles within {format_number(ctx.urgency_hours)} hours; "
                "recommended the lowest-cost rail overall."
            )
        if source_currency != DEFAULT_SOURCE_CURRENCY:
            notes.append(f"Source currency assumed as {source_currency}.")
        if destination_currency != DEFAULT_DESTINATION_CURRENCY:
            notes.append(f"Destination currency assumed as {destination_currency}.")
        if not ctx.allow_crypto:
            notes.append("Crypto/stablecoin partner rail disabled by policy.")
        unsuitable = [q for q in quotes if not q.suits_risk_tolerance]
        for q in unsuitable:
            notes.append(
                f"{q.display_name} flagged as unsuitable for "
                f"{ctx.risk_tolerance.value} risk tolerance."
            )
        return " ".join(notes)
