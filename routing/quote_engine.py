"""
Quote engine: prices one transfer over one rail.

compute_quote() is pure: same rail + context always yields the same quote.

Cost model:
    variable_fee = amount * variable_fee_pct / 100
    fx_spread    = amount * fx_spread_pct / 100
    total        = base_fee + variable_fee + fx_spread

The total is summed from the unrounded components and rounded once; each
breakdown component is rounded on its own. The displayed components can
therefore sum to a value up to 0.02 away from the displayed total.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, localcontext

from models.domain import (
    FeesBreakdown,
    QuoteRequestContext,
    RailDefinition,
    RailQuote,
    RiskTolerance,
)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

# Significant digits kept past the integer part of an amount
FRACTION_DIGITS = 28


def _precision_for(value: Decimal) -> int:
    return max(FRACTION_DIGITS, value.adjusted() + 1 + FRACTION_DIGITS)


def round_aed(value: Decimal) -> Decimal:
    with localcontext() as dctx:
        dctx.prec = _precision_for(value)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def meets_urgency(rail: RailDefinition, urgency_hours: float | None) -> bool:
    """True when no deadline is set or the rail settles within it."""
    if urgency_hours is None:
        return True
    return rail.settlement_minutes <= urgency_hours * 60


def suits_risk_tolerance(rail: RailDefinition, risk_tolerance: RiskTolerance) -> bool:
    return not (risk_tolerance == RiskTolerance.LOW and rail.digital_asset)


def settlement_steps(rail: RailDefinition) -> tuple[str, ...]:
    return (
        f"Initiate payment via {rail.display_name}",
        "Process through connected bank/PSP infrastructure",
        "Settle funds to beneficiary account",
    )


def compute_quote(rail: RailDefinition, ctx: QuoteRequestContext) -> RailQuote:
    # Enough precision that no amount, however large, loses whole units
    with localcontext() as dctx:
        dctx.prec = _precision_for(ctx.amount)
        variable_fee = ctx.amount * rail.variable_fee_pct / HUNDRED
        fx_spread    = ctx.amount * rail.fx_spread_pct / HUNDRED
        total        = rail.base_fee_aed + variable_fee + fx_spread

    return RailQuote(
        id=rail.id,
        display_name=rail.display_name,
        total_cost=round_aed(total),
        estimated_settlement_minutes=rail.settlement_minutes,
        meets_urgency=meets_urgency(rail, ctx.urgency_hours),
        suits_risk_tolerance=suits_risk_tolerance(rail, ctx.risk_tolerance),
        fees_breakdown=FeesBreakdown(
            base_fee_aed=round_aed(rail.base_fee_aed),
            variable_fee_aed=round_aed(variable_fee),
            fx_spread_aed=round_aed(fx_spread),
        ),
        steps=settlement_steps(rail),
        risk_notes=rail.risk_notes,
    )
