"""
RailCatalog: the fixed set of settlement rails the router can quote.

The table is built once at import time and never mutated. Fees are Decimal
so quote arithmetic never touches float money.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Iterator

from models.domain import RailDefinition, RailKind
from models.errors import UnknownRail

# ── Rail table ────────────────────────────────────────────────────────────────

RAILS: tuple[RailDefinition, ...] = (
    RailDefinition(
        kind=RailKind.SWIFT_WIRE,
        display_name="Traditional SWIFT bank wire",
        base_fee_aed=Decimal("150"),
        variable_fee_pct=Decimal("0.4"),
        fx_spread_pct=Decimal("0.7"),
        settlement_minutes=2160,     # 1.5 days
        risk_notes="Conventional SWIFT wire with correspondent bank risk and higher FX spread.",
    ),
    RailDefinition(
        kind=RailKind.LOCAL_RTP,
        display_name="GCC Real-Time Payments Hub",
        base_fee_aed=Decimal("25"),
        variable_fee_pct=Decimal("0.1"),
        fx_spread_pct=Decimal("0.3"),
        settlement_minutes=30,
        risk_notes="Local real-time payment rail; low latency, relies on connected GCC systems.",
    ),
    RailDefinition(
        kind=RailKind.STABLECOIN_PARTNER,
        display_name="Partner Stablecoin Rail",
        base_fee_aed=Decimal("5"),
        variable_fee_pct=Decimal("0.05"),
        fx_spread_pct=Decimal("0.15"),
        settlement_minutes=5,
        risk_notes=(
            "Uses a partner stablecoin rail; subject to on/off-ramp and "
            "digital asset partner risk."
        ),
        digital_asset=True,
    ),
    RailDefinition(
        kind=RailKind.ORCHESTRATED_BANK_BUNDLE,
        display_name="AiriPay Orchestrated Bank Router",
        base_fee_aed=Decimal("10"),
        variable_fee_pct=Decimal("0.08"),
        fx_spread_pct=Decimal("0.2"),
        settlement_minutes=15,
        risk_notes=(
            "AiriPay orchestrates across connected banks/PSPs; this is a "
            "meta-route, not a new rail."
        ),
    ),
)


class RailCatalog:
    """Read-only lookup over a fixed rail table, kept in declaration order."""

    def __init__(self, rails: Iterable[RailDefinition] = RAILS) -> None:
        self._rails: dict[str, RailDefinition] = {r.id: r for r in rails}

    def __len__(self) -> int:
        return len(self._rails)

    def __iter__(self) -> Iterator[RailDefinition]:
        return iter(self._rails.values())

    def get(self, rail_id: str | RailKind) -> RailDefinition:
        key = rail_id.value if isinstance(rail_id, RailKind) else rail_id
        rail = self._rails.get(key)
        if rail is None:
            raise UnknownRail(key)
        return rail

    def all(self) -> list[RailDefinition]:
        return list(self._rails.values())

    def excluding(self, *rail_ids: str | RailKind) -> list[RailDefinition]:
        skip = {r.value if isinstance(r, RailKind) else r for r in rail_ids}
        return [r for r in self._rails.values() if r.id not in skip]

    def eligible(self, allow_crypto: bool) -> list[RailDefinition]:
        """Rails that may be quoted; digital-asset rails drop out when crypto is disallowed."""
        if allow_crypto:
            return self.all()
        return self.excluding(*(r.kind for r in self._rails.values() if r.digital_asset))
