"""
Tests for select_recommendation.

  A. Urgency-first selection
  B. Ties and ordering
  C. Alternatives invariants
"""
from __future__ import annotations

from decimal import Decimal

import pytest

from models.domain import FeesBreakdown, QuoteRequestContext, RailQuote
from models.errors import NoQuotesAvailable
from routing.catalog import RailCatalog
from routing.quote_engine import compute_quote
from routing.selector import select_recommendation


def _q(id: str, cost: str, meets: bool = True) -> RailQuote:
    return RailQuote(
        id=id,
        display_name=id.title(),
        total_cost=Decimal(cost),
        estimated_settlement_minutes=10,
        meets_urgency=meets,
        suits_risk_tolerance=True,
        fees_breakdown=FeesBreakdown(Decimal(cost), Decimal("0"), Decimal("0")),
        steps=(),
        risk_notes="",
    )


def _catalog_quotes(amount: str, **kw) -> list[RailQuote]:
    ctx = QuoteRequestContext(amount=Decimal(amount), **kw)
    return [compute_quote(r, ctx) for r in RailCatalog()]


# ── A. Urgency-first selection ────────────────────────────────────────────────

class TestSelection:

    def test_cheapest_urgent_rail_wins(self):
        quotes = [_q("a", "5", meets=False), _q("b", "20"), _q("c", "10")]
        selected, _ = select_recommendation(quotes)
        assert selected.id == "c"

    def test_fallback_to_cheapest_overall(self):
        quotes = [_q("a", "30", meets=False), _q("b", "7", meets=False), _q("c", "9", meets=False)]
        selected, _ = select_recommendation(quotes)
        assert selected.id == "b"

    def test_empty_raises(self):
        with pytest.raises(NoQuotesAvailable):
            select_recommendation([])

    def test_one_hour_scenario(self):
        """10,000 AED within 1h: SWIFT is out, stablecoin is cheapest of the rest."""
        selected, alternatives = select_recommendation(_catalog_quotes("10000", urgency_hours=1))
        assert selected.id == "stablecoin_partner"
        assert selected.total_cost == Decimal("25.00")
        assert [q.id for q in alternatives] == [
            "orchestrated_bank_bundle",
            "local_rtp",
            "swift_wire",
        ]

    def test_selected_is_minimum_among_urgent(self):
        quotes = _catalog_quotes("5000", urgency_hours=0.5)
        selected, _ = select_recommendation(quotes)
        assert all(selected.total_cost <= q.total_cost for q in quotes if q.meets_urgency)


# ── B. Ties and ordering ──────────────────────────────────────────────────────

class TestTies:

    def test_first_minimum_wins(self):
        quotes = [_q("a", "10"), _q("b", "10"), _q("c", "12")]
        selected, _ = select_recommendation(quotes)
        assert selected.id == "a"

    def test_alternatives_keep_input_order_on_ties(self):
        quotes = [_q("a", "1"), _q("b", "12"), _q("c", "5"), _q("d", "5")]
        _, alternatives = select_recommendation(quotes)
        assert [q.id for q in alternatives] == ["c", "d", "b"]


# ── C. Alternatives invariants ────────────────────────────────────────────────

class TestAlternatives:

    @pytest.mark.parametrize("amount,urgency", [
        ("100", None), ("10000", 1), ("250000", 0.1), ("42", 0), ("75000", 48),
    ])
    def test_alternatives_partition_quotes(self, amount, urgency):
        quotes = _catalog_quotes(amount, urgency_hours=urgency)
        selected, alternatives = select_recommendation(quotes)

        alt_ids = [q.id for q in alternatives]
        assert selected.id not in alt_ids
        assert sorted(alt_ids + [selected.id]) == sorted(q.id for q in quotes)
        assert len(set(alt_ids)) == len(alt_ids)
        costs = [q.total_cost for q in alternatives]
        assert costs == sorted(costs)

    def test_single_quote_has_no_alternatives(self):
        selected, alternatives = select_recommendation([_q("only", "3")])
        assert selected.id == "only"
        assert alternatives == []
