"""
Recommendation selector.

Rules, in order:
  1. Prefer rails that meet the urgency deadline
  2. Within those, choose the lowest total cost (first wins on ties)
  3. If none meet urgency, choose the lowest total cost overall

Alternatives are every other quote, cheapest first. sorted() is stable, so
equal-cost quotes keep catalog order.
"""

from __future__ import annotations

from typing import Sequence

from models.domain import RailQuote
from models.errors import NoQuotesAvailable


def select_recommendation(
    quotes: Sequence[RailQuote],
) -> tuple[RailQuote, list[RailQuote]]:
    if not quotes:
        raise NoQuotesAvailable()

    candidates = [q for q in quotes if q.meets_urgency] or list(quotes)

    # min() returns the first minimal element, which keeps ties left-to-right
    selected = min(candidates, key=lambda q: q.total_cost)

    alternatives = sorted(
        (q for q in quotes if q.id != selected.id),
        key=lambda q: q.total_cost,
    )
    return selected, alternatives
