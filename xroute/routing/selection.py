"""Route selection under an objective."""

from __future__ import annotations

from collections.abc import Iterable

from xroute.models.route import Objective, RouteQuote


def select_best_route(quotes: Iterable[RouteQuote], objective: Objective) -> RouteQuote | None:
    """Pick the winning quote.

    MAX_NET_VALUE keeps the strictly greatest net USD value; FASTEST_TIME the
    strictly least total time. Ties keep the first quote encountered, so
    enumeration order (same-chain, direct, hub) breaks ties.

    Returns:
        The best quote, or None for empty input
    """
    best: RouteQuote | None = None
    for quote in quotes:
        if best is None or _beats(quote, best, objective):
            best = quote
    return best


def _beats(candidate: RouteQuote, incumbent: RouteQuote, objective: Objective) -> bool:
    if objective is Objective.FASTEST_TIME:
        return candidate.estimated_time_seconds < incumbent.estimated_time_seconds
    return candidate.net_value_usd > incumbent.net_value_usd


__all__ = ["select_best_route"]
