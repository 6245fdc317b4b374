# app/services/draft/selection.py
from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, TypeVar

from app.core.config import settings
from app.services.draft.positions import player_qualifies

P = TypeVar("P")


def _rank_key(player, untiered: int):
    # ranked players first by ADP; unranked after them, by tier
    if player.adp is not None:
        return (0, player.adp, 0)
    tier = player.tier if player.tier is not None else untiered
    return (1, 0, tier)


def rank_players(players: Sequence[P], untiered: Optional[int] = None) -> List[P]:
    """ADP ascending, unranked last (by tier). Stable: ties keep pool order."""
    untiered = settings.UNTIERED_TIER if untiered is None else untiered
    return sorted(players, key=lambda p: _rank_key(p, untiered))


def select_best(available: Sequence[P], needs: Mapping[str, int]) -> Optional[P]:
    """
    Greedy need-aware pick: the first player in ranked order who fills any
    outstanding need, otherwise the top-ranked player. None for an empty pool.
    """
    if not available:
        return None

    ranked = rank_players(available)
    open_needs = [pos for pos, left in needs.items() if left and left > 0]
    for player in ranked:
        if any(player_qualifies(player.positions, pos) for pos in open_needs):
            return player
    return ranked[0]
