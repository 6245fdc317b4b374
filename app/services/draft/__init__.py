"""
Draft progression & auto-draft engine.
"""

from .positions import (
    ALL_POSITIONS,
    BENCH,
    COMPOSITE_POSITIONS,
    CORNER_INFIELD,
    MIDDLE_INFIELD,
    PRIMITIVE_POSITIONS,
    player_qualifies,
    remaining_needs,
)
from .turn_order import (
    effective_draft_order,
    pick_position,
    picks_until_user_turn,
    team_on_clock,
    validate_draft_order,
)
from .selection import rank_players, select_best
from .engine import (
    DRAFT_STATUSES,
    DraftState,
    auto_draft_current,
    auto_draft_pick,
    draft_history,
    duplicate_draft,
    get_state,
    make_pick,
    reset_draft,
    set_draft_order,
    set_status,
)
