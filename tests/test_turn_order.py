from types import SimpleNamespace

import pytest

from app.core.errors import InvalidOrderError
from app.services.draft.turn_order import (
    effective_draft_order,
    pick_position,
    picks_until_user_turn,
    team_on_clock,
    validate_draft_order,
)

ORDER = ["a", "b", "c", "d"]


def test_first_pick_goes_to_first_team():
    assert team_on_clock(ORDER, 0) == "a"


@pytest.mark.parametrize("n", [1, 2, 3, 4, 12])
def test_snake_over_two_rounds(n):
    order = [f"t{i}" for i in range(n)]
    seq = [team_on_clock(order, p) for p in range(3 * n)]
    assert seq[:n] == order
    assert seq[n:2 * n] == order[::-1]
    assert seq[2 * n:] == order


def test_turn_at_round_boundary():
    # pick 4 is the last of round 1, pick 5 opens the reversed round
    assert team_on_clock(ORDER, 3) == "d"
    assert team_on_clock(ORDER, 4) == "d"
    assert team_on_clock(ORDER, 7) == "a"
    assert team_on_clock(ORDER, 8) == "a"


def test_empty_order_fails_loudly():
    with pytest.raises(InvalidOrderError):
        team_on_clock([], 0)


def test_negative_pick_count_rejected():
    with pytest.raises(InvalidOrderError):
        team_on_clock(ORDER, -1)


def test_pick_position():
    assert pick_position(1, 12) == (1, 1)
    assert pick_position(12, 12) == (1, 12)
    assert pick_position(13, 12) == (2, 1)


def test_picks_until_user_turn_wraps():
    assert picks_until_user_turn(ORDER, "a", "c") == 2
    assert picks_until_user_turn(ORDER, "c", "a") == 2
    assert picks_until_user_turn(ORDER, "d", "a") == 1
    assert picks_until_user_turn(ORDER, "b", "b") == 0


def test_picks_until_user_turn_unknown_team():
    with pytest.raises(InvalidOrderError):
        picks_until_user_turn(ORDER, "a", "zz")


def test_validate_draft_order_accepts_permutation():
    assert validate_draft_order(["c", "a", "b"], ["a", "b", "c"]) == ["c", "a", "b"]


@pytest.mark.parametrize(
    "order",
    [[], ["a", "a", "b"], ["a", "b"], ["a", "b", "x"]],
)
def test_validate_draft_order_rejects(order):
    with pytest.raises(InvalidOrderError):
        validate_draft_order(order, ["a", "b", "c"])


def test_effective_order_falls_back_to_team_listing():
    teams = [SimpleNamespace(id="x"), SimpleNamespace(id="y")]
    assert effective_draft_order(SimpleNamespace(draft_order=[]), teams) == ["x", "y"]
    assert effective_draft_order(SimpleNamespace(draft_order=["y", "x"]), teams) == ["y", "x"]
