"""
Tests for ball dealing.

Deals are checked for shape (who gets how many), never for a particular
random permutation.
"""

import pytest

from ..engine_core.state import PlayerState, full_rack
from ..engine_core.dealing import deal_balls, hand_sizes, seeded_shuffler


def roster(n):
    return [PlayerState(player_id=str(i), name=f"P{i}") for i in range(n)]


@pytest.mark.parametrize(
    "num_players, sizes",
    [
        (2, [8, 7]),
        (3, [5, 5, 5]),
        (4, [4, 4, 4, 3]),
        (7, [3, 2, 2, 2, 2, 2, 2]),
        (15, [1] * 15),
    ],
)
def test_hand_sizes(num_players, sizes):
    assert hand_sizes(num_players) == sizes


def test_hand_sizes_empty_roster():
    assert hand_sizes(0) == []


def test_deal_takes_from_front_in_roster_order():
    players = deal_balls(roster(4), full_rack(), lambda balls: list(reversed(balls)))

    assert [p.balls for p in players] == [
        (15, 14, 13, 12),
        (11, 10, 9, 8),
        (7, 6, 5, 4),
        (3, 2, 1),
    ]


def test_deal_keeps_player_identity():
    players = deal_balls(roster(2), full_rack(), lambda balls: list(balls))
    assert [p.player_id for p in players] == ["0", "1"]
    assert [p.name for p in players] == ["P0", "P1"]


@pytest.mark.parametrize("num_players", range(2, 16))
def test_deal_fairness(num_players):
    shuffle = seeded_shuffler(num_players)
    for _ in range(5):
        players = deal_balls(roster(num_players), full_rack(), shuffle)
        sizes = [len(p.balls) for p in players]

        assert max(sizes) - min(sizes) <= 1
        assert sum(sizes) == 15
        assert sizes == sorted(sizes, reverse=True)
        assert sorted(b for p in players for b in p.balls) == list(range(1, 16))


def test_seeded_shuffler_is_reproducible():
    first = seeded_shuffler(42)
    second = seeded_shuffler(42)

    assert [first(full_rack()) for _ in range(3)] == [second(full_rack()) for _ in range(3)]


def test_shuffler_reaches_every_seat():
    """Every ball lands in the first hand for some seed."""
    seen = set()
    for seed in range(200):
        players = deal_balls(roster(3), full_rack(), seeded_shuffler(seed))
        seen.update(players[0].balls)
    assert seen == set(range(1, 16))


def test_bad_shuffler_rejected():
    with pytest.raises(ValueError):
        deal_balls(roster(2), full_rack(), lambda balls: [1] * 15)
