"""
Ball Dealing - Secret distribution of the rack among players.

This module handles:
- Shuffling the rack through an injectable shuffler (seedable for replays)
- Splitting 15 balls as evenly as possible over the roster
- Handing each player their share in roster order

Tests pass a fixed shuffler to get exact deals.
"""

from __future__ import annotations
import random
from typing import Callable, Sequence

from .state import PlayerState, TOTAL_BALLS


Shuffler = Callable[[Sequence[int]], list[int]]


def seeded_shuffler(seed: int | None = None) -> Shuffler:
    """
    Build a uniform shuffler backed by its own random.Random.

    With a seed, successive deals from the same shuffler are reproducible.
    """
    rng = random.Random(seed)

    def shuffle(balls: Sequence[int]) -> list[int]:
        return rng.sample(list(balls), len(balls))

    return shuffle


def hand_sizes(num_players: int, num_balls: int = TOTAL_BALLS) -> list[int]:
    """
    How many balls each seat receives.

    Everyone gets num_balls // num_players; the first num_balls % num_players
    seats get one extra.
    """
    if num_players <= 0:
        return []
    base, extra = divmod(num_balls, num_players)
    return [base + 1 if i < extra else base for i in range(num_players)]


def deal_balls(
    players: Sequence[PlayerState],
    balls: Sequence[int],
    shuffle: Shuffler,
) -> tuple[PlayerState, ...]:
    """
    Deal the balls to the players.

    The shuffled sequence is consumed from the front: the first player takes
    their allotment, then the second, and so on.

    Returns:
        New player states with their hands set
    """
    shuffled = list(shuffle(balls))
    if sorted(shuffled) != sorted(balls):
        raise ValueError("Shuffler must return a permutation of the balls it was given")

    dealt = []
    for player, count in zip(players, hand_sizes(len(players), len(shuffled))):
        hand, shuffled = tuple(shuffled[:count]), shuffled[count:]
        dealt.append(player._copy_with(balls=hand))

    return tuple(dealt)
