"""
Random selection primitives for pack generation.

All randomness comes from a caller-supplied numpy Generator so runs can be
pinned with a seed in tests and left unseeded in production.

INVARIANTS:
- Inputs are never mutated
- A draw never returns two cards with the same name
- Cards skipped for a name collision are deferred, never discarded
"""

from collections import deque
from collections.abc import Sequence, Set
from dataclasses import dataclass
from typing import TypeVar

import numpy as np

from packforge.models.card import DraftCard

T = TypeVar("T")


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a random source; unseeded unless a seed is given."""
    return np.random.default_rng(seed)


def shuffle(items: Sequence[T], rng: np.random.Generator) -> list[T]:
    """Return a uniformly shuffled copy of `items`."""
    order = rng.permutation(len(items))
    return [items[int(i)] for i in order]


@dataclass(frozen=True, slots=True)
class DrawResult:
    """Outcome of a unique-name draw."""

    selected: tuple[DraftCard, ...]
    remaining_pool: tuple[DraftCard, ...]
    success: bool


def draw_unique_cards(
    pool: Sequence[DraftCard],
    count: int,
    names_in_pack: Set[str],
) -> DrawResult:
    """
    Draw `count` cards from the front of an already shuffled pool.

    Cards whose name is already in the pack (or already drawn by this call)
    are set aside and appended to the tail of the remaining pool, so they
    stay available for a later pack.

    Args:
        pool: Cards in draw order
        count: Number of cards wanted
        names_in_pack: Names the pack already contains (not modified)

    Returns:
        DrawResult; success is True only if exactly `count` cards were drawn
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    queue = deque(pool)
    seen = set(names_in_pack)
    selected: list[DraftCard] = []
    deferred: list[DraftCard] = []

    while len(selected) < count and queue:
        card = queue.popleft()
        if card.name in seen:
            deferred.append(card)
            continue
        selected.append(card)
        seen.add(card.name)

    return DrawResult(
        selected=tuple(selected),
        remaining_pool=(*queue, *deferred),
        success=len(selected) == count,
    )


def sample_unique(
    pool: Sequence[DraftCard],
    count: int,
    exclude_names: Set[str],
    rng: np.random.Generator,
) -> list[DraftCard]:
    """
    Sample up to `count` differently named cards by uniform index sampling.

    The pool itself is left untouched, so the same card can be sampled again
    for another pack.

    Args:
        pool: Cards to sample from
        count: Number of cards wanted
        exclude_names: Names that may not be picked
        rng: Random source

    Returns:
        Picked cards; fewer than `count` if the pool runs out of names
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    candidates = [card for card in pool if card.name not in exclude_names]
    untried = list(range(len(candidates)))
    picked: list[DraftCard] = []
    picked_names: set[str] = set()

    while len(picked) < count and untried:
        index = untried.pop(int(rng.integers(len(untried))))
        card = candidates[index]
        if card.name in picked_names:
            continue
        picked.append(card)
        picked_names.add(card.name)

    return picked
