from __future__ import annotations

"""Randomness helpers: unbiased shuffling, sampling and seeding."""

import os
import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def seed_if_needed() -> None:
    """Seed the process RNG if SEED env var is set."""
    seed = os.environ.get("SEED")
    if seed is not None:
        try:
            s = int(seed)
        except ValueError:
            return
        random.seed(s)


def shuffle(seq: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a new list with the elements of `seq` in uniformly random order.

    Fisher-Yates from the last index down to 1: each position swaps with a
    uniformly chosen index at or before it. `seq` is not modified.
    """
    draw = rng.random if rng is not None else random.random
    out = list(seq)
    for i in range(len(out) - 1, 0, -1):
        j = int(draw() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def take_random(seq: Sequence[T], count: int, rng: Optional[random.Random] = None) -> List[T]:
    """Shuffle a copy of `seq` and keep the first `count` items."""
    return shuffle(seq, rng)[: max(0, count)]
