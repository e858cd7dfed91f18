"""Dice sources — the only randomness the tick ever sees.

A dice source is any zero-argument callable returning an int.  The
default is hash-based and fully reproducible:

    Roll = 1 + Hash(WorldSeed, Day, Counter) mod Sides

so the same seed and day always yield the same roll sequence, regardless
of process or platform.
"""

from __future__ import annotations

import struct
from typing import Callable, Iterable, Sequence

import xxhash

DiceSource = Callable[[], int]


class SeededDice:
    """Deterministic d20 keyed on (seed, day) with an explicit call counter.

    The counter is the only mutable state; two instances built from the
    same seed and day produce identical sequences.
    """

    __slots__ = ("_seed", "_day", "_sides", "_counter")

    def __init__(self, seed: int, day: int, sides: int = 20) -> None:
        if sides < 1:
            raise ValueError(f"dice must have at least one side, got {sides}")
        self._seed = seed
        self._day = day
        self._sides = sides
        self._counter = 0

    def _hash(self, counter: int) -> int:
        payload = struct.pack("<qqq", self._seed, self._day, counter)
        return xxhash.xxh64(payload).intdigest()

    def __call__(self) -> int:
        value = 1 + self._hash(self._counter) % self._sides
        self._counter += 1
        return value

    @property
    def rolls_made(self) -> int:
        return self._counter


class ScriptedDice:
    """Replays a fixed roll sequence, cycling when it runs out."""

    __slots__ = ("_rolls", "_index")

    def __init__(self, rolls: Iterable[int]) -> None:
        self._rolls = list(rolls)
        if not self._rolls:
            raise ValueError("ScriptedDice needs at least one roll")
        self._index = 0

    def __call__(self) -> int:
        roll = self._rolls[self._index % len(self._rolls)]
        self._index += 1
        return roll

    @property
    def rolls_made(self) -> int:
        return self._index


class RecordingDice:
    """Wraps another dice source and remembers every roll it produced."""

    __slots__ = ("_inner", "rolls")

    def __init__(self, inner: DiceSource) -> None:
        self._inner = inner
        self.rolls: list[int] = []

    def __call__(self) -> int:
        roll = self._inner()
        self.rolls.append(roll)
        return roll


def pick(items: Sequence, roll: int):
    """Select ``items[roll % len(items)]``; None for an empty sequence."""
    if not items:
        return None
    return items[roll % len(items)]


def weighted_pick(outcomes: Sequence, roll: int):
    """Pick from objects with a ``weight`` attribute.

    ``r = roll % total``; the first outcome whose cumulative weight exceeds
    ``r`` wins, falling back to the first outcome.
    """
    if not outcomes:
        return None
    total = sum(o.weight for o in outcomes)
    if total <= 0:
        return outcomes[0]
    r = roll % total
    cumulative = 0
    for outcome in outcomes:
        cumulative += outcome.weight
        if r < cumulative:
            return outcome
    return outcomes[0]
