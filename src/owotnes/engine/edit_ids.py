"""
Edit id allocator.

OWOT wants an id on every edit for its own acknowledgement bookkeeping; ids
must not repeat during one connection. Seeding from a random value keeps a
restarted bridge from colliding with ids still tracked by the same world
session.
"""

from __future__ import annotations
import random
from typing import Optional

from owotnes.models.enums import EditIdStrategy

RANDOM_SEED_LIMIT = 2 ** 30


class EditIdAllocator:
    """Monotonic id source."""

    def __init__(self, strategy: EditIdStrategy = EditIdStrategy.RANDOM_SEED, rng: Optional[random.Random] = None):
        self.strategy = strategy
        if strategy is EditIdStrategy.COUNTER:
            self._next = 1
        else:
            self._next = (rng or random).randrange(1, RANDOM_SEED_LIMIT)
        self.first_id = self._next

    def allocate(self) -> int:
        edit_id = self._next
        self._next += 1
        return edit_id

    @property
    def allocated(self) -> int:
        return self._next - self.first_id

    def __repr__(self) -> str:
        return f"EditIdAllocator(strategy={self.strategy.name}, next={self._next})"
