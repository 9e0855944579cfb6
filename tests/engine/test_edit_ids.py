"""
Tests for the edit id allocator.
"""

import random

from owotnes.engine.edit_ids import RANDOM_SEED_LIMIT, EditIdAllocator
from owotnes.models.enums import EditIdStrategy


class TestEditIdAllocator:

    def test_counter_starts_at_one(self):
        ids = EditIdAllocator(EditIdStrategy.COUNTER)
        assert [ids.allocate() for _ in range(3)] == [1, 2, 3]
        assert ids.allocated == 3

    def test_random_seed_in_range_and_monotonic(self):
        ids = EditIdAllocator(EditIdStrategy.RANDOM_SEED, random.Random(7))
        assert 1 <= ids.first_id < RANDOM_SEED_LIMIT
        values = [ids.allocate() for _ in range(100)]
        assert values == list(range(ids.first_id, ids.first_id + 100))

    def test_seed_is_reproducible_with_same_rng(self):
        a = EditIdAllocator(EditIdStrategy.RANDOM_SEED, random.Random(42))
        b = EditIdAllocator(EditIdStrategy.RANDOM_SEED, random.Random(42))
        assert a.first_id == b.first_id
