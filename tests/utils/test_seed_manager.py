"""Tests for per-subproblem random streams."""

import random

import pytest

from amgraph.seed_manager import SeedManager


def _draws(rng: random.Random, n: int = 5):
    return [rng.random() for _ in range(n)]


class TestDeriveSeed:
    def test_unseeded_manager_derives_nothing(self):
        assert SeedManager().derive_seed("hcs", "0") is None

    def test_seed_is_31_bit(self):
        seed = SeedManager(42).derive_seed("hcs", "0.1")
        assert isinstance(seed, int)
        assert 0 <= seed <= 0x7FFFFFFF

    def test_depends_on_master_seed_and_path(self):
        base = SeedManager(42).derive_seed("hcs", "0.1")
        assert base == SeedManager(42).derive_seed("hcs", "0.1")
        assert base != SeedManager(43).derive_seed("hcs", "0.1")
        assert base != SeedManager(42).derive_seed("hcs", "0.0")
        assert base != SeedManager(42).derive_seed("0.1", "hcs")

    def test_path_items_are_stringified(self):
        seeds = SeedManager(7)
        assert seeds.derive_seed("karger", 3) == seeds.derive_seed("karger", "3")

    def test_split_positions_get_distinct_seeds(self):
        seeds = SeedManager(42)
        positions = {"0"}
        frontier = ["0"]
        for _ in range(8):
            frontier = [p + suffix for p in frontier for suffix in (".0", ".1")][:200]
            positions.update(frontier)
        derived = {seeds.derive_seed("hcs", p) for p in positions}
        assert len(derived) > 0.99 * len(positions)


class TestRng:
    def test_same_path_same_stream(self):
        assert _draws(SeedManager(42).rng("hcs", "0")) == _draws(
            SeedManager(42).rng("hcs", "0")
        )

    def test_sibling_positions_independent(self):
        seeds = SeedManager(42)
        assert _draws(seeds.rng("hcs", "0.0")) != _draws(seeds.rng("hcs", "0.1"))

    def test_stream_unaffected_by_other_consumers(self):
        seeds = SeedManager(5)
        expected = _draws(seeds.rng("hcs", "0.1"))
        _draws(seeds.rng("hcs", "0.0"), 1000)
        assert _draws(seeds.rng("hcs", "0.1")) == expected

    def test_unseeded_streams_are_usable(self):
        value = SeedManager().rng("hcs", "0").random()
        assert 0.0 <= value < 1.0

    @pytest.mark.parametrize("master_seed", [0, 1, 2**40])
    def test_matches_random_seeded_with_derived_seed(self, master_seed):
        seeds = SeedManager(master_seed)
        expected = random.Random(seeds.derive_seed("hcs", "0"))
        assert _draws(seeds.rng("hcs", "0")) == _draws(expected)
