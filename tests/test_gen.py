"""Tests for indexed sample generators."""

import numpy as np
import pytest

from sheet_beautify.geometry import XYPos
from sheet_beautify.gentest.gen import (
    Gen,
    from_list,
    map_gen,
    product,
    shuffle_array,
    shuffled,
    truncate,
    xy_positions,
)


class TestGen:
    """Test the basic generator operations."""

    def test_from_list(self):
        gen = from_list(["a", "b", "c"])
        assert len(gen) == 3
        assert [gen[i] for i in range(3)] == ["a", "b", "c"]

    def test_index_out_of_range(self):
        gen = from_list([1, 2])
        with pytest.raises(IndexError):
            gen[2]
        with pytest.raises(IndexError):
            gen[-1]

    def test_map(self):
        gen = map_gen(lambda n: n * 10, from_list([1, 2, 3]))
        assert gen.size == 3
        assert gen[2] == 30
        assert from_list([1, 2]).map(str)[1] == "2"

    def test_product_index_mapping(self):
        """Index i pairs a[i // len(b)] with b[i % len(b)]."""
        gen = product(from_list([1, 2, 3]), from_list(["x", "y"]))
        assert gen.size == 6
        assert [gen[i] for i in range(6)] == [
            (1, "x"),
            (1, "y"),
            (2, "x"),
            (2, "y"),
            (3, "x"),
            (3, "y"),
        ]

    def test_product_combine(self):
        gen = product(from_list([1, 2]), from_list([10, 20]), lambda a, b: a + b)
        assert [gen[i] for i in range(4)] == [11, 21, 12, 22]

    def test_truncate(self):
        gen = from_list(range(10))
        assert len(truncate(gen, 4)) == 4
        assert len(truncate(gen, 40)) == 10

    def test_samples_are_lazy(self):
        calls = []
        gen = Gen(1_000_000, lambda i: calls.append(i) or i)
        assert gen[123_456] == 123_456
        assert calls == [123_456]


class TestRandomGenerators:
    """Test seeded shuffles."""

    def test_shuffle_array_is_permutation(self):
        items = list(range(20))
        result = shuffle_array(items, np.random.default_rng(3))
        assert sorted(result) == items

    def test_shuffled_is_reproducible(self):
        """Sample i depends only on the seed and i."""
        first = shuffled(["a", "b", "c", "d"], seed=7)
        second = shuffled(["a", "b", "c", "d"], seed=7)
        assert first[42] == second[42]
        assert first[5] == first[5]
        assert sorted(first[9]) == ["a", "b", "c", "d"]

    def test_shuffled_size(self):
        assert len(shuffled([1, 2, 3], seed=0, size=12)) == 12


class TestXYPositions:
    """Test grid offsets."""

    def test_grid(self):
        gen = xy_positions(20, 20)
        assert len(gen) == 9
        assert gen[0] == XYPos(-20.0, -20.0)
        assert gen[1] == XYPos(-20.0, 0.0)
        assert gen[8] == XYPos(20.0, 20.0)

    def test_default_step(self):
        assert len(xy_positions(100)) == 11 * 11
