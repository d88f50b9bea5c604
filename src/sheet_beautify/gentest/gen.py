"""
Finite indexed generators for property tests.

A :class:`Gen` is a size plus a function from index to sample.  Samples are
produced on demand, so a product of large generators costs nothing until a
sample is asked for, and any sample can be regenerated from its index alone.

Randomised generators take an explicit seed and derive a fresh
``numpy.random.Generator`` per index, so sample ``i`` is the same on every
run and independent of which other samples were generated before it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, TypeVar

import numpy as np

from ..geometry import XYPos

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")


@dataclass(frozen=True)
class Gen(Generic[T]):
    """A finite sequence of samples addressed by index."""

    size: int
    data: Callable[[int], T]

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> T:
        if not 0 <= index < self.size:
            raise IndexError(f"Sample index {index} out of range 0..{self.size - 1}")
        return self.data(index)

    def map(self, func: Callable[[T], U]) -> Gen[U]:
        return map_gen(func, self)


def from_list(items: Sequence[T]) -> Gen[T]:
    """Enumerate a fixed list."""
    values = list(items)
    return Gen(len(values), lambda i: values[i % len(values)])


def map_gen(func: Callable[[T], U], gen: Gen[T]) -> Gen[U]:
    return Gen(gen.size, lambda i: func(gen.data(i)))


def product(
    gen_a: Gen[T],
    gen_b: Gen[U],
    combine: Optional[Callable[[T, U], V]] = None,
) -> Gen:
    """Cartesian product; index ``i`` pairs ``a[i // b.size]`` with ``b[i % b.size]``."""

    def sample(i: int):
        a = gen_a.data(i // gen_b.size)
        b = gen_b.data(i % gen_b.size)
        return combine(a, b) if combine is not None else (a, b)

    return Gen(gen_a.size * gen_b.size, sample)


def truncate(gen: Gen[T], size: int) -> Gen[T]:
    """Keep at most the first *size* samples."""
    return Gen(min(size, gen.size), gen.data)


def shuffle_array(items: Sequence[T], rng: np.random.Generator) -> list[T]:
    """Return a permutation of *items* drawn from *rng*."""
    order = rng.permutation(len(items))
    return [items[int(k)] for k in order]


def shuffled(items: Sequence[T], seed: int, size: int = 100) -> Gen[list[T]]:
    """A generator whose i-th sample is a permutation seeded by (seed, i)."""
    values = list(items)
    return Gen(size, lambda i: shuffle_array(values, np.random.default_rng([seed, i])))


def xy_positions(limit: int, step: int = 20) -> Gen[XYPos]:
    """All offsets on a grid covering ``[-limit, limit]`` on both axes."""
    coords = from_list([float(c) for c in range(-limit, limit + 1, step)])
    return product(coords, coords, lambda x, y: XYPos(x, y))
