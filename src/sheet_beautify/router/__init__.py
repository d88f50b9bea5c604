"""
Wire routing.

Provides the :class:`Router` protocol the beautifier talks to and a
deterministic orthogonal reference router.

Example::

    from sheet_beautify.router import ManhattanRouter

    router = ManhattanRouter(nub_length=8.0, separation=6.0)
    sheet = router.route_all(sheet, ["C1"], XYPos.zero())
    sheet = router.separate(sheet)
"""

from .core import DEFAULT_NUB_LENGTH, DEFAULT_SEPARATION, ManhattanRouter, Router
from .separation import CrossingLeg, crossing_leg, separate_crossing_legs

__all__ = [
    "Router",
    "ManhattanRouter",
    "DEFAULT_NUB_LENGTH",
    "DEFAULT_SEPARATION",
    "CrossingLeg",
    "crossing_leg",
    "separate_crossing_legs",
]
