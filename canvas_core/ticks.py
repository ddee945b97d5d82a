from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .math2d import EPSILON

MIN_NUMBER_OF_TICKS = 4
TICK_OPTIONS = (1, 2, 5, 25)
# scaled span must reach this many units per wanted tick before the integer search
_RESOLUTION_PER_TICK = 1000


@dataclass(frozen=True)
class AbsoluteTick:
    """A fixed tick interval in logical units."""

    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise ValueError("tick interval must be finite")

    def get_absolute_tick(self, draw_space: float) -> float:
        return self.value


@dataclass(frozen=True)
class AutomaticTick:
    """Pick a nice interval giving roughly `count` ticks over the visible span."""

    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("tick count must not be negative")

    def get_absolute_tick(self, draw_space: float) -> float:
        """Return one of {1, 2, 5, 25} x 10^k for the given span."""
        span = abs(draw_space)
        if not math.isfinite(span):
            return 1.0
        if span <= 0.0:
            span = EPSILON

        shrink_exponent = 0
        while span < _RESOLUTION_PER_TICK * self.count:
            span *= 10.0
            shrink_exponent += 1

        best = _best_tick_from_big(int(span), self.count)
        if shrink_exponent:
            return best / 10**shrink_exponent
        return float(best)


Tick = Union[AbsoluteTick, AutomaticTick]


def _best_tick_from_big(draw_space: int, wanted: int) -> int:
    min_ticks = min(wanted, MIN_NUMBER_OF_TICKS)

    best_tick = 1
    ticks_with_best = draw_space

    rest = draw_space
    growing = 1
    while rest != 0:
        for option in TICK_OPTIONS:
            new_ticks = rest // option
            if new_ticks >= min_ticks and abs(wanted - new_ticks) < abs(wanted - ticks_with_best):
                best_tick = growing * option
                ticks_with_best = new_ticks
        rest //= 10
        growing *= 10
    return best_tick


def format_number(value: float) -> str:
    """Compact axis label: scientific for extreme magnitudes, else at most 5 chars."""
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if not math.isfinite(magnitude):
        return f"{sign}inf" if math.isinf(magnitude) else "nan"
    if magnitude >= 10_000.0 or 0.000001 <= magnitude < 0.0001:
        exponent = math.floor(math.log10(magnitude))
        mantissa = magnitude / 10.0**exponent
        return f"{sign}{mantissa:.2f}e{exponent}"
    if magnitude < 0.000001:
        return "0"
    text = f"{sign}{magnitude:.6f}"[:5]
    return text.rstrip(".")
