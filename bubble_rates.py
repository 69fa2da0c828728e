"""
Bubble-rate lookup for the photosynthesis simulator.

The number of oxygen bubbles a plant gives off over one run is read from a
hand-authored table: for every filter color and light level 1-10 there is a
list of carbon dioxide bands, each with a base bubble count. A small random
jitter is added so two runs with the same inputs rarely look identical.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from logging_config import get_logger

logger = get_logger(__name__)

MIN_LEVEL = 0
MAX_LEVEL = 10

# Returned when no rate is defined for the inputs
NO_RATE = -1


class FilterColor(str, Enum):
    COLORLESS = "colorless"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"


@dataclass(frozen=True)
class Band:
    co2_min: int
    co2_max: int
    base: int
    jitter: Tuple[float, float] = (-2.0, 2.0)

    def contains(self, co2: int) -> bool:
        return self.co2_min <= co2 <= self.co2_max


@dataclass(frozen=True)
class SimulationInputs:
    filter_color: FilterColor
    light: int
    co2: int

    def clamped(self) -> "SimulationInputs":
        return SimulationInputs(
            filter_color=self.filter_color,
            light=clamp_level(self.light, "light"),
            co2=clamp_level(self.co2, "co2"),
        )


def _bands(*rows) -> List[Band]:
    return [Band(*row) for row in rows]


RATE_TABLE: Dict[FilterColor, Dict[int, List[Band]]] = {
    FilterColor.COLORLESS: {
        1: _bands((1, 2, 3), (3, 10, 4)),
        2: _bands((1, 10, 7, (-2.0, 3.0))),
        3: _bands((1, 1, 6), (2, 5, 9), (6, 10, 11)),
        4: _bands((1, 1, 7), (2, 5, 12), (6, 10, 14)),
        5: _bands((1, 1, 8), (2, 4, 15), (5, 10, 17)),
        6: _bands((1, 1, 9), (2, 4, 18), (5, 10, 20)),
        7: _bands((1, 1, 9), (2, 2, 15), (3, 3, 17), (4, 8, 21), (9, 10, 28)),
        8: _bands((1, 1, 9), (2, 2, 15), (3, 4, 21), (5, 8, 24), (9, 10, 27)),
        9: _bands((1, 1, 9), (2, 2, 16), (3, 3, 21), (4, 6, 25), (7, 10, 30)),
        10: _bands((1, 1, 9), (2, 2, 16), (3, 3, 22), (4, 4, 26), (5, 10, 32)),
    },
    FilterColor.RED: {
        1: _bands((1, 10, 2)),
        2: _bands((1, 3, 4), (4, 10, 5)),
        3: _bands((1, 3, 5), (4, 10, 7)),
        4: _bands((1, 3, 6), (4, 10, 8)),
        5: _bands((1, 3, 8), (4, 6, 9), (7, 10, 10)),
        6: _bands((1, 1, 7), (2, 4, 11), (5, 10, 13)),
        7: _bands((1, 1, 8), (2, 5, 12), (6, 10, 15)),
        8: _bands((1, 4, 14), (5, 10, 18)),
        9: _bands((1, 1, 9), (2, 2, 12), (3, 4, 15), (5, 10, 18)),
        10: _bands((1, 1, 7), (2, 2, 14), (3, 5, 18), (6, 10, 22)),
    },
    FilterColor.BLUE: {
        1: _bands((1, 10, 3)),
        2: _bands((1, 3, 5), (4, 10, 6)),
        3: _bands((1, 1, 7), (2, 10, 9)),
        4: _bands((1, 1, 7), (2, 10, 12)),
        5: _bands((1, 1, 7), (2, 2, 11), (3, 6, 13), (7, 10, 14)),
        6: _bands((1, 1, 8), (2, 4, 13), (5, 7, 15), (8, 10, 18)),
        7: _bands((1, 1, 8), (2, 2, 12), (3, 3, 15), (4, 4, 18), (5, 10, 20)),
        8: _bands((1, 1, 9), (2, 2, 14), (3, 5, 16), (6, 7, 20), (8, 10, 22)),
        9: _bands((1, 1, 9), (2, 2, 14), (3, 6, 19), (7, 10, 24)),
        10: _bands((1, 1, 8), (2, 2, 16), (3, 3, 19), (4, 6, 22), (7, 10, 27)),
    },
    FilterColor.GREEN: {
        1: _bands((1, 10, 1)),
        2: _bands((1, 4, 1), (5, 10, 2)),
        3: _bands((1, 10, 2)),
        4: _bands((1, 10, 3)),
        5: _bands((1, 4, 3), (5, 10, 4)),
        6: _bands((1, 4, 4), (5, 10, 5)),
        7: _bands((1, 2, 4), (3, 7, 5), (8, 10, 6)),
        8: _bands((1, 10, 6)),
        9: _bands((1, 10, 7)),
        10: _bands((1, 10, 8)),
    },
}


# --------------------
# Input handling
# --------------------
def clamp_level(value: int, name: str) -> int:
    """Clamp a light/CO2 level into [0, 10], logging when it had to be corrected."""
    if value < MIN_LEVEL:
        logger.warning("%s=%s below %d, using %d. %s", name, value, MIN_LEVEL, MIN_LEVEL,
                       "Sneaky of you." if name == "co2" else "Wow.")
        return MIN_LEVEL
    if value > MAX_LEVEL:
        logger.warning("%s=%s above %d, using %d. %s", name, value, MAX_LEVEL, MAX_LEVEL,
                       "Nice try." if name == "co2" else "Too bright!")
        return MAX_LEVEL
    return int(value)


def parse_filter_color(value: Union[FilterColor, str]) -> Optional[FilterColor]:
    """Return the FilterColor for an enum member or its name/value, or None if unknown."""
    if isinstance(value, FilterColor):
        return value
    try:
        return FilterColor(str(value).lower())
    except ValueError:
        return None


def find_band(color: FilterColor, light: int, co2: int) -> Optional[Band]:
    for band in RATE_TABLE.get(color, {}).get(light, []):
        if band.contains(co2):
            return band
    return None


# --------------------
# Resolver
# --------------------
def _lookup(filter_color, light: int, co2: int) -> Tuple[int, Optional[Band]]:
    """Shared clamping/lookup. Returns (early_result, band); band is None when early_result applies."""
    co2 = clamp_level(co2, "co2")
    light = clamp_level(light, "light")
    if co2 == 0 or light == 0:
        return 0, None

    color = parse_filter_color(filter_color)
    if color is None:
        logger.error("No bubble rate for unknown filter color %r", filter_color)
        return NO_RATE, None

    band = find_band(color, light, co2)
    if band is None:
        logger.error("No bubble rate for %s light=%d co2=%d", color.value, light, co2)
        return NO_RATE, None
    return 0, band


def base_rate(filter_color, light: int, co2: int) -> int:
    """Bubble count for the inputs without jitter."""
    result, band = _lookup(filter_color, light, co2)
    return result if band is None else band.base


def rate_range(filter_color, light: int, co2: int) -> Tuple[int, int]:
    """Inclusive (low, high) interval a call to resolve() can return."""
    result, band = _lookup(filter_color, light, co2)
    if band is None:
        return result, result
    low, high = band.jitter
    return max(0, band.base + int(low)), band.base + int(high)


def resolve(filter_color, light: int, co2: int, rng=None) -> int:
    """
    Number of bubbles the plant should produce over one run.

    Args:
        filter_color: FilterColor (or its string value)
        light: light strength, clamped to 0-10
        co2: carbon dioxide level, clamped to 0-10
        rng: object with uniform(a, b); defaults to the random module

    Returns:
        Bubble count >= 0, or NO_RATE (-1) when the inputs have no defined rate
    """
    result, band = _lookup(filter_color, light, co2)
    if band is None:
        return result

    rng = rng or random
    low, high = band.jitter
    count = band.base + int(rng.uniform(low, high))
    return max(0, count)
