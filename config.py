"""
Configuration for the photosynthesis simulator.

Change FILTER_COLOR, LIGHT and CO2 below to see how they change the simulation.
The plant produces different amounts of oxygen bubbles depending on the color
and strength of the light and on the carbon dioxide in the water.
"""

import os
from dataclasses import dataclass
from typing import Tuple

from bubble_rates import FilterColor, SimulationInputs


# --------------------
# Simulation inputs: edit these!
# --------------------
# Color of light: FilterColor.COLORLESS, RED, BLUE or GREEN
FILTER_COLOR = FilterColor.RED

# Strength of light: a value between 0 and 10
LIGHT = 5

# Amount of carbon dioxide: a value between 0 and 10
CO2 = 2


# --------------------
# Display constants: don't change these
# --------------------
@dataclass
class Config:
    WIDTH: int = 800
    HEIGHT: int = 415
    CONTAINER_SIZE: int = 420
    FPS: int = 60
    DURATION_MS: int = 30000

    HEADER_SIZE: int = 20
    SUBTEXT_SIZE: int = 18
    COUNTDOWN_SIZE: int = 42
    SMALL_SIZE: int = 12

    BASE: Tuple[int, int, int] = (0, 50, 98)
    TEXT: Tuple[int, int, int] = (255, 255, 255)
    BUBBLE: Tuple[int, int, int] = (255, 255, 255)
    BULB_SOCKET: Tuple[int, int, int] = (35, 35, 35)

    NATURAL_BLUE: Tuple[int, int, int, int] = (64, 164, 223, 48)
    FILTER_RED: Tuple[int, int, int, int] = (255, 0, 0, 48)
    FILTER_BLUE: Tuple[int, int, int, int] = (0, 0, 255, 48)
    FILTER_GREEN: Tuple[int, int, int, int] = (0, 255, 0, 48)

    ASSET_PATH: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets", "waterweed.jpg")


CFG = Config()


def filter_overlay(color: FilterColor) -> Tuple[int, int, int, int]:
    """RGBA overlay drawn over the plant for a light filter."""
    overlays = {
        FilterColor.COLORLESS: CFG.NATURAL_BLUE,
        FilterColor.RED: CFG.FILTER_RED,
        FilterColor.BLUE: CFG.FILTER_BLUE,
        FilterColor.GREEN: CFG.FILTER_GREEN,
    }
    return overlays.get(color, CFG.NATURAL_BLUE)


def current_inputs() -> SimulationInputs:
    return SimulationInputs(filter_color=FILTER_COLOR, light=LIGHT, co2=CO2)
