"""
Bubble emission and animation for one 30 second photosynthesis run.

advance() is called once per rendered frame with the milliseconds elapsed
since the run started. It paces bubble creation so the target count is
reached roughly evenly over the run, moves every bubble up a little and
counts the ones that have risen into view.
"""

import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from bubble_rates import NO_RATE, SimulationInputs, resolve
from config import CFG
from logging_config import get_logger

logger = get_logger(__name__)

# A bubble counts once its y coordinate reaches this line
VISIBLE_Y = 415
SPAWN_MARGIN = 6
SPAWN_DEPTH = 150


class ConfigurationError(ValueError):
    """Raised when the inputs have no defined bubble rate."""


@dataclass
class Bubble:
    x: float
    y: float
    visible: bool = False

    @classmethod
    def spawn(cls, rng, container_size: int = CFG.CONTAINER_SIZE) -> "Bubble":
        """New bubble somewhere below the bottom edge of the plant image."""
        x = math.floor(rng.uniform(SPAWN_MARGIN, container_size - SPAWN_MARGIN))
        y = math.floor(rng.uniform(0, SPAWN_DEPTH)) + container_size
        return cls(x=float(x), y=float(y))

    def rise(self, rng):
        self.y += rng.uniform(-2.0, -0.2)


@dataclass
class RunState:
    inputs: SimulationInputs
    target_count: int
    duration_ms: int = CFG.DURATION_MS
    created_count: int = 0
    visible_count: int = 0
    elapsed_ms: float = 0.0
    last_emission_ms: float = 0.0
    countdown: int = 0
    running: bool = True
    bubbles: List[Bubble] = field(default_factory=list)

    @property
    def interval_ms(self) -> float:
        if self.target_count <= 0:
            return math.inf
        return self.duration_ms / self.target_count

    @property
    def remaining_to_create(self) -> int:
        return max(0, self.target_count - self.created_count)


# --------------------
# Run lifecycle
# --------------------
def start_run(inputs: SimulationInputs, rng=None, duration_ms: int = CFG.DURATION_MS) -> RunState:
    """Resolve the bubble target for the inputs and return a fresh running state."""
    inputs = inputs.clamped()
    target = resolve(inputs.filter_color, inputs.light, inputs.co2, rng=rng)
    if target == NO_RATE:
        raise ConfigurationError(
            f"no bubble rate defined for filter={inputs.filter_color!r} "
            f"light={inputs.light} co2={inputs.co2}"
        )

    state = RunState(inputs=inputs, target_count=target, duration_ms=duration_ms,
                     countdown=duration_ms // 1000)
    logger.info("Run started: filter=%s light=%d co2=%d target=%d bubbles",
                _color_name(inputs.filter_color), inputs.light, inputs.co2, target)
    return state


def _color_name(color) -> str:
    return getattr(color, "value", str(color))


def _emit(state: RunState, count: int, rng):
    for _ in range(count):
        if state.created_count >= state.target_count:
            break
        state.bubbles.append(Bubble.spawn(rng))
        state.created_count += 1


def advance(state: RunState, elapsed_ms: float, rng=None) -> RunState:
    """
    Move the run forward to `elapsed_ms` (milliseconds since start_run).

    Args:
        state: run to update in place
        elapsed_ms: time since the run started, non-decreasing between calls
        rng: object with uniform(a, b); defaults to the random module

    Returns:
        The same state, for chaining
    """
    rng = rng or random
    state.elapsed_ms = elapsed_ms

    seconds_left = math.floor((state.duration_ms - elapsed_ms) / 1000)
    if seconds_left >= 0:
        state.countdown = seconds_left

    if state.running:
        if seconds_left < 0:
            # Pacing lags behind the clock a little; top up so the run ends on target
            _emit(state, state.remaining_to_create, rng)
            state.running = False
            logger.info("Run finished: %d bubbles created, %d visible",
                        state.created_count, state.visible_count)
        elif (elapsed_ms - state.last_emission_ms) > state.interval_ms and \
                state.created_count < state.target_count:
            state.last_emission_ms = elapsed_ms
            _emit(state, math.ceil(rng.uniform(0.1, 1.1)), rng)

    for bubble in state.bubbles:
        bubble.rise(rng)
        if not bubble.visible and bubble.y <= VISIBLE_Y:
            bubble.visible = True
            state.visible_count += 1

    return state


def countdown_label(countdown: int) -> Tuple[str, str]:
    """Countdown text and its unit, e.g. (' 9', 'seconds') or ('1', 'second')."""
    value = f" {countdown}" if countdown < 10 else str(countdown)
    unit = "second" if countdown == 1 else "seconds"
    return value, unit


def summary(state: RunState) -> Dict[str, Any]:
    return {
        "filter": _color_name(state.inputs.filter_color),
        "light": state.inputs.light,
        "co2": state.inputs.co2,
        "target": state.target_count,
        "created": state.created_count,
        "visible": state.visible_count,
        "countdown": state.countdown,
        "running": state.running,
    }


# --------------------
# Headless driver
# --------------------
def run_headless(inputs: SimulationInputs, fps: float = CFG.FPS, rng=None,
                 duration_ms: int = CFG.DURATION_MS, sample_every_ms: float = 1000.0,
                 settle_ms: float = 5000.0) -> Tuple[RunState, List[Dict[str, Any]]]:
    """
    Run a whole simulation against a synthetic frame clock.

    Frames continue for `settle_ms` after the countdown ends so the last
    bubbles have time to rise into view.

    Returns:
        (final state, list of samples taken every `sample_every_ms`)
    """
    rng = rng or random.Random()
    state = start_run(inputs, rng=rng, duration_ms=duration_ms)

    frame_ms = 1000.0 / max(1.0, fps)
    total_frames = int(math.ceil((duration_ms + settle_ms) / frame_ms))
    samples: List[Dict[str, Any]] = []
    next_sample = 0.0

    for frame in range(1, total_frames + 1):
        t = frame * frame_ms
        advance(state, t, rng)
        if t >= next_sample or frame == total_frames:
            samples.append(_snapshot(state))
            next_sample += sample_every_ms

    return state, samples


def _snapshot(state: RunState) -> Dict[str, Any]:
    return {
        "elapsed_ms": state.elapsed_ms,
        "countdown": state.countdown,
        "created": state.created_count,
        "visible": state.visible_count,
        "running": state.running,
    }

