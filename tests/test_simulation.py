"""Emission pacing, bubble animation and countdown tests driven by a synthetic clock."""

import random
import unittest

from bubble_rates import FilterColor, SimulationInputs
from simulation import (
    VISIBLE_Y, Bubble, ConfigurationError, advance, countdown_label, run_headless,
    start_run, summary,
)
from tests.helpers import FractionRandom

RED_5_2 = SimulationInputs(FilterColor.RED, light=5, co2=2)


class BubbleTests(unittest.TestCase):
    def test_spawn_bounds(self):
        low = Bubble.spawn(FractionRandom(0.0))
        high = Bubble.spawn(FractionRandom(0.999))
        self.assertEqual((low.x, low.y), (6.0, 420.0))
        self.assertEqual((high.x, high.y), (413.0, 569.0))
        self.assertFalse(low.visible)

    def test_rise_moves_up(self):
        bubble = Bubble(x=10.0, y=500.0)
        bubble.rise(FractionRandom(0.5))
        self.assertAlmostEqual(bubble.y, 498.9)


class StartRunTests(unittest.TestCase):
    def test_target_and_interval(self):
        state = start_run(RED_5_2, rng=FractionRandom(0.5))
        self.assertEqual(state.target_count, 8)
        self.assertEqual(state.interval_ms, 30000 / 8)
        self.assertEqual(state.countdown, 30)
        self.assertTrue(state.running)
        self.assertEqual(state.bubbles, [])

    def test_inputs_are_clamped(self):
        with self.assertLogs("photosynthesis", level="WARNING"):
            state = start_run(SimulationInputs(FilterColor.BLUE, light=11, co2=-3))
        self.assertEqual((state.inputs.light, state.inputs.co2), (10, 0))
        self.assertEqual(state.target_count, 0)

    def test_unknown_filter_refuses_to_start(self):
        with self.assertLogs("photosynthesis", level="ERROR"):
            with self.assertRaises(ConfigurationError):
                start_run(SimulationInputs("purple", light=5, co2=5))


class AdvanceTests(unittest.TestCase):
    def test_first_bubble_waits_for_interval(self):
        rng = FractionRandom(0.5)
        state = start_run(RED_5_2, rng=rng)
        advance(state, 3000, rng)
        self.assertEqual(state.created_count, 0)
        advance(state, 3751, rng)
        self.assertEqual(state.created_count, 1)
        self.assertEqual(state.last_emission_ms, 3751)
        advance(state, 4000, rng)
        self.assertEqual(state.created_count, 1)

    def test_batch_can_hold_two_bubbles(self):
        rng = FractionRandom(0.95)
        state = start_run(RED_5_2, rng=rng)
        advance(state, 5000, rng)
        self.assertEqual(state.created_count, 2)

    def test_countdown_and_stop(self):
        rng = FractionRandom(0.5)
        state = start_run(RED_5_2, rng=rng)
        advance(state, 500, rng)
        self.assertEqual(state.countdown, 29)
        advance(state, 30000, rng)
        self.assertEqual(state.countdown, 0)
        self.assertTrue(state.running)
        advance(state, 30001, rng)
        self.assertEqual(state.countdown, 0)
        self.assertFalse(state.running)
        self.assertEqual(state.created_count, state.target_count)

    def test_no_emission_after_stop(self):
        rng = FractionRandom(0.5)
        state = start_run(RED_5_2, rng=rng)
        advance(state, 31000, rng)
        created = state.created_count
        y_before = [b.y for b in state.bubbles]
        advance(state, 40000, rng)
        self.assertEqual(state.created_count, created)
        self.assertTrue(all(b.y < y for b, y in zip(state.bubbles, y_before)))

    def test_bubble_counted_visible_once(self):
        rng = FractionRandom(0.5)
        state = start_run(RED_5_2, rng=rng)
        state.bubbles.append(Bubble(x=50.0, y=VISIBLE_Y + 1.0))
        advance(state, 10, rng)
        self.assertTrue(state.bubbles[0].visible)
        self.assertEqual(state.visible_count, 1)
        advance(state, 20, rng)
        self.assertEqual(state.visible_count, 1)

    def test_zero_target_runs_to_completion(self):
        state, samples = run_headless(SimulationInputs(FilterColor.GREEN, light=0, co2=7),
                                      rng=random.Random(3))
        self.assertEqual(state.target_count, 0)
        self.assertEqual(state.created_count, 0)
        self.assertEqual(state.bubbles, [])
        self.assertFalse(state.running)
        self.assertEqual(samples[-1]["countdown"], 0)


class HeadlessRunTests(unittest.TestCase):
    def test_run_invariants(self):
        for seed in range(5):
            state, samples = run_headless(
                SimulationInputs(FilterColor.COLORLESS, light=10, co2=8), rng=random.Random(seed))
            self.assertEqual(state.created_count, state.target_count)
            self.assertEqual(state.visible_count, state.target_count)
            self.assertFalse(state.running)

            for prev, cur in zip(samples, samples[1:]):
                self.assertGreaterEqual(cur["visible"], prev["visible"])
                self.assertGreaterEqual(cur["created"], prev["created"])
                if cur["running"]:
                    self.assertLessEqual(cur["countdown"], prev["countdown"])
            for sample in samples:
                self.assertLessEqual(sample["created"], state.target_count)
                self.assertLessEqual(sample["visible"], sample["created"])
                self.assertGreaterEqual(sample["countdown"], 0)
                self.assertEqual(sample["running"], sample["elapsed_ms"] <= 30000)

    def test_emission_is_spread_over_the_run(self):
        state, samples = run_headless(RED_5_2, rng=FractionRandom(0.5))
        self.assertEqual(state.target_count, 8)
        halfway = [s for s in samples if 15000 <= s["elapsed_ms"] < 16000][0]
        self.assertTrue(2 <= halfway["created"] <= 5)

    def test_summary(self):
        state, _ = run_headless(RED_5_2, rng=FractionRandom(0.5))
        info = summary(state)
        self.assertEqual(info["filter"], "red")
        self.assertEqual(info["target"], 8)
        self.assertEqual(info["created"], 8)
        self.assertFalse(info["running"])


class CountdownLabelTests(unittest.TestCase):
    def test_padding_and_plural(self):
        self.assertEqual(countdown_label(30), ("30", "seconds"))
        self.assertEqual(countdown_label(9), (" 9", "seconds"))
        self.assertEqual(countdown_label(1), (" 1", "second"))
        self.assertEqual(countdown_label(0), (" 0", "seconds"))


if __name__ == "__main__":
    unittest.main()
