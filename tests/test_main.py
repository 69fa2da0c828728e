"""Command line entry point tests."""

import io
import logging
import unittest
from contextlib import redirect_stdout
from unittest import mock

import config
import main
from bubble_rates import FilterColor


class MainTests(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger("photosynthesis")
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_headless_prints_summary(self):
        out = io.StringIO()
        with mock.patch.object(config, "FILTER_COLOR", FilterColor.GREEN), \
                mock.patch.object(config, "LIGHT", 3), \
                mock.patch.object(config, "CO2", 4), \
                redirect_stdout(out):
            code = main.main(["--headless", "--seed", "1", "--log-level", "ERROR"])
        self.assertEqual(code, 0)
        text = out.getvalue()
        self.assertIn("filter: green", text)
        self.assertIn("running: False", text)

    def test_unknown_filter_is_a_configuration_error(self):
        with mock.patch.object(config, "FILTER_COLOR", "purple"), redirect_stdout(io.StringIO()):
            code = main.main(["--headless", "--log-level", "ERROR"])
        self.assertEqual(code, 2)

    def test_default_inputs_are_valid(self):
        inputs = config.current_inputs()
        self.assertIn(inputs.filter_color, list(FilterColor))
        self.assertTrue(0 <= inputs.light <= 10)
        self.assertTrue(0 <= inputs.co2 <= 10)


class FilterOverlayTests(unittest.TestCase):
    def test_each_filter_has_translucent_overlay(self):
        overlays = {config.filter_overlay(c) for c in FilterColor}
        self.assertEqual(len(overlays), 4)
        for rgba in overlays:
            self.assertEqual(len(rgba), 4)
            self.assertLess(rgba[3], 255)


if __name__ == "__main__":
    unittest.main()
