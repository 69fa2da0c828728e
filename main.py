"""
Photosynthesis Simulation
-------------------------
Analyze the impact of light color, light strength and carbon dioxide on
photosynthesis by counting the oxygen bubbles a waterweed gives off in 30
seconds.

The inputs live in config.py (FILTER_COLOR, LIGHT, CO2); edit them there.

Usage
-----
1) Interactive window (default):
     python main.py

2) Headless run with a synthetic clock, prints a summary:
     python main.py --headless --seed 3

3) Export the rate table, heatmaps and a run trace:
     python main.py --analysis out
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

import config
from logging_config import get_logger, setup_logging
from simulation import ConfigurationError, run_headless, summary

logger = get_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Photosynthesis bubble simulation")
    ap.add_argument("--ui", action="store_true", help="open the pygame window (default)")
    ap.add_argument("--headless", action="store_true", help="run without a window and print a summary")
    ap.add_argument("--analysis", metavar="OUTDIR", help="export rate table, heatmaps and a run trace")
    ap.add_argument("--seed", type=int, help="seed for the random jitter and bubble motion")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    ap.add_argument("--log-file", help="also write logs to this file")
    args = ap.parse_args(argv)

    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)
    inputs = config.current_inputs()

    try:
        if args.analysis:
            from analysis import export_all
            result = export_all(args.analysis, inputs, seed=args.seed)
            print(f"[done] analysis written to {args.analysis}: {result['summary']}")
            return 0

        if args.headless:
            state, _ = run_headless(inputs, rng=random.Random(args.seed))
            for key, value in summary(state).items():
                print(f"{key:>10}: {value}")
            return 0

        from ui import UI
        UI(inputs, seed=args.seed).run()
        return 0
    except ConfigurationError as e:
        logger.error("Cannot start simulation: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
