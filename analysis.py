# analysis.py
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from bubble_rates import MAX_LEVEL, FilterColor, SimulationInputs, base_rate, rate_range
from logging_config import get_logger
from simulation import run_headless, summary

logger = get_logger(__name__)

plt.style.use('dark_background')
plt.rcParams['figure.facecolor'] = '#0f1923'
plt.rcParams['axes.facecolor'] = '#1a2332'

LEVELS = list(range(0, MAX_LEVEL + 1))


# --------------------
# Tables
# --------------------
def rate_table_frame() -> pd.DataFrame:
    """One row per (filter, light, co2) with the base count and the jittered range."""
    recs = []
    for color in FilterColor:
        for light in LEVELS:
            for co2 in LEVELS:
                low, high = rate_range(color, light, co2)
                recs.append({"filter": color.value, "light": light, "co2": co2,
                             "base": base_rate(color, light, co2), "low": low, "high": high})
    return pd.DataFrame(recs).sort_values(["filter", "light", "co2"]).reset_index(drop=True)


def base_grid(df: pd.DataFrame, color: FilterColor) -> np.ndarray:
    """light x co2 matrix of base counts for one filter."""
    sub = df[df["filter"] == color.value]
    grid = sub.pivot(index="light", columns="co2", values="base")
    return grid.reindex(index=LEVELS, columns=LEVELS).to_numpy()


def samples_frame(samples: List[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(samples)
    df["seconds"] = df["elapsed_ms"] / 1000.0
    return df


# --------------------
# Plots
# --------------------
def plot_rate_heatmaps(df: pd.DataFrame, outdir) -> List[Path]:
    outdir = Path(outdir); outdir.mkdir(parents=True, exist_ok=True)
    vmax = df["base"].max()
    paths = []
    for color in FilterColor:
        grid = base_grid(df, color)
        fig, ax = plt.subplots(figsize=(7, 6))
        im = ax.imshow(grid, origin="lower", cmap="viridis", vmin=0, vmax=vmax)
        for (light, co2), value in np.ndenumerate(grid):
            ax.text(co2, light, f"{int(value)}", ha="center", va="center", fontsize=7)
        ax.set_xticks(LEVELS); ax.set_yticks(LEVELS)
        ax.set_xlabel("CO₂ level"); ax.set_ylabel("Light level")
        ax.set_title(f"Bubbles per run: {color.value} light")
        fig.colorbar(im, ax=ax, label="Base bubble count")
        path = outdir / f"rates_{color.value}.png"
        fig.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        paths.append(path)
    return paths


def plot_run_trace(samples: List[Dict[str, Any]], outdir, name: str = "run") -> Path:
    outdir = Path(outdir); outdir.mkdir(parents=True, exist_ok=True)
    df = samples_frame(samples)
    fig = plt.figure()
    plt.plot(df["seconds"], df["created"], label="Created")
    plt.plot(df["seconds"], df["visible"], label="Visible")
    plt.step(df["seconds"], df["countdown"], where="post", ls="--", alpha=0.6, label="Countdown (s)")
    plt.xlabel("Time (s)"); plt.ylabel("Bubbles")
    plt.title(f"Bubble emission: {name}")
    plt.legend(); plt.grid(True, alpha=0.3)
    path = outdir / f"{name}_trace.png"
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path


# --------------------
# Main analysis function
# --------------------
def export_all(outdir, inputs: SimulationInputs, seed: Optional[int] = None) -> Dict[str, Any]:
    """Write the rate table CSV, one heatmap per filter and a traced headless run."""
    outdir = Path(outdir); outdir.mkdir(parents=True, exist_ok=True)

    table = rate_table_frame()
    table_path = outdir / "rate_table.csv"
    table.to_csv(table_path, index=False)
    heatmaps = plot_rate_heatmaps(table, outdir)

    state, samples = run_headless(inputs, rng=random.Random(seed))
    name = f"{getattr(inputs.filter_color, 'value', inputs.filter_color)}_light{state.inputs.light}_co2{state.inputs.co2}"
    samples_frame(samples).to_csv(outdir / f"{name}_samples.csv", index=False)
    trace = plot_run_trace(samples, outdir, name)

    logger.info("Exported rate table, %d heatmaps and run trace to %s", len(heatmaps), outdir)
    return {"table": table_path, "heatmaps": heatmaps, "trace": trace, "summary": summary(state)}
