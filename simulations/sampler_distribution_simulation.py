"""
Sampler Distribution Simulation: 50 Seed Analysis
==================================================
Runs the death sampler across many seeds to check the statistical shape
the dashboard relies on.

Outputs:
1. Hotspot vs Random Location split (expected ~80/20)
2. Per-hotspot share (expected uniform, density weights unused)
3. Area uniformity inside hotspot discs (share within r/2 ~ 25%)
4. Hour-of-day vs timestamp hour correlation (expected ~0, independent draws)
5. Charts saved to simulations/output/

Run with: python simulations/sampler_distribution_simulation.py
"""

import math
import os
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.hotspots import UNASSIGNED_LABEL, find_hotspot  # noqa: E402
from app.core.sampler import HOTSPOT_PROBABILITY, generate_deaths, make_rng  # noqa: E402

NUM_SEEDS = 50
DEATHS_PER_SEED = 5000
OUTPUT_DIR = Path(__file__).parent / "output"


# ============================================================================
# SIMULATION
# ============================================================================

def run_simulation(num_seeds: int = NUM_SEEDS, count: int = DEATHS_PER_SEED) -> pd.DataFrame:
    """Generate deaths for each seed and flatten into one DataFrame."""
    rows = []
    for seed in range(num_seeds):
        for death in generate_deaths(count, rng=make_rng(seed)):
            hotspot = find_hotspot(death.hotspot)
            # Normalized radial distance inside the generating disc (NaN if random)
            radial = (
                math.hypot(death.x - hotspot.x, death.y - hotspot.y) / hotspot.radius
                if hotspot
                else np.nan
            )
            rows.append({
                "seed": seed,
                "x": death.x,
                "y": death.y,
                "hotspot": death.hotspot,
                "radial": radial,
                "hour_of_day": death.hour_of_day,
                "timestamp_hour": death.timestamp.hour,
                "month": death.timestamp.month,
                "wealth_lost": death.wealth_lost,
                "player_level": death.player_level,
            })
    return pd.DataFrame(rows)


def summarize(df: pd.DataFrame) -> dict:
    """Compute the checks the dashboard's visual density depends on."""
    attributed = df["hotspot"] != UNASSIGNED_LABEL
    in_disc = df.loc[attributed, "radial"]

    hotspot_shares = (
        df.loc[attributed, "hotspot"].value_counts(normalize=True).sort_index()
    )

    return {
        "total_deaths": len(df),
        "hotspot_share": attributed.mean(),
        "hotspot_share_expected": HOTSPOT_PROBABILITY,
        "within_half_radius": (in_disc <= 0.5).mean(),
        "per_hotspot_share": hotspot_shares.to_dict(),
        "hour_vs_timestamp_corr": df["hour_of_day"].corr(df["timestamp_hour"]),
        "wealth_vs_level_corr": df["wealth_lost"].corr(df["player_level"]),
    }


# ============================================================================
# CHARTS
# ============================================================================

def plot_density(df: pd.DataFrame, output_dir: Path) -> None:
    """Death density on the reference plane for a single seed."""
    single = df[df["seed"] == 0]
    fig, ax = plt.subplots(figsize=(8, 8))
    sns.kdeplot(data=single, x="x", y="y", fill=True, cmap="rocket", levels=30, ax=ax)
    ax.scatter(single["x"], single["y"], s=2, c="red", alpha=0.3)
    ax.set_xlim(0, 800)
    ax.set_ylim(800, 0)
    ax.set_title("Death Density (seed 0)")
    fig.savefig(output_dir / "density.png", dpi=120, bbox_inches="tight")
    plt.close(fig)


def plot_radial_distribution(df: pd.DataFrame, output_dir: Path) -> None:
    """Radial distance histogram; area-uniform sampling gives a linear ramp."""
    radial = df["radial"].dropna()
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.histplot(radial, bins=40, stat="density", ax=ax, color="#3b82f6")
    r = np.linspace(0, 1, 100)
    ax.plot(r, 2 * r, color="red", linestyle="--", label="Area-uniform (2r)")
    ax.set_xlabel("Distance from hotspot center / radius")
    ax.set_title("Radial Distribution Inside Hotspots")
    ax.legend()
    fig.savefig(output_dir / "radial_distribution.png", dpi=120, bbox_inches="tight")
    plt.close(fig)


def plot_time_distributions(df: pd.DataFrame, output_dir: Path) -> None:
    """Hour-of-day and month distributions for a single seed."""
    single = df[df["seed"] == 0]
    hours = single["hour_of_day"].value_counts().reindex(range(24), fill_value=0)
    months = single["month"].value_counts().reindex(range(1, 13), fill_value=0)

    fig, axes = plt.subplots(1, 2, figsize=(14, 4))
    sns.barplot(x=list(range(24)), y=hours.tolist(), ax=axes[0], color="#3b82f6")
    axes[0].set_title("Deaths by Hour of Day")
    sns.barplot(x=list(range(1, 13)), y=months.tolist(), ax=axes[1], color="#f59e0b")
    axes[1].set_title("Deaths by Month")
    fig.savefig(output_dir / "time_distributions.png", dpi=120, bbox_inches="tight")
    plt.close(fig)


def main():
    print(f"Simulating {NUM_SEEDS} seeds x {DEATHS_PER_SEED} deaths...")
    df = run_simulation()
    summary = summarize(df)

    print("\n" + "=" * 60)
    print("SAMPLER DISTRIBUTION SUMMARY")
    print("=" * 60)
    print(f"Total deaths:              {summary['total_deaths']:,}")
    print(f"Hotspot share:             {summary['hotspot_share']:.3f} "
          f"(expected {summary['hotspot_share_expected']:.2f})")
    print(f"Within half radius:        {summary['within_half_radius']:.3f} (expected 0.25)")
    print(f"Hour vs timestamp hour r:  {summary['hour_vs_timestamp_corr']:+.4f} (expected ~0)")
    print(f"Wealth vs level r:         {summary['wealth_vs_level_corr']:+.4f} (expected ~0)")
    print("\nPer-hotspot share (expected 0.20 each):")
    for name, share in summary["per_hotspot_share"].items():
        print(f"  {name:<35} {share:.3f}")

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    sns.set_theme(style="darkgrid")
    plot_density(df, OUTPUT_DIR)
    plot_radial_distribution(df, OUTPUT_DIR)
    plot_time_distributions(df, OUTPUT_DIR)
    print(f"\nCharts saved to {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
