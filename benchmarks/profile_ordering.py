"""Profile ordering backends and batched bootstrap draws.

Measures median wall-clock time and peak memory of
``Predictor.get_order`` for each available backend across a grid of
sizes, and of ``generate_bootstrap_indices`` for both strategies
across a grid of replicate counts.

Usage::

    python benchmarks/profile_ordering.py          # full grid
    python benchmarks/profile_ordering.py --quick  # reduced grid for smoke test

Outputs:
    benchmarks/results/ordering_profile.csv
    benchmarks/results/bootstrap_profile.csv
    docs/image/ordering-profile/time_vs_n.png
"""

from __future__ import annotations

import argparse
import platform
import time
import tracemalloc
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from rocresample import Predictor, generate_bootstrap_indices
from rocresample._backends import resolve_backend

# ------------------------------------------------------------------ #
# Configuration
# ------------------------------------------------------------------ #

N_VALUES_FULL = [100, 1_000, 10_000, 100_000, 1_000_000]
N_VALUES_QUICK = [100, 1_000, 10_000]

B_VALUES_FULL = [100, 1_000, 2_000, 5_000]
B_VALUES_QUICK = [100, 1_000]

# The comparator-driven backend is O(n log n) Python calls.
PYTHON_BACKEND_MAX_N = 100_000

BOOT_N_CONTROLS = 500
BOOT_N_CASES = 300

REPEATS = 3
SEED_BASE = 42

RESULTS_DIR = Path(__file__).resolve().parent / "results"
IMAGE_DIR = Path(__file__).resolve().parents[1] / "docs" / "image" / "ordering-profile"


def _available_backends() -> list[str]:
    names = ["numpy", "python"]
    try:
        resolve_backend("jax")
    except ImportError:
        pass
    else:
        names.insert(1, "jax")
    return names


def _make_predictor(n: int, seed: int) -> Predictor:
    rng = np.random.default_rng(seed)
    n_controls = n // 2
    # Rounded values so that ties occur at every size.
    controls = np.round(rng.standard_normal(n_controls), 2)
    cases = np.round(rng.standard_normal(n - n_controls) + 0.5, 2)
    return Predictor(controls, cases)


# ------------------------------------------------------------------ #
# Benchmark helpers
# ------------------------------------------------------------------ #


def _timed(fn) -> tuple[float, int]:
    tracemalloc.start()
    t0 = time.perf_counter()
    fn()
    elapsed = time.perf_counter() - t0
    _, peak_bytes = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    return elapsed, peak_bytes


def run_ordering_grid(n_values: list[int], repeats: int = REPEATS) -> pd.DataFrame:
    """Time ``get_order`` per backend, size and direction."""
    rows: list[dict] = []
    for backend in _available_backends():
        for n in n_values:
            if backend == "python" and n > PYTHON_BACKEND_MAX_N:
                continue
            for direction in (">", "<"):
                times: list[float] = []
                peaks: list[float] = []
                for r in range(repeats):
                    p = _make_predictor(n, SEED_BASE + r)
                    # Warm-up so JIT compilation is not timed.
                    p.get_order(direction, backend=backend)
                    elapsed, peak = _timed(
                        lambda p=p: p.get_order(direction, backend=backend)
                    )
                    times.append(elapsed)
                    peaks.append(peak)
                row = {
                    "backend": backend,
                    "n": n,
                    "direction": direction,
                    "median_time_s": float(np.median(times)),
                    "median_peak_memory_MB": float(np.median(peaks)) / (1024 * 1024),
                }
                rows.append(row)
                print(
                    f"  backend={backend:6s} n={n:9,d} direction={direction} "
                    f"time={row['median_time_s']:.4f}s"
                )
    return pd.DataFrame(rows)


def run_bootstrap_grid(b_values: list[int], repeats: int = REPEATS) -> pd.DataFrame:
    """Time ``generate_bootstrap_indices`` per strategy and replicate count."""
    p = _make_predictor(BOOT_N_CONTROLS + BOOT_N_CASES, SEED_BASE)
    rows: list[dict] = []
    for strategy in ("stratified", "non_stratified"):
        for n_boot in b_values:
            times: list[float] = []
            peaks: list[float] = []
            for r in range(repeats):
                elapsed, peak = _timed(
                    lambda r=r: generate_bootstrap_indices(
                        p, n_boot, strategy, random_state=SEED_BASE + r
                    )
                )
                times.append(elapsed)
                peaks.append(peak)
            row = {
                "strategy": strategy,
                "n_boot": n_boot,
                "median_time_s": float(np.median(times)),
                "median_peak_memory_MB": float(np.median(peaks)) / (1024 * 1024),
            }
            rows.append(row)
            print(
                f"  strategy={strategy:14s} n_boot={n_boot:6,d} "
                f"time={row['median_time_s']:.4f}s"
            )
    return pd.DataFrame(rows)


# ------------------------------------------------------------------ #
# Chart generation
# ------------------------------------------------------------------ #


def _make_time_vs_n(df: pd.DataFrame, image_dir: Path) -> None:
    """Line plot: ordering time vs. n per backend (ascending direction)."""
    fig, ax = plt.subplots(figsize=(10, 6))
    subset = df[df["direction"] == ">"]
    for backend in subset["backend"].unique():
        b_df = subset[subset["backend"] == backend].sort_values("n")
        ax.plot(b_df["n"], b_df["median_time_s"], marker="o", label=backend)
    ax.set_xlabel("n_total")
    ax.set_ylabel("Median time (s)")
    ax.set_title("get_order time by backend")
    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.legend(title="backend")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(image_dir / "time_vs_n.png", dpi=150)
    plt.close(fig)
    print(f"  Saved {image_dir / 'time_vs_n.png'}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile ordering and bootstrap draws")
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Run a reduced grid for quick smoke testing",
    )
    args = parser.parse_args()

    n_values = N_VALUES_QUICK if args.quick else N_VALUES_FULL
    b_values = B_VALUES_QUICK if args.quick else B_VALUES_FULL

    print("=" * 60)
    print("Ordering / Bootstrap Profile")
    print("=" * 60)
    print(f"  Platform:    {platform.platform()}")
    print(f"  Python:      {platform.python_version()}")
    print(f"  NumPy:       {np.__version__}")
    print(f"  Backends:    {_available_backends()}")
    print(f"  n values:    {n_values}")
    print(f"  B values:    {b_values}")
    print(f"  Repeats:     {REPEATS}")
    print()

    print("Ordering...")
    order_df = run_ordering_grid(n_values)
    print("\nBootstrap draws...")
    boot_df = run_bootstrap_grid(b_values)

    RESULTS_DIR.mkdir(parents=True, exist_ok=True)
    order_df.to_csv(RESULTS_DIR / "ordering_profile.csv", index=False)
    boot_df.to_csv(RESULTS_DIR / "bootstrap_profile.csv", index=False)
    print(f"\nSaved results to {RESULTS_DIR}")

    IMAGE_DIR.mkdir(parents=True, exist_ok=True)
    print("\nGenerating charts...")
    _make_time_vs_n(order_df, IMAGE_DIR)

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(order_df.to_string(index=False))
    print()
    print(boot_df.to_string(index=False))


if __name__ == "__main__":
    main()
