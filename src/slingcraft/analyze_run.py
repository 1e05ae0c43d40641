"""Analyze a recorded simulation run and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from collections import Counter
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from slingcraft.core.config import LOG_CFG


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            events.append(
                {
                    "t": float(row["t"]),
                    "type": row["type"],
                    "body_id": int(float(row["body_id"])),
                    "details": row.get("details", ""),
                }
            )
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def relative_energy_drift(ts: Dict[str, np.ndarray]) -> float:
    """Largest |E - E0| / |E0| over the run."""

    energy = ts.get("total", np.array([]))
    if energy.size == 0:
        return 0.0
    denom = abs(energy[0]) if abs(energy[0]) > 1e-12 else 1.0
    return float(np.max(np.abs(energy - energy[0])) / denom)


def com_excursion(ts: Dict[str, np.ndarray]) -> float:
    """Largest distance of the center of mass from its starting point."""

    com_x = ts.get("com_x", np.array([]))
    com_y = ts.get("com_y", np.array([]))
    if com_x.size == 0:
        return 0.0
    return float(np.max(np.hypot(com_x - com_x[0], com_y - com_y[0])))


def summarize_events(events: List[dict]) -> Dict[str, int]:
    return dict(Counter(event["type"] for event in events))


def plot_energy(fig_dir: Path, ts: Dict[str, np.ndarray], rel_drift: float) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["kinetic"], color="#4dabf7", label="kinetic")
    ax.plot(ts["t"], ts["potential"], color="#9775fa", label="potential")
    ax.plot(ts["t"], ts["total"], color="#ffa94d", lw=2, label="total")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("energy")
    ax.set_title(f"Energy - max relative drift {rel_drift:.2e}")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "energy.png", dpi=150)
    plt.close(fig)


def plot_center_of_mass(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(ts["com_x"], ts["com_y"], color="#6bc5c0", lw=1.5)
    ax.scatter([ts["com_x"][0]], [ts["com_y"][0]], color="#d9480f", s=30, label="start")
    ax.set_aspect("equal", "datalim")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Center of mass")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "center_of_mass.png", dpi=150)
    plt.close(fig)


def print_summary(
    run_dir: Path,
    meta: dict,
    rel_drift: float,
    excursion: float,
    event_summary: Dict[str, int],
) -> None:
    print(f"Run: {run_dir.name}")
    print(f" Scenario: {meta.get('scenario_name', 'unknown')}")
    print(f" Bodies: {len(meta.get('bodies', []))}")
    print(f" Max relative energy drift = {rel_drift:.3e}")
    print(f" Center of mass excursion = {excursion:.3e}")
    if event_summary:
        print(
            " Events: " + ", ".join(f"{etype}: {count}" for etype, count in event_summary.items())
        )


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded run and write figures.")
    parser.add_argument("run_dir", nargs="?", help="Path to a specific run directory")
    parser.add_argument("--runs-root", default=str(LOG_CFG.run_dir), help="Root of recorded runs")
    args = parser.parse_args(argv)

    base_runs_dir = Path(args.runs_root)
    if args.run_dir:
        run_path = Path(args.run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / args.run_dir
    else:
        last_run_file = base_runs_dir / "last_run.txt"
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_id = last_run_file.read_text(encoding="utf-8").strip()
        run_path = base_runs_dir / run_id

    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME

    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing meta/timeseries/events files.")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)

    if not ts or ts.get("t", np.array([])).size == 0:
        parser.error("timeseries.csv is empty - nothing to analyze.")

    fig_dir = ensure_fig_dir(run_path)
    rel_drift = relative_energy_drift(ts)
    excursion = com_excursion(ts)

    plot_energy(fig_dir, ts, rel_drift)
    plot_center_of_mass(fig_dir, ts)

    print_summary(run_path, meta, rel_drift, excursion, summarize_events(events))


if __name__ == "__main__":
    main()
