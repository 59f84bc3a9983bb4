"""
Visualization Utilities for Hover Thrust Estimation.

All functions return matplotlib Figure objects for flexible display/saving.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np


def plot_hover_thrust_estimate(
    t: np.ndarray,
    estimates: Dict[str, Dict[str, np.ndarray]],
    truth: Optional[np.ndarray] = None,
    title: str = "Hover Thrust Estimate",
) -> plt.Figure:
    """
    Plot hover thrust estimates with their 1-sigma bounds.

    Args:
        t: Timestamps, shape (N,)
        estimates: Dictionary {name: replay output}; each replay output must
                   contain 'hover_thrust' and 'hover_thrust_var'
        truth: True hover thrust, shape (N,) (optional)
        title: Plot title

    Returns:
        fig: Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=(12, 5))

    if truth is not None:
        ax.plot(t, truth, "k-", linewidth=2, label="Ground Truth", zorder=10)

    colors = ["blue", "red", "green", "orange", "purple"]
    linestyles = ["-", "--", "-.", ":", "-"]

    for i, (name, est) in enumerate(estimates.items()):
        color = colors[i % len(colors)]
        hover = est["hover_thrust"]
        sigma = np.sqrt(est["hover_thrust_var"])
        ax.plot(
            t,
            hover,
            linestyle=linestyles[i % len(linestyles)],
            color=color,
            linewidth=1.5,
            label=name,
        )
        ax.fill_between(t, hover - sigma, hover + sigma, color=color, alpha=0.15)

    ax.set_xlabel("Time (s)", fontsize=12)
    ax.set_ylabel("Hover thrust (-)", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig


def plot_innovation_diagnostics(
    t: np.ndarray,
    result: Dict[str, np.ndarray],
    gate_size: float = 3.0,
    title: str = "Innovation Diagnostics",
) -> plt.Figure:
    """
    Plot innovation with gate bounds, test ratio and learned noise.

    Args:
        t: Timestamps, shape (N,)
        result: Replay output ('innov', 'innov_var', 'innov_test_ratio',
                'accel_noise_var', 'accepted')
        gate_size: Gate size used in the run (sigmas)
        title: Plot title

    Returns:
        fig: Matplotlib figure
    """
    fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

    innov = result["innov"]
    gate = gate_size * np.sqrt(result["innov_var"])
    rejected = ~np.asarray(result["accepted"], dtype=bool)

    ax = axes[0]
    ax.plot(t, innov, color="blue", linewidth=0.8, label="Innovation")
    ax.plot(t, gate, "r--", linewidth=1.0, label=f"±{gate_size:g}σ gate")
    ax.plot(t, -gate, "r--", linewidth=1.0)
    if np.any(rejected):
        ax.plot(t[rejected], innov[rejected], "rx", markersize=6, label="Rejected")
    ax.set_ylabel("Innovation (m/s²)", fontsize=11)
    ax.legend(fontsize=9)
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.semilogy(t, np.maximum(result["innov_test_ratio"], 1e-6), color="green", linewidth=0.8)
    ax.axhline(y=1.0, color="r", linestyle="--", linewidth=1.0, label="Gate")
    ax.set_ylabel("Test ratio (-)", fontsize=11)
    ax.legend(fontsize=9)
    ax.grid(True, alpha=0.3)

    ax = axes[2]
    ax.plot(t, np.sqrt(result["accel_noise_var"]), color="orange", linewidth=1.2)
    ax.set_xlabel("Time (s)", fontsize=11)
    ax.set_ylabel("Accel noise std (m/s²)", fontsize=11)
    ax.grid(True, alpha=0.3)

    fig.suptitle(title, fontsize=14, fontweight="bold", y=1.0)
    plt.tight_layout()
    return fig


def save_figure(
    fig: plt.Figure,
    out_dir: Union[str, Path],
    name: str,
    formats: Tuple[str, ...] = ("svg", "pdf", "png"),
) -> List[Path]:
    """
    Save figure in multiple formats.

    Args:
        fig: Matplotlib figure to save
        out_dir: Output directory
        name: Base filename (without extension)
        formats: Tuple of format extensions

    Returns:
        paths: List of saved file paths
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for fmt in formats:
        filepath = out_dir / f"{name}.{fmt}"
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        paths.append(filepath)

    return paths
