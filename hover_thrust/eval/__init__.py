"""
Evaluation and Visualization Module.

Modules:
    metrics: Error metrics (RMSE, error stats, NIS, convergence time)
    plots: Visualization of estimates and innovation diagnostics
"""

from .metrics import (
    compute_convergence_time,
    compute_error_stats,
    compute_nis,
    compute_nis_consistency,
    compute_rmse,
)
from .plots import (
    plot_hover_thrust_estimate,
    plot_innovation_diagnostics,
    save_figure,
)

__all__ = [
    # Metrics
    "compute_rmse",
    "compute_error_stats",
    "compute_nis",
    "compute_nis_consistency",
    "compute_convergence_time",
    # Plots
    "plot_hover_thrust_estimate",
    "plot_innovation_diagnostics",
    "save_figure",
]
