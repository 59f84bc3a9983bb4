"""Offline replay of the hover thrust EKF over a flight log.

Runs the per-tick predict → fuse sequence over time-aligned arrays of
vertical acceleration and thrust commands, as a flight controller would, and
collects the status of every update. Used by the examples, the dataset
tooling and the regression tests.

Dataset layout (written by scripts/generate_hover_flight_dataset.py):

    <data_dir>/flight.npz   t, acc_z, thrust, hover_thrust_true
    <data_dir>/config.json  generation parameters and estimator config
"""

import json
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import numpy as np

from hover_thrust.estimators.types import HoverThrustEkfConfig
from hover_thrust.estimators.zero_order_ekf import ZeroOrderHoverThrustEkf
from hover_thrust.fusion.adaptive import InnovationMonitor


def load_hover_dataset(data_dir: Union[str, Path]) -> Dict:
    """Load a hover flight dataset from directory.

    Args:
        data_dir: Path to dataset directory.

    Returns:
        Dictionary with keys:
            - 't': timestamps (N,)
            - 'acc_z': vertical acceleration (N,)
            - 'thrust': thrust commands (N,)
            - 'hover_thrust_true': ground truth hover thrust (N,)
            - 'config': configuration dict

    Raises:
        FileNotFoundError: If flight.npz or config.json is missing.
        ValueError: If the arrays do not have the same length.
    """
    data_path = Path(data_dir)

    flight = np.load(data_path / "flight.npz")
    with open(data_path / "config.json", "r") as f:
        config = json.load(f)

    dataset = {
        't': flight['t'],
        'acc_z': flight['acc_z'],
        'thrust': flight['thrust'],
        'hover_thrust_true': flight['hover_thrust_true'],
        'config': config,
    }

    n = len(dataset['t'])
    for key in ('acc_z', 'thrust', 'hover_thrust_true'):
        if len(dataset[key]) != n:
            raise ValueError(
                f"Array '{key}' has length {len(dataset[key])}, expected {n}"
            )

    return dataset


def run_hover_thrust_ekf(
    t: np.ndarray,
    acc_z: np.ndarray,
    thrust: np.ndarray,
    config: Optional[HoverThrustEkfConfig] = None,
    monitor: Optional[InnovationMonitor] = None,
    reset_noise_at: Optional[Iterable[float]] = None,
    reset_noise_on_starvation: bool = False,
) -> Dict[str, np.ndarray]:
    """Run the hover thrust EKF over a log.

    The first sample uses ``config.dt`` as time step, the following ones the
    difference of consecutive timestamps.

    Args:
        t: Timestamps in seconds (N,), strictly increasing.
        acc_z: Vertical acceleration in m/s², positive up (N,).
        thrust: Normalized thrust commands (N,), > 0.
        config: Estimator configuration (default HoverThrustEkfConfig()).
        monitor: Optional innovation monitor, updated with every sample.
                 A fresh one is created when None.
        reset_noise_at: Times at which reset_accel_noise() is called before
                        the fusion (e.g. flight mode changes).
        reset_noise_on_starvation: Call reset_accel_noise() whenever the
                                   monitor reports a starved innovation stream.

    Returns:
        Dictionary of arrays (N,): 'hover_thrust', 'hover_thrust_var',
        'innov', 'innov_var', 'innov_test_ratio', 'accel_noise_var',
        'accepted', plus 'stats' (monitor statistics) and 'n_noise_resets'.

    Raises:
        ValueError: If the inputs are inconsistent.
    """
    t = np.asarray(t, dtype=float)
    acc_z = np.asarray(acc_z, dtype=float)
    thrust = np.asarray(thrust, dtype=float)

    if t.ndim != 1:
        raise ValueError(f"t must be 1D, got shape {t.shape}")
    if acc_z.shape != t.shape or thrust.shape != t.shape:
        raise ValueError(
            f"t, acc_z and thrust must have the same shape, got "
            f"{t.shape}, {acc_z.shape} and {thrust.shape}"
        )
    if len(t) > 1 and np.any(np.diff(t) <= 0):
        raise ValueError("Timestamps must be strictly increasing")
    if np.any(thrust <= 0):
        raise ValueError("Thrust commands must be strictly positive")

    ekf = ZeroOrderHoverThrustEkf(config)
    if monitor is None:
        monitor = InnovationMonitor()

    n = len(t)
    out = {
        'hover_thrust': np.zeros(n),
        'hover_thrust_var': np.zeros(n),
        'innov': np.zeros(n),
        'innov_var': np.zeros(n),
        'innov_test_ratio': np.zeros(n),
        'accel_noise_var': np.zeros(n),
        'accepted': np.zeros(n, dtype=bool),
    }

    reset_times = sorted(reset_noise_at) if reset_noise_at is not None else []
    next_reset = 0
    n_noise_resets = 0

    for k in range(n):
        dt = ekf.config.dt if k == 0 else t[k] - t[k - 1]
        ekf.predict(dt)

        if next_reset < len(reset_times) and t[k] >= reset_times[next_reset]:
            ekf.reset_accel_noise()
            n_noise_resets += 1
            while next_reset < len(reset_times) and t[k] >= reset_times[next_reset]:
                next_reset += 1

        status = ekf.fuse_acc_z(acc_z[k], thrust[k])
        monitor.update(status.innov, status.innov_var, status.accepted)

        if reset_noise_on_starvation and monitor.is_starved:
            ekf.reset_accel_noise()
            monitor.consecutive_rejects = 0
            n_noise_resets += 1

        out['hover_thrust'][k] = status.hover_thrust
        out['hover_thrust_var'][k] = status.hover_thrust_var
        out['innov'][k] = status.innov
        out['innov_var'][k] = status.innov_var
        out['innov_test_ratio'][k] = status.innov_test_ratio
        out['accel_noise_var'][k] = status.accel_noise_var
        out['accepted'][k] = status.accepted

    out['stats'] = monitor.get_stats()
    out['n_noise_resets'] = n_noise_resets

    return out
