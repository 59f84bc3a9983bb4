"""
Example: Hover Thrust Estimation

This script runs the zero-order hover thrust EKF on a simulated (or
recorded) hover flight in which the vehicle releases a payload, and reports
how quickly the estimate converges to the new hover thrust.

Demonstrates:
    - Per-tick predict → fuse sequence of the estimator
    - Convergence after a hover thrust change
    - Online learning of the vertical acceleration noise
    - Innovation consistency (NIS) checking
"""

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from hover_thrust.estimators import (
    HoverThrustEkfConfig,
    load_hover_dataset,
    run_hover_thrust_ekf,
)
from hover_thrust.eval import (
    compute_convergence_time,
    compute_error_stats,
    compute_nis,
    compute_nis_consistency,
    plot_hover_thrust_estimate,
    plot_innovation_diagnostics,
    save_figure,
)
from hover_thrust.sim import simulate_hover_flight


def simulate_payload_drop(seed: int = 42) -> dict:
    """Simulated flight: hover thrust 0.55 → 0.44 at t = 30 s."""
    rng = np.random.default_rng(seed)
    log = simulate_hover_flight(
        duration=60.0,
        dt=0.02,
        hover_thrust=0.55,
        hover_thrust_after=0.44,
        change_time=30.0,
        accel_noise_std=1.5,
        rng=rng,
    )
    log['config'] = {'flight': {'change_time': 30.0}}
    return log


def example_hover_thrust_ekf(data_dir: str = None, save_dir: str = None):
    """Run the estimator on a flight and print a performance summary."""
    print("=" * 70)
    print("EXAMPLE: Hover Thrust Estimation with a Zero-Order EKF")
    print("=" * 70)

    if data_dir is not None:
        print(f"\nLoading dataset from {data_dir}...")
        log = load_hover_dataset(data_dir)
        config = HoverThrustEkfConfig.from_dict(log['config']['estimator'])
    else:
        print("\nSimulating payload drop flight...")
        log = simulate_payload_drop()
        # faster random walk than the default so the payload change is tracked in seconds
        config = HoverThrustEkfConfig(process_noise_var=0.0036 ** 2)

    t = log['t']
    truth = log['hover_thrust_true']
    change_time = log['config'].get('flight', {}).get('change_time')

    print(f"  Samples: {len(t)}")
    print(f"  Duration: {t[-1] - t[0]:.1f} s")
    print(f"  Initial estimate: {config.hover_thrust:.3f}")
    print(f"  True hover thrust: {truth[0]:.3f} -> {truth[-1]:.3f}")

    result = run_hover_thrust_ekf(t, log['acc_z'], log['thrust'], config=config)

    errors = result['hover_thrust'] - truth
    stats = compute_error_stats(errors[len(errors) // 10:])
    nis = compute_nis(result['innov'], result['innov_var'])
    consistency = compute_nis_consistency(nis)

    print(f"\nResults:")
    print(f"  Final estimate: {result['hover_thrust'][-1]:.4f} "
          f"(truth {truth[-1]:.4f})")
    print(f"  RMSE (after first 10%): {stats['rmse']:.4f}")
    print(f"  Max error (after first 10%): {stats['max']:.4f}")

    t_conv = compute_convergence_time(t, result['hover_thrust'], truth, tolerance=0.01)
    if t_conv is not None:
        print(f"  Initial convergence (1% thrust): {t_conv:.2f} s")
    else:
        print(f"  Initial convergence (1% thrust): not reached")
    if change_time is not None:
        t_conv = compute_convergence_time(
            t, result['hover_thrust'], truth, tolerance=0.01, t_start=change_time
        )
        if t_conv is not None:
            print(f"  Convergence after change: {t_conv:.2f} s")
        else:
            print(f"  Convergence after change: not reached")

    print(f"\nInnovation statistics:")
    print(f"  Acceptance rate: {result['stats']['acceptance_rate']:.1%}")
    print(f"  Mean NIS: {consistency['mean_nis']:.2f} (expected 1.0)")
    print(f"  NIS inside 95% bounds: {consistency['fraction_inside']:.1%}")
    print(f"  Learned accel noise std: {np.sqrt(result['accel_noise_var'][-1]):.2f} m/s²")

    fig1 = plot_hover_thrust_estimate(t, {"EKF": result}, truth=truth)
    fig2 = plot_innovation_diagnostics(t, result, gate_size=config.gate_size)

    if save_dir is not None:
        save_figure(fig1, save_dir, "hover_thrust_estimate")
        save_figure(fig2, save_dir, "innovation_diagnostics")
        print(f"\nFigures saved to {save_dir}")
    else:
        plt.show()


def main():
    parser = argparse.ArgumentParser(description="Hover thrust EKF example")
    parser.add_argument(
        "--data", type=str, default=None,
        help="Dataset directory (default: simulate a payload drop)"
    )
    parser.add_argument(
        "--save", type=str, default=None,
        help="Directory to save figures (default: show interactively)"
    )
    args = parser.parse_args()

    example_hover_thrust_ekf(data_dir=args.data, save_dir=args.save)


if __name__ == "__main__":
    main()
