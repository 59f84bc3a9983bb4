"""
Generate Hover Flight Dataset.

Creates a synthetic hover flight log for hover thrust estimation with:
    - True hover thrust profile (optionally stepping: payload drop/pick-up)
    - Commanded thrust with a small sinusoidal excitation
    - Vertical acceleration from the thrust model, vibration noise and
      optional impulsive outliers

Saves to: data/sim/<dataset_name>/
    flight.npz   : t, acc_z, thrust, hover_thrust_true, is_outlier
    config.json  : generation parameters and estimator configuration
"""

import argparse
import json
import sys
from pathlib import Path

import numpy as np

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hover_thrust.estimators.types import HoverThrustEkfConfig
from hover_thrust.sensors.gravity import gravity_magnitude, gravity_magnitude_from_lat_deg
from hover_thrust.sim.hover_flight import simulate_hover_flight


# ============================================================================
# PRESET CONFIGURATIONS
# ============================================================================

PRESETS = {
    'baseline': {
        'description': 'Steady hover, moderate vibrations',
        'hover_thrust': 0.45,
        'hover_thrust_after': None,
        'change_time': None,
        'accel_noise_std': 1.5,
        'outlier_prob': 0.0,
    },
    'payload_drop': {
        'description': 'Hover thrust drops by 20% at t=30 s (payload released)',
        'hover_thrust': 0.55,
        'hover_thrust_after': 0.44,
        'change_time': 30.0,
        'accel_noise_std': 1.5,
        'outlier_prob': 0.0,
    },
    'high_vibration': {
        'description': 'Steady hover on an airframe with strong vibrations',
        'hover_thrust': 0.45,
        'hover_thrust_after': None,
        'change_time': None,
        'accel_noise_std': 6.0,
        'outlier_prob': 0.0,
    },
    'outliers': {
        'description': 'Steady hover with 2% impulsive disturbances',
        'hover_thrust': 0.45,
        'hover_thrust_after': None,
        'change_time': None,
        'accel_noise_std': 1.5,
        'outlier_prob': 0.02,
    },
}


def generate_dataset(
    output_dir: str = "data/sim/hover_flight_baseline",
    seed: int = 42,
    duration: float = 60.0,
    dt: float = 0.02,
    hover_thrust: float = 0.45,
    hover_thrust_after: float = None,
    change_time: float = None,
    excitation_amplitude: float = 0.05,
    excitation_freq: float = 0.5,
    accel_noise_std: float = 1.5,
    outlier_prob: float = 0.0,
    outlier_magnitude: float = 20.0,
    latitude_deg: float = None,
) -> None:
    """Generate and save a hover flight dataset.

    Args:
        output_dir: Output directory path.
        seed: Random seed for reproducibility.
        duration: Dataset duration (s).
        dt: Sample period (s).
        hover_thrust: True hover thrust.
        hover_thrust_after: True hover thrust after the step change.
        change_time: Time of the step change (s).
        excitation_amplitude: Relative thrust excitation amplitude.
        excitation_freq: Thrust excitation frequency (Hz).
        accel_noise_std: Vibration noise std (m/s²).
        outlier_prob: Probability of an impulsive disturbance per sample.
        outlier_magnitude: Std of the impulsive disturbances (m/s²).
        latitude_deg: Latitude for local gravity (None: standard gravity).
    """
    rng = np.random.default_rng(seed)

    if latitude_deg is None:
        g = gravity_magnitude()
    else:
        g = gravity_magnitude_from_lat_deg(latitude_deg)

    print(f"\n{'='*70}")
    print(f"Generating Hover Flight Dataset")
    print(f"{'='*70}")

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    print(f"\n1. Simulating flight...")
    print(f"   Duration: {duration} s")
    print(f"   Time step: {dt} s")
    print(f"   Gravity: {g:.5f} m/s²")

    log = simulate_hover_flight(
        duration=duration,
        dt=dt,
        hover_thrust=hover_thrust,
        hover_thrust_after=hover_thrust_after,
        change_time=change_time,
        excitation_amplitude=excitation_amplitude,
        excitation_freq=excitation_freq,
        accel_noise_std=accel_noise_std,
        outlier_prob=outlier_prob,
        outlier_magnitude=outlier_magnitude,
        gravity=g,
        rng=rng,
    )

    print(f"   Generated {len(log['t'])} samples")
    print(f"   Outliers: {int(np.count_nonzero(log['is_outlier']))}")

    np.savez(
        output_path / "flight.npz",
        t=log['t'],
        acc_z=log['acc_z'],
        thrust=log['thrust'],
        hover_thrust_true=log['hover_thrust_true'],
        is_outlier=log['is_outlier'],
    )
    print(f"   Saved: flight.npz")

    print(f"\n2. Saving configuration...")

    estimator_config = HoverThrustEkfConfig(gravity=g, dt=dt)

    config = {
        "dataset_info": {
            "description": "Synthetic multirotor hover flight",
            "seed": seed,
            "duration_sec": duration,
            "num_samples": int(len(log['t'])),
        },
        "flight": {
            "hover_thrust": hover_thrust,
            "hover_thrust_after": hover_thrust_after,
            "change_time": change_time,
            "excitation_amplitude": excitation_amplitude,
            "excitation_freq_hz": excitation_freq,
        },
        "sensor": {
            "rate_hz": 1.0 / dt,
            "accel_noise_std": accel_noise_std,
            "outlier_prob": outlier_prob,
            "outlier_magnitude": outlier_magnitude,
        },
        "estimator": estimator_config.to_dict(),
    }

    with open(output_path / "config.json", "w") as f:
        json.dump(config, f, indent=2)

    print(f"   Saved: config.json")

    print(f"\n{'='*70}")
    print(f"Dataset generation complete!")
    print(f"{'='*70}")
    print(f"Output directory: {output_path.absolute()}")
    print(f"\n")


# ============================================================================
# COMMAND-LINE INTERFACE
# ============================================================================

def main():
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Generate a synthetic hover flight dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate with default parameters
  python %(prog)s

  # Use a preset configuration
  python %(prog)s --preset payload_drop --output data/sim/hover_flight_payload_drop

  # Custom parameters
  python %(prog)s --hover-thrust 0.38 --accel-noise 3.0 --duration 120

Available presets: """ + ", ".join(PRESETS.keys())
    )

    parser.add_argument(
        '--preset',
        type=str,
        choices=PRESETS.keys(),
        help='Use preset configuration (overrides individual parameters)'
    )
    parser.add_argument(
        '--output',
        type=str,
        default='data/sim/hover_flight_baseline',
        help='Output directory (default: data/sim/hover_flight_baseline)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=42,
        help='Random seed for reproducibility (default: 42)'
    )

    flight_group = parser.add_argument_group('Flight Parameters')
    flight_group.add_argument(
        '--duration', type=float, default=60.0,
        help='Flight duration in seconds (default: 60.0)'
    )
    flight_group.add_argument(
        '--dt', type=float, default=0.02,
        help='Sample period in seconds (default: 0.02)'
    )
    flight_group.add_argument(
        '--hover-thrust', type=float, default=0.45,
        help='True hover thrust (default: 0.45)'
    )
    flight_group.add_argument(
        '--hover-thrust-after', type=float, default=None,
        help='True hover thrust after the step change (default: no change)'
    )
    flight_group.add_argument(
        '--change-time', type=float, default=None,
        help='Time of the hover thrust change in seconds (default: no change)'
    )
    flight_group.add_argument(
        '--excitation', type=float, default=0.05,
        help='Relative thrust excitation amplitude (default: 0.05)'
    )
    flight_group.add_argument(
        '--latitude', type=float, default=None,
        help='Latitude in degrees for local gravity (default: standard gravity)'
    )

    sensor_group = parser.add_argument_group('Sensor Parameters')
    sensor_group.add_argument(
        '--accel-noise', type=float, default=1.5,
        help='Vibration noise std in m/s² (default: 1.5)'
    )
    sensor_group.add_argument(
        '--outlier-prob', type=float, default=0.0,
        help='Probability of an impulsive disturbance per sample (default: 0.0)'
    )

    args = parser.parse_args()

    params = {
        'hover_thrust': args.hover_thrust,
        'hover_thrust_after': args.hover_thrust_after,
        'change_time': args.change_time,
        'accel_noise_std': args.accel_noise,
        'outlier_prob': args.outlier_prob,
    }

    if args.preset:
        preset_config = PRESETS[args.preset]
        print(f"\nUsing preset: '{args.preset}'")
        print(f"Description: {preset_config['description']}")
        for key, value in preset_config.items():
            if key != 'description':
                params[key] = value

    if args.duration <= 0:
        parser.error("Duration must be positive")
    if args.dt <= 0 or args.dt > args.duration:
        parser.error("Time step must be positive and less than duration")

    generate_dataset(
        output_dir=args.output,
        seed=args.seed,
        duration=args.duration,
        dt=args.dt,
        excitation_amplitude=args.excitation,
        latitude_deg=args.latitude,
        **params,
    )


if __name__ == "__main__":
    main()
