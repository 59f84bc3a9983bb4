"""Online hover thrust estimation for multirotor vehicles.

This package contains:
- estimators: Zero-order hover thrust EKF, configuration and log replay
- models: Thrust / vertical acceleration measurement model
- fusion: Innovation gating and adaptive measurement noise
- sensors: Gravity magnitude
- sim: Synthetic hover flight logs
- eval: Metrics and plots
"""

__version__ = "0.1.0"
