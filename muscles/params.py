"""
Fixed configuration shared by every actuator variant.
"""
from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from typing import Tuple

Limits = Tuple[float, float]


@dataclass(frozen=True)
class ActuatorParams:
    """Immutable configuration snapshot of an actuator.

    Attributes
    ----------
    mnoise_sd : float
        Measurement-noise standard deviation of emitted sensations.
    state_lims : tuple(float, float)
        Closed interval the state is clamped into after every update.
    action_lims : tuple(float, float)
        Bounds on admissible actions; carried for the surrounding simulation.
    dt : float
        Step size of the first-order update.
    """
    mnoise_sd: float = 1.0
    state_lims: Limits = (0.0, 1.0)
    action_lims: Limits = (-1.0, 1.0)
    dt: float = 1.0

    def __post_init__(self):
        # Normalise lists/ints coming from JSON or callers into float tuples
        object.__setattr__(self, 'mnoise_sd', float(self.mnoise_sd))
        object.__setattr__(self, 'dt', float(self.dt))
        object.__setattr__(self, 'state_lims', _limits(self.state_lims, 'state_lims'))
        object.__setattr__(self, 'action_lims', _limits(self.action_lims, 'action_lims'))

        if not self.mnoise_sd >= 0.0:
            raise ValueError(f"mnoise_sd must be >= 0, got {self.mnoise_sd}")
        if not (self.dt > 0.0 and math.isfinite(self.dt)):
            raise ValueError(f"dt must be a positive finite number, got {self.dt}")

    def as_dict(self) -> dict:
        """Plain-dict view: exactly ``mnoise_sd``, ``state_lims``, ``action_lims``, ``dt``."""
        return asdict(self)


def _limits(lims, name: str) -> Limits:
    if len(lims) != 2:
        raise ValueError(f"{name} must be a (lo, hi) pair, got {lims!r}")
    lo, hi = float(lims[0]), float(lims[1])
    if lo > hi:
        raise ValueError(f"{name} lower bound {lo} exceeds upper bound {hi}")
    return lo, hi


def load_params(path) -> ActuatorParams:
    """
    Load actuator configuration from a JSON file. Missing keys take defaults.
    """
    with open(path, "r") as f:
        cfg = json.load(f)
    unknown = set(cfg) - set(ActuatorParams.__dataclass_fields__)
    if unknown:
        raise ValueError(f"Unknown actuator config keys: {sorted(unknown)}")
    return ActuatorParams(**cfg)
