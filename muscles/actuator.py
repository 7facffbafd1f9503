"""Actuator plants driven by precision-weighted prediction error.

Every call cycle an external estimator hands the plant a *prediction* (a
distribution over the desired state).  ``update`` moves the state toward the
predicted mean with gain ``dt / variance`` and clamps it into ``state_lims``;
``emit`` publishes a *sensation*, a distribution centred on the new state with
variance ``mnoise_sd ** 2``.
"""
from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from .distributions import Distribution, Gaussian, mean_var
from .errors import DomainError, InvalidStateError
from .logger import get_logger
from .params import ActuatorParams

log = get_logger(__name__)

# Initial states are validated against the unit interval, independent of state_lims
INIT_RANGE = (0.0, 1.0)


def _check_init(value: float) -> float:
    value = float(value)
    if not INIT_RANGE[0] <= value <= INIT_RANGE[1]:
        raise InvalidStateError(f"Initial state has to be in [0,1], got {value}")
    return value


def _moments(prediction) -> Tuple[float, float]:
    """Extract ``(mean, variance)`` and reject anything that cannot drive an update."""
    m, v = mean_var(prediction)
    if not v > 0.0:
        log.warning("rejected prediction %r: variance %s is not > 0", prediction, v)
        raise DomainError(f"Prediction variance must be > 0, got {v}")
    if not math.isfinite(m):
        log.warning("rejected prediction %r: mean %s is not finite", prediction, m)
        raise DomainError(f"Prediction mean must be finite, got {m}")
    return m, v


def _drive(state: float, m: float, var_scale: float, dt: float) -> float:
    """Precision-weighted correction ``dt * (m - state) / var_scale``."""
    if math.isinf(var_scale):
        return 0.0
    return dt * (m - state) / var_scale


class Actuator:
    """Base class for actuator plants.

    Subclasses implement ``update`` and ``emit``; ``step`` composes them.
    Configuration is frozen at construction and exposed through ``params``.
    """

    def __init__(self, params: ActuatorParams):
        self._params = params

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def params(self) -> ActuatorParams:
        """Read-only snapshot of ``mnoise_sd``, ``state_lims``, ``action_lims`` and ``dt``."""
        return self._params

    @property
    def mnoise_sd(self) -> float:
        return self._params.mnoise_sd

    @property
    def state_lims(self) -> Tuple[float, float]:
        return self._params.state_lims

    @property
    def action_lims(self) -> Tuple[float, float]:
        return self._params.action_lims

    @property
    def dt(self) -> float:
        return self._params.dt

    # ------------------------------------------------------------------
    # Control protocol
    # ------------------------------------------------------------------
    def update(self, prediction):
        """Evolve the state toward *prediction*; to be implemented by subclasses."""
        raise NotImplementedError

    def emit(self):
        """Replace and return the sensation; to be implemented by subclasses."""
        raise NotImplementedError

    def step(self, prediction):
        """``update`` followed by ``emit``. Returns the new sensation."""
        self.update(prediction)
        return self.emit()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_sensation(self, state: float) -> Gaussian:
        # mnoise_sd is a standard deviation at construction and on every emit
        return Gaussian(state, self._params.mnoise_sd ** 2)

    def _clamp(self, new_state):
        lo, hi = self._params.state_lims
        clamped = np.clip(new_state, lo, hi)
        if np.any(clamped != new_state):
            log.debug("%s saturated: %s clamped to %s", type(self).__name__, new_state, clamped)
        return clamped


class Muscle(Actuator):
    """Single actuator with one scalar state in a bounded interval."""

    def __init__(self, init_state: float = 0.0, state_lims=(0.0, 1.0), action_lims=(-1.0, 1.0),
                 mnoise_sd: float = 1.0, dt: float = 1.0):
        self._init(_check_init(init_state),
                   ActuatorParams(mnoise_sd=mnoise_sd, state_lims=state_lims,
                                  action_lims=action_lims, dt=dt))

    @classmethod
    def from_params(cls, params: ActuatorParams, init_state: float = 0.0) -> "Muscle":
        """Build a muscle from an existing configuration snapshot."""
        obj = cls.__new__(cls)
        obj._init(_check_init(init_state), params)
        return obj

    def _init(self, init_state: float, params: ActuatorParams):
        super().__init__(params)
        self._state = init_state
        self._prediction = Gaussian(0.0, 1.0)
        self._sensation = self._make_sensation(init_state)
        log.debug("created %r", self)

    @property
    def state(self) -> float:
        return self._state

    @property
    def prediction(self):
        return self._prediction

    @property
    def sensation(self) -> Gaussian:
        return self._sensation

    def update(self, prediction: Distribution) -> float:
        """Move the state toward the predicted mean with gain ``dt / variance``.

        Raises
        ------
        DomainError
            If the prediction variance is not strictly positive.  The muscle
            is left untouched.
        """
        m, v = _moments(prediction)
        new_state = self._state + _drive(self._state, m, v, self.dt)

        self._state = float(self._clamp(new_state))
        self._prediction = prediction
        return self._state

    def emit(self) -> Gaussian:
        self._sensation = self._make_sensation(self._state)
        return self._sensation

    def __repr__(self):
        return f"Muscle(state={self._state}, mnoise_sd={self.mnoise_sd}, state_lims={self.state_lims}, dt={self.dt})"


class MusclePair(Actuator):
    """Pair of opposing muscles (e.g. flexor/extensor) with reciprocal inhibition.

    Each side is pulled toward its own predicted mean and held back by the
    antagonist's precision-weighted prediction error::

        e_i   = dt * (m_i - s_i) / (2 * v_i)
        s_1' = s_1 + e_1 - e_2
        s_2' = s_2 + e_2 - e_1

    Both sides share one ``ActuatorParams``.
    """

    def __init__(self, init_state: Sequence[float] = (0.5, 0.5), state_lims=(0.0, 1.0),
                 action_lims=(-1.0, 1.0), mnoise_sd: float = 1.0, dt: float = 1.0):
        self._init(_check_pair(init_state),
                   ActuatorParams(mnoise_sd=mnoise_sd, state_lims=state_lims,
                                  action_lims=action_lims, dt=dt))

    @classmethod
    def from_params(cls, params: ActuatorParams, init_state: Sequence[float] = (0.5, 0.5)) -> "MusclePair":
        """Build a pair from an existing configuration snapshot."""
        obj = cls.__new__(cls)
        obj._init(_check_pair(init_state), params)
        return obj

    def _init(self, init_state: Tuple[float, float], params: ActuatorParams):
        super().__init__(params)
        self._states = init_state
        self._prediction = (Gaussian(0.5, 1.0), Gaussian(0.5, 1.0))
        self._sensation = tuple(self._make_sensation(s) for s in init_state)
        log.debug("created %r", self)

    @property
    def states(self) -> Tuple[float, float]:
        return self._states

    @property
    def prediction(self) -> tuple:
        return self._prediction

    @property
    def sensation(self) -> Tuple[Gaussian, Gaussian]:
        return self._sensation

    def update(self, predictions: Sequence[Distribution]) -> Tuple[float, float]:
        """Apply the reciprocal-inhibition law to both sides and clamp elementwise.

        Raises
        ------
        DomainError
            If ``predictions`` is not a pair or either variance is not > 0.
            The pair is left untouched.
        """
        predictions = tuple(predictions)
        if len(predictions) != 2:
            raise DomainError(f"MusclePair expects 2 predictions, got {len(predictions)}")
        moments = [_moments(p) for p in predictions]

        # Half-weighted error per side; each side is inhibited by its antagonist
        e1, e2 = (_drive(s, m, 2.0 * v, self.dt) for s, (m, v) in zip(self._states, moments))
        # Equal infinite drives (tiny variances, same sign) cancel
        d = e1 - e2
        if math.isnan(d):
            d = 0.0
        s1, s2 = self._states
        new_states = np.array([s1 + d, s2 - d])

        clamped = self._clamp(new_states)
        self._states = (float(clamped[0]), float(clamped[1]))
        self._prediction = predictions
        return self._states

    def emit(self) -> Tuple[Gaussian, Gaussian]:
        self._sensation = tuple(self._make_sensation(s) for s in self._states)
        return self._sensation

    def __repr__(self):
        return f"MusclePair(states={self._states}, mnoise_sd={self.mnoise_sd}, state_lims={self.state_lims}, dt={self.dt})"


def _check_pair(init_state) -> Tuple[float, float]:
    init_state = tuple(init_state)
    if len(init_state) != 2:
        raise InvalidStateError(f"Initial states must be a pair, got {len(init_state)} values")
    if not all(INIT_RANGE[0] <= float(s) <= INIT_RANGE[1] for s in init_state):
        raise InvalidStateError(f"Initial states have to be in [0,1], got {init_state}")
    return float(init_state[0]), float(init_state[1])
