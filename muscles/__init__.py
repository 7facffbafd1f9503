# muscles/__init__.py

from .distributions import Distribution, Gaussian, mean_var
from .params import ActuatorParams, load_params
from .errors import MuscleError, InvalidStateError, DomainError
from .actuator import Actuator, Muscle, MusclePair


def update(actuator, prediction):
    """Evolve *actuator* toward *prediction* (a distribution, or a pair of them)."""
    return actuator.update(prediction)


def emit(actuator):
    """Replace and return the actuator's sensation."""
    return actuator.emit()


def step(actuator, prediction):
    """``update`` then ``emit``; returns the new sensation."""
    return actuator.step(prediction)


def params(actuator):
    """Read-only configuration snapshot of *actuator*."""
    return actuator.params()


__all__ = [
    'Distribution', 'Gaussian', 'mean_var',
    'ActuatorParams', 'load_params',
    'MuscleError', 'InvalidStateError', 'DomainError',
    'Actuator', 'Muscle', 'MusclePair',
    'update', 'emit', 'step', 'params',
]
