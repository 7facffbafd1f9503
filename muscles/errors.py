"""Exceptions raised by the actuator plants."""


class MuscleError(Exception):
    """Base class for all errors raised by :mod:`muscles`."""


class InvalidStateError(MuscleError, ValueError):
    """An initial state lies outside ``[0, 1]`` (or a pair is malformed)."""


class DomainError(MuscleError, ValueError):
    """A prediction cannot drive an update, e.g. its variance is not > 0."""
