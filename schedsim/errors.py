from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class ConfigurationError(SchedulerError, ValueError):
    """
    The caller asked for a run that cannot be simulated: empty batch,
    non-positive burst, duplicate ids, missing quantum, malformed input...
    """


class SimulationError(SchedulerError, RuntimeError):
    """An engine invariant was broken while a run was in progress."""
