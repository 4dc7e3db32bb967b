"""
Random Sources

Uniform-[0, 1) random sources injected into the physics stepper. The stepper
never owns a generator; the simulation session (or a test) hands one in so
the jitter sequence can be fixed for reproducibility.
"""

from itertools import cycle
from typing import Callable, Iterable, Optional

import numpy as np

# A zero-argument callable returning a float in [0, 1)
RandomSource = Callable[[], float]


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """
    Create a seeded uniform random source backed by numpy

    Args:
        seed: Random seed for reproducible noise (None for random)

    Returns:
        Callable returning floats uniformly distributed in [0, 1)
    """
    rng = np.random.RandomState(seed)
    return rng.random_sample


def constant_random(value: float = 0.5) -> RandomSource:
    """
    Random source that always returns the same value.

    The default midpoint 0.5 makes every centred jitter term exactly zero.
    """
    if not 0.0 <= value < 1.0:
        raise ValueError(f"Random value must be in [0, 1), got {value}")
    return lambda: value


def sequence_random(values: Iterable[float]) -> RandomSource:
    """Random source replaying a fixed sequence of values, repeating it when exhausted"""
    values = list(values)
    if not values:
        raise ValueError("Random sequence must not be empty")
    for value in values:
        if not 0.0 <= value < 1.0:
            raise ValueError(f"Random value must be in [0, 1), got {value}")
    iterator = cycle(values)
    return lambda: next(iterator)


def centered_jitter(rng: RandomSource, amplitude: float) -> float:
    """
    Uniform jitter centred on zero

    Args:
        rng: Uniform [0, 1) source
        amplitude: Peak-to-peak width of the jitter band

    Returns:
        Value uniformly distributed in [-amplitude/2, amplitude/2)
    """
    return (rng() - 0.5) * amplitude
