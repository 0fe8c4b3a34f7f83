"""
Random Sources for Blob Placement

WichmannHill is the classic three-generator combination (Wichmann & Hill,
Applied Statistics AS 183, 1982). Three small multiplicative congruential
generators run side by side and their fractional sum is taken mod 1:

  s1 <- 171 * s1 mod 30269
  s2 <- 172 * s2 mod 30307
  s3 <- 170 * s3 mod 30323
  u  = (s1/30269 + s2/30307 + s3/30323) mod 1

Period is ~6.95e12. The moduli and multipliers must not change: stamp
positions for a given seed are reproducible across runs and machines.

The engine only needs something with draw() -> float in [0, 1), so any
RandomSource can stand in (NumpyRandomSource for non-repeatable runs).
"""

from abc import ABC, abstractmethod
import numbers
import numpy as np

from .errors import InvalidSeed

SEED_MIN = 1
SEED_MAX = 30000

_MODULI = (30269, 30307, 30323)
_MULTIPLIERS = (171, 172, 170)


class RandomSource(ABC):
    """Anything that yields uniform floats in [0, 1)."""

    @abstractmethod
    def draw(self):
        """Return the next value in [0, 1)."""


def validate_seed_component(value):
    """Return value as int if it is an integer in [SEED_MIN, SEED_MAX]."""
    # bool is an Integral subclass but True/False are not seeds
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidSeed(f"Seed component must be an integer, got {value!r}")
    if not SEED_MIN <= value <= SEED_MAX:
        raise InvalidSeed(
            f"Seed component {value!r} outside [{SEED_MIN}, {SEED_MAX}]")
    return int(value)


class WichmannHill(RandomSource):

    def __init__(self, seed=(100, 100, 100)):
        """
        Args:
            seed: Three integers, each in [1, 30000]
        """
        try:
            components = list(seed)
        except TypeError:
            raise InvalidSeed(f"Seed must be a sequence of 3 integers, got {seed!r}")
        if len(components) != 3:
            raise InvalidSeed(
                f"Seed must have exactly 3 components, got {len(components)}")
        self.s1, self.s2, self.s3 = (validate_seed_component(c) for c in components)

    @property
    def state(self):
        """Current (s1, s2, s3) triple."""
        return (self.s1, self.s2, self.s3)

    def draw(self):
        """Advance all three generators and return their combined fraction."""
        m1, m2, m3 = _MODULI
        a1, a2, a3 = _MULTIPLIERS
        self.s1 = (a1 * self.s1) % m1
        self.s2 = (a2 * self.s2) % m2
        self.s3 = (a3 * self.s3) % m3
        return (self.s1 / m1 + self.s2 / m2 + self.s3 / m3) % 1.0

    def __repr__(self):
        return f"WichmannHill(state={self.state})"


class NumpyRandomSource(RandomSource):
    """Non-repeatable source backed by numpy's default Generator."""

    def __init__(self, seed=None):
        self._rng = np.random.default_rng(seed)

    def draw(self):
        return float(self._rng.random())
