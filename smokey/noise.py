# =====================================================================
# Random and coherent noise source
# =====================================================================
# One seedable object hands out both uniform random numbers and smooth
# 1D noise, so a whole sketch can be replayed from a single seed.
#
# The noise is lattice value noise: a table of random values, cosine
# interpolation between neighbouring entries and several octaves whose
# amplitude halves each time. Output stays in [0, 1).
# =====================================================================

from typing import Optional, Union

import numpy as np

PERLIN_SIZE = 4095          # lattice mask (table holds PERLIN_SIZE + 1 values)
DEFAULT_OCTAVES = 4
DEFAULT_FALLOFF = 0.5

ArrayLike = Union[float, np.ndarray]


def _scaled_cosine(t):
    """Cosine ease from 0 to 1 over t in [0, 1]."""
    return 0.5 * (1.0 - np.cos(t * np.pi))


class RandomSource:
    """Seedable uniform random numbers plus coherent noise.

    Args:
        seed: Seed for numpy's default generator; None draws fresh entropy
        octaves: Number of noise octaves summed together
        falloff: Amplitude multiplier applied per octave
    """

    def __init__(self, seed: Optional[int] = None,
                 octaves: int = DEFAULT_OCTAVES,
                 falloff: float = DEFAULT_FALLOFF):
        self.seed = seed
        self.octaves = octaves
        self.falloff = falloff
        self.rng = np.random.default_rng(seed)
        self._lattice = self.rng.random(PERLIN_SIZE + 1)

    def random(self, low: float = 1.0, high: Optional[float] = None) -> float:
        """Uniform float in [0, low) with one argument, [low, high) with two."""
        if high is None:
            low, high = 0.0, low
        if low == high:
            return float(low)
        return float(self.rng.uniform(low, high))

    def noise(self, x: ArrayLike) -> ArrayLike:
        """Coherent noise at coordinate `x` (scalar or array), in [0, 1)."""
        x = np.abs(np.asarray(x, dtype=np.float64))
        xi = np.floor(x).astype(np.int64)
        xf = x - xi

        total = np.zeros_like(x)
        amplitude = 0.5
        for _ in range(self.octaves):
            lo = self._lattice[xi & PERLIN_SIZE]
            hi = self._lattice[(xi + 1) & PERLIN_SIZE]
            total += amplitude * (lo + _scaled_cosine(xf) * (hi - lo))
            amplitude *= self.falloff

            # next octave doubles the frequency
            xi = xi << 1
            xf = xf * 2.0
            carry = xf >= 1.0
            xi = np.where(carry, xi + 1, xi)
            xf = np.where(carry, xf - 1.0, xf)

        if total.ndim == 0:
            return float(total)
        return total
