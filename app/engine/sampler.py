"""
Deterministic sampling primitives for the declaration simulator.
Mulberry32 uniform generator plus a Box-Muller normal sampler.
"""
import math

MASK_32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296.0
SEED_SCALE = 1e9
MIN_UNIFORM = 1e-9


def clamp(val, lo, hi):
    return max(lo, min(hi, val))


class Mulberry32:
    """
    Seeded 32-bit generator producing floats in [0, 1).
    Same seed gives the same sequence; each instance owns its own counter.
    """

    INCREMENT = 0x6D2B79F5

    def __init__(self, seed: int):
        self._state = int(seed) & MASK_32

    def random(self) -> float:
        self._state = (self._state + self.INCREMENT) & MASK_32
        t = self._state
        r = ((t ^ (t >> 15)) * (1 | t)) & MASK_32
        r ^= (r + (((r ^ (r >> 7)) * (61 | r)) & MASK_32)) & MASK_32
        return ((r ^ (r >> 14)) & MASK_32) / TWO_POW_32


def normal(rng: Mulberry32, mean: float, sd: float) -> float:
    """Box-Muller draw, consumes two uniforms."""
    u1 = max(rng.random(), MIN_UNIFORM)
    u2 = rng.random()
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2 * math.pi * u2)
    return mean + sd * z0


def derive_seed(parent: Mulberry32, offset: int = 0) -> int:
    """Child seed from one draw of a parent generator."""
    return int(parent.random() * SEED_SCALE + offset)


def round_runs(value: float) -> int:
    """Round half up and floor at zero, the way scorecards count runs."""
    return max(0, math.floor(value + 0.5))
