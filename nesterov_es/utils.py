import numpy as np

# Domain mapping: the optimizer searches over unconstrained reals, so an
# objective that needs a positive number, a probability or a bounded value
# takes a raw coordinate z and maps it with one of these:
#   - positive(z)     -> (0, inf)
#   - probability(z)  -> (0, 1)
#   - bounded(z, a, b) -> (a, b)
# All three are continuous, monotonic and equal their "middle" value at z = 0.


def positive(z: float) -> float:
    """
    Map a real number to (0, inf).

    z + 1 for z >= 0 and 1 / (1 - z) for z < 0, so positive(0) == 1 and both
    branches meet with slope 1.
    """
    if z >= 0:
        return z + 1.0
    return 1.0 / (1.0 - z)


def probability(z: float) -> float:
    """Map a real number to (0, 1); probability(0) == 0.5."""
    p = positive(z)
    return p / (1.0 + p)


def bounded(z: float, a: float, b: float) -> float:
    """Map a real number to the open interval (a, b)."""
    return probability(z) * (b - a) + a


def moving_average(x, w=5):
    """Centered moving average with window w."""
    return np.convolve(x, np.ones(w)/w, mode="valid")
