from nesterov_es.optimizer import (
    DimensionMismatchError,
    NesterovES,
    OptResult,
    SamplingError,
    make_weights,
    optimize,
    optimize_defaults,
    population_size,
)
from nesterov_es.params import Config, defaults
from nesterov_es.utils import bounded, positive, probability

__all__ = [
    "Config",
    "DimensionMismatchError",
    "NesterovES",
    "OptResult",
    "SamplingError",
    "bounded",
    "defaults",
    "make_weights",
    "optimize",
    "optimize_defaults",
    "population_size",
    "positive",
    "probability",
]
