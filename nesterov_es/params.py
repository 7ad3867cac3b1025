# The basic hyperparameters
import math
from dataclasses import asdict, dataclass, replace
from typing import Optional

GENERATIONS = 300       # This is the hard cap on generations per run
POP_SIZE    = 0         # 0 means "derive from the problem dimension"
SEED        = 42        # Fixed so a default run is reproducible

# The update hyperparameters
LR_MU       = 0.6       # Scales the velocity increment from the weighted noise
LR_SIGMA    = 0.15      # Scales the exponent of the multiplicative sigma update
MOMENTUM    = 0.93      # Velocity decay applied before the lookahead

# Convergence thresholds
SIGMA_TOL    = 1e-12    # Stop when every sigma is this small
DELTA_FN_TOL = 1e-12    # Stop when best and worst cost in a generation are this close

# Generations per run for the default preset: ceil(sqrt(2n+1) * GENERATIONS_SCALE)
GENERATIONS_SCALE = 300

# The Weights & Biases parameters
ENTITY  = "nesterov-es"
PROJECT = "benchmarks"


@dataclass(frozen=True)
class Config:
    """
    Hyperparameters of a single optimization run.

    Nothing is range-checked here: a negative learning rate or a momentum
    outside [0, 1) is passed straight to the update rule.
    """
    generations: int = GENERATIONS
    pop_size: int = POP_SIZE
    lr_mu: float = LR_MU
    lr_sigma: float = LR_SIGMA
    momentum: float = MOMENTUM
    sigma_tol: float = SIGMA_TOL
    delta_fn_tol: float = DELTA_FN_TOL
    verbose: bool = False
    seed: Optional[int] = SEED
    # None keeps the resampling loop unbounded
    max_resample: Optional[int] = None

    def replace(self, **changes) -> "Config":
        """Copy of this config with some fields changed."""
        return replace(self, **changes)

    def as_dict(self) -> dict:
        """Flat mapping, e.g. for wandb.init(config=...)."""
        return asdict(self)


def defaults() -> Config:
    return Config()


def default_generations(n: int) -> int:
    """Generation budget used by the default preset for an n-dimensional problem."""
    return int(math.ceil(math.sqrt(2 * n + 1) * GENERATIONS_SCALE))
