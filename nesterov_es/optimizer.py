"""
Separable evolution strategy with Nesterov momentum on the mean

- SAMPLING: each generation draws a population z_i ~ N(0, I) around a
  LOOKAHEAD point (mean + decayed velocity) and evaluates f(lookahead + z_i*sigma).
  Non-finite costs are thrown away and redrawn.
- RANKING: candidates are sorted by cost and weighted by rank only
  (log-rank weights, the worse half gets zero).
- UPDATE: the weighted noise moves the velocity, the velocity moves the mean,
  and the weighted |z| signal rescales sigma multiplicatively (log-normal),
  one step size per coordinate, no covariance.
"""

# Standard library
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, Optional, Sequence

# Third-party
import numpy as np
import numpy.typing as npt

# Same package
from nesterov_es.params import Config, default_generations, defaults

if TYPE_CHECKING:
    from nesterov_es.tracking import GenerationTracker

CostFn = Callable[[npt.NDArray[np.float64]], float]

# E|z| for z ~ N(0, 1), i.e. sqrt(2/pi)
E0 = 0.7978845608028661


class DimensionMismatchError(ValueError):
    """The initial mean and sigma vectors have different lengths."""


class SamplingError(RuntimeError):
    """The cost function kept returning NaN/inf past the configured retry cap."""


# ---------------------------- Weights ---------------------------------
def make_weights(pop_size: int) -> npt.NDArray[np.float64]:
    """
    Rank weights for a population of pop_size (rank 0 = best).

    raw[i] = ln((p-1)/2 + 1/2) - ln(i + 1/2), floored at 0 and normalised to
    sum to 1. The result is non-negative and non-increasing in i.
    """
    ranks = np.arange(pop_size, dtype=np.float64)
    raw = np.log((pop_size - 1) * 0.5 + 0.5) - np.log(ranks + 0.5)
    raw = np.maximum(raw, 0.0)
    total = raw.sum()
    if total == 0.0:
        # pop_size == 1: the single candidate gets everything
        raw[0] = total = 1.0
    return raw / total


def population_size(n: int, requested: int = 0) -> int:
    """Smallest size >= requested with size**2 > 144*n (about 12*sqrt(n))."""
    p = requested
    while p * p <= 144 * n:
        p += 1
    return p


# ---------------------------- Sampling --------------------------------
@dataclass
class Candidate:
    z: npt.NDArray[np.float64]
    cost: float


def sample_candidate(
    fn: CostFn,
    mean: npt.NDArray[np.float64],
    sigma: npt.NDArray[np.float64],
    rng: np.random.Generator,
    max_resample: Optional[int] = None,
) -> Candidate:
    """
    Draw one candidate around (mean, sigma), redrawing on NaN/inf cost.

    With max_resample=None this retries forever: a cost function that never
    returns a finite value hangs the run.
    """
    rejected = 0
    while True:
        z = rng.standard_normal(mean.size)
        cost = float(fn(z * sigma + mean))
        if math.isfinite(cost):
            return Candidate(z, cost)
        rejected += 1
        if max_resample is not None and rejected >= max_resample:
            raise SamplingError(
                f"cost function returned a non-finite value {rejected} times in a row"
            )


@dataclass
class Population:
    """
    One generation of candidates: noise rows z (p, n) and their costs (p,).

    best/worst/median are positional (rank 0, last rank, rank p // 2), so
    they only mean what they say on a ranked() population.
    """
    z: npt.NDArray[np.float64]
    costs: npt.NDArray[np.float64]

    @classmethod
    def sample(
        cls,
        fn: CostFn,
        mean: npt.NDArray[np.float64],
        sigma: npt.NDArray[np.float64],
        size: int,
        rng: np.random.Generator,
        max_resample: Optional[int] = None,
    ) -> "Population":
        candidates = [sample_candidate(fn, mean, sigma, rng, max_resample) for _ in range(size)]
        z = np.stack([c.z for c in candidates]) if candidates else np.empty((0, mean.size))
        costs = np.array([c.cost for c in candidates], dtype=np.float64)
        return cls(z=z, costs=costs)

    def ranked(self) -> "Population":
        """Copy sorted ascending by cost."""
        order = np.argsort(self.costs, kind="stable")
        return Population(z=self.z[order], costs=self.costs[order])

    def __len__(self) -> int:
        return self.costs.size

    @property
    def best(self) -> float:
        return float(self.costs[0])

    @property
    def worst(self) -> float:
        return float(self.costs[-1])

    @property
    def median(self) -> float:
        return float(self.costs[len(self) // 2])

    @property
    def spread(self) -> float:
        return abs(self.best - self.worst)


# ----------------------------- Update ---------------------------------
def gradient_estimate(
    population: Population,
    weights: npt.NDArray[np.float64],
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Weighted noise gradient and log-sigma gradient of a ranked population.

      g[j]           = sum_i W[i] * z_i[j]
      g_log_sigma[j] = sum_i W[i] * (|z_i[j]| / E0 - 1)
    """
    # Weights never increase with rank, so nothing after the first zero counts
    k = int(np.count_nonzero(weights > 0.0))
    w = weights[:k]
    z = population.z[:k]
    g = w @ z
    g_log_sigma = w @ (np.abs(z) / E0 - 1.0)
    return g, g_log_sigma


def apply_update(
    mean: npt.NDArray[np.float64],
    sigma: npt.NDArray[np.float64],
    velocity: npt.NDArray[np.float64],
    g: npt.NDArray[np.float64],
    g_log_sigma: npt.NDArray[np.float64],
    lr_mu: float,
    lr_sigma: float,
) -> None:
    """In-place momentum step on the mean and multiplicative step on sigma."""
    velocity += lr_mu * sigma * g
    mean += velocity
    sigma *= np.exp(lr_sigma * g_log_sigma)


def has_converged(
    sigma: npt.NDArray[np.float64],
    population: Population,
    sigma_tol: float,
    delta_fn_tol: float,
) -> bool:
    if sigma.size == 0 or float(sigma.max()) <= sigma_tol:
        return True
    return population.spread <= delta_fn_tol


# ----------------------------- Driver ---------------------------------
@dataclass
class OptResult:
    """Final state of a run. Unpacks as (mu, sigma)."""
    mu: npt.NDArray[np.float64]
    sigma: npt.NDArray[np.float64]
    generations: int
    converged: bool
    population_size: int

    def __iter__(self) -> Iterator[npt.NDArray[np.float64]]:
        yield self.mu
        yield self.sigma


class NesterovES:
    """
    Owns the state of one run (mean, sigma, velocity, RNG) and steps it
    generation by generation.

    The caller's mu/sigma sequences are copied, never written to.
    """

    def __init__(
        self,
        fn: CostFn,
        mu: Sequence[float],
        sigma: Sequence[float],
        config: Optional[Config] = None,
        tracker: Optional["GenerationTracker"] = None,
    ):
        if len(mu) != len(sigma):
            raise DimensionMismatchError(
                f"mu and sigma must have the same length (got {len(mu)} and {len(sigma)})"
            )
        self.fn = fn
        self.config = config if config is not None else defaults()
        self.tracker = tracker
        self.mean = np.array(mu, dtype=np.float64)
        self.sigma = np.array(sigma, dtype=np.float64)
        self._velocity = np.zeros_like(self.mean)
        self.rng = np.random.default_rng(self.config.seed)
        self.pop_size = population_size(self.mean.size, self.config.pop_size)
        self.weights = make_weights(self.pop_size)
        self.generation = 0
        self.converged = False

    def step(self) -> Population:
        """Run one generation and return its ranked population."""
        cfg = self.config

        # Decay first, then sample around the lookahead point
        self._velocity *= cfg.momentum
        lookahead = self.mean + self._velocity

        population = Population.sample(
            self.fn, lookahead, self.sigma, self.pop_size, self.rng, cfg.max_resample,
        ).ranked()

        g, g_log_sigma = gradient_estimate(population, self.weights)
        # The mean moves by the updated velocity, not from the lookahead
        apply_update(self.mean, self.sigma, self._velocity, g, g_log_sigma, cfg.lr_mu, cfg.lr_sigma)

        if self.tracker is not None:
            self.tracker.log_generation(self.generation, population, self.mean, self.sigma)
        self.generation += 1
        return population

    def run(self) -> OptResult:
        """Step until the generation budget is spent or the run converges."""
        cfg = self.config
        while self.generation < cfg.generations:
            g = self.generation
            population = self.step()
            if has_converged(self.sigma, population, cfg.sigma_tol, cfg.delta_fn_tol):
                self.converged = True
                if cfg.verbose:
                    print(
                        f"[es] converged at gen {g}: "
                        f"max sigma={float(self.sigma.max(initial=0.0)):.3e} "
                        f"cost spread={population.spread:.3e}"
                    )
                break
            if cfg.verbose:
                print(f"[es] gen {g:04d}  mu={self.mean}  sigma={self.sigma}  median={population.median:.6g}")

        return OptResult(
            mu=self.mean.copy(),
            sigma=self.sigma.copy(),
            generations=self.generation,
            converged=self.converged,
            population_size=self.pop_size,
        )


def optimize(
    fn: CostFn,
    mu: Sequence[float],
    sigma: Sequence[float],
    config: Optional[Config] = None,
    tracker: Optional["GenerationTracker"] = None,
) -> OptResult:
    """
    Minimize fn starting from the search distribution N(mu, diag(sigma**2)).

    Parameters:
    - fn: cost function of a 1D float array; NaN/inf results are redrawn.
    - mu: initial mean.
    - sigma: initial per-coordinate standard deviation, strictly positive.
    - config: hyperparameters, params.defaults() when omitted.
    - tracker: optional GenerationTracker fed once per generation.

    Returns:
    - OptResult with the final mean and sigma.

    Raises DimensionMismatchError if mu and sigma differ in length.
    """
    es = NesterovES(fn, mu, sigma, config, tracker=tracker)
    return es.run()


def optimize_defaults(fn: CostFn, mu: Sequence[float], sigma: Sequence[float]) -> OptResult:
    """optimize() with the default config and a budget of ceil(sqrt(2n+1) * 300) generations."""
    cfg = defaults().replace(generations=default_generations(len(mu)))
    return optimize(fn, mu, sigma, cfg)
