# Benchmark objectives with known minima, plus a small command-line runner:
#   python -m nesterov_es.benchmarks --objective valley --verbose

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Callable

import numpy as np

from nesterov_es.optimizer import optimize
from nesterov_es.params import SEED, default_generations, defaults
from nesterov_es.tracking import GenerationTracker
from nesterov_es.utils import probability


def sphere(x: np.ndarray) -> float:
    """Squared distance to [0, 1, ..., n-1]."""
    target = np.arange(x.size, dtype=float)
    return float(np.sum((x - target) ** 2))


def parabola(x: np.ndarray) -> float:
    """(x0 - 5)^2, minimum at [5]."""
    return float((x[0] - 5.0) ** 2)


def valley(x: np.ndarray, a: float = 4.0, b: float = -3.0) -> float:
    """Narrow diagonal valley, minimum at [a, b]."""
    return float((x[0] - a) ** 2 + 100.0 * (x[0] + x[1] - a - b) ** 2)


def make_coin_objective(
    rng: np.random.Generator,
    heads: int = 50,
    flips: int = 110,
) -> Callable[[np.ndarray], float]:
    """
    Noisy objective: simulate `flips` tosses of a coin with
    p = probability(x[0]) and score the squared gap between the simulated
    and the observed head rate. The optimum is p = heads / flips.
    """
    observed = heads / flips

    def cost(x: np.ndarray) -> float:
        p = probability(float(x[0]))
        h = np.count_nonzero(rng.random(flips) < p)
        return float((h / flips - observed) ** 2)

    return cost


OBJECTIVES = {
    "sphere": sphere,
    "parabola": parabola,
    "valley": valley,
}

# Fixed dimensionality (None = take --dim)
DIMS = {
    "sphere": None,
    "parabola": 1,
    "valley": 2,
}


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Run the optimizer on a benchmark objective")
    ap.add_argument("--objective", choices=sorted(OBJECTIVES), default="sphere")
    ap.add_argument("--dim", type=int, default=10, help="Dimension (sphere only)")
    ap.add_argument("--sigma0", type=float, default=1.0, help="Initial sigma for every coordinate")
    ap.add_argument("--generations", type=int, default=None, help="Default: ceil(sqrt(2n+1) * 300)")
    ap.add_argument("--pop-size", type=int, default=0, help="0 = derive from the dimension")
    ap.add_argument("--seed", type=int, default=SEED)
    ap.add_argument("--verbose", action="store_true")
    ap.add_argument("--wandb", action="store_true", help="Log generations to Weights & Biases")
    ap.add_argument("--out", type=str, default=None, help="Directory for the per-generation table")
    args = ap.parse_args(argv)

    n = DIMS[args.objective] or args.dim
    cfg = defaults().replace(
        generations=args.generations if args.generations is not None else default_generations(n),
        pop_size=args.pop_size,
        seed=args.seed,
        verbose=args.verbose,
    )

    tracker = None
    if args.wandb or args.out:
        tracker = GenerationTracker(
            f"{args.objective}-seed{args.seed}",
            use_wandb=args.wandb,
            config={**cfg.as_dict(), "objective": args.objective, "dim": n},
        )

    res = optimize(OBJECTIVES[args.objective], np.zeros(n), np.full(n, args.sigma0), cfg, tracker=tracker)

    summary = {
        "objective": args.objective,
        "mu": res.mu.tolist(),
        "sigma": res.sigma.tolist(),
        "cost": OBJECTIVES[args.objective](res.mu),
        "generations": res.generations,
        "converged": res.converged,
        "population_size": res.population_size,
    }
    if tracker is not None:
        summary["history"] = str(tracker.finish(Path(args.out) if args.out else Path("wandb_artifacts")))

    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
