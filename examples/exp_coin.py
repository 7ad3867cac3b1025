# Maximum-likelihood estimate of a coin's head probability by simulation:
# the optimizer only sees a noisy cost, and probability() keeps p in (0, 1).

import numpy as np

from nesterov_es import defaults, optimize, probability
from nesterov_es.benchmarks import make_coin_objective

HEADS, FLIPS = 50, 110


def main():
    rng = np.random.default_rng(7)  # drives the simulated tosses, not the optimizer
    cfg = defaults().replace(
        verbose=True,
        momentum=0.0,
        lr_mu=1.0,
        lr_sigma=1.0,
        pop_size=200,
        generations=200,
    )
    res = optimize(make_coin_objective(rng, HEADS, FLIPS), [0.0], [1.0], cfg)
    print("Optimized p:", probability(res.mu[0]))
    print("MLE:        ", HEADS / FLIPS)


if __name__ == "__main__":
    main()
