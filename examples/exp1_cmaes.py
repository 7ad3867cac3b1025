# =========================
# EXPERIMENT 1 (CMA-ES reference)
# Same task as experiment 0, solved by pycma with its default population size.
# =========================

import os

import cma
import numpy as np

from nesterov_es.benchmarks import sphere

# Same directory
from params import DIM, GENERATIONS, RESULTS_DIR, SEEDS, SIGMA_INIT


def run_one_seed(seed):
    """
    Running CMA-ES once (with a fixed random seed) and return:
      - Best cost per generation: array, length = GENERATIONS
      - Best overall cost
    """
    es = cma.CMAEvolutionStrategy(
        np.zeros(DIM),
        SIGMA_INIT,
        {'seed': seed, 'verbose': -9}  # quiet logs
    )

    best_per_gen = []
    for g in range(GENERATIONS):
        # ask(): sampling a whole population of candidate solutions
        population = es.ask()
        costs = [sphere(np.asarray(x, dtype=np.float64)) for x in population]
        # tell(): giving CMA-ES the evaluated costs so it can update its search distribution
        es.tell(population, costs)
        best_per_gen.append(min(costs))

    print(f"[seed {seed}] best={es.best.f:.3e}")
    return np.array(best_per_gen, dtype=float), float(es.best.f)


def main():
    os.makedirs(RESULTS_DIR, exist_ok=True)

    curves = np.vstack([run_one_seed(seed)[0] for seed in SEEDS])
    np.save(f"{RESULTS_DIR}/exp1_cmaes_mean.npy", curves.mean(axis=0))
    np.save(f"{RESULTS_DIR}/exp1_cmaes_std.npy", curves.std(axis=0))
    np.save(f"{RESULTS_DIR}/exp1_cmaes_final.npy", curves[:, -1])


if __name__ == "__main__":
    main()
