# =========================
# EXPERIMENT 0 (NES with Nesterov momentum)
# Task: minimize the shifted sphere sum((x_i - i)^2) in DIM dimensions.
# Fitness = best cost in each generation (lower is better).
# =========================

import os

import numpy as np

from nesterov_es import defaults, optimize
from nesterov_es.benchmarks import sphere
from nesterov_es.tracking import GenerationTracker

# Same directory
from params import (
    CONFIG,
    DIM,
    ENTITY,
    GENERATIONS,
    PROJECT,
    RESULTS_DIR,
    SEEDS,
    SIGMA_INIT,
    USE_WANDB,
)


def run_one_seed(seed):
    """
    Running the optimizer once (with a fixed random seed) and return:
      - Best cost per generation: array, padded with the last value if the run converged early
      - Final mean
    """
    cfg = defaults().replace(generations=GENERATIONS, seed=seed)
    tracker = GenerationTracker(
        f"NES-seed{seed}",
        use_wandb=USE_WANDB,
        config={**CONFIG, **cfg.as_dict()},
        entity=ENTITY,
        project=PROJECT,
    )

    res = optimize(sphere, np.zeros(DIM), np.full(DIM, SIGMA_INIT), cfg, tracker=tracker)
    tracker.finish()

    curve = tracker.best_per_generation()
    curve = np.pad(curve, (0, GENERATIONS - curve.size), mode="edge")
    print(f"[seed {seed}] generations={res.generations}  final cost={sphere(res.mu):.3e}")
    return curve, res.mu


def main():
    """Main: run every seed and store mean±std of the best-cost curves"""
    os.makedirs(RESULTS_DIR, exist_ok=True)

    curves = np.vstack([run_one_seed(seed)[0] for seed in SEEDS])   # (n_seeds, generations)
    np.save(f"{RESULTS_DIR}/exp0_nes_mean.npy", curves.mean(axis=0))
    np.save(f"{RESULTS_DIR}/exp0_nes_std.npy", curves.std(axis=0))
    np.save(f"{RESULTS_DIR}/exp0_nes_final.npy", curves[:, -1])


if __name__ == "__main__":
    main()
