## COMPARISON OF NES AND CMA-ES TOGETHER ##

import os

import matplotlib.pyplot as plt
import numpy as np

from nesterov_es.utils import moving_average

# Same directory
from params import DIM, RESULTS_DIR

os.makedirs(RESULTS_DIR, exist_ok=True)

nes_mean = np.load(f"{RESULTS_DIR}/exp0_nes_mean.npy")
nes_std = np.load(f"{RESULTS_DIR}/exp0_nes_std.npy")

cmaes_mean = np.load(f"{RESULTS_DIR}/exp1_cmaes_mean.npy")
cmaes_std = np.load(f"{RESULTS_DIR}/exp1_cmaes_std.npy")

generations = np.arange(1, len(nes_mean) + 1)

# Costs span many decades, so everything is plotted on log10
for mean, std, label, color in (
    (nes_mean, nes_std, "NES + momentum", "blue"),
    (cmaes_mean, cmaes_std, "CMA-ES", "orange"),
):
    plt.plot(generations, np.log10(mean + 1e-300), label=label, color=color)
    plt.fill_between(generations, np.log10(np.maximum(mean - std, 1e-300)), np.log10(mean + std),
                     color=color, alpha=0.2)

smoothed = moving_average(np.log10(nes_mean + 1e-300), w=5)
plt.plot(np.arange(1, len(smoothed) + 1), smoothed, label="NES (moving avg w=5)", color="green")

plt.title(f"NES vs CMA-ES on the shifted sphere (n={DIM})")
plt.xlabel("Generation")
plt.ylabel("log10(best cost)")
plt.legend(loc="upper right")
plt.grid(True, linestyle="--", alpha=0.6)
plt.tight_layout()
plt.savefig(f"{RESULTS_DIR}/all_exp_comparison.png", dpi=160)
plt.show()
