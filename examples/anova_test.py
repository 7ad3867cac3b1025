## ANOVA STATISTICAL TEST ##
import numpy as np
import scipy.stats as stats

# Same directory
from params import RESULTS_DIR


def main():
    # Final best cost per seed, written by exp0_nes.py and exp1_cmaes.py
    nes_runs   = np.load(f"{RESULTS_DIR}/exp0_nes_final.npy")
    cmaes_runs = np.load(f"{RESULTS_DIR}/exp1_cmaes_final.npy")

    # log10 so that "1e-20 vs 1e-18" is a difference, not two zeros
    f_statistic, p_value = stats.f_oneway(np.log10(nes_runs + 1e-300), np.log10(cmaes_runs + 1e-300))

    print("One-Way ANOVA on log10(final best cost)")
    print("---------------------------------------")
    print(f"F-statistic: {f_statistic:.4f}")
    print(f"P-value:     {p_value:.4f}")

    if p_value < 0.05:
        print("Significant difference found between the two algorithms.")
    else:
        print("No significant difference found.")


if __name__ == "__main__":
    main()
