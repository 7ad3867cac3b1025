# The basic hyperparameters of the comparison experiments
DIM         = 10                # Sphere dimension (optimum at [0, 1, ..., DIM-1])
GENERATIONS = 200               # Generations per run for both algorithms
SIGMA_INIT  = 1.0               # Initial step size (same for every coordinate)
SEEDS       = [42, 1337, 2025]  # Each experiment is run once per seed (for mean±std)

# The Weights & Biases parameters
USE_WANDB = False
ENTITY    = "nesterov-es"
PROJECT   = "sphere-comparison"
CONFIG = {
    "Dimension": DIM,
    "Generations": GENERATIONS,
    "Initial Sigma": SIGMA_INIT,
}

RESULTS_DIR = "__results__"
