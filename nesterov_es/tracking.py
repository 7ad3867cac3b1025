# Standard library
import time
from pathlib import Path
from typing import Optional

# Third-party
import numpy as np
import numpy.typing as npt
import pandas as pd
import wandb

# Same package
from nesterov_es.optimizer import Population
from nesterov_es.params import ENTITY, PROJECT

ARTIFACT_DIR = Path("wandb_artifacts")


def _save_table(df: pd.DataFrame, out_path: Path) -> Path:
    """Write parquet when an engine is installed, CSV otherwise."""
    try:
        df.to_parquet(out_path, index=False)
        return out_path
    except ImportError:
        csv_path = out_path.with_suffix(".csv")
        df.to_csv(csv_path, index=False)
        return csv_path


class GenerationTracker:
    """
    Records one row per generation of an optimization run and optionally
    mirrors the scalar columns to Weights & Biases.

    Pass it to optimize(..., tracker=...). Call finish() once the run is
    done to write the raw table (and upload it as an artifact when W&B is on).
    """

    def __init__(
        self,
        run_name: Optional[str] = None,
        *,
        use_wandb: bool = False,
        config: Optional[dict] = None,
        entity: str = ENTITY,
        project: str = PROJECT,
    ):
        self.run_name = run_name or time.strftime("%Y%m%dT%H%M%S")
        self.rows: list[dict] = []
        self.run = None
        if use_wandb:
            self.run = wandb.init(
                entity=entity,
                project=project,
                name=self.run_name,
                config=config,
            )

    def log_generation(
        self,
        g: int,
        population: Population,
        mean: npt.NDArray[np.float64],
        sigma: npt.NDArray[np.float64],
    ) -> dict:
        """Logs one generation to W&B (if on) and returns the stored raw row."""
        log_data = {
            "gen": g,
            "best": population.best,
            "median": population.median,
            "worst": population.worst,
            "max_sigma": float(sigma.max()),
            "min_sigma": float(sigma.min()),
        }
        if self.run is not None:
            self.run.log(log_data, step=g)

        raw_data = log_data.copy()
        raw_data["mean"] = mean.tolist()
        raw_data["sigma"] = sigma.tolist()
        raw_data["costs"] = population.costs.tolist()
        self.rows.append(raw_data)
        return raw_data

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows)

    def best_per_generation(self) -> npt.NDArray[np.float64]:
        return np.array([row["best"] for row in self.rows], dtype=float)

    def save(self, out_dir: Path = ARTIFACT_DIR) -> Path:
        out_dir = Path(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        return _save_table(self.to_frame(), out_dir / f"{self.run_name}_raw.parquet")

    def finish(self, out_dir: Path = ARTIFACT_DIR) -> Path:
        """Writes the raw table and closes the W&B run (uploading the table)."""
        file_path = self.save(out_dir)
        if self.run is not None:
            artifact = wandb.Artifact(
                name=f"{self.run_name}-raw-data",
                type="raw_data",
                metadata={"generations": len(self.rows)},
            )
            artifact.add_file(str(file_path))
            self.run.log_artifact(artifact)
            self.run.finish()
            self.run = None
        return file_path
