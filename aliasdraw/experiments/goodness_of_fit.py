"""
Goodness-of-fit experiment for the weighted sampler.

Draws a large number of items from a ``WeightedSampler`` and compares the
observed counts with ``weight / sum(weights)`` using a chi-squared test.
Supported draw modes:
- ``one``: repeated ``sample_one()``
- ``many``: a single ``sample_many(num_draws)``
- ``filtered``: ``sample_filtered(num_draws, always-true predicate)``
"""
import json
import os
from typing import Dict, Any, List, Optional, Sequence

import numpy as np
from scipy import stats

from aliasdraw.experiments.experiment import Experiment, ExperimentConfig
from aliasdraw.sampling import WeightedItem, WeightedSampler

MODES = ("one", "many", "filtered")


class GoodnessOfFitConfig(ExperimentConfig):
    """Configuration for a goodness-of-fit run."""
    def __init__(
        self,
        name: str,
        weights: Sequence[float] = (1.0, 2.0, 3.0, 4.0),
        num_draws: int = 100000,
        mode: str = "many",
        seed: Optional[int] = None,
        alpha: float = 0.001,
        **kwargs
    ):
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
        if num_draws <= 0:
            raise ValueError("num_draws must be > 0")
        if not 0.0 < alpha < 1.0:
            raise ValueError("alpha must be in (0, 1)")
        super().__init__(name, **kwargs)
        self.weights = [float(w) for w in weights]
        self.num_draws = num_draws
        self.mode = mode
        self.seed = seed
        self.alpha = alpha


def chi_squared_fit(counts: np.ndarray, weights: Sequence[float]) -> Dict[str, Any]:
    """
    Chi-squared test of ``counts`` against the distribution implied by ``weights``.

    Zero-weight items take no part in the test; any observation of one is
    reported under ``zero_weight_hits`` and fails the fit outright.
    """
    weights = np.asarray(weights, dtype=np.float64)
    counts = np.asarray(counts, dtype=np.int64)
    positive = weights > 0
    zero_weight_hits = int(counts[~positive].sum())

    observed = counts[positive]
    expected = weights[positive] / weights[positive].sum() * observed.sum()
    if observed.size > 1:
        statistic, p_value = stats.chisquare(observed, expected)
        statistic, p_value = float(statistic), float(p_value)
    else:
        # a single eligible item is drawn every time
        statistic, p_value = 0.0, 1.0
    return {
        "observed": counts.tolist(),
        "expected": (weights / weights.sum() * counts.sum()).tolist(),
        "statistic": statistic,
        "p_value": p_value,
        "zero_weight_hits": zero_weight_hits,
    }


class GoodnessOfFitExperiment(Experiment):
    """
    Checks that draws follow the normalized weights.
    """

    def __init__(self, config: GoodnessOfFitConfig):
        super().__init__(config)
        self.config = config
        self.metadata.update(
            weights=config.weights,
            num_draws=config.num_draws,
            mode=config.mode,
            seed=config.seed,
        )
        self.sampler = WeightedSampler(
            (WeightedItem(i, w) for i, w in enumerate(config.weights)),
            rng=config.seed,
        )
        self.result: Optional[Dict[str, Any]] = None

    def _draw(self) -> List[int]:
        n = self.config.num_draws
        if self.config.mode == "one":
            drawn = [self.sampler.sample_one() for _ in range(n)]
        elif self.config.mode == "many":
            drawn = self.sampler.sample_many(n)
        else:
            drawn = self.sampler.sample_filtered(n, lambda item, collected: True)
        return [item.value for item in drawn]

    def on_start(self):
        self.logger.info("Mode: %s, draws: %d", self.config.mode, self.config.num_draws)
        self.logger.info("Weights: %s", self.config.weights)

    def experiment_main(self):
        indices = self._draw()
        counts = np.bincount(indices, minlength=len(self.config.weights))
        result = chi_squared_fit(counts, self.config.weights)
        result["alpha"] = self.config.alpha
        result["mode"] = self.config.mode
        result["passed"] = (
            result["zero_weight_hits"] == 0 and result["p_value"] >= self.config.alpha
        )
        self.result = result

        self.logger.info(
            "chi2=%.4f p=%.4g -> %s",
            result["statistic"],
            result["p_value"],
            "pass" if result["passed"] else "FAIL",
        )
        if result["zero_weight_hits"]:
            self.logger.warning("%d draws hit zero-weight items", result["zero_weight_hits"])
        return result

    def on_end(self):
        results_path = os.path.join(self.config.result_dir, "result.json")
        with open(results_path, "w", encoding="utf-8") as f:
            json.dump(self.result, f, indent=2)
        self.logger.info("Results saved to %s", results_path)
