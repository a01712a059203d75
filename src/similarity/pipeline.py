import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from src.similarity.binning import build_joint_histogram, quantile_edges
from src.similarity.config import (
    DEFAULT_BUCKET_COUNT,
    DEFAULT_RANDOM_SEED,
    DEFAULT_SIMULATIONS,
)
from src.similarity.errors import InvalidArgumentError
from src.similarity.statistical_tests import (
    chi_squared_homogeneity,
    hotelling_t2_test,
    welch_t_test,
)
from src.similarity.utils import as_bivariate_sample, reduce_joint_pair

logger = logging.getLogger(__name__)

BINNING_MODES = ("sample", "pooled")


@dataclass(frozen=True)
class Verdict:
    """Result of comparing two bivariate samples for distributional similarity."""

    statistic: float
    p_value: float
    reliable: bool
    degrees_of_freedom: int | None = None
    n_cells: int = 0
    bucket_count: int = 0
    warnings: tuple = field(default_factory=tuple)


def test_similarity(
    sample_a,
    sample_b,
    bucket_count: int = None,
    simulate: bool = False,
    simulations: int = None,
    random_seed=None,
    binning: str = "sample",
) -> Verdict:
    """
    Test whether two paired bivariate samples share the same joint distribution.

    Each sample is turned into a bucket_count x bucket_count joint histogram
    over quantile bins, cells empty in both samples are dropped and the
    remaining counts are compared with a chi-squared homogeneity test.

    Parameters
    ----------
    sample_a : array-like
        Observations of shape (n_a, 2).
    sample_b : array-like
        Observations of shape (n_b, 2).
    bucket_count : int, optional
        Bins per dimension. Defaults to SIMILARITY_BUCKET_COUNT.
    simulate : bool, optional
        Use a Monte Carlo p-value. Defaults to False.
    simulations : int, optional
        Number of Monte Carlo tables. Defaults to SIMILARITY_SIMULATIONS.
    random_seed : int, optional
        Seed for the Monte Carlo generator. Defaults to SIMILARITY_RANDOM_SEED.
    binning : str, optional
        "sample" bins each sample on its own quantiles; "pooled" bins both
        samples against quantile edges of the combined data.

    Returns
    -------
    Verdict
        Statistic, p-value and reliability. Interpreting the p-value against
        a significance level is left to the caller.

    Raises
    ------
    InvalidArgumentError
        For malformed samples, bucket counts or binning mode.
    DegenerateInputError
        If fewer than 2 informative cells remain.
    """
    if bucket_count is None:
        bucket_count = DEFAULT_BUCKET_COUNT
    if simulations is None:
        simulations = DEFAULT_SIMULATIONS
    if random_seed is None:
        random_seed = DEFAULT_RANDOM_SEED
    if binning not in BINNING_MODES:
        raise InvalidArgumentError(f"Unknown binning mode: {binning!r}")

    sample_a = as_bivariate_sample(sample_a, "sample_a")
    sample_b = as_bivariate_sample(sample_b, "sample_b")

    if binning == "pooled":
        pooled = np.vstack([sample_a, sample_b])
        bins_x = quantile_edges(pooled[:, 0], bucket_count)
        bins_y = quantile_edges(pooled[:, 1], bucket_count)
    else:
        bins_x = bins_y = bucket_count

    hist_a = build_joint_histogram(sample_a[:, 0], sample_a[:, 1], bins_x, bins_y)
    hist_b = build_joint_histogram(sample_b[:, 0], sample_b[:, 1], bins_x, bins_y)
    vec_a, vec_b = reduce_joint_pair(hist_a, hist_b)

    logger.debug(
        f"Comparing {len(sample_a)} vs {len(sample_b)} observations over "
        f"{len(vec_a)} informative cells ({binning} binning)"
    )

    result = chi_squared_homogeneity(
        vec_a,
        vec_b,
        simulate=simulate,
        simulations=simulations,
        random_seed=random_seed,
    )

    logger.info(
        f"Similarity test: statistic={result.statistic:.4f}, pvalue={result.p_value:.4f}"
    )

    return Verdict(
        statistic=result.statistic,
        p_value=result.p_value,
        reliable=result.reliable,
        degrees_of_freedom=result.degrees_of_freedom,
        n_cells=len(vec_a),
        bucket_count=bucket_count,
        warnings=result.warnings,
    )


# Not a pytest test despite the name
test_similarity.__test__ = False


def run_comparison_pipeline(
    sample_a,
    sample_b,
    bucket_count: int = None,
    simulate: bool = True,
    simulations: int = None,
    random_seed=None,
    binning: str = "sample",
    skip_mean_tests: bool = False,
):
    """
    Compare two bivariate samples with mean-based tests and the similarity test.

    Runs a Welch t-test on each coordinate, Hotelling's T² on the mean
    vectors and the binned chi-squared similarity test. Mean-based tests are
    blind to differences in joint structure that leave the marginals intact;
    the similarity test is not.

    Parameters
    ----------
    sample_a, sample_b : array-like
        Observations of shape (n, 2).
    bucket_count, simulate, simulations, random_seed, binning
        Passed to test_similarity.
    skip_mean_tests : bool, optional
        If True, only run the similarity test. Defaults to False.

    Returns
    -------
    dict
        Keys "t_test-x", "t_test-y", "hotelling_t2" (unless skipped) and
        "chi_squared_similarity", each a dict with at least "p_value" and
        "test_statistic".
    """
    sample_a = as_bivariate_sample(sample_a, "sample_a")
    sample_b = as_bivariate_sample(sample_b, "sample_b")

    out = {}

    if skip_mean_tests:
        logger.info("Skipping mean-based tests.")
    else:
        for idx, axis_name in enumerate(("x", "y")):
            p_value, t_stat = welch_t_test(sample_a[:, idx], sample_b[:, idx])
            out[f"t_test-{axis_name}"] = {
                "p_value": p_value,
                "test_statistic": t_stat,
            }
            logger.debug(f"Welch t-test on {axis_name}: pvalue={p_value:.4f}")

        p_value, t2_stat, f_stat = hotelling_t2_test(sample_a, sample_b)
        out["hotelling_t2"] = {
            "p_value": p_value,
            "test_statistic": t2_stat,
            "f_statistic": f_stat,
        }
        logger.debug(f"Hotelling's T2: pvalue={p_value:.4f}")

    verdict = test_similarity(
        sample_a,
        sample_b,
        bucket_count=bucket_count,
        simulate=simulate,
        simulations=simulations,
        random_seed=random_seed,
        binning=binning,
    )
    out["chi_squared_similarity"] = {
        "p_value": verdict.p_value,
        "test_statistic": verdict.statistic,
        "reliable": verdict.reliable,
        "degrees_of_freedom": verdict.degrees_of_freedom,
        "n_cells": verdict.n_cells,
        "warnings": verdict.warnings,
    }

    return out


def results_to_frame(test_output: dict) -> pd.DataFrame:
    """Tabulate the output of run_comparison_pipeline, one row per test."""
    rows = [
        {
            "test": name,
            "test_statistic": result["test_statistic"],
            "p_value": result["p_value"],
            "reliable": result.get("reliable", True),
        }
        for name, result in test_output.items()
    ]
    return pd.DataFrame(rows, columns=["test", "test_statistic", "p_value", "reliable"])
