"""Distributional similarity testing for paired bivariate samples."""

from src.similarity.binning import (
    BinEdges,
    assign_bins,
    build_joint_histogram,
    quantile_bin,
    quantile_edges,
)
from src.similarity.errors import DegenerateInputError, InvalidArgumentError
from src.similarity.pipeline import (
    Verdict,
    results_to_frame,
    run_comparison_pipeline,
    test_similarity,
)
from src.similarity.statistical_tests import (
    ChiSquaredResult,
    chi_squared_homogeneity,
    hotelling_t2_test,
    welch_t_test,
)
from src.similarity.utils import as_bivariate_sample, reduce_joint_pair

__all__ = [
    # Main pipeline
    "test_similarity",
    "run_comparison_pipeline",
    "results_to_frame",
    "Verdict",
    # Binning
    "BinEdges",
    "quantile_bin",
    "quantile_edges",
    "assign_bins",
    "build_joint_histogram",
    # Statistical tests
    "ChiSquaredResult",
    "chi_squared_homogeneity",
    "welch_t_test",
    "hotelling_t2_test",
    # Utilities
    "as_bivariate_sample",
    "reduce_joint_pair",
    # Errors
    "InvalidArgumentError",
    "DegenerateInputError",
]
