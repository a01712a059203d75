"""Unit tests for src.similarity.utils."""

import numpy as np
import pandas as pd
import pytest

from src.similarity.binning import build_joint_histogram, quantile_edges
from src.similarity.errors import DegenerateInputError, InvalidArgumentError
from src.similarity.utils import as_bivariate_sample, reduce_joint_pair

RANDOM_SEED = 42


# ─────────────────────────────────────────────────────────────────────────────
# Tests for as_bivariate_sample
# ─────────────────────────────────────────────────────────────────────────────


class TestAsBivariateSample:
    def test_accepts_list_of_pairs(self):
        arr = as_bivariate_sample([(20.5, 10), (21.0, 11)])
        assert arr.shape == (2, 2)
        assert arr.dtype == float

    def test_accepts_dataframe(self):
        df = pd.DataFrame({"Temperature": [20.5, 21.0, 19.8], "Minute": [10, 11, 12]})
        arr = as_bivariate_sample(df)
        np.testing.assert_array_equal(arr[:, 1], [10, 11, 12])

    def test_wrong_shape_raises(self):
        with pytest.raises(InvalidArgumentError, match="shape"):
            as_bivariate_sample([[1.0, 2.0, 3.0]])

    def test_one_dimensional_raises(self):
        with pytest.raises(InvalidArgumentError, match="shape"):
            as_bivariate_sample([1.0, 2.0])

    def test_empty_raises(self):
        with pytest.raises(InvalidArgumentError, match="must not be empty"):
            as_bivariate_sample([])

    def test_inf_raises(self):
        with pytest.raises(InvalidArgumentError, match="NaN or infinite"):
            as_bivariate_sample([[1.0, np.inf]])


# ─────────────────────────────────────────────────────────────────────────────
# Tests for reduce_joint_pair
# ─────────────────────────────────────────────────────────────────────────────


class TestReduceJointPair:
    def test_removes_cells_empty_in_both(self):
        hist_a = np.array([[1, 0], [0, 0]])
        hist_b = np.array([[0, 0], [3, 0]])
        vec_a, vec_b = reduce_joint_pair(hist_a, hist_b)

        np.testing.assert_array_equal(vec_a, [1, 0])
        np.testing.assert_array_equal(vec_b, [0, 3])

    def test_row_major_order(self):
        hist_a = np.array([[1, 2], [3, 4]])
        hist_b = np.array([[5, 6], [7, 8]])
        vec_a, vec_b = reduce_joint_pair(hist_a, hist_b)

        np.testing.assert_array_equal(vec_a, [1, 2, 3, 4])
        np.testing.assert_array_equal(vec_b, [5, 6, 7, 8])

    def test_no_retained_cell_empty_in_both(self):
        rng = np.random.default_rng(RANDOM_SEED)
        hist_a = rng.poisson(0.5, size=(8, 8))
        hist_b = rng.poisson(0.5, size=(8, 8))
        vec_a, vec_b = reduce_joint_pair(hist_a, hist_b)

        assert len(vec_a) == len(vec_b) <= 64
        assert not np.any((vec_a == 0) & (vec_b == 0))
        assert vec_a.sum() == hist_a.sum()
        assert vec_b.sum() == hist_b.sum()

    def test_single_informative_cell_raises(self):
        hist_a = np.array([[1, 0], [0, 0]])
        hist_b = np.array([[2, 0], [0, 0]])
        with pytest.raises(DegenerateInputError, match="informative cell"):
            reduce_joint_pair(hist_a, hist_b)

    def test_all_empty_raises(self):
        with pytest.raises(DegenerateInputError):
            reduce_joint_pair(np.zeros((3, 3), dtype=int), np.zeros((3, 3), dtype=int))

    def test_shape_mismatch_raises(self):
        with pytest.raises(InvalidArgumentError, match="shapes differ"):
            reduce_joint_pair(np.zeros((2, 2)), np.zeros((3, 3)))


class TestFlatteningOrderInvariance:
    """Permuting the observations of a sample must not change the reduced vectors."""

    def test_shared_edges_with_ties(self):
        rng = np.random.default_rng(RANDOM_SEED)
        sample_a = rng.integers(0, 5, size=(200, 2)).astype(float)
        sample_b = rng.integers(0, 5, size=(150, 2)).astype(float)
        edges_x = quantile_edges(np.concatenate([sample_a[:, 0], sample_b[:, 0]]), 4)
        edges_y = quantile_edges(np.concatenate([sample_a[:, 1], sample_b[:, 1]]), 4)

        def reduced(a, b):
            hist_a = build_joint_histogram(a[:, 0], a[:, 1], edges_x, edges_y)
            hist_b = build_joint_histogram(b[:, 0], b[:, 1], edges_x, edges_y)
            return reduce_joint_pair(hist_a, hist_b)

        expected_a, expected_b = reduced(sample_a, sample_b)
        permuted_a, permuted_b = reduced(
            sample_a[rng.permutation(len(sample_a))],
            sample_b[rng.permutation(len(sample_b))],
        )

        np.testing.assert_array_equal(permuted_a, expected_a)
        np.testing.assert_array_equal(permuted_b, expected_b)

    def test_own_quantiles_without_ties(self):
        rng = np.random.default_rng(RANDOM_SEED)
        sample_a = rng.normal(size=(300, 2))
        sample_b = rng.normal(size=(300, 2))

        def reduced(a, b):
            hist_a = build_joint_histogram(a[:, 0], a[:, 1], 6)
            hist_b = build_joint_histogram(b[:, 0], b[:, 1], 6)
            return reduce_joint_pair(hist_a, hist_b)

        expected_a, expected_b = reduced(sample_a, sample_b)
        permuted_a, permuted_b = reduced(sample_a[::-1], sample_b[rng.permutation(300)])

        np.testing.assert_array_equal(permuted_a, expected_a)
        np.testing.assert_array_equal(permuted_b, expected_b)
