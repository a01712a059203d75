import logging
from dataclasses import dataclass

import numpy as np

from src.similarity.errors import InvalidArgumentError
from src.similarity.utils import as_finite_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class BinEdges:
    """Quantile cutoffs of a reference distribution, one upper bound per bin."""

    cutoffs: np.ndarray

    @property
    def bucket_count(self) -> int:
        return len(self.cutoffs)


def _check_bucket_count(bucket_count):
    if isinstance(bucket_count, bool) or not isinstance(bucket_count, (int, np.integer)):
        raise InvalidArgumentError(f"bucket_count must be an integer, got {bucket_count!r}")
    if bucket_count < 2:
        raise InvalidArgumentError(f"bucket_count must be at least 2, got {bucket_count}")


def quantile_bin(values, bucket_count: int) -> np.ndarray:
    """
    Assign each value to one of `bucket_count` equal-population bins.

    Values are ranked with a stable sort, so ties are broken by input order
    (the earlier value lands in the lower bin). Bin sizes differ by at most
    one; the first ``n % bucket_count`` bins hold the extra element. With
    more buckets than values, the trailing bins stay empty.

    Parameters
    ----------
    values : array-like
        1-D sequence of real numbers.
    bucket_count : int
        Number of bins, at least 2.

    Returns
    -------
    np.ndarray
        Integer bin labels in [1, bucket_count], in input order.

    Raises
    ------
    InvalidArgumentError
        If bucket_count < 2 or values is empty or non-finite.
    """
    _check_bucket_count(bucket_count)
    values = as_finite_vector(values)
    n = len(values)

    order = np.argsort(values, kind="stable")
    ranks = np.empty(n, dtype=int)
    ranks[order] = np.arange(n)

    small_size, n_large = divmod(n, bucket_count)
    large_size = small_size + 1
    large_total = n_large * large_size

    labels = np.where(
        ranks < large_total,
        ranks // large_size,
        n_large + (ranks - large_total) // max(small_size, 1),
    )
    return labels + 1


def quantile_edges(reference, bucket_count: int) -> BinEdges:
    """Compute the k/b quantiles (k = 1..b) of a reference distribution."""
    _check_bucket_count(bucket_count)
    reference = as_finite_vector(reference, "reference")
    probs = np.arange(1, bucket_count + 1) / bucket_count
    return BinEdges(cutoffs=np.quantile(reference, probs))


def assign_bins(values, edges: BinEdges) -> np.ndarray:
    """
    Label each value with the first bin whose cutoff is >= the value.

    Values above the last cutoff fall into the last bin.
    """
    values = as_finite_vector(values)
    labels = np.searchsorted(edges.cutoffs, values, side="left") + 1
    return np.minimum(labels, edges.bucket_count)


def _label(values, bins):
    if isinstance(bins, BinEdges):
        return assign_bins(values, bins), bins.bucket_count
    return quantile_bin(values, bins), int(bins)


def build_joint_histogram(sample_x, sample_y, bins_x, bins_y=None) -> np.ndarray:
    """
    Count co-occurrences of (x-bin, y-bin) for one paired sample.

    Parameters
    ----------
    sample_x : array-like
        First coordinate of each observation.
    sample_y : array-like
        Second coordinate of each observation, same length as sample_x.
    bins_x : int or BinEdges
        Bucket count for quantile binning on the sample itself, or shared
        edges to bin against.
    bins_y : int or BinEdges, optional
        Same for the second coordinate. Defaults to bins_x.

    Returns
    -------
    np.ndarray
        Integer matrix of shape (b_x, b_y); rows are x-bins, columns y-bins.

    Raises
    ------
    InvalidArgumentError
        If the coordinates differ in length or fail binning validation.
    """
    sample_x = as_finite_vector(sample_x, "sample_x")
    sample_y = as_finite_vector(sample_y, "sample_y")
    if len(sample_x) != len(sample_y):
        raise InvalidArgumentError(
            f"Paired coordinates must have equal length, got {len(sample_x)} and {len(sample_y)}"
        )
    if bins_y is None:
        bins_y = bins_x

    labels_x, n_rows = _label(sample_x, bins_x)
    labels_y, n_cols = _label(sample_y, bins_y)

    table = np.zeros((n_rows, n_cols), dtype=int)
    np.add.at(table, (labels_x - 1, labels_y - 1), 1)

    logger.debug(f"Joint histogram {n_rows}x{n_cols} built from {len(sample_x)} observations")
    return table
