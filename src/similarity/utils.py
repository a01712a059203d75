import logging

import numpy as np

from src.similarity.errors import DegenerateInputError, InvalidArgumentError

logger = logging.getLogger(__name__)


def as_finite_vector(values, name: str = "values") -> np.ndarray:
    """
    Convert a sequence of reals into a 1-D float array.

    Parameters
    ----------
    values : array-like
        Sequence of real numbers.
    name : str, optional
        Name used in error messages.

    Returns
    -------
    np.ndarray
        1-D float array.

    Raises
    ------
    InvalidArgumentError
        If values is None, empty, not 1-D, or contains NaN or infinite values.
    """
    if values is None:
        raise InvalidArgumentError(f"{name} must not be empty")
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidArgumentError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError(f"{name} contains NaN or infinite values")
    return arr


def as_bivariate_sample(sample, name: str = "sample") -> np.ndarray:
    """
    Convert paired observations into an (n, 2) float array.

    Parameters
    ----------
    sample : array-like or pd.DataFrame
        Ordered sequence of (x, y) pairs. A DataFrame must have exactly two
        numeric columns, taken in column order.
    name : str, optional
        Name used in error messages.

    Returns
    -------
    np.ndarray
        Array of shape (n, 2).

    Raises
    ------
    InvalidArgumentError
        If the sample is empty, not shaped (n, 2), or contains NaN or
        infinite values.
    """
    if sample is None:
        raise InvalidArgumentError(f"{name} must not be empty")
    arr = np.asarray(sample, dtype=float)
    if arr.size == 0:
        raise InvalidArgumentError(f"{name} must not be empty")
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidArgumentError(f"{name} must have shape (n, 2), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError(f"{name} contains NaN or infinite values")
    return arr


def reduce_joint_pair(hist_a, hist_b):
    """
    Flatten two joint histograms and drop the cells empty in both.

    Both tables are flattened in row-major order, so index i refers to the
    same (x-bin, y-bin) cell in both returned vectors.

    Parameters
    ----------
    hist_a : np.ndarray
        Joint histogram of sample A.
    hist_b : np.ndarray
        Joint histogram of sample B, same shape as hist_a.

    Returns
    -------
    tuple of np.ndarray
        (vec_a, vec_b), the retained cell counts.

    Raises
    ------
    InvalidArgumentError
        If the histograms differ in shape.
    DegenerateInputError
        If fewer than 2 cells remain after the reduction.
    """
    hist_a = np.asarray(hist_a)
    hist_b = np.asarray(hist_b)
    if hist_a.shape != hist_b.shape:
        raise InvalidArgumentError(
            f"Histogram shapes differ: {hist_a.shape} vs {hist_b.shape}"
        )

    vec_a = hist_a.ravel(order="C")
    vec_b = hist_b.ravel(order="C")

    keep = (vec_a != 0) | (vec_b != 0)
    n_kept = int(keep.sum())
    logger.debug(f"Removed {vec_a.size - n_kept} of {vec_a.size} cells empty in both samples")

    if n_kept < 2:
        raise DegenerateInputError(
            f"Only {n_kept} informative cell(s) left after removing empty cells; "
            "choose a different bucket count"
        )

    return vec_a[keep], vec_b[keep]
