"""Integration test: rejection rate of the similarity test under the null hypothesis.

Draws many pairs of samples from the same bivariate distribution and checks
that the asymptotic similarity test does not reject more often than expected.
"""

import numpy as np
import pytest

from src.similarity.pipeline import test_similarity

N_SIMULATIONS = 300
SAMPLE_SIZE = 400
BUCKET_COUNT = 4
ALPHA = 0.05
MAX_FALSE_POSITIVE_RATE = ALPHA + 3 * np.sqrt(ALPHA * (1 - ALPHA) / N_SIMULATIONS)


def _correlated_sample(rng, size):
    x = rng.normal(size=size)
    y = 0.3 * x + rng.normal(size=size)
    return np.column_stack([x, y])


@pytest.mark.integration_similarity
def test_false_positive_rate_under_null():
    """When both samples share one distribution, about 5% of p-values should fall below 0.05."""
    rng = np.random.default_rng(42)
    rejections = 0

    for _ in range(N_SIMULATIONS):
        verdict = test_similarity(
            _correlated_sample(rng, SAMPLE_SIZE),
            _correlated_sample(rng, SAMPLE_SIZE),
            bucket_count=BUCKET_COUNT,
        )
        if verdict.p_value < ALPHA:
            rejections += 1

    false_positive_rate = rejections / N_SIMULATIONS

    assert false_positive_rate <= MAX_FALSE_POSITIVE_RATE, (
        f"False positive rate {false_positive_rate:.3f} ({rejections}/{N_SIMULATIONS}) "
        f"exceeds maximum allowed rate of {MAX_FALSE_POSITIVE_RATE:.3f}"
    )
