import os

DEFAULT_BUCKET_COUNT = int(os.getenv("SIMILARITY_BUCKET_COUNT", "8"))
DEFAULT_SIMULATIONS = int(os.getenv("SIMILARITY_SIMULATIONS", "2000"))

_seed = os.getenv("SIMILARITY_RANDOM_SEED")
DEFAULT_RANDOM_SEED = int(_seed) if _seed else None

# Pearson's rule of thumb for the chi-squared approximation
MIN_EXPECTED_COUNT = 5
