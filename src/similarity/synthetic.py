import numpy as np

from src.similarity.utils import as_bivariate_sample

MINUTES_PER_DAY = 1440


def generate_sensor_sample(
    seed: int = 42,
    n_observations: int = 500,
    mean_temperature: float = 21.0,
    daily_amplitude: float = 4.0,
    noise_sd: float = 0.5,
) -> np.ndarray:
    """
    Generate a synthetic (Temperature, Minute) sensor log.

    Readings are taken at random minutes of the day; the temperature follows
    a diurnal cycle peaking mid-afternoon plus Gaussian noise.

    Parameters
    ----------
    seed : int
        Random seed for reproducibility.
    n_observations : int
        Number of readings.
    mean_temperature : float
        Daily mean temperature.
    daily_amplitude : float
        Amplitude of the diurnal cycle.
    noise_sd : float
        Standard deviation of the measurement noise.

    Returns
    -------
    np.ndarray
        Array of shape (n_observations, 2): column 0 is Temperature, column 1
        is Minute of the day.
    """
    rng = np.random.default_rng(seed)

    minutes = rng.integers(0, MINUTES_PER_DAY, size=n_observations).astype(float)
    # Peak around 15:00
    phase = 2 * np.pi * (minutes - 9 * 60) / MINUTES_PER_DAY
    temperatures = (
        mean_temperature
        + daily_amplitude * np.sin(phase)
        + rng.normal(0.0, noise_sd, size=n_observations)
    )

    return np.column_stack([temperatures, minutes])


def resort_temperatures(sample) -> np.ndarray:
    """
    Pair the sorted temperatures of a sample with its original minutes.

    Both marginals are unchanged, so group means and variances match the
    input exactly, while the joint structure is scrambled.
    """
    sample = as_bivariate_sample(sample)
    return np.column_stack([np.sort(sample[:, 0], kind="stable"), sample[:, 1]])
