"""
Input validation for the GA operators.

All argument checks live here so every operator rejects bad input the same
way, before it allocates any output.
"""

from typing import Any, Optional
import numpy as np


class InvalidArgumentError(ValueError):
    """Raised when an operator argument is out of range or malformed."""
    pass


def validate_population(population: Any, name: str = "population") -> np.ndarray:
    """
    Convert a population to a 2-D boolean array and check its contents.

    Accepts boolean arrays as well as array-likes of 0/1 integers.

    Args:
        population: m x n matrix, one individual per row
        name: Argument name used in error messages

    Returns:
        Boolean array view or copy of the population

    Raises:
        InvalidArgumentError: If the input is not a 2-D binary matrix
    """
    array = np.asarray(population)

    if array.ndim != 2:
        raise InvalidArgumentError(
            f"{name} must be a 2-D matrix (individuals x genes), got {array.ndim} dimension(s)"
        )

    if array.dtype == np.bool_:
        return array

    if array.size and not np.isin(array, (0, 1)).all():
        raise InvalidArgumentError(f"{name} must only contain binary values (0/1 or True/False)")

    return array.astype(bool)


def validate_fitness(fitness: Any, expected_length: int) -> np.ndarray:
    """
    Convert fitness values to a 1-D float array aligned with the population.

    Args:
        fitness: Fitness values, one per population row
        expected_length: Number of rows in the population

    Returns:
        1-D float64 array

    Raises:
        InvalidArgumentError: If the shape or length does not match
    """
    array = np.asarray(fitness, dtype=float)

    # Column vectors (m x 1) are accepted as well
    if array.ndim == 2 and 1 in array.shape:
        array = array.reshape(-1)

    if array.ndim != 1:
        raise InvalidArgumentError(f"fitness must be a vector, got shape {array.shape}")

    if array.shape[0] != expected_length:
        raise InvalidArgumentError(
            f"fitness has {array.shape[0]} values but population has {expected_length} rows"
        )

    return array


def validate_count(value: Any, name: str, minimum: Optional[int] = 0) -> int:
    """
    Check that a count argument is an integer not lower than minimum.

    Pass minimum=None to only check the type.

    Raises:
        InvalidArgumentError: If value is not integral or below minimum
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be an integer, got: {value!r}")

    if minimum is not None and value < minimum:
        raise InvalidArgumentError(f"{name} must be >= {minimum}, got: {value}")

    return int(value)


def clamp_elite_rows(elite_rows: int, population_size: int) -> int:
    """Clamp an elitism count into [0, population_size]."""
    return max(0, min(int(elite_rows), population_size))
