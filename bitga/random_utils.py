"""
Random number helpers shared by the GA operators.

Every operator receives an explicit numpy Generator; nothing here keeps
global state or reseeds.
"""

from typing import List, Optional
import numpy as np

from .validation import InvalidArgumentError


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the generator passed to every operator.

    Args:
        seed: Fixed seed for reproducible runs, or None for OS entropy

    Returns:
        numpy Generator
    """
    return np.random.default_rng(seed)


def bounded_random_int(rng: np.random.Generator, low: int, high: int) -> int:
    """
    Draw a uniform integer from the closed range [low, high].

    Raises:
        InvalidArgumentError: If the range is empty
    """
    if high < low:
        raise InvalidArgumentError(f"Empty integer range [{low}, {high}]")
    return int(rng.integers(low, high + 1))


def bounded_random_unit(rng: np.random.Generator) -> float:
    """Draw a uniform float from [0, 1)."""
    return float(rng.random())


def draw_distinct(
    rng: np.random.Generator,
    count: int,
    low: int,
    high: int
) -> List[int]:
    """
    Draw count distinct integers from [low, high] by rejection sampling.

    A candidate already drawn is discarded and drawn again, so the result
    keeps draw order. Cost grows quickly as count approaches the size of the
    range; use rng.permutation for those regimes.

    Args:
        rng: Random number generator
        count: Number of distinct values wanted
        low: Smallest allowed value
        high: Largest allowed value (inclusive)

    Returns:
        List of count distinct integers, in the order they were accepted

    Raises:
        InvalidArgumentError: If the range holds fewer than count values
    """
    available = high - low + 1
    if count > available:
        raise InvalidArgumentError(
            f"Cannot draw {count} distinct values from [{low}, {high}] ({max(available, 0)} available)"
        )

    chosen: List[int] = []
    seen = set()
    while len(chosen) < count:
        candidate = bounded_random_int(rng, low, high)
        if candidate not in seen:
            seen.add(candidate)
            chosen.append(candidate)

    return chosen
