"""
Benchmark fitness functions for binary chromosomes.

Each function scores a whole population at once and returns one float per
row, higher is better. They are used by the reference driver; real
applications pass their own evaluator.
"""

from typing import Callable, Dict
import numpy as np

from .validation import validate_population

FitnessFunction = Callable[..., np.ndarray]


def onemax(population: np.ndarray) -> np.ndarray:
    """Number of ones in each chromosome."""
    genes = validate_population(population)
    return genes.sum(axis=1).astype(float)


def leading_ones(population: np.ndarray) -> np.ndarray:
    """Length of the run of ones at the start of each chromosome."""
    genes = validate_population(population)
    # cumprod stays 1 until the first zero
    return np.cumprod(genes, axis=1).sum(axis=1).astype(float)


def _blocks(genes: np.ndarray, block_size: int) -> np.ndarray:
    m, n = genes.shape
    if block_size <= 0:
        raise ValueError(f"block_size must be positive, got {block_size}")
    if n % block_size != 0:
        raise ValueError(
            f"Chromosome length {n} is not a multiple of block_size {block_size}"
        )
    return genes.reshape(m, n // block_size, block_size)


def royal_road(population: np.ndarray, block_size: int = 4) -> np.ndarray:
    """
    Royal road function.

    Each fully set block of block_size genes scores block_size; partially
    set blocks score nothing.
    """
    genes = validate_population(population)
    blocks = _blocks(genes, block_size)
    complete = blocks.all(axis=2).sum(axis=1)
    return (complete * block_size).astype(float)


def deceptive_trap(population: np.ndarray, block_size: int = 4) -> np.ndarray:
    """
    Concatenated deceptive trap function.

    A block with u ones scores block_size when u == block_size and
    block_size - 1 - u otherwise, which leads hill climbers towards all
    zeros.
    """
    genes = validate_population(population)
    blocks = _blocks(genes, block_size)
    ones = blocks.sum(axis=2)
    scores = np.where(ones == block_size, block_size, block_size - 1 - ones)
    return scores.sum(axis=1).astype(float)


FITNESS_FUNCTIONS: Dict[str, FitnessFunction] = {
    'onemax': onemax,
    'leading_ones': leading_ones,
    'royal_road': royal_road,
    'deceptive_trap': deceptive_trap,
}

BLOCK_FUNCTIONS = {'royal_road', 'deceptive_trap'}


def get_fitness_function(name: str, block_size: int = 4) -> Callable[[np.ndarray], np.ndarray]:
    """
    Look up a benchmark fitness function by name.

    Args:
        name: One of FITNESS_FUNCTIONS
        block_size: Block size for block-based functions

    Returns:
        Callable scoring a population

    Raises:
        ValueError: If the name is unknown
    """
    if name not in FITNESS_FUNCTIONS:
        raise ValueError(
            f"Unknown fitness function: '{name}'. Available: {sorted(FITNESS_FUNCTIONS)}"
        )

    function = FITNESS_FUNCTIONS[name]
    if name in BLOCK_FUNCTIONS:
        return lambda population: function(population, block_size=block_size)
    return function


def optimum(name: str, chromosome_length: int, block_size: int = 4) -> float:
    """Best attainable fitness of a benchmark for the given chromosome length."""
    if name not in FITNESS_FUNCTIONS:
        raise ValueError(f"Unknown fitness function: '{name}'")
    if name in BLOCK_FUNCTIONS:
        return float((chromosome_length // block_size) * block_size)
    return float(chromosome_length)
