"""
Selection operators for binary chromosomes.

Implements tournament selection over the non-elite part of a population.
"""

from typing import Any, Sequence, Tuple
import logging
import numpy as np

from .random_utils import draw_distinct
from .validation import (
    InvalidArgumentError,
    validate_population,
    validate_fitness,
    validate_count,
)

logger = logging.getLogger(__name__)


def draw_contenders(
    k: int,
    elite_rows: int,
    population_size: int,
    rng: np.random.Generator
) -> list:
    """
    Draw k distinct contender indices from [elite_rows, population_size).

    Returns:
        Contender row indices in draw order
    """
    return draw_distinct(rng, k, elite_rows, population_size - 1)


def tournament_winner(contenders: Sequence[int], fitness: np.ndarray) -> int:
    """
    Return the contender with the highest fitness.

    Ties go to the contender drawn first.

    Args:
        contenders: Contender row indices in draw order
        fitness: Fitness of every population row

    Returns:
        Row index of the winner
    """
    winner = contenders[0]
    best = fitness[winner]
    for index in contenders[1:]:
        if fitness[index] > best:
            winner, best = index, fitness[index]
    return winner


def tournament_selection(
    k: int,
    fitness: Any,
    population: Any,
    no_survivors: int,
    elite_rows: int,
    rng: np.random.Generator
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Select survivors by repeated k-way tournaments.

    Each tournament draws k distinct contenders from the non-elite rows
    [elite_rows, m) and copies the fittest one, with its fitness, into the
    next survivor slot. Contenders are distinct within a tournament only, so
    an individual can win several tournaments.

    Args:
        k: Tournament size, 1 <= k <= m - elite_rows
        fitness: Fitness per population row, higher is better
        population: m x n binary matrix, one individual per row
        no_survivors: Number of tournaments to hold
        elite_rows: Number of top rows that never compete
        rng: Random number generator

    Returns:
        Tuple of (survivors, survivor_fitness): a no_survivors x n boolean
        matrix and the index-aligned fitness vector

    Raises:
        InvalidArgumentError: If any count is out of range or fitness does
            not match the population
    """
    genes = validate_population(population)
    m, n = genes.shape
    scores = validate_fitness(fitness, m)
    k = validate_count(k, "tournament size k", minimum=1)
    no_survivors = validate_count(no_survivors, "no_survivors", minimum=0)
    elite_rows = validate_count(elite_rows, "elite_rows", minimum=0)

    if elite_rows > m:
        raise InvalidArgumentError(f"elite_rows ({elite_rows}) exceeds population size ({m})")

    if k > m - elite_rows:
        raise InvalidArgumentError(
            f"Tournament size k={k} exceeds the {m - elite_rows} non-elite individuals"
        )

    survivors = np.zeros((no_survivors, n), dtype=bool)
    survivor_fitness = np.zeros(no_survivors, dtype=float)

    for tournament in range(no_survivors):
        contenders = draw_contenders(k, elite_rows, m, rng)
        winner = tournament_winner(contenders, scores)

        survivors[tournament] = genes[winner]
        survivor_fitness[tournament] = scores[winner]

    logger.debug(
        "tournament_selection: %d tournaments of size %d over rows [%d, %d)",
        no_survivors, k, elite_rows, m
    )

    return survivors, survivor_fitness
