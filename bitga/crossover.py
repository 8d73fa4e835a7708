"""
Crossover operators for binary chromosomes.

Implements N-point crossover: two distinct parents are cut at N distinct
points and their segments are alternated to build two complementary
children per crossover event.
"""

from typing import Any, Dict, Tuple
import logging
import numpy as np

from .random_utils import bounded_random_int, draw_distinct
from .validation import InvalidArgumentError, validate_population, validate_count

logger = logging.getLogger(__name__)


def select_parent_pair(
    pool_size: int,
    rng: np.random.Generator
) -> Tuple[int, int]:
    """
    Pick two distinct parent row indices uniformly from [0, pool_size).

    The second index is redrawn until it differs from the first.

    Args:
        pool_size: Number of rows in the parent pool
        rng: Random number generator

    Returns:
        Tuple of (parent_1, parent_2) row indices

    Raises:
        InvalidArgumentError: If fewer than 2 parents are available
    """
    if pool_size < 2:
        raise InvalidArgumentError(f"Need at least 2 parents for crossover, got {pool_size}")

    parent_1 = bounded_random_int(rng, 0, pool_size - 1)
    parent_2 = bounded_random_int(rng, 0, pool_size - 1)
    while parent_2 == parent_1:
        parent_2 = bounded_random_int(rng, 0, pool_size - 1)

    return parent_1, parent_2


def draw_crossover_points(
    n_points: int,
    chromosome_length: int,
    rng: np.random.Generator
) -> np.ndarray:
    """
    Draw n_points distinct cut points from [0, chromosome_length), sorted.

    Args:
        n_points: Number of cut points
        chromosome_length: Number of genes per chromosome
        rng: Random number generator

    Returns:
        Sorted int array of distinct cut points
    """
    points = draw_distinct(rng, n_points, 0, chromosome_length - 1)
    return np.sort(np.asarray(points, dtype=int))


def segment_mask(points: np.ndarray, chromosome_length: int) -> np.ndarray:
    """
    Mark the genes that come from the first parent.

    A cut point is the last gene of its segment, so the segment of gene g is
    the number of cut points strictly lower than g. Even segments belong to
    the first parent.

    Args:
        points: Sorted cut points
        chromosome_length: Number of genes per chromosome

    Returns:
        Boolean array, True where the gene is inherited from parent 1
    """
    genes = np.arange(chromosome_length)
    segments = np.searchsorted(points, genes, side='left')
    return segments % 2 == 0


def recombine(
    parent_1: np.ndarray,
    parent_2: np.ndarray,
    points: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the two complementary children of one crossover event.

    Args:
        parent_1: First parent chromosome
        parent_2: Second parent chromosome
        points: Sorted cut points

    Returns:
        Tuple of (child, sibling); child starts with parent_1's first
        segment, sibling with parent_2's
    """
    from_first = segment_mask(points, parent_1.shape[0])
    child = np.where(from_first, parent_1, parent_2)
    sibling = np.where(from_first, parent_2, parent_1)
    return child, sibling


def npoint_crossover(
    parentpool: Any,
    n_points: int,
    my: int,
    rng: np.random.Generator
) -> np.ndarray:
    """
    Generate my children from a parent pool using N-point crossover.

    Each crossover event:
        1. Selects two distinct parents uniformly from all rows
           (elite rows are eligible parents)
        2. Draws n_points distinct cut points and sorts them
        3. Alternates segments between the parents, yielding a child and
           its complementary sibling

    Events repeat until my rows are filled. When my is odd the sibling of
    the last event is dropped.

    Args:
        parentpool: m x n binary matrix, one parent per row
        n_points: Number of crossover points, 1 <= n_points <= n
        my: Number of children to generate
        rng: Random number generator

    Returns:
        Newly allocated my x n boolean matrix of children

    Raises:
        InvalidArgumentError: If n_points is out of range, my is negative,
            or the pool has fewer than two parents while children are requested
    """
    pool = validate_population(parentpool, "parentpool")
    n_points = validate_count(n_points, "n_points", minimum=None)
    my = validate_count(my, "my", minimum=0)

    m, n = pool.shape

    if n_points > n:
        raise InvalidArgumentError(
            f"Crossover points (N={n_points}) must not exceed the number of genes ({n})"
        )
    if n_points <= 0:
        raise InvalidArgumentError(f"Crossover points (N={n_points}) must be greater or equal to 1")
    if my > 0 and m < 2:
        raise InvalidArgumentError(f"Need at least 2 parents for crossover, got {m}")

    children = np.zeros((my, n), dtype=bool)

    row = 0
    while row < my:
        parent_1, parent_2 = select_parent_pair(m, rng)
        points = draw_crossover_points(n_points, n, rng)

        child, sibling = recombine(pool[parent_1], pool[parent_2], points)

        children[row] = child
        if row + 1 < my:
            children[row + 1] = sibling

        logger.debug(
            "npoint_crossover: parents (%d, %d), points %s -> rows %d-%d",
            parent_1, parent_2, points.tolist(), row, min(row + 1, my - 1)
        )
        row += 2

    return children


def crossover_statistics(children: Any, parentpool: Any) -> Dict:
    """
    Check gene provenance of children against a parent pool.

    A child is traceable when some pair of pool rows explains every gene,
    i.e. each gene equals the gene of at least one of the two parents.

    Args:
        children: Children produced by npoint_crossover
        parentpool: Pool the children were generated from

    Returns:
        Dictionary with child count and number of traceable children
    """
    kids = validate_population(children, "children")
    pool = validate_population(parentpool, "parentpool")

    traceable = 0
    for child in kids:
        # matches[i, g] is True when pool row i carries the child's gene g
        matches = pool == child
        covered = matches[:, None, :] | matches[None, :, :]
        if covered.all(axis=2).any():
            traceable += 1

    stats: Dict = {
        'children': int(kids.shape[0]),
        'traceable_children': traceable,
    }
    stats['traceable_rate'] = traceable / max(stats['children'], 1)

    return stats
