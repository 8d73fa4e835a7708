"""
Mutation operator for binary chromosomes.

Implements bit-flip mutation: every gene of every non-elite individual is
flipped independently with probability Pm.
"""

from typing import Any, Dict
import logging
import numpy as np

from .validation import InvalidArgumentError, validate_population, clamp_elite_rows

logger = logging.getLogger(__name__)


def bitflip_mutation(
    population: Any,
    pm: float,
    elitism_no: int,
    rng: np.random.Generator
) -> np.ndarray:
    """
    Flip genes of non-elite individuals with probability pm.

    The population is copied first and the copy is mutated, so the input is
    never modified. One uniform draw in [0, 1) is made per eligible
    (gene, individual) pair, gene by gene, and the bit is negated when the
    draw is below pm.

    Args:
        population: m x n binary matrix, one individual per row
        pm: Mutation probability per gene
        elitism_no: Number of rows from the top left untouched.
            Values outside [0, m] are clamped.
        rng: Random number generator

    Returns:
        Newly allocated m x n boolean matrix with the mutated population

    Note:
        pm = 0 returns an exact copy and pm = 1 flips every eligible bit,
        since draws never reach 1.
    """
    genes = validate_population(population)
    pm = float(pm)

    m, n = genes.shape
    first_row = clamp_elite_rows(elitism_no, m)

    mutated = genes.copy()
    eligible = m - first_row

    if eligible == 0 or n == 0:
        logger.debug("bitflip_mutation: no eligible rows (m=%d, elitism_no=%d)", m, elitism_no)
        return mutated

    # Draws are generated gene-major, then laid out as rows x genes
    draws = rng.random((n, eligible)).T
    flip_mask = draws < pm
    mutated[first_row:] = np.logical_xor(mutated[first_row:], flip_mask)

    logger.debug(
        "bitflip_mutation: flipped %d of %d eligible bits (pm=%.4f)",
        int(flip_mask.sum()), flip_mask.size, pm
    )

    return mutated


def mutation_statistics(original: Any, mutated: Any, elitism_no: int = 0) -> Dict:
    """
    Calculate statistics about a bit-flip mutation.

    Args:
        original: Population before mutation
        mutated: Population after mutation
        elitism_no: Elitism count used for the mutation

    Returns:
        Dictionary with mutation statistics
    """
    before = validate_population(original, "original")
    after = validate_population(mutated, "mutated")

    if before.shape != after.shape:
        raise InvalidArgumentError(f"Shape mismatch: {before.shape} vs {after.shape}")

    m, n = before.shape
    first_row = clamp_elite_rows(elitism_no, m)
    changed = before != after

    stats = {
        'bits_flipped': int(changed[first_row:].sum()),
        'eligible_bits': (m - first_row) * n,
        'elites_intact': bool(not changed[:first_row].any()),
    }
    stats['flip_rate'] = stats['bits_flipped'] / max(stats['eligible_bits'], 1)

    return stats
