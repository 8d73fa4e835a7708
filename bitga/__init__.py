"""
bitga - Genetic algorithm operators for binary chromosomes

This package provides the three stochastic operators of a generational
GA over fixed-length bit strings, plus a small reference driver.

Key Features:
- Explicit, seedable random generator passed to every operator
- Inputs never modified (every operator returns a fresh matrix)
- Elitism support in mutation and selection
- Argument validation at the operator boundary

Modules:
- random_utils: Bounded random integers/floats and distinct draws
- validation: Argument checks and InvalidArgumentError
- mutation: Bit-flip mutation
- crossover: N-point crossover
- selection: Tournament selection
- data_models: Core data structures (Population, GenerationRecord)
- fitness: Benchmark fitness functions (OneMax, LeadingOnes, ...)
- io_utils: YAML config, generation log, metadata sidecars
- orchestration: Reference generational loop
- visualization_utils: Fitness history and population plots
- cli: Run configuration loading and validation
"""

__version__ = "0.1.0"
__author__ = "bitga developers"

from .validation import InvalidArgumentError
from .random_utils import create_rng
from .mutation import bitflip_mutation
from .crossover import npoint_crossover
from .selection import tournament_selection
from .data_models import Population, GenerationRecord

__all__ = [
    "InvalidArgumentError",
    "create_rng",
    "bitflip_mutation",
    "npoint_crossover",
    "tournament_selection",
    "Population",
    "GenerationRecord",
]
