"""
Data models for the GA driver.

Core data structures representing a population and the per-generation
records written to the generation log.
"""

from dataclasses import dataclass, field
from typing import Optional, Any
import numpy as np

from .validation import validate_population, validate_fitness


@dataclass
class Population:
    """
    A generation of binary chromosomes.

    Attributes:
        genes: m x n boolean matrix, one individual per row
        fitness: Optional fitness vector aligned with the rows
        generation: Generation number this population belongs to
        metadata: Additional information (seed, operator settings, etc.)
    """
    genes: np.ndarray
    fitness: Optional[np.ndarray] = None
    generation: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Convert genes and fitness to validated arrays."""
        self.genes = validate_population(self.genes)
        if self.fitness is not None:
            self.fitness = validate_fitness(self.fitness, self.genes.shape[0])

    @property
    def size(self) -> int:
        """Number of individuals."""
        return self.genes.shape[0]

    @property
    def chromosome_length(self) -> int:
        """Number of genes per individual."""
        return self.genes.shape[1]

    def copy(self) -> "Population":
        """
        Create a deep copy of this population.

        Returns:
            New Population with copied genes, fitness and metadata
        """
        return Population(
            genes=self.genes.copy(),
            fitness=None if self.fitness is None else self.fitness.copy(),
            generation=self.generation,
            metadata=self.metadata.copy()
        )

    def _require_fitness(self) -> np.ndarray:
        if self.fitness is None:
            raise ValueError("Population has not been evaluated (fitness is None)")
        return self.fitness

    def sorted_by_fitness(self) -> "Population":
        """
        Return a copy ordered from best to worst fitness.

        The sort is stable, so among equal fitness values the earlier row
        stays first. Elitism relies on this ordering: the top rows are the
        elites.
        """
        fitness = self._require_fitness()
        order = np.argsort(-fitness, kind='stable')
        return Population(
            genes=self.genes[order],
            fitness=fitness[order],
            generation=self.generation,
            metadata=self.metadata.copy()
        )

    def best_index(self) -> int:
        """Row index of the fittest individual (first one on ties)."""
        return int(np.argmax(self._require_fitness()))

    def best(self) -> tuple[np.ndarray, float]:
        """
        Get the fittest individual.

        Returns:
            Tuple of (chromosome copy, fitness)
        """
        index = self.best_index()
        return self.genes[index].copy(), float(self.fitness[index])


def chromosome_to_bitstring(chromosome: np.ndarray) -> str:
    """Render a chromosome as a string of 0/1 characters."""
    return ''.join('1' if gene else '0' for gene in chromosome)


def bitstring_to_chromosome(bits: str) -> np.ndarray:
    """Parse a string of 0/1 characters into a boolean chromosome."""
    if any(char not in '01' for char in bits):
        raise ValueError(f"Invalid bit string: {bits!r}")
    return np.array([char == '1' for char in bits], dtype=bool)


@dataclass
class GenerationRecord:
    """
    Summary of one generation of a GA run.

    Attributes:
        generation: Generation number (0 is the initial population)
        best_fitness: Highest fitness in the generation
        mean_fitness: Average fitness
        min_fitness: Lowest fitness
        best_chromosome: Fittest chromosome as a 0/1 string
        bits_flipped: Number of genes flipped by mutation to reach this generation
        seed: Random seed of the run
        timestamp: When the record was created
    """
    generation: int
    best_fitness: float
    mean_fitness: float
    min_fitness: float
    best_chromosome: str
    bits_flipped: int
    seed: int
    timestamp: Optional[str] = None

    def __post_init__(self):
        """Validate generation record."""
        if self.generation < 0:
            raise ValueError(f"Invalid generation: {self.generation}. Must be >= 0")

        if self.min_fitness > self.best_fitness:
            raise ValueError(
                f"min_fitness ({self.min_fitness}) exceeds best_fitness ({self.best_fitness})"
            )

    @classmethod
    def from_population(
        cls,
        population: Population,
        bits_flipped: int,
        seed: int,
        timestamp: Optional[str] = None
    ) -> "GenerationRecord":
        """
        Summarize an evaluated population.

        Args:
            population: Population with fitness set
            bits_flipped: Genes flipped by mutation in this generation
            seed: Random seed of the run
            timestamp: Creation timestamp

        Returns:
            GenerationRecord for the population
        """
        chromosome, best_fitness = population.best()
        return cls(
            generation=population.generation,
            best_fitness=best_fitness,
            mean_fitness=float(np.mean(population.fitness)),
            min_fitness=float(np.min(population.fitness)),
            best_chromosome=chromosome_to_bitstring(chromosome),
            bits_flipped=int(bits_flipped),
            seed=seed,
            timestamp=timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert generation record to dictionary for CSV export.

        Returns:
            Dictionary with string-serializable values
        """
        return {
            "generation": self.generation,
            "best_fitness": self.best_fitness,
            "mean_fitness": self.mean_fitness,
            "min_fitness": self.min_fitness,
            "best_chromosome": self.best_chromosome,
            "bits_flipped": self.bits_flipped,
            "seed": self.seed,
            "timestamp": self.timestamp or "",
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationRecord":
        """
        Create generation record from dictionary (e.g., from CSV).

        Args:
            data: Dictionary with generation information

        Returns:
            GenerationRecord instance
        """
        return cls(
            generation=int(data["generation"]),
            best_fitness=float(data["best_fitness"]),
            mean_fitness=float(data["mean_fitness"]),
            min_fitness=float(data["min_fitness"]),
            best_chromosome=data["best_chromosome"],
            bits_flipped=int(data["bits_flipped"]),
            seed=int(data["seed"]),
            timestamp=data.get("timestamp") or None,
        )
