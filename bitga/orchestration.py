"""
Orchestration module for bitga.

Implements the reference generational loop that chains tournament
selection, N-point crossover and bit-flip mutation.
"""

from typing import Callable, Dict, List, Optional, Tuple
from datetime import datetime
from pathlib import Path
import numpy as np

from .data_models import Population, GenerationRecord
from .io_utils import load_config, create_run_folder, save_generation_log, save_metadata
from .fitness import get_fitness_function, optimum
from .selection import tournament_selection
from .crossover import npoint_crossover
from .mutation import bitflip_mutation, mutation_statistics
from .random_utils import create_rng

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'bitga_config.yaml'


def resolve_settings(run_config: Dict) -> Dict:
    """
    Merge a run configuration over the default GA configuration.

    Sections 'operators', 'fitness' and 'generation' are merged key by key;
    the GA config file is run_config['ga_config'] if given, otherwise the
    packaged bitga_config.yaml.

    Args:
        run_config: Run configuration dict from YAML

    Returns:
        Dict with merged 'operators', 'fitness' and 'generation' sections
    """
    ga_config_path = run_config.get('ga_config', DEFAULT_CONFIG_PATH)
    ga_config = load_config(ga_config_path)

    settings = {}
    for section in ('operators', 'fitness', 'generation'):
        merged = dict(ga_config.get(section, {}))
        merged.update(run_config.get(section, {}))
        settings[section] = merged

    return settings


def initialize_population(
    size: int,
    chromosome_length: int,
    rng: np.random.Generator
) -> np.ndarray:
    """Draw a uniformly random size x chromosome_length binary population."""
    return rng.random((size, chromosome_length)) < 0.5


def evolve_generation(
    population: Population,
    fitness_fn: Callable[[np.ndarray], np.ndarray],
    operators: Dict,
    rng: np.random.Generator
) -> Tuple[Population, Dict]:
    """
    Produce the next generation from an evaluated population.

    Algorithm:
        1. Rank the population by fitness, best first; the top
           'elitism' rows are the elites
        2. Fill a parent pool: elites plus m - elitism tournament winners
           drawn from the non-elite rows
        3. Breed m - elitism children from the pool by N-point crossover
        4. Stack elites and children, then mutate every non-elite row
        5. Evaluate the new population

    Args:
        population: Current population with fitness set
        fitness_fn: Callable scoring a gene matrix
        operators: Operator settings (mutation_probability, elitism,
            crossover_points, tournament_size)
        rng: Random number generator

    Returns:
        Tuple of (next_population, mutation_stats)
    """
    ranked = population.sorted_by_fitness()
    elitism = operators['elitism']
    offspring_count = ranked.size - elitism

    parents, _ = tournament_selection(
        operators['tournament_size'],
        ranked.fitness,
        ranked.genes,
        offspring_count,
        elitism,
        rng
    )

    elites = ranked.genes[:elitism]
    parent_pool = np.vstack([elites, parents])

    children = npoint_crossover(parent_pool, operators['crossover_points'], offspring_count, rng)

    unmutated = np.vstack([elites, children])
    mutated = bitflip_mutation(unmutated, operators['mutation_probability'], elitism, rng)
    stats = mutation_statistics(unmutated, mutated, elitism)

    next_population = Population(
        genes=mutated,
        fitness=fitness_fn(mutated),
        generation=population.generation + 1,
        metadata=population.metadata.copy()
    )

    return next_population, stats


def run_evolution(run_config: Dict) -> List[GenerationRecord]:
    """
    Run a complete GA from a run configuration.

    Args:
        run_config: Run configuration dict from YAML

    Algorithm:
        1. Merge operator/fitness/generation settings with bitga_config.yaml
        2. Setup RNG (run_config['random_seed'] or a fresh random seed)
        3. Create output directory: run_config['output']['root']
        4. Draw and evaluate a random initial population
        5. Evolve until max_generations or target_fitness is reached
        6. Save generation log, run metadata and (optionally) a fitness plot
        7. Print summary report

    Returns:
        Generation records, one per generation including generation 0
    """
    print("=" * 70)
    print("BITGA RUN")
    print("=" * 70)

    settings = resolve_settings(run_config)
    operators = settings['operators']
    fitness_settings = settings['fitness']
    generation_settings = settings['generation']

    # Setup RNG
    seed = run_config.get('random_seed')
    if seed is None:
        seed = int(np.random.default_rng().integers(0, 2**31))
    print(f"Random seed: {seed}")
    rng = create_rng(seed)

    size = run_config['population']['size']
    chromosome_length = run_config['population']['chromosome_length']
    print(f"Population: {size} individuals x {chromosome_length} genes")

    fitness_name = fitness_settings.get('function', 'onemax')
    block_size = fitness_settings.get('block_size', 4)
    fitness_fn = get_fitness_function(fitness_name, block_size)
    best_possible = optimum(fitness_name, chromosome_length, block_size)
    print(f"Fitness function: {fitness_name} (optimum {best_possible})")
    print(
        f"Operators: Pm={operators['mutation_probability']}, "
        f"elitism={operators['elitism']}, N={operators['crossover_points']}, "
        f"k={operators['tournament_size']}"
    )

    output_config = run_config.get('output', {})
    output_root: Optional[Path] = None
    if 'root' in output_config:
        output_root = create_run_folder(output_config['root'], output_config.get('overwrite', False))
        print(f"Output directory: {output_root}")
    print()

    max_generations = generation_settings['max_generations']
    target_fitness = generation_settings.get('target_fitness')
    progress_every = generation_settings.get('progress_every', 10)

    genes = initialize_population(size, chromosome_length, rng)
    population = Population(genes=genes, fitness=fitness_fn(genes), metadata={'seed': seed})

    records = [GenerationRecord.from_population(
        population, bits_flipped=0, seed=seed, timestamp=datetime.now().isoformat()
    )]

    print(f"Evolving for up to {max_generations} generations...")
    print()

    for _ in range(max_generations):
        if target_fitness is not None and records[-1].best_fitness >= target_fitness:
            break

        population, stats = evolve_generation(population, fitness_fn, operators, rng)
        record = GenerationRecord.from_population(
            population,
            bits_flipped=stats['bits_flipped'],
            seed=seed,
            timestamp=datetime.now().isoformat()
        )
        records.append(record)

        # Progress reporting
        if record.generation % progress_every == 0 or record.generation == max_generations:
            print(
                f"  Generation {record.generation:4d}: best={record.best_fitness:.4f} "
                f"mean={record.mean_fitness:.4f}"
            )

    best = max(records, key=lambda r: r.best_fitness)
    reached_target = target_fitness is not None and best.best_fitness >= target_fitness

    # Save outputs
    if output_root is not None:
        log_path = save_generation_log(records, output_root / 'generation_log.csv', overwrite=True)
        metadata_path = save_metadata(
            {
                'random_seed': seed,
                'population': dict(run_config['population']),
                'operators': operators,
                'fitness': fitness_settings,
                'generations_run': records[-1].generation,
                'best_fitness': best.best_fitness,
                'optimum': best_possible,
                'best_generation': best.generation,
                'best_chromosome': best.best_chromosome,
                'reached_target': reached_target,
                'finished_at': datetime.now().isoformat(),
            },
            output_root / 'run_metadata.yaml',
            overwrite=True
        )

        if output_config.get('plot', False):
            from .visualization_utils import plot_fitness_history
            plot_path = plot_fitness_history(
                records,
                output_root / 'fitness_history.png',
                title=f"{fitness_name} ({size} x {chromosome_length})"
            )
            print(f"  Saved plot: {plot_path}")

    # Print summary
    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Generations run: {records[-1].generation}")
    print(f"Best fitness: {best.best_fitness} (generation {best.generation})")
    if target_fitness is not None:
        print(f"Target fitness {target_fitness}: {'reached' if reached_target else 'not reached'}")
    if output_root is not None:
        print(f"Generation log: {log_path}")
        print(f"Metadata: {metadata_path}")

    return records
