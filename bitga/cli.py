"""
CLI module for bitga.

Handles run configuration loading, validation, and dispatching to the
generational loop.
"""

from typing import Dict, Any
from pathlib import Path
import yaml

from .fitness import FITNESS_FUNCTIONS, BLOCK_FUNCTIONS
from .orchestration import resolve_settings, run_evolution


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    The 'operators', 'fitness' and 'generation' sections are checked after
    merging them over bitga_config.yaml (or 'ga_config'), so defaults are
    validated against the population dimensions of this run too.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    # Check required sections
    required = ['population', 'output']
    for section in required:
        if section not in config:
            raise ConfigValidationError(f"Missing required field: '{section}'")

    for section in ['population', 'output', 'operators', 'fitness', 'generation']:
        if section in config and not isinstance(config[section], dict):
            raise ConfigValidationError(f"'{section}' must be a dictionary")

    if 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    seed = config.get('random_seed')
    if seed is not None and (not _is_int(seed) or seed < 0):
        raise ConfigValidationError(f"'random_seed' must be a non-negative integer, got: {seed}")

    _validate_population_config(config)

    merged = dict(config)
    merged.update(resolve_settings(config))

    _validate_operator_config(merged)
    _validate_fitness_config(merged)
    _validate_generation_config(merged)


def _validate_population_config(config: Dict[str, Any]) -> None:
    """
    Validate population section.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    population = config['population']

    for field in ['size', 'chromosome_length']:
        if field not in population:
            raise ConfigValidationError(f"Missing required field: 'population.{field}'")

    size = population['size']
    if not _is_int(size) or size < 2:
        raise ConfigValidationError(f"'population.size' must be an integer >= 2, got: {size}")

    length = population['chromosome_length']
    if not _is_int(length) or length < 1:
        raise ConfigValidationError(
            f"'population.chromosome_length' must be a positive integer, got: {length}"
        )


def _validate_operator_config(config: Dict[str, Any]) -> None:
    """
    Validate merged operator settings against the population dimensions.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    operators = config.get('operators', {})
    size = config['population']['size']
    length = config['population']['chromosome_length']

    for field in ['mutation_probability', 'elitism', 'crossover_points', 'tournament_size']:
        if field not in operators:
            raise ConfigValidationError(f"Missing operator setting: 'operators.{field}'")

    pm = operators['mutation_probability']
    if not _is_number(pm) or not 0 <= pm <= 1:
        raise ConfigValidationError(
            f"'operators.mutation_probability' must be between 0 and 1, got: {pm}"
        )

    elitism = operators['elitism']
    if not _is_int(elitism) or not 0 <= elitism < size:
        raise ConfigValidationError(
            f"'operators.elitism' must be an integer in [0, {size - 1}], got: {elitism}"
        )

    n_points = operators['crossover_points']
    if not _is_int(n_points) or not 1 <= n_points <= length:
        raise ConfigValidationError(
            f"'operators.crossover_points' must be an integer in [1, {length}], got: {n_points}"
        )

    k = operators['tournament_size']
    if not _is_int(k) or not 1 <= k <= size - elitism:
        raise ConfigValidationError(
            f"'operators.tournament_size' must be an integer in [1, {size - elitism}], got: {k}"
        )


def _validate_fitness_config(config: Dict[str, Any]) -> None:
    """
    Validate fitness section.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    fitness = config.get('fitness', {})

    name = fitness.get('function')
    if name is not None and name not in FITNESS_FUNCTIONS:
        raise ConfigValidationError(
            f"Invalid fitness function: '{name}'. Must be one of {sorted(FITNESS_FUNCTIONS)}"
        )

    if name in BLOCK_FUNCTIONS:
        block_size = fitness.get('block_size', 4)
        length = config['population']['chromosome_length']
        if not _is_int(block_size) or block_size < 1 or length % block_size != 0:
            raise ConfigValidationError(
                f"'fitness.block_size' must be a positive divisor of {length}, got: {block_size}"
            )


def _validate_generation_config(config: Dict[str, Any]) -> None:
    """
    Validate generation section.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    generation = config.get('generation', {})

    if 'max_generations' not in generation:
        raise ConfigValidationError("Missing generation setting: 'generation.max_generations'")

    max_generations = generation['max_generations']
    if not _is_int(max_generations) or max_generations <= 0:
        raise ConfigValidationError(
            f"'generation.max_generations' must be a positive integer, got: {max_generations}"
        )

    if 'target_fitness' in generation and not _is_number(generation['target_fitness']):
        raise ConfigValidationError(
            f"'generation.target_fitness' must be a number, got: {generation['target_fitness']}"
        )

    if 'progress_every' in generation:
        progress_every = generation['progress_every']
        if not _is_int(progress_every) or progress_every <= 0:
            raise ConfigValidationError(
                f"'generation.progress_every' must be a positive integer, got: {progress_every}"
            )


def run_from_config(config_path: str) -> None:
    """
    Load run configuration and execute the GA.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        Various exceptions from the GA run
    """
    # Load and validate config
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print(f"Validating configuration...")
    validate_run_config(config)
    print()

    run_evolution(config)

    print("\nRun completed successfully!")
