"""
I/O utilities for the GA driver.

Handles YAML configuration loading, generation log CSV serialization,
metadata sidecars, and run folder management.
"""

import csv
from pathlib import Path
from typing import Union
import yaml

from .data_models import GenerationRecord

GENERATION_LOG_FIELDS = [
    'generation', 'best_fitness', 'mean_fitness', 'min_fitness',
    'best_chromosome', 'bits_flipped', 'seed', 'timestamp'
]


def load_config(config_path: Union[str, Path]) -> dict:
    """
    Load GA configuration from YAML file.

    Args:
        config_path: Path to config YAML file

    Returns:
        Configuration dictionary (empty if the file has no content)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def create_run_folder(root: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Create the output folder of a run.

    Args:
        root: Output directory
        overwrite: If True, reuse an existing directory

    Returns:
        Path to the output directory

    Raises:
        FileExistsError: If the directory exists and overwrite=False
    """
    root = Path(root)

    if root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    root.mkdir(parents=True, exist_ok=overwrite)

    return root


def save_generation_log(
    records: list[GenerationRecord],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save generation records to CSV file.

    Args:
        records: List of GenerationRecord objects
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved generation log

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Generation log already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=GENERATION_LOG_FIELDS)
        writer.writeheader()

        for record in records:
            writer.writerow(record.to_dict())

    return output_path


def load_generation_log(log_path: Union[str, Path]) -> list[GenerationRecord]:
    """
    Load generation records from a CSV log.

    Args:
        log_path: Path to generation log CSV

    Returns:
        List of GenerationRecord objects in file order

    Raises:
        FileNotFoundError: If the log doesn't exist
        ValueError: If required columns are missing
    """
    log_path = Path(log_path)

    if not log_path.exists():
        raise FileNotFoundError(f"Generation log not found: {log_path}")

    with open(log_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        missing = set(GENERATION_LOG_FIELDS) - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"Invalid generation log {log_path}. Missing columns: {sorted(missing)}")

        return [GenerationRecord.from_dict(row) for row in reader]


def save_metadata(
    metadata: dict,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save metadata to YAML sidecar file.

    Args:
        metadata: Metadata dictionary
        output_path: Path for output YAML
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved metadata file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Metadata file already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        yaml.dump(metadata, f, default_flow_style=False, sort_keys=False)

    return output_path
