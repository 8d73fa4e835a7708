"""
Visualization utilities for the GA driver.

Plots the fitness history of a run and bitmaps of a population.
"""

from pathlib import Path
from typing import List, Tuple, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .data_models import GenerationRecord
from .validation import validate_population


def plot_fitness_history(
    records: List[GenerationRecord],
    output_path: Union[str, Path],
    title: str = "Fitness history",
    figsize: Tuple[int, int] = (10, 6)
) -> Path:
    """
    Plot best, mean and min fitness per generation and save as PNG.

    Args:
        records: Generation records of a run, in generation order
        output_path: Path to save PNG file
        title: Figure title
        figsize: Figure size (width, height) in inches

    Returns:
        Path to the saved figure
    """
    if not records:
        raise ValueError("No generation records to plot")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    generations = [r.generation for r in records]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(generations, [r.best_fitness for r in records], color="red", label="best")
    ax.plot(generations, [r.mean_fitness for r in records], color="blue", label="mean")
    ax.fill_between(
        generations,
        [r.min_fitness for r in records],
        [r.best_fitness for r in records],
        color="blue", alpha=0.1, label="min-max range"
    )

    ax.set_xlabel("Generation")
    ax.set_ylabel("Fitness")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="lower right")

    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)

    return output_path


def plot_population(
    population: np.ndarray,
    output_path: Union[str, Path],
    elite_rows: int = 0,
    figsize: Tuple[int, int] = (10, 6)
) -> Path:
    """
    Draw a population as a bitmap, one row per individual.

    Elite rows are separated from the rest by a horizontal line.

    Args:
        population: m x n binary matrix
        output_path: Path to save PNG file
        elite_rows: Number of elite rows to mark
        figsize: Figure size (width, height) in inches

    Returns:
        Path to the saved figure
    """
    genes = validate_population(population)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=figsize)
    ax.imshow(genes, cmap="Greys", aspect="auto", interpolation="nearest")

    if 0 < elite_rows < genes.shape[0]:
        ax.axhline(elite_rows - 0.5, color="red", linewidth=1.5)

    ax.set_xlabel("Gene")
    ax.set_ylabel("Individual")
    ax.set_title(f"Population ({genes.shape[0]} x {genes.shape[1]})")

    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)

    return output_path
