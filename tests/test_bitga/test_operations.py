"""
Tests for GA operations: random utilities, mutation, crossover, and selection.
"""

import unittest
import numpy as np

from bitga.validation import InvalidArgumentError
from bitga.random_utils import (
    create_rng,
    bounded_random_int,
    bounded_random_unit,
    draw_distinct,
)
from bitga.mutation import bitflip_mutation, mutation_statistics
from bitga.crossover import (
    select_parent_pair,
    draw_crossover_points,
    segment_mask,
    recombine,
    npoint_crossover,
    crossover_statistics,
)
from bitga.selection import draw_contenders, tournament_winner, tournament_selection


EXAMPLE_POPULATION = np.array([
    [1, 0, 1],
    [0, 1, 0],
    [1, 1, 1],
    [0, 0, 0],
], dtype=bool)


class ScriptedRng:
    """Stand-in generator returning a fixed sequence of integers."""

    def __init__(self, values):
        self.values = list(values)

    def integers(self, low, high):
        value = self.values.pop(0)
        assert low <= value < high, f"scripted value {value} outside [{low}, {high})"
        return value


class TestRandomUtils(unittest.TestCase):
    """Test bounded and distinct random draws."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_bounded_random_int_range(self):
        """Draws stay inside the closed range and hit both ends."""
        values = {bounded_random_int(self.rng, 3, 6) for _ in range(500)}
        self.assertEqual(values, {3, 4, 5, 6})

    def test_bounded_random_int_single_value(self):
        self.assertEqual(bounded_random_int(self.rng, 5, 5), 5)

    def test_bounded_random_int_empty_range(self):
        with self.assertRaises(InvalidArgumentError):
            bounded_random_int(self.rng, 4, 3)

    def test_bounded_random_unit(self):
        for _ in range(200):
            value = bounded_random_unit(self.rng)
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_draw_distinct(self):
        """Values are distinct and inside the range."""
        values = draw_distinct(self.rng, 5, 10, 19)

        self.assertEqual(len(values), 5)
        self.assertEqual(len(set(values)), 5)
        for value in values:
            self.assertGreaterEqual(value, 10)
            self.assertLessEqual(value, 19)

    def test_draw_distinct_full_range(self):
        values = draw_distinct(self.rng, 8, 0, 7)
        self.assertEqual(sorted(values), list(range(8)))

    def test_draw_distinct_zero(self):
        self.assertEqual(draw_distinct(self.rng, 0, 0, 7), [])

    def test_draw_distinct_too_many(self):
        """Asking for more values than the range holds fails instead of looping."""
        with self.assertRaises(InvalidArgumentError):
            draw_distinct(self.rng, 9, 0, 7)

    def test_create_rng_reproducible(self):
        a = create_rng(123).random(10)
        b = create_rng(123).random(10)
        np.testing.assert_array_equal(a, b)


class TestMutation(unittest.TestCase):
    """Test bit-flip mutation."""

    def setUp(self):
        self.rng = np.random.default_rng(42)
        self.population = np.random.default_rng(0).random((12, 30)) < 0.5

    def test_zero_probability_returns_copy(self):
        """Pm = 0 returns an identical but distinct matrix."""
        mutated = bitflip_mutation(EXAMPLE_POPULATION, 0.0, 0, self.rng)

        np.testing.assert_array_equal(mutated, EXAMPLE_POPULATION)
        self.assertFalse(np.shares_memory(mutated, EXAMPLE_POPULATION))

    def test_shape_invariance(self):
        mutated = bitflip_mutation(self.population, 0.3, 2, self.rng)

        self.assertEqual(mutated.shape, self.population.shape)
        self.assertEqual(mutated.dtype, np.bool_)

    def test_full_probability_flips_everything(self):
        mutated = bitflip_mutation(self.population, 1.0, 0, self.rng)
        np.testing.assert_array_equal(mutated, ~self.population)

    def test_elites_unchanged(self):
        """Rows above the elitism count are never flipped."""
        mutated = bitflip_mutation(self.population, 1.0, 3, self.rng)

        np.testing.assert_array_equal(mutated[:3], self.population[:3])
        np.testing.assert_array_equal(mutated[3:], ~self.population[3:])

    def test_elitism_covering_population(self):
        """Elitism >= m mutates nobody and does not fail."""
        for elitism_no in (12, 50):
            mutated = bitflip_mutation(self.population, 1.0, elitism_no, self.rng)
            np.testing.assert_array_equal(mutated, self.population)

    def test_negative_elitism_is_clamped(self):
        mutated = bitflip_mutation(self.population, 1.0, -4, self.rng)
        np.testing.assert_array_equal(mutated, ~self.population)

    def test_input_not_modified(self):
        original = self.population.copy()
        bitflip_mutation(self.population, 0.5, 1, self.rng)
        np.testing.assert_array_equal(self.population, original)

    def test_draws_are_gene_major(self):
        """One draw per eligible bit, consumed gene by gene."""
        mutated = bitflip_mutation(self.population, 0.2, 2, np.random.default_rng(9))

        draws = np.random.default_rng(9).random((30, 10))
        expected = self.population.copy()
        expected[2:] ^= draws.T < 0.2

        np.testing.assert_array_equal(mutated, expected)

    def test_flip_rate_close_to_probability(self):
        population = np.zeros((200, 100), dtype=bool)
        mutated = bitflip_mutation(population, 0.1, 0, self.rng)

        rate = mutated.mean()
        self.assertGreater(rate, 0.08)
        self.assertLess(rate, 0.12)

    def test_accepts_integer_matrix(self):
        mutated = bitflip_mutation([[0, 1], [1, 0]], 1.0, 0, self.rng)
        np.testing.assert_array_equal(mutated, [[True, False], [False, True]])

    def test_rejects_non_binary_values(self):
        with self.assertRaises(InvalidArgumentError):
            bitflip_mutation([[0, 2], [1, 0]], 0.5, 0, self.rng)

        with self.assertRaises(InvalidArgumentError):
            bitflip_mutation([0, 1, 1], 0.5, 0, self.rng)

    def test_mutation_statistics(self):
        mutated = bitflip_mutation(self.population, 1.0, 1, self.rng)
        stats = mutation_statistics(self.population, mutated, 1)

        self.assertEqual(stats['bits_flipped'], 11 * 30)
        self.assertEqual(stats['eligible_bits'], 11 * 30)
        self.assertTrue(stats['elites_intact'])
        self.assertEqual(stats['flip_rate'], 1.0)

    def test_mutation_statistics_shape_mismatch(self):
        with self.assertRaises(InvalidArgumentError):
            mutation_statistics(self.population, self.population[:5], 0)


class TestCrossover(unittest.TestCase):
    """Test N-point crossover."""

    def setUp(self):
        self.rng = np.random.default_rng(42)
        self.pool = np.random.default_rng(1).random((6, 20)) < 0.5

    def test_rejects_zero_points(self):
        with self.assertRaises(InvalidArgumentError):
            npoint_crossover(self.pool, 0, 4, self.rng)

    def test_rejects_too_many_points(self):
        with self.assertRaises(InvalidArgumentError):
            npoint_crossover(self.pool, 21, 4, self.rng)

    def test_rejects_negative_points(self):
        with self.assertRaises(InvalidArgumentError):
            npoint_crossover(self.pool, -1, 4, self.rng)

    def test_rejects_negative_offspring(self):
        with self.assertRaises(InvalidArgumentError):
            npoint_crossover(self.pool, 2, -1, self.rng)

    def test_single_parent_pool(self):
        with self.assertRaises(InvalidArgumentError):
            npoint_crossover(self.pool[:1], 2, 2, self.rng)

        children = npoint_crossover(self.pool[:1], 2, 0, self.rng)
        self.assertEqual(children.shape, (0, 20))

    def test_zero_offspring(self):
        """my = 0 yields an empty matrix without consuming randomness."""
        rng = np.random.default_rng(5)
        children = npoint_crossover(self.pool, 3, 0, rng)

        self.assertEqual(children.shape, (0, 20))
        self.assertEqual(rng.random(), np.random.default_rng(5).random())

    def test_output_shape(self):
        for my in (1, 4, 5, 11):
            children = npoint_crossover(self.pool, 3, my, self.rng)
            self.assertEqual(children.shape, (my, 20))
            self.assertEqual(children.dtype, np.bool_)

    def test_all_points(self):
        """N equal to the chromosome length is accepted."""
        points = draw_crossover_points(20, 20, self.rng)
        np.testing.assert_array_equal(points, np.arange(20))

        children = npoint_crossover(self.pool, 20, 2, self.rng)
        self.assertEqual(children.shape, (2, 20))

    def test_points_distinct_and_sorted(self):
        for _ in range(50):
            points = draw_crossover_points(5, 20, self.rng)

            self.assertEqual(len(points), 5)
            self.assertEqual(len(set(points.tolist())), 5)
            self.assertTrue(np.all(np.diff(points) > 0))
            self.assertGreaterEqual(points[0], 0)
            self.assertLess(points[-1], 20)

    def test_parent_pair_distinct(self):
        for _ in range(100):
            parent_1, parent_2 = select_parent_pair(3, self.rng)
            self.assertNotEqual(parent_1, parent_2)
            self.assertIn(parent_1, range(3))
            self.assertIn(parent_2, range(3))

        with self.assertRaises(InvalidArgumentError):
            select_parent_pair(1, self.rng)

    def test_segment_mask(self):
        """A cut point is the last gene of its segment."""
        mask = segment_mask(np.array([2, 5]), 8)
        np.testing.assert_array_equal(
            mask, [True, True, True, False, False, False, True, True]
        )

    def test_segment_mask_cut_at_last_gene(self):
        mask = segment_mask(np.array([7]), 8)
        self.assertTrue(mask.all())

        mask = segment_mask(np.array([0]), 8)
        np.testing.assert_array_equal(mask, [True] + [False] * 7)

    def test_recombine_complementary(self):
        ones = np.ones(8, dtype=bool)
        zeros = np.zeros(8, dtype=bool)

        child, sibling = recombine(ones, zeros, np.array([1, 4]))

        np.testing.assert_array_equal(child, [1, 1, 0, 0, 0, 1, 1, 1])
        np.testing.assert_array_equal(sibling, ~child)

    def test_gene_provenance(self):
        """Replaying the draws reproduces every child from its two parents."""
        children = npoint_crossover(self.pool, 3, 4, np.random.default_rng(3))

        replay = np.random.default_rng(3)
        for event in range(2):
            parent_1, parent_2 = select_parent_pair(6, replay)
            points = draw_crossover_points(3, 20, replay)
            child, sibling = recombine(self.pool[parent_1], self.pool[parent_2], points)

            np.testing.assert_array_equal(children[2 * event], child)
            np.testing.assert_array_equal(children[2 * event + 1], sibling)

            for row in (children[2 * event], children[2 * event + 1]):
                from_parents = (row == self.pool[parent_1]) | (row == self.pool[parent_2])
                self.assertTrue(from_parents.all())

    def test_odd_offspring_drops_last_sibling(self):
        children = npoint_crossover(self.pool, 2, 3, np.random.default_rng(8))

        replay = np.random.default_rng(8)
        expected = []
        for _ in range(2):
            parent_1, parent_2 = select_parent_pair(6, replay)
            points = draw_crossover_points(2, 20, replay)
            expected.extend(recombine(self.pool[parent_1], self.pool[parent_2], points))

        self.assertEqual(children.shape, (3, 20))
        np.testing.assert_array_equal(children, np.array(expected[:3]))

    def test_input_not_modified(self):
        original = self.pool.copy()
        npoint_crossover(self.pool, 4, 7, self.rng)
        np.testing.assert_array_equal(self.pool, original)

    def test_crossover_statistics(self):
        children = npoint_crossover(self.pool, 3, 9, self.rng)
        stats = crossover_statistics(children, self.pool)

        self.assertEqual(stats['children'], 9)
        self.assertEqual(stats['traceable_children'], 9)
        self.assertEqual(stats['traceable_rate'], 1.0)


class TestSelection(unittest.TestCase):
    """Test tournament selection."""

    def setUp(self):
        self.rng = np.random.default_rng(42)
        self.population = np.random.default_rng(2).random((20, 8)) < 0.5
        # Unique fitness values
        self.fitness = np.random.default_rng(3).permutation(20) / 20.0

    def test_forced_contenders_example(self):
        """Contenders {1, 3} with fitness 0.9 and 0.2 -> row [0, 1, 0] wins."""
        fitness = [0.1, 0.9, 0.5, 0.2]

        self.assertEqual(tournament_winner([1, 3], np.array(fitness)), 1)

        survivors, survivor_fitness = tournament_selection(
            2, fitness, EXAMPLE_POPULATION, 1, 0, ScriptedRng([1, 3])
        )

        np.testing.assert_array_equal(survivors, [[False, True, False]])
        np.testing.assert_array_equal(survivor_fitness, [0.9])

    def test_duplicate_draw_is_redrawn(self):
        """A contender drawn twice in one tournament is rejected and redrawn."""
        fitness = [0.1, 0.9, 0.5, 0.2]
        survivors, survivor_fitness = tournament_selection(
            2, fitness, EXAMPLE_POPULATION, 1, 0, ScriptedRng([3, 3, 2])
        )

        np.testing.assert_array_equal(survivors, [[True, True, True]])
        np.testing.assert_array_equal(survivor_fitness, [0.5])

    def test_tie_goes_to_first_drawn(self):
        fitness = np.array([0.5, 0.5, 0.1])

        self.assertEqual(tournament_winner([1, 0, 2], fitness), 1)
        self.assertEqual(tournament_winner([2, 0, 1], fitness), 0)

    def test_winner_is_tournament_maximum(self):
        """Replaying contender draws confirms every winner."""
        survivors, survivor_fitness = tournament_selection(
            4, self.fitness, self.population, 10, 3, np.random.default_rng(5)
        )

        replay = np.random.default_rng(5)
        for t in range(10):
            contenders = draw_contenders(4, 3, 20, replay)
            best = max(contenders, key=lambda i: self.fitness[i])

            self.assertTrue(all(c >= 3 for c in contenders))
            self.assertEqual(survivor_fitness[t], self.fitness[best])
            np.testing.assert_array_equal(survivors[t], self.population[best])

    def test_survivor_fitness_alignment(self):
        survivors, survivor_fitness = tournament_selection(
            3, self.fitness, self.population, 25, 0, self.rng
        )

        for row, value in zip(survivors, survivor_fitness):
            index = int(np.flatnonzero(self.fitness == value)[0])
            np.testing.assert_array_equal(row, self.population[index])

    def test_elites_never_compete(self):
        fitness = self.fitness.copy()
        fitness[:4] = 100.0

        _, survivor_fitness = tournament_selection(
            5, fitness, self.population, 200, 4, self.rng
        )

        self.assertTrue(np.all(survivor_fitness < 100.0))

    def test_full_tournament_picks_best_non_elite(self):
        _, survivor_fitness = tournament_selection(
            18, self.fitness, self.population, 5, 2, self.rng
        )
        np.testing.assert_array_equal(survivor_fitness, [self.fitness[2:].max()] * 5)

    def test_output_shapes(self):
        survivors, survivor_fitness = tournament_selection(
            2, self.fitness, self.population, 33, 1, self.rng
        )
        self.assertEqual(survivors.shape, (33, 8))
        self.assertEqual(survivor_fitness.shape, (33,))

    def test_zero_survivors(self):
        survivors, survivor_fitness = tournament_selection(
            2, self.fitness, self.population, 0, 0, self.rng
        )
        self.assertEqual(survivors.shape, (0, 8))
        self.assertEqual(survivor_fitness.shape, (0,))

    def test_column_fitness_vector(self):
        survivors, _ = tournament_selection(
            2, self.fitness.reshape(-1, 1), self.population, 4, 0, self.rng
        )
        self.assertEqual(survivors.shape, (4, 8))

    def test_invalid_arguments(self):
        with self.assertRaises(InvalidArgumentError):
            tournament_selection(18, self.fitness, self.population, 5, 3, self.rng)

        with self.assertRaises(InvalidArgumentError):
            tournament_selection(0, self.fitness, self.population, 5, 0, self.rng)

        with self.assertRaises(InvalidArgumentError):
            tournament_selection(2, self.fitness[:-1], self.population, 5, 0, self.rng)

        with self.assertRaises(InvalidArgumentError):
            tournament_selection(2, self.fitness, self.population, -1, 0, self.rng)

        with self.assertRaises(InvalidArgumentError):
            tournament_selection(1, self.fitness, self.population, 5, 21, self.rng)

    def test_outputs_do_not_alias_input(self):
        original = self.population.copy()
        survivors, _ = tournament_selection(3, self.fitness, self.population, 5, 0, self.rng)

        survivors[:] = ~survivors
        np.testing.assert_array_equal(self.population, original)


if __name__ == '__main__':
    unittest.main()
