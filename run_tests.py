#!/usr/bin/env python3
"""
Test runner for bitga
"""

import unittest
import sys
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))


def run_all_tests():
    """Run all test modules"""
    loader = unittest.TestLoader()
    suite = loader.discover(str(Path(__file__).parent / 'tests'), pattern='test_*.py')

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return result.wasSuccessful()


def run_integration_test():
    """Run a short OneMax run end to end"""
    print("\n" + "=" * 50)
    print("INTEGRATION TEST")
    print("=" * 50)

    import tempfile
    from bitga.orchestration import run_evolution

    with tempfile.TemporaryDirectory() as tmp:
        run_config = {
            'random_seed': 7,
            'population': {'size': 40, 'chromosome_length': 32},
            'fitness': {'function': 'onemax'},
            'generation': {'max_generations': 150, 'target_fitness': 32},
            'output': {'root': str(Path(tmp) / 'run'), 'plot': False},
        }
        records = run_evolution(run_config)

    initial = records[0].best_fitness
    final = max(r.best_fitness for r in records)
    print(f"Best fitness: {initial} -> {final}")

    success = final > initial
    if success:
        print("✓ Integration test PASSED")
    else:
        print("✗ Integration test FAILED")

    return success


if __name__ == "__main__":
    print("Running bitga Tests")
    print("=" * 60)

    # Run unit tests
    print("Running unit tests...")
    unit_success = run_all_tests()

    # Run integration test
    integration_success = run_integration_test()

    # Summary
    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)
    print(f"Unit tests: {'PASSED' if unit_success else 'FAILED'}")
    print(f"Integration test: {'PASSED' if integration_success else 'FAILED'}")

    overall_success = unit_success and integration_success
    print(f"Overall: {'PASSED' if overall_success else 'FAILED'}")

    sys.exit(0 if overall_success else 1)
