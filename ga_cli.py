#!/usr/bin/env python3
"""
Command-line entry point for bitga runs.

Evolves binary chromosomes on a benchmark fitness function with tournament
selection, N-point crossover and bit-flip mutation. Everything about a run
(population shape, operators, stopping rule, output folder) comes from one
YAML run configuration; operator values it leaves out are taken from
bitga/bitga_config.yaml.
"""

import argparse
import sys

from bitga.cli import load_run_config, validate_run_config, run_from_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="bitga - binary genetic algorithm runs from YAML configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 ga_cli.py examples/onemax_run.yaml            # OneMax, 64-bit chromosomes
  python3 ga_cli.py --config examples/trap_run.yaml     # Deceptive trap blocks
  python3 ga_cli.py examples/trap_run.yaml --check      # Validate only, no output written
        """
    )

    parser.add_argument(
        'config',
        nargs='?',
        help='Run configuration YAML file'
    )

    parser.add_argument(
        '--config', '-c',
        dest='config_option',
        metavar='CONFIG',
        help='Run configuration YAML file (alternative to the positional argument)'
    )

    parser.add_argument(
        '--check',
        action='store_true',
        help='Validate the configuration merged with the defaults and exit'
    )

    return parser


def main(argv=None) -> int:
    """Parse arguments, run the GA and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = args.config_option or args.config
    if config_path is None:
        parser.print_help()
        return 1

    try:
        if args.check:
            validate_run_config(load_run_config(config_path))
            print(f"Configuration OK: {config_path}")
        else:
            run_from_config(config_path)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"\nError: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
