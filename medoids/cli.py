"""Command-line interface for medoids."""

import argparse
import logging
import sys

from .runner import run_experiment, run_grid
from .config.schema import load_config, validate_config
from .core.registry import get_registry


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="medoids: k-medoid clustering over arbitrary dissimilarities"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser("run", help="Run a single experiment")
    run_parser.add_argument("config", help="Path to config YAML file")
    run_parser.add_argument("-o", "--output", default="results", help="Output directory")
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    grid_parser = subparsers.add_parser("grid", help="Run grid of experiments")
    grid_parser.add_argument("config", help="Path to grid config YAML file")
    grid_parser.add_argument("-o", "--output", default="results", help="Output directory")
    grid_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    list_parser = subparsers.add_parser("list", help="List available components")
    list_parser.add_argument("component", choices=["distances", "clusterers"])

    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    if args.command == "run":
        config = load_config(args.config)
        errors = validate_config(config)
        if errors:
            print("Configuration errors:")
            for e in errors:
                print(f"  - {e}")
            sys.exit(1)

        run_experiment(config, args.output, verbose=args.verbose)
        print(f"\nResults saved to: {args.output}")

    elif args.command == "grid":
        config = load_config(args.config)
        run_grid(config, args.output, verbose=args.verbose)
        print(f"\nGrid results saved to: {args.output}/grid_results.csv")

    elif args.command == "list":
        registry = get_registry(args.component)
        print(f"Available {args.component}:")
        for name in registry.list():
            print(f"  - {name}")

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
