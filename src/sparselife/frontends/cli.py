"""Command-line interface for the sparse Game of Life."""

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Tuple, Dict, Any, List

from ..core.formats import save_generation, to_csv
from ..core.game import GameOfLife
from ..core.generation import Generation
from ..core.patterns import Pattern, PatternLibrary, load_pattern_file


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self, pattern_dir: Optional[str] = None):
        """Initialize CLI interface.

        Args:
            pattern_dir: Directory with extra pattern files to load
        """
        self.pattern_library = PatternLibrary(pattern_dir)
        if pattern_dir:
            self.pattern_library.load_all_patterns()

    def resolve_pattern(self, name: Optional[str] = None, path: Optional[str] = None) -> Pattern:
        """Find the starting pattern by library name or file path.

        Raises:
            ValueError: If neither is given or the name is unknown
            FileNotFoundError: If the pattern file doesn't exist
            PatternFormatError: If the pattern file is invalid
        """
        if path:
            pattern = load_pattern_file(path)
            self.pattern_library.add_pattern(pattern)
            return pattern

        if name:
            pattern = self.pattern_library.get_pattern(name)
            if pattern is None:
                available = ", ".join(self.pattern_library.list_patterns())
                raise ValueError(f"Pattern '{name}' not found. Available patterns: {available}")
            return pattern

        raise ValueError("Either a pattern name or a pattern file is required")

    def run_simulation(
        self,
        pattern: Pattern,
        generations: Optional[int] = None,
        max_generations: int = 10000,
        offset_row: int = 0,
        offset_column: int = 0,
        verbose: bool = False,
        show_grid: bool = False,
        live_char: str = "O",
        dead_char: str = ".",
    ) -> Tuple[int, str, Dict[str, Any], Generation]:
        """Run a Game of Life simulation.

        Args:
            pattern: Starting pattern
            generations: Exact number of generations to run; when None, run
                until the pattern dies out or repeats
            max_generations: Upper bound when running until stable
            offset_row: Row offset for pattern placement
            offset_column: Column offset for pattern placement
            verbose: Print progress updates
            show_grid: Show initial and final states
            live_char: Character for live cells in displayed grids
            dead_char: Character for dead cells in displayed grids

        Returns:
            Tuple of (final_generation, finish_reason, statistics, final_generation_state)
        """
        world = pattern.to_generation(offset_row, offset_column)
        game = GameOfLife(world)

        if verbose:
            print(f"Loading pattern '{pattern.name}' at ({offset_row}, {offset_column})")

        initial_population = game.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_generation(game.world, live_char, dead_char))

        start_time = time.time()

        if generations is not None:
            if verbose:
                print(f"\nRunning simulation ({generations} generations)...")
            final_generation = game.run(generations)
            reason = "completed"
        else:
            if verbose:
                print(f"\nRunning simulation (max {max_generations} generations)...")
            final_generation, reason = game.run_until_stable(max_generations)

        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid and game.population > 0:
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_generation(game.world, live_char, dead_char))

        return final_generation, reason, stats, game.world

    def _format_generation(self, world: Generation, live_char: str = "O", dead_char: str = ".") -> str:
        """Format the bounding box of a generation for display."""
        if world.count == 0:
            return "(empty)"

        return world.to_text(live_char, dead_char)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    height, width = pattern.get_size()
                    print(f"  {pattern_name}: {height}x{width}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life on an unbounded grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a glider for 8 generations and show the result
  sparselife --pattern Glider -n 8 --show-grid

  # Run R-pentomino until it settles
  sparselife --pattern R-pentomino --until-stable --verbose

  # Load a CSV pattern and export the final state
  sparselife --file start.csv -n 100 --csv-out end.csv

  # Save the final state as a JSON record
  sparselife --pattern Acorn -n 500 --save acorn.json

  # List available patterns
  sparselife --list-patterns
        """,
    )

    # Pattern configuration
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--pattern",
        type=str,
        help="Start from a built-in or library pattern",
    )

    source.add_argument(
        "-f",
        "--file",
        type=str,
        help="Start from a pattern file (.csv, .json or text picture)",
    )

    parser.add_argument(
        "--pattern-dir",
        type=str,
        help="Directory of extra pattern files to add to the library",
    )

    parser.add_argument(
        "--offset-row",
        type=int,
        default=0,
        help="Row offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--offset-column",
        type=int,
        default=0,
        help="Column offset for pattern placement (default: 0)",
    )

    # Simulation configuration
    parser.add_argument(
        "-n",
        "--generations",
        type=int,
        default=1,
        help="Number of generations to run (default: 1)",
    )

    parser.add_argument(
        "-u",
        "--until-stable",
        action="store_true",
        help="Run until extinction or a repeated state instead of a fixed count",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=10000,
        help="Maximum generations with --until-stable (default: 10000)",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final states",
    )

    parser.add_argument(
        "--live-char",
        type=str,
        default="O",
        help="Character for live cells in displayed grids (default: O)",
    )

    parser.add_argument(
        "--dead-char",
        type=str,
        default=".",
        help="Character for dead cells in displayed grids (default: .)",
    )

    parser.add_argument(
        "--csv-out",
        type=str,
        help="Write the final live cells as row,column lines to this file",
    )

    parser.add_argument(
        "--save",
        type=str,
        help="Save the final generation as a JSON record to this file",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display.

    Args:
        reason: Finish reason from GameOfLife.run_until_stable, or 'completed'
        stats: Statistics dictionary

    Returns:
        Formatted reason string
    """
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    elif reason == "completed":
        return f"Requested generations completed ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) [{bbox_size[0]}x{bbox_size[1]}]")
    else:
        initial_pop = stats["initial_population"]
        final_pop = stats["population"]
        duration = stats.get("duration_seconds", 0)
        speed = stats.get("generations_per_second", 0)

        print(f"Population: {initial_pop} -> {final_pop}, Duration: {duration:.3f}s, Speed: {speed:.0f} gen/s")


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors: List[str] = []

    if not args.list_patterns and not (args.pattern or args.file):
        errors.append("A starting pattern is required (--pattern or --file)")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if len(args.live_char) != 1 or len(args.dead_char) != 1:
        errors.append("Live and dead characters must be single characters")
    elif args.live_char == args.dead_char:
        errors.append("Live and dead characters must differ")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not validate_args(args):
        return 1

    try:
        cli = CLIGameOfLife(args.pattern_dir)

        if args.list_patterns:
            cli.list_patterns()
            return 0

        pattern = cli.resolve_pattern(args.pattern, args.file)

        final_generation, reason, stats, world = cli.run_simulation(
            pattern,
            generations=None if args.until_stable else args.generations,
            max_generations=args.max_generations,
            offset_row=args.offset_row,
            offset_column=args.offset_column,
            verbose=args.verbose,
            show_grid=args.show_grid,
            live_char=args.live_char,
            dead_char=args.dead_char,
        )

        print_results(final_generation, reason, stats, args.verbose)

        if args.csv_out:
            lines = to_csv(world)
            Path(args.csv_out).write_text("".join(f"{line}\n" for line in lines))
            if args.verbose:
                print(f"Wrote {len(lines)} cells to {args.csv_out}")

        if args.save:
            save_generation(world, args.save)
            if args.verbose:
                print(f"Saved generation {world.generation} to {args.save}")

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
