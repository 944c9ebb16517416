#!/usr/bin/env python3
"""
Example usage of the sparselife package.
"""

from sparselife import GameOfLife, PatternLibrary, from_csv, to_csv, to_record


def main():
    """Demonstrate programmatic usage of the sparselife package."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    # The grid is unbounded, so the glider can start anywhere
    game = GameOfLife(glider.to_generation(offset_row=-5, offset_column=-5))

    print("Initial state:")
    print(game.world)
    print(f"Population: {game.population}")
    print()

    for _ in range(8):
        game.step()
        print(f"Generation {game.generation} (rows {game.world.row_range}, columns {game.world.column_range}):")
        print(game.world)
        print()

    # CSV and records both round-trip the live cells
    lines = to_csv(game.world)
    print("As CSV:")
    print("\n".join(lines))
    assert from_csv(lines) == game.world
    print(f"As record: {to_record(game.world)}")

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
