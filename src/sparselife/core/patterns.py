"""Common Conway's Game of Life patterns and pattern management."""

from typing import Dict, List, Tuple, Optional, Any, Union
import json
from pathlib import Path

from .cell import Cell
from .generation import Generation
from .formats import PatternFormatError, from_csv, from_text


class Pattern:
    """Represents a named Game of Life pattern."""

    def __init__(
        self,
        name: str,
        cells: List[Tuple[int, int]],
        description: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, column) coordinates for living cells
            description: Optional description
            metadata: Optional metadata dictionary
        """
        self.name = name
        self.cells = cells
        self.description = description
        self.metadata = metadata or {}

    def to_generation(self, offset_row: int = 0, offset_column: int = 0) -> Generation:
        """Place this pattern in a new generation.

        Args:
            offset_row: Vertical offset
            offset_column: Horizontal offset
        """
        return Generation(Cell(row + offset_row, column + offset_column) for row, column in self.cells)

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_column, max_row, max_column)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, columns = zip(*self.cells)
        return (min(rows), min(columns), max(rows), max(columns))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size.

        Returns:
            Tuple of (height, width)
        """
        min_row, min_column, max_row, max_column = self.get_bounding_box()
        return (max_row - min_row + 1, max_column - min_column + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates normalized to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description, self.metadata.copy())

        min_row, min_column, _, _ = self.get_bounding_box()
        normalized_cells = [(row - min_row, column - min_column) for row, column in self.cells]

        return Pattern(self.name, normalized_cells, self.description, self.metadata.copy())

    def to_dict(self) -> Dict[str, Any]:
        """Convert pattern to dictionary for serialization."""
        return {
            "name": self.name,
            "cells": [list(cell) for cell in self.cells],
            "description": self.description,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        """Create pattern from dictionary.

        Raises:
            KeyError: If name or cells are missing
        """
        # JSON gives lists, patterns use tuples
        cells = [tuple(cell) for cell in data["cells"]]

        return cls(
            name=data["name"],
            cells=cells,
            description=data.get("description", ""),
            metadata=data.get("metadata", {}),
        )

    @classmethod
    def from_generation(cls, generation: Generation, name: str, description: str = "") -> "Pattern":
        """Create pattern from the live cells of a generation.

        Args:
            generation: Source generation
            name: Pattern name
            description: Optional description
        """
        cells = [(cell.row, cell.column) for cell in sorted(generation.live_cells)]
        metadata = {"generation": generation.generation, "population": len(cells)}

        return cls(name, cells, description, metadata)


def load_pattern_file(path: Union[str, Path]) -> Pattern:
    """Load a pattern from a file, choosing the format by suffix.

    ``.json`` files hold a pattern dictionary, ``.csv`` files hold
    ``row,column`` lines and anything else is read as a text picture.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PatternFormatError: If the file content is invalid
    """
    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()

    if suffix == ".json":
        try:
            return Pattern.from_dict(json.loads(text))
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise PatternFormatError(f"Invalid pattern file {path.name}: {e}") from None

    if suffix == ".csv":
        generation = from_csv(text.splitlines())
    else:
        generation = from_text(text)

    return Pattern.from_generation(generation, path.stem, f"Loaded from {path.name}")


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize pattern library.

        Args:
            storage_dir: Directory for storing patterns (defaults to 'patterns',
                created on first save)
        """
        self.storage_dir = Path(storage_dir or "patterns")
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life patterns
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))

        self.add_pattern(
            Pattern(
                "Beehive",
                [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)],
                "Beehive still life",
            )
        )

        self.add_pattern(
            Pattern(
                "Loaf",
                [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 3), (3, 2)],
                "Loaf still life",
            )
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(0, 0), (0, 1), (0, 2)], "Period-2 oscillator"))

        self.add_pattern(
            Pattern(
                "Toad",
                [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)],
                "Period-2 oscillator",
            )
        )

        self.add_pattern(
            Pattern(
                "Beacon",
                [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)],
                "Period-2 oscillator",
            )
        )

        self.add_pattern(
            Pattern.from_generation(
                from_text(
                    """
                    ..OOO...OOO..
                    .............
                    O....O.O....O
                    O....O.O....O
                    O....O.O....O
                    ..OOO...OOO..
                    .............
                    ..OOO...OOO..
                    O....O.O....O
                    O....O.O....O
                    O....O.O....O
                    .............
                    ..OOO...OOO..
                    """.strip()
                ),
                "Pulsar",
                "Period-3 oscillator",
            )
        )

        # Spaceships
        self.add_pattern(
            Pattern(
                "Glider",
                [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)],
                "Smallest spaceship, period-4",
            )
        )

        self.add_pattern(
            Pattern(
                "Lightweight Spaceship",
                [(0, 0), (0, 3), (1, 4), (2, 0), (2, 4), (3, 1), (3, 2), (3, 3), (3, 4)],
                "LWSS - Period-4 spaceship",
            )
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )

        self.add_pattern(
            Pattern(
                "Diehard",
                [(0, 6), (1, 0), (1, 1), (2, 1), (2, 5), (2, 6), (2, 7)],
                "Dies after exactly 130 generations",
            )
        )

        self.add_pattern(
            Pattern(
                "Acorn",
                [(0, 1), (1, 3), (2, 0), (2, 1), (2, 4), (2, 5), (2, 6)],
                "Takes 5206 generations to stabilize",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Args:
            name: Pattern name

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        categories = {
            "Still Life": ["Block", "Beehive", "Loaf"],
            "Oscillators": ["Blinker", "Toad", "Beacon", "Pulsar"],
            "Spaceships": ["Glider", "Lightweight Spaceship"],
            "Methuselahs": ["R-pentomino", "Diehard", "Acorn"],
            "Custom": [],
        }

        all_builtin = set()
        for cat_patterns in categories.values():
            all_builtin.update(cat_patterns)

        for name in self._patterns:
            if name not in all_builtin:
                categories["Custom"].append(name)

        # Remove empty categories
        return {cat: patterns for cat, patterns in categories.items() if patterns}

    def save_pattern(self, pattern: Pattern, filename: Optional[str] = None) -> Path:
        """Save a pattern to disk as JSON.

        Args:
            pattern: Pattern to save
            filename: Optional filename (defaults to pattern name)

        Returns:
            Path of the written file
        """
        if filename is None:
            filename = f"{pattern.name.replace(' ', '_').lower()}.json"

        self.storage_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.storage_dir / filename
        with open(filepath, "w") as f:
            json.dump(pattern.to_dict(), f, indent=2)

        return filepath

    def load_pattern(self, filename: str) -> Pattern:
        """Load a pattern file from the storage directory and add it.

        Args:
            filename: Filename to load from (.json, .csv or text)

        Returns:
            Loaded Pattern instance

        Raises:
            FileNotFoundError: If file doesn't exist
            PatternFormatError: If file format is invalid
        """
        pattern = load_pattern_file(self.storage_dir / filename)
        self.add_pattern(pattern)
        return pattern

    def load_all_patterns(self) -> None:
        """Load all pattern files from the storage directory."""
        if not self.storage_dir.is_dir():
            return

        for filepath in sorted(self.storage_dir.iterdir()):
            if filepath.suffix.lower() not in (".json", ".csv", ".txt"):
                continue
            try:
                self.load_pattern(filepath.name)
            except (ValueError, KeyError) as e:
                print(f"Warning: Failed to load pattern from {filepath.name}: {e}")
