"""Sparse Conway's Game of Life on an unbounded grid."""

__version__ = "0.1.0"

from .core.cell import Cell
from .core.generation import Generation
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary
from .core.formats import PatternFormatError, from_csv, from_record, from_text, to_csv, to_record

__all__ = [
    "Cell",
    "Generation",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
    "PatternFormatError",
    "from_csv",
    "from_record",
    "from_text",
    "to_csv",
    "to_record",
]
