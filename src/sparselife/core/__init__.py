"""Core sparse Game of Life logic."""

from .cell import Cell, as_cell
from .generation import Generation
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary, load_pattern_file
from .formats import (
    PatternFormatError,
    decode_field,
    encode_field,
    from_csv,
    from_record,
    from_text,
    load_generation,
    save_generation,
    to_csv,
    to_record,
)

__all__ = [
    "Cell",
    "as_cell",
    "Generation",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
    "load_pattern_file",
    "PatternFormatError",
    "decode_field",
    "encode_field",
    "from_csv",
    "from_record",
    "from_text",
    "load_generation",
    "save_generation",
    "to_csv",
    "to_record",
]
