"""Text, CSV and persistence formats for generations."""

from typing import Any, Dict, Iterable, List, Union
import json
import re
from pathlib import Path

from .cell import Cell
from .generation import Generation

RECORD_VERSION = 1

DEAD_CHARACTERS = "_."

# Row and column are signed integers separated by whitespace or by one
# non-digit character. A hyphen separator must touch both numbers.
_CSV_LINE = re.compile(r"^\s*(?P<row>[+-]?\d+)(?:\s*[^\d\s+\-]\s*|\s+|-(?=\d))(?P<col>[+-]?\d+)\s*$")


class PatternFormatError(ValueError):
    """Raised when pattern or record data cannot be parsed."""


def from_text(field: str) -> Generation:
    """Parse a text picture of a pattern.

    Every character position is one cell: ``_``, ``.`` and whitespace are
    dead, anything else is alive. Lines are stripped before reading and
    blank lines still count as rows.

    Example::

        .O.
        ..O
        OOO

    Args:
        field: Multi-line pattern text

    Returns:
        New Generation (empty for blank input)

    Raises:
        TypeError: If field is None
    """
    if field is None:
        raise TypeError("field must not be None")

    result = Generation()
    for row, line in enumerate(field.splitlines()):
        for column, char in enumerate(line.strip()):
            if char in DEAD_CHARACTERS or char.isspace():
                continue
            result.set_alive(Cell(row, column))

    return result


def from_csv(lines: Union[str, Iterable[str]]) -> Generation:
    """Parse ``row,column`` lines with optional ``#`` comments.

    Blank and comment-only lines are skipped. Any other line that does not
    hold exactly two integers fails the whole parse.

    Args:
        lines: Iterable of lines, or a single string holding all lines

    Returns:
        New Generation

    Raises:
        TypeError: If lines is None
        PatternFormatError: On the first malformed line
    """
    if lines is None:
        raise TypeError("lines must not be None")
    if isinstance(lines, str):
        lines = lines.splitlines()

    cells = []
    for number, line in enumerate(lines, start=1):
        record = line.split("#", 1)[0]
        if not record.strip():
            continue

        match = _CSV_LINE.match(record)
        if not match:
            raise PatternFormatError(f"Invalid CSV at line {number}: {line.rstrip()!r}")

        cells.append(Cell(int(match.group("row")), int(match.group("col"))))

    return Generation(cells)


def to_csv(generation: Generation) -> List[str]:
    """Write live cells as sorted ``row,column`` lines."""
    return [f"{cell.row},{cell.column}" for cell in sorted(generation.live_cells)]


def encode_field(cells: Iterable[Cell]) -> str:
    """Encode cells as ``row:column`` pairs joined by ``;``."""
    return ";".join(f"{cell.row}:{cell.column}" for cell in cells)


def decode_field(field: str) -> List[Cell]:
    """Decode a ``row:column;row:column`` field.

    Raises:
        TypeError: If field is None
        PatternFormatError: If any pair is malformed
    """
    if field is None:
        raise TypeError("field must not be None")
    if not field.strip():
        return []

    cells = []
    for pair in field.split(";"):
        parts = pair.split(":")
        if len(parts) != 2:
            raise PatternFormatError(f"Invalid cell {pair!r} in field")
        try:
            cells.append(Cell(int(parts[0]), int(parts[1])))
        except ValueError:
            raise PatternFormatError(f"Invalid cell {pair!r} in field") from None

    return cells


def to_record(generation: Generation) -> Dict[str, Any]:
    """Serialize a generation to a plain dictionary.

    Returns:
        ``{"version": 1, "generation": counter, "field": "row:col;..."}``
    """
    return {
        "version": RECORD_VERSION,
        "generation": generation.generation,
        "field": encode_field(generation.live_cells),
    }


def from_record(record: Dict[str, Any]) -> Generation:
    """Restore a generation saved by :func:`to_record`.

    The live cells and the generation counter are restored exactly.

    Raises:
        TypeError: If record is None
        PatternFormatError: If the record is incomplete, from an unknown
            version, or holds a malformed field
    """
    if record is None:
        raise TypeError("record must not be None")

    version = record.get("version", RECORD_VERSION)
    if version != RECORD_VERSION:
        raise PatternFormatError(f"Unsupported record version: {version}")

    try:
        counter = record["generation"]
        field = record["field"]
    except KeyError as e:
        raise PatternFormatError(f"Record is missing {e.args[0]!r}") from None

    if isinstance(counter, bool) or not isinstance(counter, int) or counter < 0:
        raise PatternFormatError(f"Invalid generation counter: {counter!r}")
    if not isinstance(field, str):
        raise PatternFormatError(f"Invalid field: {field!r}")

    return Generation(decode_field(field), counter)


def save_generation(generation: Generation, path: Union[str, Path]) -> None:
    """Save a generation record as JSON."""
    with open(path, "w") as f:
        json.dump(to_record(generation), f, indent=2)


def load_generation(path: Union[str, Path]) -> Generation:
    """Load a generation record saved by :func:`save_generation`.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PatternFormatError: If the file is not a valid record
    """
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise PatternFormatError(f"Invalid JSON in {path}: {e}") from None

    if not isinstance(data, dict):
        raise PatternFormatError(f"Expected a JSON object in {path}")

    return from_record(data)
