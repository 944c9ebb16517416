"""Grid coordinate type for the sparse Game of Life."""

from typing import Iterator, Tuple, Union


class Cell:
    """An immutable (row, column) position on the unbounded grid.

    Any pair of integers is a valid cell, negative values included.
    Cells compare row-major then column-major, so sorting a collection
    of cells gives a deterministic top-to-bottom, left-to-right order.
    """

    __slots__ = ("_row", "_column")

    def __init__(self, row: int, column: int) -> None:
        """Initialize a cell.

        Args:
            row: Row coordinate
            column: Column coordinate
        """
        object.__setattr__(self, "_row", row)
        object.__setattr__(self, "_column", column)

    @classmethod
    def from_tuple(cls, at: Tuple[int, int]) -> "Cell":
        """Create a cell from a (row, column) pair."""
        row, column = at
        return cls(row, column)

    @property
    def row(self) -> int:
        """Row coordinate."""
        return self._row

    @property
    def column(self) -> int:
        """Column coordinate."""
        return self._column

    @staticmethod
    def compare(left: "Cell", right: "Cell") -> int:
        """Compare two cells.

        Returns:
            Negative if left sorts first, zero if equal, positive otherwise
        """
        if left.row != right.row:
            return -1 if left.row < right.row else 1
        if left.column != right.column:
            return -1 if left.column < right.column else 1
        return 0

    def neighbours(self) -> Iterator["Cell"]:
        """Yield the 8 cells of the Moore neighbourhood, excluding this cell."""
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                yield Cell(self._row + dr, self._column + dc)

    def neighbourhood(self) -> Iterator["Cell"]:
        """Yield the 9 cells of the Moore neighbourhood, including this cell."""
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                yield Cell(self._row + dr, self._column + dc)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __iter__(self) -> Iterator[int]:
        yield self._row
        yield self._column

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._row == other._row and self._column == other._column

    def __lt__(self, other: "Cell") -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return Cell.compare(self, other) < 0

    def __le__(self, other: "Cell") -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return Cell.compare(self, other) <= 0

    def __gt__(self, other: "Cell") -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return Cell.compare(self, other) > 0

    def __ge__(self, other: "Cell") -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return Cell.compare(self, other) >= 0

    def __hash__(self) -> int:
        return hash((self._row, self._column))

    def __reduce__(self):
        return (Cell, (self._row, self._column))

    def __repr__(self) -> str:
        return f"Cell({self._row}, {self._column})"

    def __str__(self) -> str:
        """Diagnostic form, e.g. ``"3 : -1"``."""
        return f"{self._row} : {self._column}"


CellLike = Union[Cell, Tuple[int, int]]


def as_cell(value: CellLike) -> Cell:
    """Coerce a Cell or a (row, column) pair to a Cell.

    Raises:
        TypeError: If value is None
    """
    if isinstance(value, Cell):
        return value
    if value is None:
        raise TypeError("cell must not be None")
    return Cell.from_tuple(value)
