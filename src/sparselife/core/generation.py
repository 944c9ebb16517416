"""Sparse Game of Life generation on an unbounded grid."""

from typing import Iterable, Iterator, Optional, Set, Tuple
import numpy as np

from .cell import Cell, CellLike, as_cell

# Default rendering falls back to these windows for sprawling patterns
MAX_RENDER_ROWS = 50
MAX_RENDER_COLUMNS = 100
FALLBACK_ROWS = (-25, 26)
FALLBACK_COLUMNS = (-50, 51)


class Generation:
    """The set of live cells of a Game of Life universe.

    Only live cells are stored, so the grid is unbounded in every
    direction. Each call to :meth:`advance` computes the whole next
    generation from the current one and swaps it in:

    - Dead cell with exactly 3 live neighbours is born
    - Live cell with 2 or 3 live neighbours survives
    - All other cells die or stay dead

    Two generations are equal when they hold the same live cells; the
    generation counter is not part of equality.
    """

    def __init__(self, cells: Optional[Iterable[CellLike]] = None, generation: int = 0) -> None:
        """Initialize a generation.

        Args:
            cells: Optional initial live cells, as Cells or (row, column) pairs
            generation: Starting value of the generation counter

        Raises:
            ValueError: If generation is negative
        """
        if generation < 0:
            raise ValueError(f"generation must be non-negative, got {generation}")

        self._live: Set[Cell] = set()
        self._generation = generation

        if cells is not None:
            for cell in cells:
                self._live.add(as_cell(cell))

    @classmethod
    def from_array(cls, array: np.ndarray, origin: Tuple[int, int] = (0, 0)) -> "Generation":
        """Create a generation from a dense 2D array.

        Args:
            array: 2D array; non-zero entries are live cells
            origin: (row, column) of the array's top-left entry

        Raises:
            ValueError: If the array is not two-dimensional
        """
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {arr.shape}")

        origin_row, origin_column = origin
        rows, columns = np.nonzero(arr)
        return cls(
            Cell(origin_row + int(r), origin_column + int(c)) for r, c in zip(rows, columns)
        )

    @property
    def generation(self) -> int:
        """Number of steps applied since creation."""
        return self._generation

    @property
    def count(self) -> int:
        """Number of live cells."""
        return len(self._live)

    @property
    def live_cells(self) -> Tuple[Cell, ...]:
        """Snapshot of the live cells, in no particular order."""
        return tuple(self._live)

    def advance(self, steps: int = 1) -> int:
        """Advance the simulation.

        Args:
            steps: Number of generations to compute (non-negative)

        Returns:
            The generation counter after advancing

        Raises:
            TypeError: If steps is not an integer
            ValueError: If steps is negative
        """
        if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
            raise TypeError(f"steps must be an integer, got {type(steps).__name__}")
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")

        for _ in range(steps):
            self._step()
            self._generation += 1

        return self._generation

    def _step(self) -> None:
        """Compute the next generation and swap it in."""
        # Only cells within one step of a live cell can have live neighbours
        agenda: Set[Cell] = set()
        for cell in self._live:
            agenda.update(cell.neighbourhood())

        next_live: Set[Cell] = set()
        for cell in agenda:
            count = self._count_neighbours(cell)
            if count == 3 or (count == 2 and cell in self._live):
                next_live.add(cell)

        self._live = next_live

    def _count_neighbours(self, cell: Cell) -> int:
        """Count live neighbours of a cell in the current generation."""
        return sum(1 for neighbour in cell.neighbours() if neighbour in self._live)

    def is_alive(self, cell: CellLike) -> bool:
        """Check whether a cell is alive."""
        return as_cell(cell) in self._live

    def set_alive(self, cell: CellLike, alive: bool = True) -> None:
        """Set the state of a cell.

        Setting a cell to the state it already has does nothing.

        Args:
            cell: Cell or (row, column) pair
            alive: Whether the cell should be alive
        """
        cell = as_cell(cell)
        if alive:
            self._live.add(cell)
        else:
            self._live.discard(cell)

    @property
    def row_range(self) -> Tuple[int, int]:
        """Half-open (min_row, max_row + 1) enclosing all live cells."""
        return self._range(lambda cell: cell.row)

    @property
    def column_range(self) -> Tuple[int, int]:
        """Half-open (min_column, max_column + 1) enclosing all live cells."""
        return self._range(lambda cell: cell.column)

    def _range(self, key) -> Tuple[int, int]:
        if not self._live:
            return (0, 0)

        lo = hi = None
        for cell in self._live:
            value = key(cell)
            if lo is None:
                lo = hi = value
            elif value < lo:
                lo = value
            elif value > hi:
                hi = value

        return (lo, hi + 1)

    def render(
        self,
        rows: Tuple[int, int],
        columns: Tuple[int, int],
        live: str = "O",
        dead: str = ".",
    ) -> str:
        """Render a rectangular region as text.

        Args:
            rows: Half-open (from, to) row range
            columns: Half-open (from, to) column range
            live: Character for live cells
            dead: Character for dead cells

        Returns:
            One line per row, joined with newlines
        """
        lines = []
        for r in range(rows[0], rows[1]):
            lines.append(
                "".join(live if Cell(r, c) in self._live else dead for c in range(columns[0], columns[1]))
            )
        return "\n".join(lines)

    def to_array(
        self,
        rows: Optional[Tuple[int, int]] = None,
        columns: Optional[Tuple[int, int]] = None,
    ) -> np.ndarray:
        """Convert a region to a dense int8 array (1 = alive).

        Args:
            rows: Half-open row range (defaults to the bounding box)
            columns: Half-open column range (defaults to the bounding box)

        Returns:
            Array of shape (rows, columns)
        """
        if rows is None:
            rows = self.row_range
        if columns is None:
            columns = self.column_range

        arr = np.zeros((max(0, rows[1] - rows[0]), max(0, columns[1] - columns[0])), dtype=np.int8)
        for cell in self._live:
            if rows[0] <= cell.row < rows[1] and columns[0] <= cell.column < columns[1]:
                arr[cell.row - rows[0], cell.column - columns[0]] = 1
        return arr

    def clone(self) -> "Generation":
        """Return an independent copy of this generation."""
        return Generation(self._live, self._generation)

    def __copy__(self) -> "Generation":
        return self.clone()

    def __deepcopy__(self, memo) -> "Generation":
        return self.clone()

    def __len__(self) -> int:
        return len(self._live)

    def __contains__(self, cell: object) -> bool:
        if isinstance(cell, Cell):
            return cell in self._live
        if isinstance(cell, tuple) and len(cell) == 2:
            return Cell.from_tuple(cell) in self._live
        return False

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.live_cells)

    def __eq__(self, other: object) -> bool:
        """Check if two generations hold the same live cells."""
        if not isinstance(other, Generation):
            return NotImplemented
        return len(self._live) == len(other._live) and self._live == other._live

    # Mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Generation generation={self._generation} count={len(self._live)}>"

    def __str__(self) -> str:
        """String representation showing living cells as 'O' and dead as '.'."""
        return self.to_text()

    def to_text(self, live: str = "O", dead: str = ".") -> str:
        """Render the bounding box of the live cells.

        Patterns spreading over more than 50 rows or 100 columns are shown
        through a fixed window around the origin instead.
        """
        rows = self.row_range
        columns = self.column_range

        if rows[1] - rows[0] > MAX_RENDER_ROWS:
            rows = FALLBACK_ROWS

        if columns[1] - columns[0] > MAX_RENDER_COLUMNS:
            columns = FALLBACK_COLUMNS

        return self.render(rows, columns, live, dead)
