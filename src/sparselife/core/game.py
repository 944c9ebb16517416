"""Conway's Game of Life simulation driver."""

from typing import Any, Deque, Dict, FrozenSet, Optional, Tuple
from collections import deque
import numpy as np

from .cell import Cell
from .generation import Generation
from .formats import from_record, to_record


class GameOfLife:
    """Runs a Generation while tracking population and repeated states.

    The generation itself knows nothing about its history; this class
    keeps a bounded population history and remembers every live-set it
    has seen so that oscillators and still lifes can be detected.
    """

    def __init__(self, generation: Optional[Generation] = None) -> None:
        """Initialize the game.

        Args:
            generation: Generation to simulate (defaults to an empty one)
        """
        self.world = generation if generation is not None else Generation()
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[Tuple[FrozenSet[Cell], int]] = deque(maxlen=1000)
        self._seen_states: Dict[FrozenSet[Cell], int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self.world.generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.world.count

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self._check_for_cycles()
        self.world.advance()
        self._update_population_history()

    def run(self, generations: int) -> int:
        """Advance a fixed number of generations.

        Args:
            generations: Number of steps (non-negative)

        Returns:
            Final generation number

        Raises:
            ValueError: If generations is negative
        """
        if generations < 0:
            raise ValueError(f"generations must be non-negative, got {generations}")

        for _ in range(generations):
            self.step()

        return self.generation

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Check if the current live-set has been seen before."""
        if self._cycle_detected:
            return

        current_state = frozenset(self.world.live_cells)

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self.generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            return

        # Drop the oldest state before the deque evicts it
        if len(self._state_history) == self._state_history.maxlen:
            old_state, recorded = self._state_history[0]
            if self._seen_states.get(old_state) == recorded:
                del self._seen_states[old_state]

        self._seen_states[current_state] = self.generation
        self._state_history.append((current_state, self.generation))

    def reset(self, clear_world: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_world: Whether to start over from an empty generation as well
        """
        if clear_world:
            self.world = Generation()
        else:
            self.world = Generation(self.world.live_cells)

        self._population_history.clear()
        self.clear_cycle_detection()
        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget seen states while keeping generation and population history.

        Call this after editing cells by hand, since earlier states no
        longer predict the future.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self.generation, "cycle"

            if self.population == 0:
                return self.generation, "extinction"

        return self.generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        changes = np.diff(recent_history)
        return float(np.mean(changes))

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_row, min_column, max_row, max_column) or None if
            no living cells
        """
        if self.population == 0:
            return None

        min_row, row_end = self.world.row_range
        min_column, column_end = self.world.column_range
        return (min_row, min_column, row_end - 1, column_end - 1)

    def save_state(self) -> Dict[str, Any]:
        """Save complete game state for serialization.

        Returns:
            Dictionary containing all game state
        """
        return {
            "world": to_record(self.world),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

    def load_state(self, state: Dict[str, Any]) -> None:
        """Load complete game state from serialization.

        Args:
            state: Dictionary from :meth:`save_state`

        Raises:
            PatternFormatError: If the saved generation record is invalid
        """
        self.world = from_record(state["world"])
        self._population_history = deque(state["population_history"], maxlen=100)
        self._cycle_detected = state["cycle_detected"]
        self._cycle_length = state["cycle_length"]
        self._cycle_start_generation = state["cycle_start_generation"]

        # Seen states are not serialized
        self._state_history.clear()
        self._seen_states.clear()

    def get_statistics(self) -> Dict[str, Any]:
        """Get comprehensive simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.get_bounding_box()

        stats: Dict[str, Any] = {
            "generation": self.generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_height = bbox[2] - bbox[0] + 1
            box_width = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_height, box_width)
            stats["bounding_box_area"] = box_height * box_width
            stats["population_density"] = self.population / (box_height * box_width)
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0
            stats["population_density"] = 0.0

        return stats
