"""Tests for the Generation class."""

import copy

import numpy as np
import pytest
from sparselife.core.cell import Cell
from sparselife.core.generation import Generation


def cells(*pairs):
    return {Cell(row, column) for row, column in pairs}


class TestGeneration:
    """Test cases for the Generation class."""

    def test_initialization_empty(self):
        """Test empty generation."""
        generation = Generation()
        assert generation.count == 0
        assert len(generation) == 0
        assert generation.generation == 0
        assert generation.live_cells == ()

    def test_initialization_from_cells(self):
        """Test creation from cells and tuples, with duplicates collapsed."""
        generation = Generation([Cell(0, 0), (0, 0), (1, -1)])
        assert generation.count == 2
        assert set(generation.live_cells) == cells((0, 0), (1, -1))

    def test_initialization_negative_counter(self):
        """Test a negative starting counter is rejected."""
        with pytest.raises(ValueError):
            Generation(generation=-1)

    def test_cell_operations(self):
        """Test basic cell get/set operations."""
        generation = Generation()

        assert not generation.is_alive(Cell(0, 0))
        assert not generation.is_alive((-5, 3))

        generation.set_alive(Cell(0, 0), True)
        generation.set_alive((-5, 3), True)

        assert generation.is_alive((0, 0))
        assert generation.is_alive(Cell(-5, 3))
        assert Cell(-5, 3) in generation
        assert (0, 0) in generation
        assert "0,0" not in generation

        generation.set_alive((0, 0), False)
        assert not generation.is_alive((0, 0))
        assert generation.count == 1

    def test_set_alive_idempotent(self):
        """Test setting a cell to its current state changes nothing."""
        generation = Generation()
        generation.set_alive((2, 2), True)
        generation.set_alive((2, 2), True)
        assert set(generation.live_cells) == cells((2, 2))

        generation.set_alive((9, 9), False)
        assert set(generation.live_cells) == cells((2, 2))

    def test_live_cells_snapshot(self):
        """Test live_cells does not see later mutations."""
        generation = Generation([(0, 0), (0, 1)])
        snapshot = generation.live_cells

        generation.set_alive((5, 5), True)
        generation.set_alive((0, 0), False)

        assert set(snapshot) == cells((0, 0), (0, 1))
        # Restartable
        assert list(snapshot) == list(snapshot)

    def test_iteration(self):
        """Test iterating a generation while mutating it."""
        generation = Generation([(0, 0), (1, 1)])
        for cell in generation:
            generation.set_alive(cell, False)
        assert generation.count == 0

    def test_empty_stays_empty(self):
        """Test an empty generation never comes to life."""
        generation = Generation()
        assert generation.advance() == 1
        assert generation.advance(10) == 11
        assert generation.count == 0
        assert generation.generation == 11

    def test_still_life_block(self):
        """Test that a block pattern is stable (still life)."""
        block = cells((0, 0), (0, 1), (1, 0), (1, 1))
        generation = Generation(block)

        generation.advance()
        assert set(generation.live_cells) == block

        generation.advance(5)
        assert set(generation.live_cells) == block
        assert generation.generation == 6

    def test_oscillator_blinker(self):
        """Test blinker oscillator (period 2)."""
        horizontal = cells((0, 0), (0, 1), (0, 2))
        vertical = cells((-1, 1), (0, 1), (1, 1))
        generation = Generation(horizontal)

        generation.advance(1)
        assert set(generation.live_cells) == vertical

        generation.advance(1)
        assert set(generation.live_cells) == horizontal

    def test_glider_translation(self):
        """Test a glider moves one cell diagonally every 4 generations."""
        glider = [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]
        generation = Generation(glider)

        for _ in range(4):
            generation.advance(1)

        assert generation == Generation((row + 1, column + 1) for row, column in glider)
        assert generation.generation == 4

    def test_glider_crosses_origin(self):
        """Test the grid is unbounded in negative directions."""
        glider = [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]
        start = Generation((row - 40, column - 40) for row, column in glider)
        start.advance(80)
        assert start == Generation((row - 20, column - 20) for row, column in glider)

    def test_birth_and_death(self):
        """Test underpopulation, overcrowding and birth."""
        # Lone cell dies
        generation = Generation([(0, 0)])
        generation.advance()
        assert generation.count == 0

        # Three in an L produce a block
        generation = Generation([(0, 0), (0, 1), (1, 0)])
        generation.advance()
        assert set(generation.live_cells) == cells((0, 0), (0, 1), (1, 0), (1, 1))

        # Centre of a plus sign has four neighbours and dies
        generation = Generation([(0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)])
        generation.advance()
        assert not generation.is_alive((0, 0))

    def test_advance_zero(self):
        """Test advancing zero steps changes nothing."""
        generation = Generation([(0, 0), (0, 1), (0, 2)])
        assert generation.advance(0) == 0
        assert set(generation.live_cells) == cells((0, 0), (0, 1), (0, 2))

    def test_advance_negative(self):
        """Test a negative step count is rejected without changes."""
        generation = Generation([(0, 0), (0, 1), (0, 2)])
        with pytest.raises(ValueError):
            generation.advance(-1)
        assert generation.generation == 0
        assert set(generation.live_cells) == cells((0, 0), (0, 1), (0, 2))

    def test_advance_non_integer(self):
        """Test non-integer step counts are rejected."""
        generation = Generation()
        with pytest.raises(TypeError):
            generation.advance(1.5)
        with pytest.raises(TypeError):
            generation.advance(None)
        assert generation.generation == 0

    def test_ranges(self):
        """Test bounding ranges are tight and half-open."""
        generation = Generation([(-2, 5), (3, -1), (0, 0)])
        assert generation.row_range == (-2, 4)
        assert generation.column_range == (-1, 6)

    def test_ranges_empty(self):
        """Test empty generation ranges."""
        generation = Generation()
        assert generation.row_range == (0, 0)
        assert generation.column_range == (0, 0)

    def test_ranges_single_cell(self):
        """Test ranges of a single cell."""
        generation = Generation([(7, -3)])
        assert generation.row_range == (7, 8)
        assert generation.column_range == (-3, -2)

    def test_render(self):
        """Test rendering a region."""
        generation = Generation([(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)])
        assert generation.render((0, 3), (0, 3)) == ".O.\n..O\nOOO"
        assert generation.render((0, 2), (-1, 2), live="#", dead="_") == "__#\n___"
        assert generation.render((0, 0), (0, 3)) == ""

    def test_str(self):
        """Test default rendering uses the bounding box."""
        generation = Generation([(-1, 1), (0, 1), (1, 1)])
        assert str(generation) == "O\nO\nO"
        assert str(Generation()) == ""

    def test_str_clamps_large_patterns(self):
        """Test sprawling patterns are shown through a fixed window."""
        generation = Generation([(-100, 0), (100, 0), (0, -200), (0, 200)])
        lines = str(generation).split("\n")
        assert len(lines) == 51
        assert all(len(line) == 101 for line in lines)
        # Origin sits at row 25, column 50 of the window
        assert lines[25][50] == "."

    def test_str_keeps_moderate_patterns(self):
        """Test spans within the limits are rendered whole."""
        generation = Generation([(0, 0), (49, 99)])
        lines = str(generation).split("\n")
        assert len(lines) == 50
        assert len(lines[0]) == 100
        assert lines[0][0] == "O"
        assert lines[49][99] == "O"

    def test_to_text_characters(self):
        """Test custom characters in default rendering."""
        generation = Generation([(0, 0), (0, 2)])
        assert generation.to_text("*", " ") == "* *"

    def test_equality(self):
        """Test equality ignores the generation counter."""
        a = Generation([(0, 0), (0, 1), (0, 2)])
        b = Generation([(0, 2), (0, 1), (0, 0)])
        assert a == b

        a.advance(2)
        assert a == b
        assert a.generation != b.generation

        b.set_alive((5, 5), True)
        assert a != b
        assert a != "not a generation"

    def test_equality_with_other_types(self):
        """Test comparing with other types defers to the other operand."""
        generation = Generation([(0, 0)])

        assert generation.__eq__((0, 0)) is NotImplemented
        assert generation != [(0, 0)]
        assert not generation == None  # noqa: E711

    def test_unhashable(self):
        """Test generations cannot be used as dict keys."""
        with pytest.raises(TypeError):
            hash(Generation())

    def test_clone_is_independent(self):
        """Test cloning copies cells and counter independently."""
        original = Generation([(0, 0), (0, 1), (0, 2)])
        original.advance()

        clone = original.clone()
        assert clone == original
        assert clone.generation == original.generation

        clone.set_alive((10, 10), True)
        clone.advance()
        assert not original.is_alive((10, 10))
        assert original.generation == 1

        assert copy.copy(original) == original
        assert copy.deepcopy(original) is not original

    def test_to_array(self):
        """Test dense conversion of the bounding box."""
        generation = Generation([(-1, 1), (0, 1), (1, 1)])
        arr = generation.to_array()
        assert arr.shape == (3, 1)
        assert arr.dtype == np.int8
        assert arr.sum() == 3

        arr = generation.to_array(rows=(-1, 2), columns=(0, 3))
        np.testing.assert_array_equal(arr, [[0, 1, 0], [0, 1, 0], [0, 1, 0]])

    def test_to_array_empty(self):
        """Test dense conversion of an empty generation."""
        assert Generation().to_array().shape == (0, 0)

    def test_from_array(self):
        """Test creation from a dense array."""
        arr = np.array([[0, 1, 0], [0, 0, 1], [1, 1, 1]])
        generation = Generation.from_array(arr)
        assert generation == Generation([(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)])

        shifted = Generation.from_array(arr, origin=(-10, 5))
        assert shifted.is_alive((-10, 6))
        assert shifted.count == 5

    def test_from_array_invalid(self):
        """Test non-2D arrays are rejected."""
        with pytest.raises(ValueError):
            Generation.from_array(np.zeros(5))
