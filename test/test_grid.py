#!/usr/bin/env python3
"""
Grid and cell tests: anchors, wall edits, neighbor generation, locking and views.
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import dataclasses
import math
import pytest

from config.schemas import EngineConfig
from gridsearch.pathfinding.cell import CellRef
from gridsearch.pathfinding.errors import IllegalEdit, InvalidPosition
from gridsearch.pathfinding.grid import Grid


class TestGridCreation:
    """Board construction and default anchors"""

    def test_default_anchors(self):
        grid = Grid(30)
        assert grid.start == (6, 6)
        assert grid.end == (10, 15)
        assert grid.start != grid.end

    def test_all_cells_walkable_with_sentinel_costs(self):
        grid = Grid(5, start=(0, 0), end=(4, 4))
        states = grid.working_states()
        assert all(state.walkable for state in states)
        assert grid.working_state((0, 0)).g_cost == 0
        assert all(math.isinf(state.g_cost) for state in states if state.position != (0, 0))
        assert all(state.parent is None for state in states)

    def test_arena_is_flat_and_row_major(self):
        grid = Grid(4, start=(0, 0), end=(3, 3))
        states = grid.working_states()
        assert len(states) == 16
        assert grid.index_of((2, 1)) == 9
        assert states[9].position == (2, 1)

    def test_from_config_uses_grid_size(self):
        grid = Grid.from_config(EngineConfig(grid_size=7), start=(0, 0), end=(6, 6))
        assert grid.size == 7
        assert len(grid.working_states()) == 49
        assert Grid.from_config(EngineConfig()).size == 30

    def test_rejects_equal_anchors(self):
        with pytest.raises(IllegalEdit):
            Grid(5, start=(1, 1), end=(1, 1))

    def test_rejects_tiny_grid(self):
        with pytest.raises(InvalidPosition):
            Grid(1)

    def test_out_of_bounds_anchor(self):
        with pytest.raises(InvalidPosition):
            Grid(5, start=(0, 0), end=(5, 0))

    def test_from_ascii(self):
        grid = Grid.from_ascii([
            "S.#",
            ".#.",
            "..E",
        ])
        assert grid.size == 3
        assert grid.start == (0, 0)
        assert grid.end == (2, 2)
        assert not grid.is_walkable((0, 2))
        assert not grid.is_walkable((1, 1))
        assert grid.wall_count() == 2

    def test_from_ascii_rejects_bad_pictures(self):
        with pytest.raises(ValueError):
            Grid.from_ascii(["S.", ".E", ".."])
        with pytest.raises(ValueError):
            Grid.from_ascii(["S.", ".."])
        with pytest.raises(ValueError):
            Grid.from_ascii(["S?", ".E"])


class TestGridEdits:
    """Wall edits and anchor moves"""

    def setup_method(self):
        self.grid = Grid(5, start=(0, 0), end=(4, 4))

    def test_set_and_clear_wall(self):
        self.grid.set_wall((2, 2))
        assert not self.grid.is_walkable((2, 2))
        self.grid.clear_wall((2, 2))
        assert self.grid.is_walkable((2, 2))

    def test_toggle_wall(self):
        self.grid.toggle_wall((1, 3))
        assert not self.grid.is_walkable((1, 3))
        self.grid.toggle_wall((1, 3))
        assert self.grid.is_walkable((1, 3))

    @pytest.mark.parametrize("edit", ["set_wall", "clear_wall", "toggle_wall"])
    def test_walling_anchors_is_rejected(self, edit):
        for anchor in (self.grid.start, self.grid.end):
            with pytest.raises(IllegalEdit):
                getattr(self.grid, edit)(anchor)
            assert self.grid.is_walkable(anchor)
        assert self.grid.wall_count() == 0
        assert self.grid.start == (0, 0)
        assert self.grid.end == (4, 4)

    def test_edit_out_of_bounds(self):
        with pytest.raises(InvalidPosition):
            self.grid.set_wall((-1, 0))
        with pytest.raises(IndexError):
            self.grid.toggle_wall((0, 5))

    def test_move_start(self):
        self.grid.move_start((2, 3))
        assert self.grid.start == (2, 3)
        assert self.grid.working_state((2, 3)).g_cost == 0
        assert math.isinf(self.grid.working_state((0, 0)).g_cost)

    def test_move_start_onto_wall_or_end_is_rejected(self):
        self.grid.set_wall((2, 2))
        with pytest.raises(IllegalEdit):
            self.grid.move_start((2, 2))
        with pytest.raises(IllegalEdit):
            self.grid.move_start(self.grid.end)
        assert self.grid.start == (0, 0)

    def test_move_end(self):
        self.grid.move_end((3, 1))
        assert self.grid.end == (3, 1)

    def test_move_end_onto_wall_or_start_is_rejected(self):
        self.grid.set_wall((3, 3))
        with pytest.raises(IllegalEdit):
            self.grid.move_end((3, 3))
        with pytest.raises(IllegalEdit):
            self.grid.move_end(self.grid.start)
        assert self.grid.end == (4, 4)

    def test_moved_anchor_becomes_protected(self):
        self.grid.move_end((1, 1))
        with pytest.raises(IllegalEdit):
            self.grid.set_wall((1, 1))
        self.grid.set_wall((4, 4))
        assert not self.grid.is_walkable((4, 4))

    def test_locked_grid_rejects_every_mutation(self):
        self.grid.lock()
        with pytest.raises(IllegalEdit):
            self.grid.set_wall((2, 2))
        with pytest.raises(IllegalEdit):
            self.grid.clear_wall((2, 2))
        with pytest.raises(IllegalEdit):
            self.grid.toggle_wall((2, 2))
        with pytest.raises(IllegalEdit):
            self.grid.move_start((2, 2))
        with pytest.raises(IllegalEdit):
            self.grid.move_end((2, 2))
        with pytest.raises(IllegalEdit):
            self.grid.reset()
        self.grid.unlock()
        self.grid.set_wall((2, 2))
        assert not self.grid.is_walkable((2, 2))

    def test_reset_clears_search_state(self):
        cell = self.grid._cell((2, 2))
        cell.explored = True
        cell.visited = True
        cell.g_cost = 3.0
        cell.h_cost = 1.0
        cell.parent = 0
        self.grid._cell(self.grid.start).g_cost = 5.0
        self.grid.reset()
        assert not cell.explored and not cell.visited
        assert math.isinf(cell.g_cost) and math.isinf(cell.h_cost)
        assert cell.parent is None
        assert self.grid.working_state(self.grid.start).g_cost == 0

    def test_reset_keeps_walls(self):
        self.grid.set_wall((2, 2))
        self.grid.reset()
        assert not self.grid.is_walkable((2, 2))


class TestNeighbors:
    """8-neighborhood generation"""

    def setup_method(self):
        self.grid = Grid(5, start=(0, 0), end=(4, 4))

    def test_center_has_eight_neighbors_in_scan_order(self):
        positions = self.grid.neighbors((2, 2))
        assert positions == [(1, 1), (1, 2), (1, 3), (2, 1), (2, 3), (3, 1), (3, 2), (3, 3)]

    def test_corner_is_clipped_to_bounds(self):
        positions = self.grid.neighbors((0, 0))
        assert positions == [(0, 1), (1, 0), (1, 1)]

    def test_walls_are_skipped(self):
        self.grid.set_wall((1, 2))
        self.grid.set_wall((3, 3))
        positions = self.grid.neighbors((2, 2))
        assert (1, 2) not in positions
        assert (3, 3) not in positions
        assert len(positions) == 6

    def test_diagonal_allowed_between_two_walls(self):
        self.grid.set_wall((0, 1))
        self.grid.set_wall((1, 0))
        positions = self.grid.neighbors((0, 0))
        assert positions == [(1, 1)]

    def test_cardinal_only(self):
        positions = self.grid.neighbors((2, 2), allow_diagonal=False)
        assert positions == [(1, 2), (2, 1), (2, 3), (3, 2)]


class TestCellViews:
    """Read-only presentation views and cell handles"""

    def test_view_flags(self):
        grid = Grid(4, start=(0, 0), end=(3, 3))
        grid.set_wall((1, 1))
        assert grid.view((0, 0)).is_start
        assert grid.view((3, 3)).is_end
        assert not grid.view((1, 1)).walkable
        rows = grid.views()
        assert len(rows) == 4 and all(len(row) == 4 for row in rows)

    def test_view_is_read_only(self):
        grid = Grid(4, start=(0, 0), end=(3, 3))
        view = grid.view((2, 2))
        with pytest.raises(dataclasses.FrozenInstanceError):
            view.walkable = False
        assert grid.is_walkable((2, 2))

    def test_cell_ref_identity_uses_both_coordinates(self):
        # swapped coordinates must stay distinct keys
        refs = {CellRef(1, 2), CellRef(2, 1), CellRef(3, 0), CellRef(0, 3)}
        assert len(refs) == 4
        assert CellRef(1, 2) == CellRef.of((1, 2))
        assert CellRef(0, 5) < CellRef(1, 0)

    def test_cell_ref_index_round_trip(self):
        ref = CellRef.from_index(13, 5)
        assert ref.position == (2, 3)
        assert ref.index(5) == 13

    def test_working_state_is_a_frozen_snapshot(self):
        grid = Grid(4, start=(0, 0), end=(3, 3))
        assert not hasattr(grid, 'cells')
        state = grid.working_state((0, 0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.g_cost = 7.0
        with pytest.raises(dataclasses.FrozenInstanceError):
            grid.working_states()[5].parent = 0
        assert grid.working_state((0, 0)).g_cost == 0
        assert grid.working_state((1, 1)).parent is None

    def test_working_state_follows_the_grid(self):
        grid = Grid(4, start=(0, 0), end=(3, 3))
        grid.set_wall((2, 1))
        assert grid.working_state((2, 1)).walkable is False
        assert grid.working_states()[grid.index_of((2, 1))].position == (2, 1)
