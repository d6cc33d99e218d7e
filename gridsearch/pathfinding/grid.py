import logging
from typing import List, Optional, Sequence, Tuple

from config.schemas import EngineConfig
from gridsearch.pathfinding.cell import Cell, CellView, Position, WorkingState
from gridsearch.pathfinding.errors import IllegalEdit, InvalidPosition

logger = logging.getLogger(__name__)

# Fixed neighbor scan order: row delta outer, col delta inner
DIRECTIONS: List[Tuple[int, int]] = [
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
]
CARDINAL_DIRECTIONS: List[Tuple[int, int]] = [(dr, dc) for dr, dc in DIRECTIONS if dr == 0 or dc == 0]

WALL_SYMBOL = '#'
OPEN_SYMBOL = '.'
START_SYMBOL = 'S'
END_SYMBOL = 'E'


class Grid:
    """
    N x N board of cells with one start and one end anchor.

    Cells live in a flat arena addressed by ``row * size + col``; parents are
    stored as arena indices so nothing dangles across resets.

    Callers must not edit the grid while a search is running. The search
    engine locks the grid for the duration of a run and every mutation
    attempted in the meantime raises IllegalEdit.
    """

    def __init__(self, size: int, start: Optional[Position] = None, end: Optional[Position] = None):
        if size < 2:
            raise InvalidPosition((size, size), size)
        self.size = size
        self._cells: List[Cell] = [Cell(row=i // size, col=i % size) for i in range(size * size)]
        self._locked = False

        start = tuple(start) if start is not None else (size // 5, size // 5)
        end = tuple(end) if end is not None else (size // 3, size // 2)
        self._require_in_bounds(start)
        self._require_in_bounds(end)
        if start == end:
            raise IllegalEdit(f"Start and end must differ, both given as {start}")
        self._start: Position = start
        self._end: Position = end
        self.reset()

    @classmethod
    def from_config(cls, config: EngineConfig, start: Optional[Position] = None,
                    end: Optional[Position] = None) -> 'Grid':
        """Empty grid sized by config.grid_size."""
        return cls(config.grid_size, start=start, end=end)

    @classmethod
    def from_ascii(cls, rows: Sequence[str]) -> 'Grid':
        """
        Build a grid from an in-memory picture.

        '#' is a wall, '.' open floor, 'S' the start and 'E' the end. The
        picture must be square and contain exactly one 'S' and one 'E'.
        """
        rows = [row.strip() for row in rows if row.strip()]
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError(f"Grid picture must be square, got {size} rows of widths {[len(r) for r in rows]}")

        starts = [(r, c) for r, row in enumerate(rows) for c, ch in enumerate(row) if ch == START_SYMBOL]
        ends = [(r, c) for r, row in enumerate(rows) for c, ch in enumerate(row) if ch == END_SYMBOL]
        if len(starts) != 1 or len(ends) != 1:
            raise ValueError(f"Grid picture needs exactly one '{START_SYMBOL}' and one '{END_SYMBOL}'")

        grid = cls(size, start=starts[0], end=ends[0])
        for r, row in enumerate(rows):
            for c, ch in enumerate(row):
                if ch == WALL_SYMBOL:
                    grid.set_wall((r, c))
                elif ch not in (OPEN_SYMBOL, START_SYMBOL, END_SYMBOL):
                    raise ValueError(f"Unknown grid symbol {ch!r} at {(r, c)}")
        return grid

    # -------------------- addressing --------------------

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.size and 0 <= col < self.size

    def _require_in_bounds(self, pos: Position):
        if not self.in_bounds(pos):
            raise InvalidPosition(pos, self.size)

    def index_of(self, pos: Position) -> int:
        self._require_in_bounds(pos)
        row, col = pos
        return row * self.size + col

    def _cell(self, pos: Position) -> Cell:
        """Mutable arena record; only search code in this package writes through it."""
        return self._cells[self.index_of(pos)]

    def _cell_at(self, index: int) -> Cell:
        return self._cells[index]

    def _neighbor_cells(self, pos: Position, allow_diagonal: bool = True) -> List[Cell]:
        """
        In-bounds walkable cells around pos, in fixed scan order.

        Diagonal neighbors are returned even when both adjoining cardinal
        cells are walls (no corner-cutting prevention).
        """
        self._require_in_bounds(pos)
        row, col = pos
        directions = DIRECTIONS if allow_diagonal else CARDINAL_DIRECTIONS
        neighbors = []
        for dr, dc in directions:
            r, c = row + dr, col + dc
            if 0 <= r < self.size and 0 <= c < self.size:
                cell = self._cells[r * self.size + c]
                if cell.walkable:
                    neighbors.append(cell)
        return neighbors

    # -------------------- queries --------------------

    @property
    def start(self) -> Position:
        return self._start

    @property
    def end(self) -> Position:
        return self._end

    @property
    def locked(self) -> bool:
        return self._locked

    def is_walkable(self, pos: Position) -> bool:
        return self._cell(pos).walkable

    def is_explored(self, pos: Position) -> bool:
        return self._cell(pos).explored

    def is_visited(self, pos: Position) -> bool:
        return self._cell(pos).visited

    def view(self, pos: Position) -> CellView:
        cell = self._cell(pos)
        return CellView(
            row=cell.row,
            col=cell.col,
            walkable=cell.walkable,
            explored=cell.explored,
            visited=cell.visited,
            is_start=cell.position == self._start,
            is_end=cell.position == self._end,
        )

    def views(self) -> List[List[CellView]]:
        """Row-major snapshot of the whole board."""
        return [[self.view((r, c)) for c in range(self.size)] for r in range(self.size)]

    def working_state(self, pos: Position) -> WorkingState:
        return WorkingState.of(self._cell(pos))

    def working_states(self) -> List[WorkingState]:
        """Frozen algorithm state of every cell, in arena order."""
        return [WorkingState.of(cell) for cell in self._cells]

    def neighbors(self, pos: Position, allow_diagonal: bool = True) -> List[Position]:
        """Positions of the walkable cells around pos, in fixed scan order."""
        return [cell.position for cell in self._neighbor_cells(pos, allow_diagonal)]

    # -------------------- mutation --------------------

    def lock(self):
        self._locked = True

    def unlock(self):
        self._locked = False

    def _check_unlocked(self, action: str):
        if self._locked:
            raise IllegalEdit(f"Cannot {action} while a search is running")

    def _check_not_anchor(self, pos: Position, action: str):
        if pos == self._start or pos == self._end:
            raise IllegalEdit(f"Cannot {action} on the {'start' if pos == self._start else 'end'} cell {pos}")

    def set_wall(self, pos: Position):
        pos = tuple(pos)
        self._check_unlocked("insert a wall")
        self._require_in_bounds(pos)
        self._check_not_anchor(pos, "insert a wall")
        self._cell(pos).walkable = False

    def clear_wall(self, pos: Position):
        pos = tuple(pos)
        self._check_unlocked("remove a wall")
        self._require_in_bounds(pos)
        self._check_not_anchor(pos, "remove a wall")
        self._cell(pos).walkable = True

    def toggle_wall(self, pos: Position):
        pos = tuple(pos)
        self._check_unlocked("toggle a wall")
        self._require_in_bounds(pos)
        self._check_not_anchor(pos, "toggle a wall")
        cell = self._cell(pos)
        cell.walkable = not cell.walkable

    def move_start(self, pos: Position):
        pos = tuple(pos)
        self._check_unlocked("move the start")
        self._require_in_bounds(pos)
        if not self.is_walkable(pos) or pos == self._end:
            raise IllegalEdit(f"Start cannot be placed on {pos}: target is a wall or the end cell")
        self._cell(self._start).g_cost = float('inf')
        self._start = pos
        self._cell(pos).g_cost = 0
        logger.debug(f"Start moved to {pos}")

    def move_end(self, pos: Position):
        pos = tuple(pos)
        self._check_unlocked("move the end")
        self._require_in_bounds(pos)
        if not self.is_walkable(pos) or pos == self._start:
            raise IllegalEdit(f"End cannot be placed on {pos}: target is a wall or the start cell")
        self._end = pos
        logger.debug(f"End moved to {pos}")

    def reset(self):
        """Clear explored/visited/cost/parent state and reseed g-cost of start to 0."""
        self._check_unlocked("reset the grid")
        for cell in self._cells:
            cell.clear_search_state()
        self._cell(self._start).g_cost = 0

    def wall_count(self) -> int:
        return sum(1 for cell in self._cells if not cell.walkable)

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, start={self._start}, end={self._end}, walls={self.wall_count()})"
