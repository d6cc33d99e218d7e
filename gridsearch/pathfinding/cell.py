from typing import Optional, Tuple
from dataclasses import dataclass

Position = Tuple[int, int]  # (row, col)

@dataclass
class Cell:
    """Per-position state stored in the grid's flat arena."""
    row: int
    col: int
    walkable: bool = True
    explored: bool = False  # dequeued/expanded during the current run
    visited: bool = False   # part of the reconstructed path
    g_cost: float = float('inf')  # Cost from start
    h_cost: float = float('inf')  # Heuristic cost to goal
    parent: Optional[int] = None  # Arena index of the predecessor

    @property
    def position(self) -> Position:
        return self.row, self.col

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost

    def clear_search_state(self):
        """Drop everything a previous run wrote into this cell."""
        self.explored = False
        self.visited = False
        self.g_cost = float('inf')
        self.h_cost = float('inf')
        self.parent = None


@dataclass(frozen=True, order=True)
class CellRef:
    """
    Non-owning handle to one cell.

    Equality, hashing and ordering all use the composite (row, col) key, so
    handles work as set members, dict keys and heap entries.
    """
    row: int
    col: int

    @classmethod
    def of(cls, position: Position) -> 'CellRef':
        row, col = position
        return cls(row, col)

    @classmethod
    def from_index(cls, index: int, size: int) -> 'CellRef':
        return cls(index // size, index % size)

    def index(self, size: int) -> int:
        return self.row * size + self.col

    @property
    def position(self) -> Position:
        return self.row, self.col


@dataclass(frozen=True)
class WorkingState:
    """Read-only snapshot of the algorithm state of a cell."""
    row: int
    col: int
    walkable: bool
    explored: bool
    visited: bool
    g_cost: float
    h_cost: float
    parent: Optional[int]

    @property
    def position(self) -> Position:
        return self.row, self.col

    @classmethod
    def of(cls, cell: Cell) -> 'WorkingState':
        return cls(
            row=cell.row,
            col=cell.col,
            walkable=cell.walkable,
            explored=cell.explored,
            visited=cell.visited,
            g_cost=cell.g_cost,
            h_cost=cell.h_cost,
            parent=cell.parent,
        )


@dataclass(frozen=True)
class CellView:
    """Read-only presentation state of a cell for the rendering layer."""
    row: int
    col: int
    walkable: bool
    explored: bool
    visited: bool
    is_start: bool
    is_end: bool
