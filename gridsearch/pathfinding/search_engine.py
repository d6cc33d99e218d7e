import heapq
import itertools
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple

from config.schemas import AlgorithmKind, EngineConfig, HeuristicKind, RunResult
from config.settings import DEFAULT_ALGORITHM, DEFAULT_HEURISTIC
from gridsearch.pathfinding.cell import Cell, CellRef, Position
from gridsearch.pathfinding.errors import InvalidPosition, InvalidRunState
from gridsearch.pathfinding.grid import Grid
from gridsearch.pathfinding.heuristics import chessboard, get_heuristic
from gridsearch.pathfinding.reconstruct import PathReconstructor
from gridsearch.pathfinding.stats import SearchStats
from gridsearch.utils.logger_config import get_search_logger

@dataclass(frozen=True)
class ExpansionEvent:
    """Emitted to observers each time a node is marked explored."""
    algorithm: str
    position: Position
    expanded_count: int
    frontier_size: int
    is_goal: bool = False

Observer = Callable[[ExpansionEvent], None]


class SearchEngine:
    """
    Runs one of five classical searches over a Grid.

    Features:
    - Depth-first (explicit stack), breadth-first, uniform-cost best-first,
      greedy best-first and A*
    - 8-connected movement with straight cost 1 and diagonal cost sqrt(2)
    - Per-expansion observer hook for incremental rendering
    - Run statistics and path reconstruction

    Execution is synchronous: run() returns only after success or frontier
    exhaustion. The grid is locked while a run is in progress.
    """

    def __init__(self, grid: Grid, allow_diagonal: bool = True, heuristic=DEFAULT_HEURISTIC,
                 default_algorithm=DEFAULT_ALGORITHM):
        self.grid = grid
        self.default_algorithm = AlgorithmKind(default_algorithm)
        self.allow_diagonal = allow_diagonal
        self.heuristic_kind = HeuristicKind(heuristic)
        self.heuristic = get_heuristic(self.heuristic_kind)
        self.stats = SearchStats()
        self.reconstructor = PathReconstructor(grid)
        self.log = get_search_logger(self.stats, 'search.engine')

        self._observers: List[Observer] = []
        self._path: Optional[List[Position]] = None
        self._algorithms: Dict[AlgorithmKind, Callable[[Position], bool]] = {
            AlgorithmKind.DEPTH_FIRST: self._depth_first,
            AlgorithmKind.BREADTH_FIRST: self._breadth_first,
            AlgorithmKind.BEST_FIRST: self._best_first,
            AlgorithmKind.GREEDY_BEST_FIRST: self._greedy_best_first,
            AlgorithmKind.A_STAR: self._a_star,
        }

    @classmethod
    def from_config(cls, grid: Grid, config: EngineConfig) -> 'SearchEngine':
        return cls(grid, allow_diagonal=config.allow_diagonal, heuristic=config.heuristic,
                   default_algorithm=config.algorithm)

    # -------------------- observers --------------------

    def add_observer(self, callback: Observer):
        self._observers.append(callback)

    def remove_observer(self, callback: Observer):
        self._observers.remove(callback)

    def _notify(self, event: ExpansionEvent):
        for callback in list(self._observers):
            callback(event)

    # -------------------- lifecycle --------------------

    def reset(self):
        """Clear grid working state and statistics; g-cost of start goes back to 0."""
        self.grid.reset()
        self.stats.reset()
        self._path = None

    def run(self, kind=None, goal: Optional[Position] = None) -> RunResult:
        """
        Run one algorithm to completion.

        Args:
            kind: AlgorithmKind or its string value; defaults to the engine's
                default_algorithm.
            goal: Target cell; defaults to the grid end.

        Returns:
            RunResult with status, expanded_count and path_length.
        """
        kind = AlgorithmKind(kind) if kind is not None else self.default_algorithm
        goal = tuple(goal) if goal is not None else self.grid.end
        if not self.grid.in_bounds(goal):
            raise InvalidPosition(goal, self.grid.size)

        self.reset()
        self.stats.set_algorithm(kind.label)

        start_cell = self.grid._cell(self.grid.start)
        start_cell.g_cost = 0
        start_cell.h_cost = self.heuristic(start_cell.position, goal)
        self.log.info(f"Searching {self.grid.start} -> {goal} on {self.grid.size}x{self.grid.size} grid")

        self.grid.lock()
        try:
            found = self._algorithms[kind](goal)
        finally:
            self.grid.unlock()

        if found:
            self.stats.set_success()
            self._path = self.reconstructor.reconstruct(goal, self.stats)
            self.log.info(f"Path found: {self.stats.path_length} moves, cost {self.stats.path_cost:.3f}, "
                          f"{self.stats.expanded_count} nodes expanded")
        else:
            self.stats.set_failure()
            self.log.info(f"No path found after expanding {self.stats.expanded_count} nodes")

        return self.stats.to_result()

    def get_path(self) -> List[Position]:
        """Ordered start -> goal positions of the last successful run."""
        if not self.stats.succeeded or self._path is None:
            raise InvalidRunState("No successful run to take a path from; call run() first")
        return list(self._path)

    # -------------------- helpers --------------------

    def _ref(self, cell: Cell) -> CellRef:
        return CellRef(cell.row, cell.col)

    def _expand(self, cell: Cell, goal: Position, frontier_size: int) -> bool:
        """Mark a dequeued cell explored; returns True when it is the goal."""
        cell.explored = True
        is_goal = cell.position == goal
        if not is_goal:
            self.stats.inc_expanded()
        self.log.debug(f"Expanding {cell.position} g={cell.g_cost:.3f} h={cell.h_cost:.3f}")
        self._notify(ExpansionEvent(
            algorithm=self.stats.algorithm,
            position=cell.position,
            expanded_count=self.stats.expanded_count,
            frontier_size=frontier_size,
            is_goal=is_goal,
        ))
        return is_goal

    def _link(self, parent: Cell, child: Cell, goal: Position, g_cost: float):
        child.g_cost = g_cost
        child.h_cost = self.heuristic(child.position, goal)
        child.parent = self.grid.index_of(parent.position)

    def _neighbors(self, cell: Cell) -> List[Cell]:
        return self.grid._neighbor_cells(cell.position, self.allow_diagonal)

    # -------------------- algorithms --------------------

    def _depth_first(self, goal: Position) -> bool:
        """First complete path wins; explicit stack instead of recursion."""
        start = self.grid._cell(self.grid.start)
        if self._expand(start, goal, 0):
            return True

        stack = [(start, iter(self._neighbors(start)))]
        while stack:
            current, candidates = stack[-1]
            for neighbor in candidates:
                if neighbor.explored:
                    continue
                self._link(current, neighbor, goal,
                           current.g_cost + chessboard(current.position, neighbor.position))
                if self._expand(neighbor, goal, len(stack)):
                    return True
                stack.append((neighbor, iter(self._neighbors(neighbor))))
                break
            else:
                # Exhausted, backtrack
                stack.pop()
        return False

    def _breadth_first(self, goal: Position) -> bool:
        """FIFO order; parents are fixed on discovery so paths have the fewest edges."""
        start = self.grid._cell(self.grid.start)
        queue = deque([start])
        discovered: Set[CellRef] = {self._ref(start)}

        while queue:
            current = queue.popleft()
            if self._expand(current, goal, len(queue)):
                return True

            for neighbor in self._neighbors(current):
                ref = self._ref(neighbor)
                if neighbor.explored or ref in discovered:
                    continue
                self._link(current, neighbor, goal,
                           current.g_cost + chessboard(current.position, neighbor.position))
                discovered.add(ref)
                queue.append(neighbor)
        return False

    def _best_first(self, goal: Position) -> bool:
        return self._priority_search(goal, lambda cell: (cell.g_cost,), readmit=True)

    def _greedy_best_first(self, goal: Position) -> bool:
        return self._priority_search(goal, lambda cell: (cell.h_cost,), readmit=False)

    def _a_star(self, goal: Position) -> bool:
        return self._priority_search(goal, lambda cell: (cell.f_cost, cell.h_cost), readmit=True)

    def _priority_search(self, goal: Position, key: Callable[[Cell], Tuple[float, ...]], readmit: bool) -> bool:
        """
        Shared heap-driven search.

        Heap entries are key(cell) + (seq, ref); seq keeps equal keys in
        insertion order. With readmit, a cell whose g-cost improves while it
        is still open gets a fresh entry and the outdated one is skipped when
        popped after the cell is explored.
        """
        seq = itertools.count()
        start = self.grid._cell(self.grid.start)
        open_pq: List[tuple] = [key(start) + (next(seq), self._ref(start))]
        open_set: Set[CellRef] = {self._ref(start)}

        while open_pq:
            *_, ref = heapq.heappop(open_pq)
            current = self.grid._cell(ref.position)

            # Ignore stale pops
            if current.explored:
                continue

            open_set.discard(ref)
            if self._expand(current, goal, len(open_set)):
                return True

            for neighbor in self._neighbors(current):
                if neighbor.explored:
                    continue
                neighbor_ref = self._ref(neighbor)
                candidate = current.g_cost + chessboard(current.position, neighbor.position)
                improves = candidate < neighbor.g_cost
                if not improves and neighbor_ref in open_set:
                    continue

                self._link(current, neighbor, goal, candidate)
                if neighbor_ref not in open_set:
                    open_set.add(neighbor_ref)
                    heapq.heappush(open_pq, key(neighbor) + (next(seq), neighbor_ref))
                elif readmit:
                    heapq.heappush(open_pq, key(neighbor) + (next(seq), neighbor_ref))
        return False
