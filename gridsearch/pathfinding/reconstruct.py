import logging
from typing import List, Optional

from gridsearch.pathfinding.cell import Position
from gridsearch.pathfinding.errors import InconsistentSuccess
from gridsearch.pathfinding.grid import Grid
from gridsearch.pathfinding.stats import SearchStats

logger = logging.getLogger(__name__)


class PathReconstructor:
    """Walks the parent chain from the goal back to the start."""

    def __init__(self, grid: Grid):
        self.grid = grid

    def reconstruct(self, goal: Position, stats: Optional[SearchStats] = None) -> List[Position]:
        """
        Build the start -> goal path and mark its intermediate cells visited.

        When the goal has no parent (start == goal, or success was signalled
        without a parent chain) an InconsistentSuccess diagnostic is logged
        and recorded on ``stats`` and an empty path is returned.
        """
        start = self.grid.start
        goal_cell = self.grid._cell(goal)

        if goal_cell.parent is None:
            diagnostic = InconsistentSuccess(f"Parent of goal {goal} is not set; returning an empty path")
            logger.warning(str(diagnostic))
            if stats is not None:
                stats.diagnostic = str(diagnostic)
                stats.record_path([])
            return []

        path = [goal]
        current = self.grid._cell_at(goal_cell.parent)
        while current.parent is not None and current.position != start:
            current.visited = True
            path.append(current.position)
            current = self.grid._cell_at(current.parent)
        path.append(current.position)
        path.reverse()

        if path[0] != start:
            logger.warning(f"Parent chain of {goal} ends at {path[0]} instead of start {start}")

        if stats is not None:
            stats.record_path(path)
        return path
