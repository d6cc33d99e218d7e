from dataclasses import dataclass
from typing import List, Optional

from config.schemas import RunResult, SearchStatus
from gridsearch.pathfinding.cell import Position
from gridsearch.pathfinding.heuristics import chessboard

NO_ALGORITHM = "None"

@dataclass
class SearchStats:
    """
    Counters and status for one search run.

    Contract:
    - expanded_count is incremented once per node dequeued and marked
      explored. The goal is NOT counted, so a failed run reports every cell
      reachable from start and a start == goal run reports zero.
    - path_length is the number of moves in the reconstructed path.
    - reset() must be called before each run; the engine does this itself.
    """
    algorithm: str = NO_ALGORITHM
    status: SearchStatus = SearchStatus.NONE
    expanded_count: int = 0
    path_length: int = 0
    path_cost: float = 0.0
    diagnostic: Optional[str] = None

    def reset(self):
        self.algorithm = NO_ALGORITHM
        self.status = SearchStatus.NONE
        self.expanded_count = 0
        self.path_length = 0
        self.path_cost = 0.0
        self.diagnostic = None

    def set_algorithm(self, label: str):
        self.algorithm = label

    def inc_expanded(self):
        self.expanded_count += 1

    def set_success(self):
        self.status = SearchStatus.SUCCESS

    def set_failure(self):
        self.status = SearchStatus.FAILURE

    def record_path(self, path: List[Position]):
        self.path_length = max(len(path) - 1, 0)
        self.path_cost = sum(chessboard(a, b) for a, b in zip(path, path[1:]))

    @property
    def succeeded(self) -> bool:
        return self.status == SearchStatus.SUCCESS

    def to_result(self) -> RunResult:
        return RunResult(
            algorithm=self.algorithm,
            status=self.status,
            expanded_count=self.expanded_count,
            path_length=self.path_length,
            path_cost=self.path_cost,
            diagnostic=self.diagnostic,
        )
