import math
from typing import Callable, Tuple

from config.schemas import HeuristicKind

Position = Tuple[int, int]

SQRT2 = math.sqrt(2)

def _deltas(pos1: Position, pos2: Position) -> Tuple[int, int]:
    return abs(pos1[0] - pos2[0]), abs(pos1[1] - pos2[1])

def manhattan(pos1: Position, pos2: Position) -> float:
    """|dx| + |dy|. Admissible only when diagonal moves are disabled."""
    dx, dy = _deltas(pos1, pos2)
    return float(dx + dy)

def euclidean(pos1: Position, pos2: Position) -> float:
    """Straight-line distance."""
    dx, dy = _deltas(pos1, pos2)
    return math.sqrt(dx * dx + dy * dy)

def chessboard(pos1: Position, pos2: Position) -> float:
    """
    Diagonal distance for 8-directional movement.

    Straight steps cost 1 and diagonal steps cost sqrt(2), so this is both the
    true step cost between adjacent cells and an admissible, consistent
    heuristic for the same movement model.
    """
    dx, dy = _deltas(pos1, pos2)
    return SQRT2 * min(dx, dy) + abs(dx - dy)

HEURISTICS = {
    HeuristicKind.MANHATTAN: manhattan,
    HeuristicKind.EUCLIDEAN: euclidean,
    HeuristicKind.CHESSBOARD: chessboard,
}

def get_heuristic(kind) -> Callable[[Position, Position], float]:
    """Resolve a HeuristicKind (or its string value) to its distance function."""
    return HEURISTICS[HeuristicKind(kind)]
