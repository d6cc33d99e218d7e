"""Error types raised by the pathfinding core. None of them is fatal to the process."""


class PathfindingError(Exception):
    """Base class for every error raised by the pathfinding core."""


class InvalidPosition(PathfindingError, IndexError):
    """Coordinates outside the grid bounds."""

    def __init__(self, position, size: int):
        self.position = position
        self.size = size
        super().__init__(f"Position {position} is outside the {size}x{size} grid")


class IllegalEdit(PathfindingError):
    """Rejected grid mutation; the grid is left unchanged."""


class InvalidRunState(PathfindingError):
    """Query that requires a completed successful run."""


class InconsistentSuccess(PathfindingError):
    """
    Success was reported but the goal has no parent at reconstruction time.

    Never raised out of the core: the reconstructor logs it and stores it on
    the run statistics as a diagnostic.
    """
