from .cell import Cell, CellRef, CellView, WorkingState
from .errors import PathfindingError, InvalidPosition, IllegalEdit, InvalidRunState, InconsistentSuccess
from .grid import Grid
from .heuristics import manhattan, euclidean, chessboard, get_heuristic
from .reconstruct import PathReconstructor
from .search_engine import SearchEngine, ExpansionEvent
from .stats import SearchStats

__all__ = ['Cell', 'CellRef', 'CellView', 'WorkingState', 'Grid', 'SearchEngine', 'ExpansionEvent', 'SearchStats',
           'PathReconstructor', 'manhattan', 'euclidean', 'chessboard', 'get_heuristic',
           'PathfindingError', 'InvalidPosition', 'IllegalEdit', 'InvalidRunState', 'InconsistentSuccess']
