# config/schemas.py
import logging
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from enum import Enum

from config.settings import (
    DEFAULT_GRID_SIZE, DEFAULT_ALGORITHM, DEFAULT_HEURISTIC, ALLOW_DIAGONAL, LOG_LEVEL,
)

# --- Enums for Algorithms, Heuristics and Statuses ---

class AlgorithmKind(str, Enum):
    DEPTH_FIRST = "depth_first"
    BREADTH_FIRST = "breadth_first"
    BEST_FIRST = "best_first"      # uniform-cost, ordered by g
    GREEDY_BEST_FIRST = "greedy_best_first"  # ordered by h only
    A_STAR = "a_star"

    @property
    def label(self) -> str:
        return ALGORITHM_LABELS[self]

ALGORITHM_LABELS = {
    AlgorithmKind.DEPTH_FIRST: "Depth First Search",
    AlgorithmKind.BREADTH_FIRST: "Breadth First Search",
    AlgorithmKind.BEST_FIRST: "Best First Search",
    AlgorithmKind.GREEDY_BEST_FIRST: "Greedy Best First Search",
    AlgorithmKind.A_STAR: "A Star",
}

class HeuristicKind(str, Enum):
    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"
    CHESSBOARD = "chessboard"

class SearchStatus(str, Enum):
    NONE = "none"
    SUCCESS = "success"
    FAILURE = "failure"

# --- Engine configuration ---

class EngineConfig(BaseModel):
    """
    Schema for the engine configuration file.
    Loaded from: config/engine.yml
    """
    grid_size: int = Field(DEFAULT_GRID_SIZE, ge=2, description="Side length N of the N x N grid.")
    allow_diagonal: bool = Field(ALLOW_DIAGONAL, description="Whether the 4 diagonal neighbors are generated.")
    algorithm: AlgorithmKind = Field(AlgorithmKind(DEFAULT_ALGORITHM), description="Algorithm run() uses when none is given.")
    heuristic: HeuristicKind = Field(HeuristicKind(DEFAULT_HEURISTIC), description="Heuristic used by A* and greedy search.")
    log_level: str = Field(LOG_LEVEL, description="Console log level name, e.g. 'INFO' or 'DEBUG'.")

    @field_validator('log_level')
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level

# --- Run results ---

class RunResult(BaseModel):
    """
    Outcome of a single search run, handed to the rendering layer.

    expanded_count does not include the goal cell; path_length counts moves
    (cells in the path minus one).
    """
    algorithm: str = Field(..., description="Human readable algorithm label, e.g. 'A Star'.")
    status: SearchStatus = Field(..., description="Final status of the run.")
    expanded_count: int = Field(..., ge=0, description="Nodes dequeued and expanded, goal excluded.")
    path_length: int = Field(0, ge=0, description="Number of moves in the reconstructed path.")
    path_cost: float = Field(0.0, ge=0, description="Total chessboard step cost of the reconstructed path.")
    diagnostic: Optional[str] = Field(None, description="Recoverable diagnostic recorded during reconstruction.")
