# config/settings.py

# Grid defaults
DEFAULT_GRID_SIZE = 30  # N for an N x N board

# Search Settings
DEFAULT_ALGORITHM = "a_star"
DEFAULT_HEURISTIC = "chessboard"
ALLOW_DIAGONAL = True
LOG_LEVEL = "INFO"

# File name of the engine configuration (relative to the config directory)
ENGINE_CONFIG_FILE = "engine.yml"
