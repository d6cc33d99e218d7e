import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from config.schemas import EngineConfig

SEARCH_LOGGER_NAME = 'search'

GENERAL_LOG_FILE = 'general.log'
SEARCH_LOG_FILE = 'search_details.log'

class SearchFormatter(logging.Formatter):
    """
    Console format for search records: '[algorithm #expanded] message'.
    Records logged outside a run fall back to '[LEVEL] message'.
    """
    def format(self, record):
        if not hasattr(record, 'algorithm'):
            return f"[{record.levelname}] {record.getMessage()}"
        expanded = getattr(record, 'expanded', None)
        tag = record.algorithm if expanded is None else f"{record.algorithm} #{expanded}"
        return f"[{tag}] {record.getMessage()}"


def _clear_handlers(logger: logging.Logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        # Release log files from a previous setup; streams stay open
        if isinstance(handler, logging.FileHandler):
            handler.close()


def _rotating_file(path: str, level: int, fmt: logging.Formatter, max_mb: int, backups: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=max_mb * 1024 * 1024, backupCount=backups)
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def _console(level: int, fmt: logging.Formatter) -> logging.StreamHandler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(config: Optional[EngineConfig] = None, log_dir="logs") -> int:
    """
    Wire the root and 'search' loggers from an engine configuration.

    The console level comes from ``config.log_level`` (the default
    EngineConfig when no config is given). Root records go to the console
    and ``general.log``. The 'search' logger does not propagate: it has its
    own console handler with SearchFormatter and writes every record that
    carries an algorithm label to ``search_details.log`` at DEBUG, so a
    DEBUG console level shows each expansion as it happens.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        config (EngineConfig): Engine configuration, usually from load_engine_config().
        log_dir (str): Directory for the rotating log files.

    Returns:
        int: The console level that was applied.
    """
    config = config or EngineConfig()
    level = logging.getLevelName(config.log_level)
    os.makedirs(log_dir, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    _clear_handlers(root_logger)

    console_handler = _console(level, logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
    # Search records have their own handlers
    console_handler.addFilter(lambda record: not record.name.startswith(SEARCH_LOGGER_NAME))
    root_logger.addHandler(console_handler)
    root_logger.addHandler(_rotating_file(
        os.path.join(log_dir, GENERAL_LOG_FILE), logging.INFO,
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'), max_mb=5, backups=3,
    ))

    search_logger = logging.getLogger(SEARCH_LOGGER_NAME)
    search_logger.setLevel(logging.DEBUG)
    search_logger.propagate = False
    _clear_handlers(search_logger)

    search_logger.addHandler(_console(level, SearchFormatter()))
    details_handler = _rotating_file(
        os.path.join(log_dir, SEARCH_LOG_FILE), logging.DEBUG,
        logging.Formatter('%(asctime)s - %(levelname)s - [%(algorithm)s] - %(name)s - %(message)s'),
        max_mb=10, backups=5,
    )
    details_handler.addFilter(lambda record: hasattr(record, 'algorithm'))
    search_logger.addHandler(details_handler)

    logging.getLogger(__name__).debug(f"Logging configured at {config.log_level} in {log_dir}")
    return level


class SearchLoggerAdapter(logging.LoggerAdapter):
    """Stamps each record with the algorithm label and expansion count of the bound SearchStats."""

    def process(self, msg, kwargs):
        stats = self.extra.get('stats')
        if stats is not None:
            extra = dict(kwargs.get('extra') or {})
            extra['algorithm'] = stats.algorithm
            extra['expanded'] = stats.expanded_count
            kwargs['extra'] = extra
        return msg, kwargs

def get_search_logger(stats, name=SEARCH_LOGGER_NAME):
    """
    Logger adapter bound to an engine's SearchStats.

    Args:
        stats: SearchStats whose current label and counter go on every record.
        name (str): Logger name under 'search', e.g. 'search.engine'.
    """
    return SearchLoggerAdapter(logging.getLogger(name), {'stats': stats})
