"""
Logging Setup
Scout Dashboard - console + rotating file logs
"""

import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Dict, Optional


# ============================================================================
# LOGGING SETUP
# ============================================================================

class ScoutLogger:
    """Structured logging with rotation"""

    def __init__(self, name: str, log_dir: str = 'logs', level: str = 'INFO',
                 max_bytes: int = 10485760, backup_count: int = 5,
                 file_logging: bool = True):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.handlers.clear()
        self.logger.propagate = False

        # Console handler
        console = logging.StreamHandler()
        console.setLevel(self.logger.level)
        console.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
        self.logger.addHandler(console)

        if file_logging:
            os.makedirs(log_dir, exist_ok=True)

            # File handler with rotation
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, f'scout_dashboard_{datetime.now().strftime("%Y%m%d")}.log'),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            self.logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        return self.logger


_LOGGERS: Dict[str, logging.Logger] = {}


def get_logger(name: str, config=None, file_logging: Optional[bool] = None) -> logging.Logger:
    """
    Return a configured logger, building it once per name.

    Settings come from a ScoutConfig when given. File logging is switched
    off with SCOUT_FILE_LOGGING=0 (the test suite does this).
    """
    if name in _LOGGERS:
        return _LOGGERS[name]

    if file_logging is None:
        file_logging = os.getenv('SCOUT_FILE_LOGGING', '1') != '0'

    if config is not None:
        logger = ScoutLogger(
            name,
            log_dir=config.LOG_DIR,
            level=config.LOG_LEVEL,
            max_bytes=config.LOG_MAX_BYTES,
            backup_count=config.LOG_BACKUP_COUNT,
            file_logging=file_logging,
        ).get_logger()
    else:
        logger = ScoutLogger(name, file_logging=file_logging).get_logger()

    _LOGGERS[name] = logger
    return logger
