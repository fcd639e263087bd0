"""
Dedicated logger for heading pipeline debugging.

This module provides a singleton logger that separates pipeline debugging logs
into dedicated files for easier analysis and troubleshooting.

Features:
- Singleton pattern (one instance per session)
- Separate log files for the solver and the output channels
- DEBUG level logging to files
- WARNING level console output for critical messages

Log Files:
- solver.log: Raw/smoothed azimuth per accepted cycle, rejected samples
- output.log: Bearing text changes pushed to the presentation layer

Usage:
    from compass.core.telemetry.loggers.heading_logger import get_heading_logger

    heading_logger = get_heading_logger(session_dir=Path("logs/session_2024-01-15_10-30-00"))
    heading_logger.solver.debug("raw=12.0 smoothed=11.4")
    heading_logger.output.info("Bearing: 11° North")
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from compass.utils.config import Config

CHANNELS = {
    "solver": "solver.log",
    "output": "output.log",
}


class HeadingLogger:
    """Singleton logger for heading pipeline debugging."""

    _instance = None
    _initialized = False

    def __new__(cls, session_dir: Optional[Path] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, session_dir: Optional[Path] = None):
        if self._initialized:
            return

        # Use provided session directory or create new one
        if session_dir is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            self.log_dir = Path(Config.LOG_DIR) / f"{Config.LOG_SESSION_PREFIX}{timestamp}"
        else:
            self.log_dir = Path(session_dir)

        self.log_dir.mkdir(parents=True, exist_ok=True)

        for name, filename in CHANNELS.items():
            self._setup_logger(name, filename)

        self._initialized = True

    def _setup_logger(self, name: str, filename: str):
        """Setup individual logger with file handler."""
        logger = logging.getLogger(f"heading.{name}")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        # Clear existing handlers
        logger.handlers.clear()

        # File handler
        fh = logging.FileHandler(self.log_dir / filename, mode='w', encoding='utf-8')
        fh.setLevel(logging.DEBUG)

        # Console handler (critical messages only)
        ch = logging.StreamHandler()
        ch.setLevel(logging.WARNING)

        formatter = logging.Formatter(
            '%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s',
            datefmt='%H:%M:%S'
        )
        fh.setFormatter(formatter)
        ch.setFormatter(formatter)

        logger.addHandler(fh)
        logger.addHandler(ch)

        setattr(self, name, logger)

    def close(self):
        """Close all handlers."""
        for name in CHANNELS:
            logger = getattr(self, name, None)
            if logger:
                for handler in logger.handlers[:]:
                    handler.close()
                    logger.removeHandler(handler)


# Global instance
_heading_logger = None


def get_heading_logger(session_dir: Optional[Path] = None) -> HeadingLogger:
    """Get or create heading logger instance."""
    global _heading_logger
    if _heading_logger is None:
        _heading_logger = HeadingLogger(session_dir=session_dir)
    return _heading_logger


def reset_heading_logger() -> None:
    """Close and forget the session logger so the next call starts a new session."""
    global _heading_logger
    if _heading_logger is not None:
        _heading_logger.close()
    _heading_logger = None
    HeadingLogger._instance = None
    HeadingLogger._initialized = False
