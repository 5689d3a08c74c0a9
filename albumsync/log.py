"""Logging initialization using loguru."""

from pathlib import Path
import sys

from loguru import logger


def init_logging(log_dir: str = "logs", debug: bool = False):
    """Console logging plus a rotating file log under log_dir."""
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug else "INFO", format="{time:HH:mm:ss} | {level: <7} | {message}")
    logger.add(
        str(log_path / "albumsync_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        backtrace=False,
        diagnose=False,
        level="DEBUG",
        encoding="utf-8",
    )
    return logger
