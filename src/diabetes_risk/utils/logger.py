import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_level: str = "INFO") -> None:
    """Configure the root logger with a single timestamped console handler."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # avoid stacking handlers when called twice (tests, notebooks)
    for handler in root_logger.handlers:
        if getattr(handler, "_diabetes_risk", False):
            return

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    console_handler._diabetes_risk = True
    root_logger.addHandler(console_handler)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the package namespace."""
    if name is None:
        return logging.getLogger("diabetes_risk")
    return logging.getLogger(f"diabetes_risk.{name}")
