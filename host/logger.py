import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the host side. The tableau engine itself never logs."""
    name = str(level).upper()
    if name not in LOG_LEVELS:
        name = "INFO"
    logging.basicConfig(
        level=getattr(logging, name),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
