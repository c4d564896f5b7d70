"""Logging utilities."""
import logging

from rich.logging import RichHandler


def setup_logger(name: str = "ccu_tools", verbose: bool = False) -> logging.Logger:
    """Route the package's log records to a rich console handler."""
    logger = logging.getLogger(name)
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(show_path=verbose, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
