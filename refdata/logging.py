from __future__ import annotations
import logging
from rich.logging import RichHandler
from rich.console import Console

_LOGGER = logging.getLogger("refdata")
_FORMAT = "%(message)s"
_CONSOLE = Console()
_ERR_CONSOLE = Console(stderr=True)

def setup_logger(verbose: bool = False) -> logging.Logger:
    """Setup logger with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    _LOGGER.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in _LOGGER.handlers):
        handler = RichHandler(console=_ERR_CONSOLE, rich_tracebacks=True, markup=False, show_path=False)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="[%X]"))
        _LOGGER.addHandler(handler)
        _LOGGER.propagate = False
    return _LOGGER

def log() -> logging.Logger:
    """Get the compiler logger."""
    return _LOGGER

def console() -> Console:
    """Get the Rich console for styled output."""
    return _CONSOLE

def err_console() -> Console:
    return _ERR_CONSOLE
