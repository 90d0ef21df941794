import sys
import logging

from tqdm import tqdm

FORMAT = '%(asctime)s %(levelname)s - %(message)s'
FORMATTER = logging.Formatter(FORMAT, datefmt="%d-%m-%Y %H:%M:%S")

logger = logging.getLogger('elastobar')
handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(FORMATTER)
logger.addHandler(handler)
logger.setLevel(logging.WARNING)
logger.propagate = False


class TqdmLoggingHandler(logging.Handler):
    """Write log records through tqdm so they don't break a progress bar."""

    def __init__(self, level=logging.NOTSET):
        super().__init__(level)
        self.setFormatter(FORMATTER)

    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg)
            self.flush()
        except Exception:
            self.handleError(record)


def set_level(level) -> None:
    """Set the package log level from a name ("INFO") or a logging constant."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logger.setLevel(level)


def use_tqdm_handler() -> None:
    """Swap the stdout handler for one that cooperates with progress bars."""
    for h in list(logger.handlers):
        if not isinstance(h, TqdmLoggingHandler):
            logger.removeHandler(h)
    if not any(isinstance(h, TqdmLoggingHandler) for h in logger.handlers):
        logger.addHandler(TqdmLoggingHandler())
