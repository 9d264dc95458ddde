import logging
import sys

LOGGER_NAME = "guildgraph"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the ``guildgraph`` logger.

    Library modules log through ``logging.getLogger(__name__)`` and so inherit
    whatever is configured here. ``level`` may be a number or a level name
    such as ``"DEBUG"``.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {level!r}")
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger  # already configured
    handler = logging.StreamHandler(sys.stdout)
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    # per-request lines from the http client only when debugging
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
    return logger
