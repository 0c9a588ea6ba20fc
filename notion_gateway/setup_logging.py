import logging, os, sys

def setup_logging(level: str | None = None):
    logger = logging.getLogger()
    if logger.handlers:  # don’t double add during reload
        return
    level = level or os.getenv("LOG_LEVEL", "INFO")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    h = logging.StreamHandler(sys.stdout)
    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s :: %(message)s"
    )
    h.setFormatter(fmt)
    logger.addHandler(h)
