import logging

FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the `noteful` logger tree.

    Service modules log under `noteful.*`, so the handler lives on the
    package logger and propagation stops there. Calling this again only
    changes the level.
    """
    logger = logging.getLogger("noteful")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    if not any(getattr(h, "_noteful", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        handler._noteful = True
        logger.addHandler(handler)
    return logger
