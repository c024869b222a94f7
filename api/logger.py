import logging

from api.settings import settings


logging_formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(settings.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging_formatter)
        logger.addHandler(handler)
    return logger
