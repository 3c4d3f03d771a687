import logging

import uvicorn

from priceright.configs import settings

FORMAT = "%(levelprefix)s %(asctime)s [%(threadName)s] [%(name)s] %(message)s"


def get_logger(name: str = __name__, level: str | None = None) -> logging.Logger:
    level_name = (level or settings.LOG_LEVEL).upper()
    logger = logging.getLogger(name)
    logger.setLevel(level_name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level_name)
        formatter = uvicorn.logging.DefaultFormatter(
            FORMAT, datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
