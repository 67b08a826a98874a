import logging
from app.config.settings import get_settings

LOGGER_NAME = "dayssince"


def setup_logger() -> logging.Logger:
    level = getattr(logging, get_settings().log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # already configured
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(console_handler)

    return logger


logger = setup_logger()
