import logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s [%(name)s:%(funcName)s] %(levelname)-8s : %(message)s',
    )
