# Copyright Stratus Labs 2026
import logging


def configure_logger(logger: logging.Logger, log_level: str, log_format: str, log_pattern: str = ""):
    ch = logging.StreamHandler()
    log_level_numeric = logging.getLevelName(log_level.upper())
    logger.setLevel(log_level_numeric)
    ch.setLevel(log_level_numeric)
    datefmt = "%Y-%m-%dT%H:%M:%S%z"
    if log_format.upper() == "JSON":
        from pythonjsonlogger import jsonlogger

        if not log_pattern:
            log_pattern = "%(asctime)s %(levelname)s [%(name)s] [%(filename)s:%(lineno)d] - %(message)s"

        json_formatter = jsonlogger.JsonFormatter(
            fmt=log_pattern,
            datefmt=datefmt,
        )
        ch.setFormatter(json_formatter)
    else:
        if not log_pattern:
            log_pattern = "[%(name)s] %(asctime)s %(message)s"

        ch.setFormatter(logging.Formatter(log_pattern, datefmt=datefmt))

    logger.addHandler(ch)
