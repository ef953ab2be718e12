import logging
import logging.config
import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE = os.getenv("LOG_FILE")


def build_logging_config(level=None, log_file=None):
    level = (level or LOG_LEVEL).upper()
    log_file = log_file if log_file is not None else LOG_FILE
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "level": level,
            "stream": "ext://sys.stderr",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": log_file,
            "formatter": "default",
            "level": level,
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": handlers,
        "root": {
            "handlers": list(handlers),
            "level": level,
        },
    }


def setup_logging(level=None, log_file=None):
    config = build_logging_config(level, log_file)
    if "file" in config["handlers"]:
        log_dir = os.path.dirname(config["handlers"]["file"]["filename"])
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
    logging.config.dictConfig(config)
