import json
import logging
import logging.config
import sys

from core.config import configs


class JsonFormatter(logging.Formatter):
    """
    Formatter for logging in JSON format.
    """

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


FORMATTERS = {
    # Console-friendly, readable text format.
    "default": {
        "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    # JSON structured, machine-parsable, suitable for aggregation (ELK, CloudWatch, etc.)
    "json": {
        "()": JsonFormatter,
        "datefmt": "%Y-%m-%dT%H:%M:%S%z",
    },
}


def build_logging_config(formatter: str, level: str, server_error_level: str = "INFO") -> dict:
    """dictConfig payload writing every logger to stdout with one formatter."""
    logger_levels = {
        # Application loggers
        "app": level,
        "api": level,
        # Uvicorn (FastAPI Server) loggers
        "uvicorn": "INFO",
        "uvicorn.access": "INFO",
        "uvicorn.error": server_error_level,
        # External libraries noise reduction
        "httpx": "WARNING",
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {formatter: FORMATTERS[formatter]},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": formatter,
            },
        },
        "loggers": {
            # Root Logger: Catches everything not caught by specific loggers
            "root": {"level": level, "handlers": ["console"]},
            **{
                name: {"level": lvl, "handlers": ["console"], "propagate": False}
                for name, lvl in logger_levels.items()
            },
        },
    }


DEV_LOGGING_CONFIG = build_logging_config("default", configs.LOG_LEVEL)
PROD_LOGGING_CONFIG = build_logging_config("json", configs.LOG_LEVEL, server_error_level="ERROR")


def setup_logging():
    """
    Set up logging configuration based on the environment.
    """
    env = configs.ENVIRONMENT.lower()

    if env == "production":
        log_config = PROD_LOGGING_CONFIG
    else:
        log_config = DEV_LOGGING_CONFIG

    logging.config.dictConfig(log_config)

    logger = logging.getLogger("app")
    logger.info(f"Logging setup complete for {env} environment with level {configs.LOG_LEVEL}")
