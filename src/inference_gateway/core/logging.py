import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import ClassVar, Optional

import pydantic

logger = logging.getLogger("inference_gateway")
logger.addHandler(logging.NullHandler())

# Attributes every LogRecord carries; anything else arrived through `extra=`
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Formats log records as one JSON object per line, including any `extra` data.
    """

    def format(self, record):
        log_object = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_object[key] = value

        if record.exc_info:
            log_object["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


class LogConfig(pydantic.BaseModel):
    """Logging configuration for the gateway"""

    LOGGER_NAME: ClassVar[str] = "inference_gateway"

    version: int = 1
    disable_existing_loggers: bool = False
    formatters: dict = {
        "default": {
            "()": JsonFormatter,
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
    }
    handlers: dict = {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    }
    loggers: dict = {
        "inference_gateway": {"handlers": ["default"], "level": "INFO"},
    }

    @classmethod
    def build(cls, level: str = "INFO", log_dir: Optional[str] = None) -> "LogConfig":
        config = cls()
        handler_names = ["default"]
        if log_dir:
            directory = Path(log_dir)
            directory.mkdir(parents=True, exist_ok=True)
            config.handlers["file"] = {
                "formatter": "default",
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(directory / "gateway.log"),
                "maxBytes": 10000000,  # 10MB
                "backupCount": 5,
            }
            handler_names.append("file")
        config.loggers = {
            cls.LOGGER_NAME: {"handlers": handler_names, "level": level.upper()},
        }
        return config


def setup_logging(config: Optional[LogConfig] = None) -> None:
    """Configure logging for the application"""
    if config is None:
        config = LogConfig()

    logging.config.dictConfig(config.model_dump())

    def handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.error(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = handle_exception


def debug(msg: str, *args, **kwargs):
    logger.debug(msg, *args, **kwargs)


def info(msg: str, *args, **kwargs):
    logger.info(msg, *args, **kwargs)


def warning(msg: str, *args, **kwargs):
    logger.warning(msg, *args, **kwargs)


def error(msg: str, *args, exc_info=False, **kwargs):
    logger.error(msg, *args, exc_info=exc_info, **kwargs)


def critical(msg: str, *args, **kwargs):
    logger.critical(msg, *args, **kwargs)
