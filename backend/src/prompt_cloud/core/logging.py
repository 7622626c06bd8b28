from __future__ import annotations

import logging
import logging.config


_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the API process.

    Uvicorn's own loggers keep their handlers; they only inherit the level.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": _FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {
                "prompt_cloud": {"level": level, "propagate": True},
                # SQL echo is driven by DATABASE_ECHO, keep engine chatter down otherwise
                "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
            },
        }
    )
