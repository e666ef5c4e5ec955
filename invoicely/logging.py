import logging
import sys

from invoicely.settings import settings

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Libraries that are chatty at INFO and only interesting when something breaks.
QUIET_LOGGERS = ("uvicorn.access", "botocore", "boto3", "faker", "fontTools")


def configure_logging() -> None:
    """Install a single stderr handler on the root logger.

    ``INVOICELY_LOG_JSON=true`` switches to one JSON object per line, with
    ``timestamp``/``level`` keys and an ``app`` field for log shippers.

    Alembic's ``fileConfig`` replaces the root handlers, so ``reconfigure()``
    must run again after migrations.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt=JSON_FORMAT,
                rename_fields={"asctime": "timestamp", "levelname": "level"},
                static_fields={"app": "invoicely"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


reconfigure = configure_logging
