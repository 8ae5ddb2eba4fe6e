# -----------------------------------------------------------------------------
# answer_router/utils/logger.py — package logger, text or JSON output
# -----------------------------------------------------------------------------
# Call sites log an event name and pass fields via extra={...}; both
# formatters render those fields. API keys and bearer tokens are masked.
# -----------------------------------------------------------------------------

import json
import logging
import re
from datetime import datetime, timezone

LOGGER_NAME = "answer_router"

# attributes every LogRecord has; anything else came in through extra=
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_SECRET_PATTERN = re.compile(
    r"(?P<bearer>Bearer\s+)[^\s\"']+"
    r"|(?P<key>(?:api_)?key=)[^&\s\"']+"
    r"|\b(?:sk-or-v1-|sk-|gsk_|hf_)[A-Za-z0-9\-_]{8,}"
)

logger = logging.getLogger(LOGGER_NAME)


def _mask(text: str) -> str:
    def repl(m: re.Match) -> str:
        prefix = m.group("bearer") or m.group("key") or ""
        return f"{prefix}***MASKED***"

    return _SECRET_PATTERN.sub(repl, text)


def _extras(record: logging.LogRecord) -> dict:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED}


class SecretFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _mask(record.msg)
        if isinstance(record.args, dict):
            record.args = {k: _mask(v) if isinstance(v, str) else v for k, v in record.args.items()}
        elif record.args:
            record.args = tuple(_mask(a) if isinstance(a, str) else a for a in record.args)
        for k, v in _extras(record).items():
            if isinstance(v, str):
                setattr(record, k, _mask(v))
        return True


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        entry.update(_extras(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    """Attach one stream handler to the package logger.

    Safe to call more than once; earlier handlers are replaced.
    """
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if json_output else TextFormatter())
    handler.addFilter(SecretFilter())
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    # httpx logs full request lines at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
