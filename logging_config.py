"""
Logging setup for the payment review backend.

ENV:
  - APP_ENV: production|staging|development (default: production)
  - LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO in prod, DEBUG otherwise)
  - LOG_FORMAT: json|text (default: json in prod, text otherwise)
"""
import json
import logging
import logging.config
import os
import re
from typing import Any, Dict

_BEARER_RE = re.compile(r"(Bearer\s+)([A-Za-z0-9._-]+)", re.IGNORECASE)
# Account numbers are long digit runs; keep the last four
_ACCOUNT_RE = re.compile(r"\b(\d{4,})(\d{4})\b")


def mask_sensitive(s: str) -> str:
     if not isinstance(s, str) or not s:
          return s
     s = _BEARER_RE.sub(lambda m: m.group(1) + "[REDACTED]", s)
     return _ACCOUNT_RE.sub(lambda m: "***" + m.group(2), s)


def _mask_arg(arg: Any) -> Any:
     if isinstance(arg, str):
          return mask_sensitive(arg)
     return arg


class SensitiveDataFilter(logging.Filter):
     """Masks bearer tokens and account numbers in the message and its args."""

     def filter(self, record: logging.LogRecord) -> bool:
          if isinstance(record.msg, str):
               record.msg = mask_sensitive(record.msg)
          if isinstance(record.args, tuple):
               record.args = tuple(_mask_arg(a) for a in record.args)
          elif isinstance(record.args, dict):
               record.args = {k: _mask_arg(v) for k, v in record.args.items()}
          return True


class JsonFormatter(logging.Formatter):
     def format(self, record: logging.LogRecord) -> str:
          payload: Dict[str, Any] = {
               "level": record.levelname,
               "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
               "logger": record.name,
               "message": record.getMessage(),
          }
          if record.exc_info:
               payload["exc_info"] = self.formatException(record.exc_info)
          return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging() -> None:
     """Configure root logging from the environment."""
     app_env = os.getenv("APP_ENV", "production").lower()
     default_level = "INFO" if app_env == "production" else "DEBUG"
     log_level = os.getenv("LOG_LEVEL", default_level).upper()
     log_format = os.getenv("LOG_FORMAT", "json" if app_env == "production" else "text").lower()

     config: Dict[str, Any] = {
          "version": 1,
          "disable_existing_loggers": False,
          "filters": {
               "sensitive": {"()": SensitiveDataFilter},
          },
          "formatters": {
               "json": {"()": JsonFormatter},
               "plain": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
          },
          "handlers": {
               "console": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "stream": "ext://sys.stdout",
                    "formatter": "json" if log_format == "json" else "plain",
                    "filters": ["sensitive"],
               },
          },
          "root": {
               "level": log_level,
               "handlers": ["console"],
          },
          "loggers": {
               "sqlalchemy.engine": {"level": "WARNING"},
               "uvicorn.access": {"level": "WARNING" if app_env == "production" else "INFO"},
          },
     }
     logging.config.dictConfig(config)
     logging.getLogger(__name__).info(
          "logging configured (env=%s level=%s format=%s)", app_env, log_level, log_format
     )
