from __future__ import annotations

import logging
import re


_API_KEY_RE = re.compile(r"(api_key['\"]?\s*[=:]\s*['\"]?)[^&'\"\s,}]+")


class RedactApiKeyFilter(logging.Filter):
    """Logging filter that masks ``api_key`` values in request logs.

    Request URLs and parameter dicts carry the key; this keeps it out of the
    terminal while leaving the rest of the message intact.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _API_KEY_RE.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(level: str = "INFO", name: str = "etsy_listings") -> logging.Logger:
    """Attach a console handler to the package logger (once) and set its level."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    handler.addFilter(RedactApiKeyFilter())
    logger.addHandler(handler)
    return logger
