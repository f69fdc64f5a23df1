"""
Logging setup for the storefront.

Usage:
    from storefront.logging import get_logger, sanitize_cart_key
    logger = get_logger(__name__)

    logger.info(f"Cart saved under {sanitize_cart_key(key)}")

Cart keys and product ids reach the logs straight from client headers and
request bodies, so anything client-supplied goes through one of the
sanitize_* helpers first.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Short form for hosts that timestamp stdout themselves
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Keep only this much of a session id in log lines
SESSION_ID_LOG_CHARS = 8

# Noisy transport loggers used by the Upstash REST client
_QUIET_LOGGERS = ("httpx", "httpcore")


def _get_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _get_log_format() -> str:
    return LOG_FORMAT_SIMPLE if os.environ.get("LOG_FORMAT_SIMPLE") == "1" else LOG_FORMAT


def _configure_root_logger() -> None:
    """Attach a stdout handler unless the host already configured logging."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = _get_log_level()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_get_log_format()))
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Module logger (typically get_logger(__name__))."""
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Escape control characters that could forge log entries (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | int | None) -> str:
    """
    Escaped, truncated form of a client-supplied id (product, session).

    Returns "N/A" for empty values.
    """
    if id_value is None or id_value == "":
        return "N/A"
    safe_value = _escape_log_injection(str(id_value))
    return safe_value[:SESSION_ID_LOG_CHARS]


def sanitize_cart_key(key: str | None) -> str:
    """
    Loggable form of a cart storage key.

    Session keys ("cart:<session id>") keep their prefix and a truncated
    session id; the fixed client slot ("actionProtectionCart") passes
    through unchanged.
    """
    if not key:
        return "N/A"
    prefix, sep, session_id = key.partition(":")
    if not sep:
        return _escape_log_injection(prefix)
    return f"{_escape_log_injection(prefix)}:{sanitize_id_for_logging(session_id)}"


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escaped free text (error reasons, names), cut at max_length."""
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "sanitize_cart_key",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
