"""
Logging configuration for announce.

announce logs through structlog. Libraries only emit events; applications
call setup_logging() once to route them to stdout (and optionally a file).
Every event passes through a masking processor so tokens and destination
credentials never reach a handler.
"""
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Optional
import structlog

from announce.utils.config import get_settings
from announce.utils.uri import MASK, mask_destination

SENSITIVE_FIELDS = frozenset({'password', 'token', 'secret', 'credential'})


def mask_sensitive_data(data: Any, sensitive_fields: Optional[Iterable[str]] = None) -> Any:
    """
    Mask sensitive data in dictionaries before logging.

    A key is sensitive when it contains one of the sensitive field names,
    so ``x-auth-token`` matches ``token``.

    Args:
        data: Data to mask (dict, list, or other type)
        sensitive_fields: Field names to mask (default: SENSITIVE_FIELDS)

    Returns:
        Copy of data with sensitive fields masked

    Example:
        >>> mask_sensitive_data({'x-user-id': 'bot', 'x-auth-token': 'secret123'})
        {'x-user-id': 'bot', 'x-auth-token': '***MASKED***'}
    """
    fields = SENSITIVE_FIELDS if sensitive_fields is None else frozenset(f.lower() for f in sensitive_fields)

    if isinstance(data, dict):
        masked = {}
        for key, value in data.items():
            if any(field in str(key).lower() for field in fields):
                masked[key] = MASK
            else:
                masked[key] = mask_sensitive_data(value, fields)
        return masked
    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, fields) for item in data)
    return data


def mask_event(logger: Any, method_name: str, event_dict: dict) -> dict:
    """structlog processor masking credentials in an event."""
    masked = mask_sensitive_data(event_dict)
    destination = masked.get("destination")
    if isinstance(destination, str):
        masked["destination"] = mask_destination(destination)
    return masked


def setup_logging(log_level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Set up structured logging for announce.

    Args:
        log_level: debug, info, warning or error (default: settings.log_level)
        log_file: Optional path of an additional log file
    """
    if log_level is None:
        log_level = get_settings().log_level
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        mask_event,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logging.getLogger().addHandler(file_handler)

    # Readable output while debugging, JSON otherwise
    if level == logging.DEBUG:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )
