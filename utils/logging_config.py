"""
Centralized Logging Configuration

Provides logging for the storefront with:
- Configurable log levels
- Automatic log rotation
- Masking of customer data (checkout form) and credentials
"""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Pattern

import config


class SecretMaskingFilter(logging.Filter):
    """
    Logging filter that masks sensitive data in log records.

    Masks:
    - Passwords and tokens (redis credentials)
    - Email addresses
    - Phone numbers
    - Shipping addresses
    - CPF numbers
    """

    PATTERNS: list[tuple[Pattern, str]] = [
        # Tokens
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-:]{20,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_TOKEN]\3'),

        # Passwords (also redis://:password@host URLs)
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^\s"\']+)(["\']?)', re.IGNORECASE), r'\1[REDACTED_PASSWORD]\3'),
        (re.compile(r'(redis://[^:/\s]*:)([^@\s]+)(@)', re.IGNORECASE), r'\1[REDACTED_PASSWORD]\3'),

        # CPF (Brazilian taxpayer id) - before phone numbers, both are digit runs
        (re.compile(r'\b\d{3}\.\d{3}\.\d{3}-\d{2}\b'), '[REDACTED_CPF]'),

        # Email addresses (PII)
        (re.compile(r'\b([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b'), '[REDACTED_EMAIL]'),

        # Phone numbers: (11) 98888-7777, +55 11 98888 7777, 555-123-4567
        (re.compile(r'(\+?\d{1,3}[-.\s]?)?\(?\d{2,3}\)?[-.\s]?\d{4,5}[-.\s]?\d{4}\b'), '[REDACTED_PHONE]'),

        # Shipping addresses
        (re.compile(r'(address["\']?\s*[:=]\s*["\']?)([^"\']{10,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_ADDRESS]\3'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrites msg and string args in place; never drops a record."""
        if record.msg:
            record.msg = self.mask(str(record.msg))
        if isinstance(record.args, tuple):
            record.args = tuple(self.mask(a) if isinstance(a, str) else a for a in record.args)
        return True

    @classmethod
    def mask(cls, text: str) -> str:
        for pattern, replacement in cls.PATTERNS:
            text = pattern.sub(replacement, text)
        return text


LOG_FORMAT = '%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _build_handlers(log_file: Path, level: int, mask_secrets: bool) -> list[logging.Handler]:
    """Daily-rotated file handler plus console handler, sharing one format."""
    handlers: list[logging.Handler] = [
        logging.handlers.TimedRotatingFileHandler(
            filename=log_file,
            when="midnight",
            backupCount=config.LOG_RETENTION_DAYS,
            encoding="utf-8"
        ),
        logging.StreamHandler(),
    ]
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        if mask_secrets:
            handler.addFilter(SecretMaskingFilter())
    return handlers


def setup_logging(log_dir: str | Path = "logs"):
    """
    Configure the root logger. Call once at startup (run.py).

    Level comes from config.LOG_LEVEL, rotated files are kept for
    config.LOG_RETENTION_DAYS days, and customer data is masked unless
    LOG_MASK_SECRETS=false. Output goes to <log_dir>/storefront.log and stderr.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in _build_handlers(log_dir / "storefront.log", level, config.LOG_MASK_SECRETS):
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # redis client logs every connection at DEBUG
    logging.getLogger("redis").setLevel(max(level, logging.INFO))

    logging.info(f"Logging initialized: level={logging.getLevelName(level)}, "
                 f"retention={config.LOG_RETENTION_DAYS} days, "
                 f"masking={'on' if config.LOG_MASK_SECRETS else 'off'}")
