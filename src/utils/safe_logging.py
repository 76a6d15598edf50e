"""
Safe Logging with Credential Protection
========================================

Keeps email addresses, passwords and bearer tokens out of logs and CLI
output. Auth code logs through this module instead of plain logging.

Usage:
    from src.utils.safe_logging import get_safe_logger

    logger = get_safe_logger(__name__)
    logger.info("Login attempt", email="jane@example.com", success=True)
    # Output: "INFO: Login attempt | email=j***@***.com | success=True"
"""

import logging
import os
import re
from typing import Any, Dict, Optional


class PIIProtector:
    """Masks credentials and personal data in log messages"""

    # Keys whose values are never logged in clear
    SENSITIVE_FIELDS = {
        'password', 'token', 'secret', 'credential', 'authorization',
        'api_key', 'hash',
    }

    # Keys that hold an email address (masked, not dropped)
    EMAIL_FIELDS = {'email', 'username'}

    EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')

    # Three base64url segments: a JWT
    JWT_PATTERN = re.compile(r'\beyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\b')

    BEARER_PATTERN = re.compile(r'(Bearer\s+)\S+', re.IGNORECASE)

    @staticmethod
    def mask_string(value: str, visible_chars: int = 4) -> str:
        """
        Mask a string, showing only the last few characters

        Returns:
            Masked string like "****5678"
        """
        if not value or len(value) <= visible_chars:
            return "****"
        return "*" * (len(value) - visible_chars) + value[-visible_chars:]

    @staticmethod
    def mask_email(email: str) -> str:
        """
        Mask email address

        Returns:
            Masked email like "d***@***.com"
        """
        if '@' not in email:
            return "***@***.com"

        local, domain = email.split('@', 1)
        tld = domain.rsplit('.', 1)[-1] if '.' in domain else 'com'
        masked_local = local[0] + "***" if len(local) > 1 else "***"
        return f"{masked_local}@***.{tld}"

    @staticmethod
    def mask_dict(data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively mask sensitive values, keeping keys visible"""
        if not isinstance(data, dict):
            return data

        masked = {}
        for key, value in data.items():
            key_lower = str(key).lower()

            if any(f in key_lower for f in PIIProtector.SENSITIVE_FIELDS):
                masked[key] = "***"
            elif key_lower in PIIProtector.EMAIL_FIELDS and isinstance(value, str):
                masked[key] = PIIProtector.mask_email(value)
            elif isinstance(value, dict):
                masked[key] = PIIProtector.mask_dict(value)
            elif isinstance(value, str):
                masked[key] = PIIProtector.sanitize_message(value)
            else:
                masked[key] = value

        return masked

    @staticmethod
    def sanitize_message(message: str) -> str:
        """Remove tokens and email addresses from free text"""
        message = PIIProtector.BEARER_PATTERN.sub(r"\1***", message)
        message = PIIProtector.JWT_PATTERN.sub("***JWT***", message)
        message = PIIProtector.EMAIL_PATTERN.sub(
            lambda m: PIIProtector.mask_email(m.group(0)), message
        )
        return message


class SafeLogger:
    """
    Logger that sanitizes the message and every keyword context value.

    Handlers are attached once per logger name, so calling get_safe_logger()
    repeatedly does not duplicate output.
    """

    def __init__(self, name: str, log_file: Optional[str] = None):
        self.logger = logging.getLogger(name)

        if not getattr(self.logger, '_safe_handlers_attached', False):
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
            self.logger.addHandler(console_handler)

            if log_file:
                log_dir = os.path.dirname(log_file)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)
                file_handler = logging.FileHandler(log_file)
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
                ))
                self.logger.addHandler(file_handler)

            self.logger._safe_handlers_attached = True

    def _format_safe_message(self, message: str, **kwargs) -> str:
        safe_message = PIIProtector.sanitize_message(message)
        if kwargs:
            safe_kwargs = PIIProtector.mask_dict(kwargs)
            kwargs_str = " | ".join(f"{k}={v}" for k, v in safe_kwargs.items())
            return f"{safe_message} | {kwargs_str}"
        return safe_message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_safe_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_safe_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_safe_message(message, **kwargs))

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_safe_message(message, **kwargs))


def get_safe_logger(name: str, log_file: Optional[str] = None) -> SafeLogger:
    """
    Get a safe logger instance

    Args:
        name: Logger name (use __name__)
        log_file: Optional log file path
    """
    return SafeLogger(name, log_file)
