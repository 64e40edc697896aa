"""
Centralized Logging and Secret Masking
======================================

This module provides the logging infrastructure for the Asset Bank client.
Access tokens travel in every request header, so every handler installed
here is guarded by a filter that redacts credentials before a record is
written anywhere.

Key Features:
-------------
- Sensitive Data Masking: Automatic redaction of bearer tokens, access tokens
  and passwords using regex and recursive dictionary filtering.
- API Instrumentation: Decorator and helpers for logging REST requests and
  responses with timing and status tracking.
- Contextual Logging: Timestamps, module origin and line numbers in every
  record.
"""

import json
import logging
import re
import sys
import time
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Optional


DEFAULT_LOG_FILE = "assetbank.log"

# Sensitive field patterns to mask
SENSITIVE_FIELDS = {
    'password', 'passwd', 'pwd', 'secret', 'token', 'api_key',
    'apikey', 'auth', 'authorization', 'credentials', 'access_token'
}

# Regex patterns for sensitive data in strings
SENSITIVE_PATTERNS = [
    (re.compile(r'(Bearer\s+[a-zA-Z0-9\-._~+/]+=*)'), 'Bearer ***'),
    (re.compile(r'((?:access_?token|token)=)[^&\s]+', re.IGNORECASE), r'\1***'),
    (re.compile(r'([a-zA-Z0-9]{32,})'), lambda m: f"***{m.group(1)[-4:]}"),
]


def _mask_string(text: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SensitiveDataFilter(logging.Filter):
    """
    Filtering hook that redacts credentials from log records.

    Attached to every handler created by `setup_logging`. It rewrites the
    message and its arguments so tokens never reach a file or the console.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _mask_string(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = mask_sensitive_data(record.args)
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    mask_sensitive_data(arg) if isinstance(arg, (dict, str)) else arg
                    for arg in record.args
                )

        return True


def mask_sensitive_data(data: Any, mask_value: str = "***") -> Any:
    """
    Recursively redact sensitive fields from complex data structures.

    Dictionary keys matching a known credential label are replaced; tokens
    keep their last four characters so two configurations can still be told
    apart. Strings are scrubbed with the regex patterns above.

    Args:
        data: The input data structure (dict, list, str, etc.) to be scrubbed.
        mask_value: The string used to replace sensitive content.

    Returns:
        A copy of the input data with sensitive values masked.
    """
    if isinstance(data, dict):
        masked = {}
        for key, value in data.items():
            key_lower = str(key).lower()

            if any(sensitive in key_lower for sensitive in SENSITIVE_FIELDS):
                if 'key' in key_lower or 'token' in key_lower:
                    if isinstance(value, str) and len(value) > 4:
                        masked[key] = f"{mask_value}{value[-4:]}"
                    else:
                        masked[key] = mask_value
                else:
                    masked[key] = mask_value
            else:
                masked[key] = mask_sensitive_data(value, mask_value)
        return masked

    elif isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask_value) for item in data)

    elif isinstance(data, str):
        return _mask_string(data)

    return data


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: int = logging.DEBUG,
    console_level: int = logging.INFO,
    log_format: Optional[str] = None
) -> Optional[Path]:
    """
    Configure the root logger for applications embedding the client.

    - Root Logger: Set to DEBUG so handlers decide what to keep.
    - File Handler: Detailed logs in `<log_dir>/assetbank.log` (only when
      `log_dir` is given).
    - Console Handler: Human-readable INFO logs on stdout.

    Args:
        log_dir: Directory for the log file; no file handler when None.
        log_level: Granularity for the persistent log file.
        console_level: Granularity for the terminal output.
        log_format: Optional custom formatting string.

    Returns:
        Path of the log file, or None when logging to the console only.
    """
    if log_format is None:
        log_format = (
            '%(asctime)s - %(name)s - %(levelname)s - '
            '[%(filename)s:%(lineno)d] - %(message)s'
        )

    formatter = logging.Formatter(log_format, datefmt='%Y-%m-%d %H:%M:%S')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / DEFAULT_LOG_FILE

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    root_logger.addHandler(console_handler)

    logging.info(f"Logging initialised - log file: {log_file or 'console only'}")

    return log_file


def log_config(config_name: str, config_data: Dict[str, Any], logger: Optional[logging.Logger] = None):
    """
    Log configuration settings with automatic sensitive data masking.

    Args:
        config_name: Name of the configuration being logged
        config_data: Dictionary of configuration settings
        logger: Optional logger instance (uses this module's logger if not provided)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    masked_config = mask_sensitive_data(config_data)

    logger.info(f"Configuration: {config_name}")
    logger.debug(f"{config_name} details: {json.dumps(masked_config, indent=2, default=str)}")


def log_api_call(func: Optional[Callable] = None, *, api_name: str = "AssetBank"):
    """
    Decorator for instrumentation of client operations.

    Logs the call with masked keyword arguments, its outcome and its
    duration. Exceptions are logged and re-raised unchanged.

    Args:
        func: The API function to be instrumented.
        api_name: Context label for the log entry.
    """
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            func_name = f.__name__

            logger.debug(f"{api_name} call: {func_name} - kwargs: {mask_sensitive_data(kwargs)}")

            start_time = time.time()
            error_occurred = False

            try:
                return f(*args, **kwargs)

            except Exception as e:
                error_occurred = True
                logger.error(f"{api_name} {func_name} failed: {type(e).__name__}: {e}")
                raise

            finally:
                elapsed = time.time() - start_time
                status = "FAILED" if error_occurred else "SUCCESS"
                logger.debug(
                    f"{api_name} {func_name} completed - Status: {status}, "
                    f"Duration: {elapsed:.3f}s"
                )

        return wrapper

    # Handle both @log_api_call and @log_api_call(api_name="...")
    if func is None:
        return decorator
    return decorator(func)


def log_api_request(
    logger: logging.Logger,
    method: str,
    endpoint: str,
    headers: Optional[Dict] = None,
    attempt: int = 1
):
    """
    Log an outgoing API request with masked headers.

    Args:
        logger: Logger instance to use
        method: HTTP method (GET, POST, etc.)
        endpoint: API endpoint URL
        headers: Request headers
        attempt: 1-based attempt number
    """
    suffix = f" (attempt {attempt})" if attempt > 1 else ""
    logger.debug(f"API Request: {method} {mask_sensitive_data(endpoint)}{suffix}")

    if headers:
        logger.debug(f"Request headers: {mask_sensitive_data(headers)}")


def log_api_response(
    logger: logging.Logger,
    status_code: int,
    response_data: Optional[Any] = None,
    elapsed_time: Optional[float] = None
):
    """
    Log an API response with timing information.

    Args:
        logger: Logger instance to use
        status_code: HTTP status code
        response_data: Response body data
        elapsed_time: Request duration in seconds
    """
    timing_info = f" ({elapsed_time:.3f}s)" if elapsed_time else ""
    logger.debug(f"API Response: {status_code}{timing_info}")

    if response_data:
        masked_response = mask_sensitive_data(response_data)

        # Truncate large responses for readability
        response_str = json.dumps(masked_response, default=str)
        if len(response_str) > 1000:
            response_str = response_str[:1000] + "... (truncated)"

        logger.debug(f"Response body: {response_str}")
