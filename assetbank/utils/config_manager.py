"""
Integration Settings Persistence
================================

Serializes `IntegrationSettings` to a JSON file so synced catalogs and
connection details survive restarts. The access token is never part of the
settings; it is supplied at runtime.

Key Responsibilities:
---------------------
- File-System Persistence: Stores settings in a hidden JSON file in the
  user's home directory (`~/.assetbank_client_config.json`) by default.
- Security Logging: Records save/load events with sensitive fields redacted.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..core.settings import IntegrationSettings
from .logger import log_config

CONFIG_PATH = Path.home() / ".assetbank_client_config.json"

logger = logging.getLogger(__name__)


def save_settings(settings: IntegrationSettings, path: Optional[Path] = None) -> Path:
    """
    Persist settings as pretty-printed JSON.

    Args:
        settings: Settings to write
        path: Target file (defaults to CONFIG_PATH)

    Returns:
        The path written to
    """
    path = Path(path or CONFIG_PATH)
    data = settings.to_dict()

    log_config("Saving Settings", data, logger)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

    logger.info(f"Settings saved to {path}")
    return path


def load_settings(path: Optional[Path] = None) -> IntegrationSettings:
    """
    Load settings from JSON.

    A missing or corrupted file yields default settings; the problem is
    logged rather than raised so the host can ask the user to reconfigure.
    """
    path = Path(path or CONFIG_PATH)

    if not path.exists():
        logger.info(f"No existing settings file found at {path}")
        return IntegrationSettings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Settings file is corrupted: {e}", exc_info=True)
        return IntegrationSettings()

    log_config("Loaded Settings", data, logger)
    return IntegrationSettings.from_dict(data)
