"""
Unified Settings Module
=======================
Single source of truth for reading environment variables.
Loads from .env at repo root with strict parsing.

Usage:
    from services.core.settings import get_env, get_env_int

    value = get_env("SOME_VAR", default="default_value")
    port = get_env_int("MAIN_PORT", 3000)
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from repository root
_REPO_ROOT = Path(__file__).parent.parent.parent
_ENV_PATH = _REPO_ROOT / '.env'

if _ENV_PATH.exists():
    load_dotenv(_ENV_PATH, override=False)
    logger.info(f"[SETTINGS] Loaded environment from {_ENV_PATH}")


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get environment variable with optional default.

    Args:
        name: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(name, default)


def get_env_bool(name: str, default: bool = False) -> bool:
    """
    Get environment variable as boolean.

    Args:
        name: Environment variable name
        default: Default value if not set

    Returns:
        Boolean value (true/false/yes/no/1/0)
    """
    value = get_env(name, str(default)).lower()
    return value in ('true', 'yes', '1', 'on')


def get_env_int(name: str, default: int = 0) -> int:
    """
    Get environment variable as integer.

    Args:
        name: Environment variable name
        default: Default value if not set

    Returns:
        Integer value
    """
    try:
        return int(get_env(name, str(default)))
    except ValueError:
        logger.warning(f"[SETTINGS] Invalid integer for {name}, using default {default}")
        return default


def get_env_float(name: str, default: float = 0.0) -> float:
    """
    Get environment variable as float.

    Args:
        name: Environment variable name
        default: Default value if not set

    Returns:
        Float value
    """
    try:
        return float(get_env(name, str(default)))
    except ValueError:
        logger.warning(f"[SETTINGS] Invalid float for {name}, using default {default}")
        return default


def get_env_list(name: str, default: str = "") -> List[str]:
    """
    Get environment variable as a comma-separated list.

    Empty items are dropped and surrounding whitespace is stripped.
    """
    return [item.strip() for item in get_env(name, default).split(",") if item.strip()]
