"""
Core Services Module
====================
Shared infrastructure for all services.
"""

from services.core.settings import (
    get_env,
    get_env_bool,
    get_env_int,
    get_env_float,
    get_env_list,
)

__all__ = [
    "get_env",
    "get_env_bool",
    "get_env_int",
    "get_env_float",
    "get_env_list",
]
