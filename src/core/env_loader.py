#!/usr/bin/env python3
"""
Environment variable loader with .env file support.

Safely loads environment variables from .env file if present. Variables
already set in the process environment always win.
"""

import os
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

# src/core/env_loader.py -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def load_env_file(env_file_path: str = ".env") -> int:
    """
    Load environment variables from .env file if it exists.

    Args:
        env_file_path: Path to .env file, relative to the project root
            unless absolute

    Returns:
        Number of variables loaded
    """
    env_path = Path(env_file_path)
    if not env_path.is_absolute():
        env_path = PROJECT_ROOT / env_file_path

    if not env_path.exists():
        logger.debug(f"No .env file found at {env_path}")
        return 0

    try:
        with open(env_path, 'r', encoding='utf-8') as f:
            lines = f.readlines()
    except OSError as e:
        logger.error(f"Error reading .env file {env_path}: {e}")
        return 0

    loaded_count = 0
    for line_num, line in enumerate(lines, 1):
        line = line.strip()

        # Skip empty lines and comments
        if not line or line.startswith('#'):
            continue

        if '=' not in line:
            logger.warning(f"Invalid .env format at line {line_num}")
            continue

        key, value = line.split('=', 1)
        key = key.strip()
        value = _strip_quotes(value.strip())

        if key not in os.environ:
            os.environ[key] = value
            loaded_count += 1
            logger.debug(f"Loaded {key} from .env")
        else:
            logger.debug(f"Skipped {key} (already in environment)")

    logger.debug(f"Loaded {loaded_count} variables from {env_path}")
    return loaded_count
