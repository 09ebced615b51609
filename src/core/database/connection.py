#!/usr/bin/env python3
"""
Unified database connection management.

Single entry point choosing between the direct PostgreSQL facade and the
Supabase REST adapter.
"""

import logging
from typing import Optional, Union

from ..exceptions import ConfigurationError
from ..supabase_adapter import SupabaseApiAdapter
from .database_facade import DatabaseFacade

logger = logging.getLogger(__name__)

# Global database instance
_db_instance = None


def get_database(config=None) -> Union[DatabaseFacade, SupabaseApiAdapter]:
    """
    Get the shared store.

    Direct PostgreSQL is used when USE_DIRECT_CONNECTION is true (the
    default), otherwise the Supabase REST API.

    Args:
        config: Config; loaded from the environment when None

    Raises:
        ConfigurationError: If database settings are absent
        DatabaseConnectionError: If the connection cannot be established
    """
    global _db_instance
    if _db_instance is not None:
        return _db_instance

    if config is None:
        from ..config import get_config
        config = get_config()

    if config.database is None:
        raise ConfigurationError('SUPABASE_URL', 'database is not configured')

    if config.database.use_direct_connection:
        logger.info("Using direct PostgreSQL connection")
        _db_instance = DatabaseFacade(config.database)
    else:
        logger.info("Using Supabase REST API")
        _db_instance = SupabaseApiAdapter(config.database)

    return _db_instance


def close_database() -> None:
    """Close global database connection."""
    global _db_instance
    if _db_instance is not None:
        if hasattr(_db_instance, 'close'):
            _db_instance.close()
        _db_instance = None


def reset_database_connection(instance: Optional[object] = None) -> None:
    """Drop the cached store, optionally replacing it (useful for testing)."""
    global _db_instance
    close_database()
    _db_instance = instance
