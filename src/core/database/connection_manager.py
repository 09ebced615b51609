#!/usr/bin/env python3
"""
PostgreSQL connection lifecycle for the direct store.

One autocommit connection per process with dict rows. A dropped connection
is detected before each cursor is handed out and re-established, retrying up
to DB_MAX_RETRIES times.
"""

import logging
import time
import psycopg
from psycopg.rows import dict_row
from typing import Optional, Dict, Any
from contextlib import contextmanager

from ..exceptions import DatabaseConnectionError, ConfigurationError

logger = logging.getLogger(__name__)

# Supabase transaction pooler
POOLER_PORT = 6543


class ConnectionManager:
    """Owns the psycopg connection used by the table services."""

    def __init__(self, config, connect: bool = True):
        """
        Args:
            config: DatabaseConfig
            connect: Open the connection immediately
        """
        self.config = config
        self.connection: Optional[psycopg.Connection] = None
        if connect:
            self._connect()

    def _conninfo(self) -> str:
        url = self.config.supabase_url
        if not url.startswith('https://'):
            raise ConfigurationError('SUPABASE_URL', f"invalid Supabase URL format: {url}")

        host = url[len('https://'):].rstrip('/')
        return (f"postgresql://postgres:{self.config.supabase_db_password}"
                f"@{host}:{POOLER_PORT}/postgres?sslmode=require")

    def _connect(self) -> None:
        attempts = max(1, self.config.max_retries)
        for attempt in range(1, attempts + 1):
            try:
                self.connection = psycopg.connect(
                    self._conninfo(),
                    row_factory=dict_row,
                    autocommit=True,
                    connect_timeout=self.config.connection_timeout,
                )
                logger.debug(f"PostgreSQL connection established (attempt {attempt})")
                return
            except psycopg.OperationalError as e:
                if attempt == attempts:
                    raise DatabaseConnectionError('postgresql', e) from e
                logger.warning(f"PostgreSQL connect attempt {attempt}/{attempts} failed: {e}")
                time.sleep(min(2 ** attempt, 10))

    def _is_alive(self) -> bool:
        if self.connection is None or self.connection.closed:
            return False
        try:
            self.connection.execute("SELECT 1")
        except psycopg.Error:
            return False
        return True

    @contextmanager
    def get_cursor(self):
        """
        Cursor on a live connection, reconnecting first if needed.

        Yields:
            psycopg cursor returning dict rows

        Raises:
            DatabaseConnectionError: If no connection can be established
        """
        if not self._is_alive():
            if self.connection is not None:
                logger.warning("PostgreSQL connection lost, reconnecting")
            self._connect()
        with self.connection.cursor() as cursor:
            yield cursor

    def close(self) -> None:
        if self.connection is not None and not self.connection.closed:
            self.connection.close()
            logger.debug("PostgreSQL connection closed")

    def health_check(self) -> Dict[str, Any]:
        """Round-trip a query and report the server version."""
        try:
            with self.get_cursor() as cursor:
                cursor.execute("SELECT version() AS version")
                row = cursor.fetchone()
        except (psycopg.Error, DatabaseConnectionError) as e:
            logger.error(f"Database health check failed: {e}")
            return {'connected': False, 'connection_type': 'direct', 'error': str(e)}

        return {'connected': True, 'connection_type': 'direct', 'version': row['version']}
