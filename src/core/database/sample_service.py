#!/usr/bin/env python3
"""
Communication Event Database Service

Registers anonymized communication samples. The unique constraint on
content_hash makes registration at-most-once per fingerprint.
"""

import logging
from typing import Dict, Any, Optional

import psycopg
from psycopg.types.json import Jsonb

from ..exceptions import DatabaseOperationError

logger = logging.getLogger(__name__)


class SampleService:
    """Service for communication_events operations."""

    def __init__(self, connection_manager):
        """
        Initialize sample service.

        Args:
            connection_manager: Database connection manager instance
        """
        self.connection_manager = connection_manager

    def register_sample(self, record: Dict[str, Any]) -> Optional[str]:
        """
        Insert a sample record unless its fingerprint already exists.

        Args:
            record: communication_events row (see CommunicationSample.to_record)

        Returns:
            New event id, or None if the fingerprint was already registered
        """
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    INSERT INTO communication_events (
                        organization_id, unit_id, source_id, event_type, content_hash,
                        anonymized_content, metadata, occurred_at, processed_at
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (content_hash) DO NOTHING
                    RETURNING id
                """, (
                    record['organization_id'],
                    record.get('unit_id'),
                    record.get('source_id'),
                    record.get('event_type', 'message'),
                    record['content_hash'],
                    record.get('anonymized_content'),
                    Jsonb(record.get('metadata') or {}),
                    record.get('occurred_at'),
                    record.get('processed_at'),
                ))

                row = cursor.fetchone()
                if row is None:
                    logger.debug(f"Sample {record['content_hash'][:12]} already registered")
                    return None
                return str(row['id'])

        except psycopg.Error as e:
            logger.error(f"Failed to register sample: {e}")
            raise DatabaseOperationError('insert', 'communication_events', e) from e

    def get_sample_stats(self) -> Dict[str, Any]:
        """Get communication event counts."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    SELECT
                        COUNT(*) as total_events,
                        COUNT(*) FILTER (WHERE processed_at >= NOW() - INTERVAL '24 hours') as events_24h
                    FROM communication_events
                """)
                return dict(cursor.fetchone())

        except psycopg.Error as e:
            logger.error(f"Failed to get sample stats: {e}")
            raise DatabaseOperationError('select', 'communication_events', e) from e
