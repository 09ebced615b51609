#!/usr/bin/env python3
"""
Alert Database Service

Handles symbolic_alerts: creation by the engine and resolution by an
external actor.
"""

import logging
from typing import List, Optional

import psycopg
from psycopg.types.json import Jsonb

from ..exceptions import DatabaseOperationError
from ..models.alert import Alert

logger = logging.getLogger(__name__)


class AlertService:
    """Service for symbolic_alerts operations."""

    def __init__(self, connection_manager):
        """
        Initialize alert service.

        Args:
            connection_manager: Database connection manager instance
        """
        self.connection_manager = connection_manager

    def store_alert(self, alert: Alert) -> str:
        """
        Insert a newly opened alert.

        Returns:
            Alert ID
        """
        record = alert.to_record()
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    INSERT INTO symbolic_alerts (
                        organization_id, unit_id, alert_type, severity, title,
                        description, interpretive_analysis, recommended_actions, is_resolved
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                """, (
                    record['organization_id'],
                    record['unit_id'],
                    record['alert_type'],
                    record['severity'],
                    record['title'],
                    record['description'],
                    record['interpretive_analysis'],
                    Jsonb(record['recommended_actions']),
                    record['is_resolved'],
                ))

                alert_id = str(cursor.fetchone()['id'])
                logger.info(f"Stored {record['alert_type']} alert with ID {alert_id}")
                return alert_id

        except psycopg.Error as e:
            logger.error(f"Failed to store alert: {e}")
            raise DatabaseOperationError('insert', 'symbolic_alerts', e) from e

    def get_alert(self, alert_id: str) -> Optional[Alert]:
        """Get one alert by ID."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("SELECT * FROM symbolic_alerts WHERE id = %s", (alert_id,))
                row = cursor.fetchone()
                return Alert.from_record(dict(row)) if row else None

        except psycopg.Error as e:
            logger.error(f"Failed to get alert {alert_id}: {e}")
            raise DatabaseOperationError('select', 'symbolic_alerts', e) from e

    def list_alerts(self, organization_id: str, unit_id: Optional[str] = None,
                    include_resolved: bool = False, limit: int = 100) -> List[Alert]:
        """
        List alerts of an organization, newest first.

        Args:
            organization_id: Organization
            unit_id: Optional unit filter
            include_resolved: Also return resolved alerts
            limit: Maximum number of alerts
        """
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    SELECT * FROM symbolic_alerts
                    WHERE organization_id = %s
                      AND (%s::text IS NULL OR unit_id = %s::text)
                      AND (%s OR is_resolved = FALSE)
                    ORDER BY created_at DESC
                    LIMIT %s
                """, (organization_id, unit_id, unit_id, include_resolved, limit))

                return [Alert.from_record(dict(row)) for row in cursor.fetchall()]

        except psycopg.Error as e:
            logger.error(f"Failed to list alerts: {e}")
            raise DatabaseOperationError('select', 'symbolic_alerts', e) from e

    def update_resolution(self, alert: Alert) -> None:
        """Persist the resolution state of an alert."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    UPDATE symbolic_alerts
                    SET is_resolved = %s, resolved_at = %s
                    WHERE id = %s
                """, (alert.is_resolved, alert.resolved_at, alert.alert_id))

        except psycopg.Error as e:
            logger.error(f"Failed to update alert {alert.alert_id}: {e}")
            raise DatabaseOperationError('update', 'symbolic_alerts', e) from e

    def get_alert_stats(self):
        """Open/total alert counts."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    SELECT
                        COUNT(*) as total_alerts,
                        COUNT(*) FILTER (WHERE is_resolved = FALSE) as open_alerts
                    FROM symbolic_alerts
                """)
                return dict(cursor.fetchone())

        except psycopg.Error as e:
            logger.error(f"Failed to get alert stats: {e}")
            raise DatabaseOperationError('select', 'symbolic_alerts', e) from e
