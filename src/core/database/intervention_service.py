#!/usr/bin/env python3
"""
Intervention Database Service

Handles stabilization_interventions. Content is stored as JSON text and is
returned unparsed; callers render it.
"""

import logging
from typing import List, Dict, Any, Optional

import psycopg

from ..exceptions import DatabaseOperationError
from ..models.intervention import Intervention

logger = logging.getLogger(__name__)


class InterventionService:
    """Service for stabilization_interventions operations."""

    def __init__(self, connection_manager):
        """
        Initialize intervention service.

        Args:
            connection_manager: Database connection manager instance
        """
        self.connection_manager = connection_manager

    def store_intervention(self, intervention: Intervention) -> str:
        """
        Insert a suggested intervention.

        Returns:
            Intervention ID
        """
        record = intervention.to_record()
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    INSERT INTO stabilization_interventions (
                        alert_id, intervention_type, content, implementation_status
                    ) VALUES (%s, %s, %s, %s)
                    RETURNING id
                """, (
                    record['alert_id'],
                    record['intervention_type'],
                    record['content'],
                    record['implementation_status'],
                ))

                return str(cursor.fetchone()['id'])

        except psycopg.Error as e:
            logger.error(f"Failed to store intervention: {e}")
            raise DatabaseOperationError('insert', 'stabilization_interventions', e) from e

    def get_intervention(self, intervention_id: str) -> Optional[Dict[str, Any]]:
        """Get the raw intervention row."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(
                    "SELECT * FROM stabilization_interventions WHERE id = %s",
                    (intervention_id,)
                )
                row = cursor.fetchone()
                return dict(row) if row else None

        except psycopg.Error as e:
            logger.error(f"Failed to get intervention {intervention_id}: {e}")
            raise DatabaseOperationError('select', 'stabilization_interventions', e) from e

    def list_for_alert(self, alert_id: str) -> List[Dict[str, Any]]:
        """Raw intervention rows owned by an alert."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    SELECT * FROM stabilization_interventions
                    WHERE alert_id = %s
                    ORDER BY created_at
                """, (alert_id,))
                return [dict(row) for row in cursor.fetchall()]

        except psycopg.Error as e:
            logger.error(f"Failed to list interventions for alert {alert_id}: {e}")
            raise DatabaseOperationError('select', 'stabilization_interventions', e) from e

    def update_intervention(self, intervention: Intervention) -> None:
        """Persist status, effectiveness score and implementation time."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    UPDATE stabilization_interventions
                    SET implementation_status = %s, effectiveness_score = %s, implemented_at = %s
                    WHERE id = %s
                """, (
                    intervention.implementation_status.value,
                    intervention.effectiveness_score,
                    intervention.implemented_at,
                    intervention.intervention_id,
                ))

        except psycopg.Error as e:
            logger.error(f"Failed to update intervention {intervention.intervention_id}: {e}")
            raise DatabaseOperationError('update', 'stabilization_interventions', e) from e
