#!/usr/bin/env python3
"""
Baseline Database Service

Read-only access to symbolic baselines. Baselines are maintained by an
external process; the engine only ever reads the latest one.
"""

import logging
from typing import Optional

import psycopg

from ..exceptions import DatabaseOperationError
from ..models.features import Baseline

logger = logging.getLogger(__name__)


class BaselineService:
    """Service for symbolic_baselines reads."""

    def __init__(self, connection_manager):
        """
        Initialize baseline service.

        Args:
            connection_manager: Database connection manager instance
        """
        self.connection_manager = connection_manager

    def get_latest_baseline(self, organization_id: str, unit_id: Optional[str] = None,
                            baseline_type: str = 'comprehensive') -> Optional[Baseline]:
        """
        Get the most recently updated baseline.

        Args:
            organization_id: Organization
            unit_id: Unit, or None for the organization-wide baseline
            baseline_type: Baseline type

        Returns:
            Baseline or None if none exists
        """
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    SELECT id, organization_id, unit_id, baseline_type, baseline_data,
                           time_period_days, established_at, last_updated
                    FROM symbolic_baselines
                    WHERE organization_id = %s
                      AND unit_id IS NOT DISTINCT FROM %s
                      AND baseline_type = %s
                    ORDER BY last_updated DESC
                    LIMIT 1
                """, (organization_id, unit_id, baseline_type))

                row = cursor.fetchone()
                return Baseline.from_record(dict(row)) if row else None

        except psycopg.Error as e:
            logger.error(f"Failed to get baseline: {e}")
            raise DatabaseOperationError('select', 'symbolic_baselines', e) from e
