#!/usr/bin/env python3
"""
Organization Database Service
"""

import logging
from typing import Optional

import psycopg

from ..exceptions import DatabaseOperationError

logger = logging.getLogger(__name__)


class OrganizationService:
    """Service for organizations reads."""

    def __init__(self, connection_manager):
        self.connection_manager = connection_manager

    def get_mission_statement(self, organization_id: str) -> Optional[str]:
        """Mission statement of an organization, None when unknown or unset."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(
                    "SELECT mission_statement FROM organizations WHERE id = %s",
                    (organization_id,)
                )
                row = cursor.fetchone()
                return row['mission_statement'] if row else None

        except psycopg.Error as e:
            logger.error(f"Failed to get mission statement: {e}")
            raise DatabaseOperationError('select', 'organizations', e) from e
