#!/usr/bin/env python3
"""
Analysis Database Service

Stores linguistic analysis results as immutable historical records.
"""

import logging
from typing import Dict, Any

import psycopg
from psycopg.types.json import Jsonb

from ..exceptions import DatabaseOperationError

logger = logging.getLogger(__name__)


class AnalysisService:
    """Service for linguistic_analyses operations."""

    def __init__(self, connection_manager):
        """
        Initialize analysis service.

        Args:
            connection_manager: Database connection manager instance
        """
        self.connection_manager = connection_manager

    def store_analysis(self, record: Dict[str, Any]) -> str:
        """
        Store an analysis record.

        Args:
            record: linguistic_analyses row (see AnalysisResult.to_record)

        Returns:
            Analysis ID
        """
        baseline_metrics = record.get('baseline_metrics')
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    INSERT INTO linguistic_analyses (
                        organization_id, unit_id, analysis_type, time_window_start,
                        time_window_end, metrics, baseline_metrics, variance_score,
                        confidence_level, content_hash, vocabulary_version
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                """, (
                    record['organization_id'],
                    record.get('unit_id'),
                    record['analysis_type'],
                    record['time_window_start'],
                    record['time_window_end'],
                    Jsonb(record['metrics']),
                    Jsonb(baseline_metrics) if baseline_metrics is not None else None,
                    record['variance_score'],
                    record['confidence_level'],
                    record.get('content_hash'),
                    record.get('vocabulary_version'),
                ))

                analysis_id = str(cursor.fetchone()['id'])
                logger.info(f"Stored analysis with ID {analysis_id}")
                return analysis_id

        except psycopg.Error as e:
            logger.error(f"Failed to store analysis: {e}")
            raise DatabaseOperationError('insert', 'linguistic_analyses', e) from e

    def get_analysis_stats(self) -> Dict[str, Any]:
        """Get analysis counts."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute("""
                    SELECT
                        COUNT(*) as total_analyses,
                        COUNT(*) FILTER (WHERE created_at >= NOW() - INTERVAL '24 hours') as analyses_24h,
                        AVG(variance_score) as avg_variance
                    FROM linguistic_analyses
                """)
                return dict(cursor.fetchone())

        except psycopg.Error as e:
            logger.error(f"Failed to get analysis stats: {e}")
            raise DatabaseOperationError('select', 'linguistic_analyses', e) from e
