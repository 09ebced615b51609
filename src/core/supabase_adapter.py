#!/usr/bin/env python3
"""
Supabase REST API Database Adapter.

Alternative to direct PostgreSQL connection for networks that block port
5432/6543. Uses the Supabase REST API over HTTPS and exposes the same
methods as DatabaseFacade.
"""

import logging
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional

from supabase import create_client, Client

from .exceptions import DatabaseConnectionError, DatabaseOperationError, RecordNotFoundError
from .models.alert import Alert
from .models.features import Baseline
from .models.intervention import Intervention

logger = logging.getLogger(__name__)


class SupabaseApiAdapter:
    """Store implementation over the Supabase REST API."""

    def __init__(self, config, client: Optional[Client] = None):
        """
        Initialize Supabase API client.

        Args:
            config: DatabaseConfig
            client: Pre-built client (mainly for tests)
        """
        self.config = config
        self.client = client or self._create_client()
        logger.debug("Supabase API adapter initialized")

    def _create_client(self) -> Client:
        """Create and configure Supabase client, preferring the service key."""
        supabase_key = self.config.supabase_service_key or self.config.supabase_anon_key
        try:
            return create_client(self.config.supabase_url, supabase_key)
        except Exception as e:
            raise DatabaseConnectionError('supabase-api', e) from e

    # Samples

    def register_sample(self, record: Dict[str, Any]) -> Optional[str]:
        """
        Register a sample unless its fingerprint already exists.

        Returns:
            New event id, or None when the content_hash was already stored
        """
        try:
            result = (self.client.table('communication_events')
                      .upsert(record, on_conflict='content_hash', ignore_duplicates=True)
                      .execute())
        except Exception as e:
            logger.error(f"Failed to register sample via API: {e}")
            raise DatabaseOperationError('upsert', 'communication_events', e) from e

        if not result.data:
            logger.debug(f"Sample {record['content_hash'][:12]} already registered")
            return None
        return str(result.data[0]['id'])

    # Reference data

    def get_latest_baseline(self, organization_id: str, unit_id: Optional[str] = None,
                            baseline_type: str = 'comprehensive') -> Optional[Baseline]:
        """Most recently updated baseline, or None."""
        try:
            query = (self.client.table('symbolic_baselines')
                     .select('*')
                     .eq('organization_id', organization_id)
                     .eq('baseline_type', baseline_type))
            query = query.eq('unit_id', unit_id) if unit_id else query.is_('unit_id', 'null')
            result = (query
                      .order('last_updated', desc=True)
                      .limit(1)
                      .execute())
        except Exception as e:
            logger.error(f"Failed to get baseline via API: {e}")
            raise DatabaseOperationError('select', 'symbolic_baselines', e) from e

        return Baseline.from_record(result.data[0]) if result.data else None

    def get_mission_statement(self, organization_id: str) -> Optional[str]:
        try:
            result = (self.client.table('organizations')
                      .select('mission_statement')
                      .eq('id', organization_id)
                      .limit(1)
                      .execute())
        except Exception as e:
            logger.error(f"Failed to get mission statement via API: {e}")
            raise DatabaseOperationError('select', 'organizations', e) from e

        return result.data[0].get('mission_statement') if result.data else None

    # Analyses

    def store_analysis(self, record: Dict[str, Any]) -> str:
        """Store analysis record using API."""
        try:
            result = (self.client.table('linguistic_analyses')
                      .insert(record)
                      .execute())
        except Exception as e:
            logger.error(f"Failed to store analysis via API: {e}")
            raise DatabaseOperationError('insert', 'linguistic_analyses', e) from e

        if not result.data:
            raise DatabaseOperationError('insert', 'linguistic_analyses',
                                         RuntimeError("No data returned from analysis insert"))
        analysis_id = str(result.data[0]['id'])
        logger.info(f"Stored analysis with ID {analysis_id} via API")
        return analysis_id

    # Alerts

    def store_alert(self, alert: Alert) -> str:
        try:
            result = (self.client.table('symbolic_alerts')
                      .insert(alert.to_record())
                      .execute())
        except Exception as e:
            logger.error(f"Failed to store alert via API: {e}")
            raise DatabaseOperationError('insert', 'symbolic_alerts', e) from e

        alert_id = str(result.data[0]['id'])
        logger.info(f"Stored {alert.alert_type.value} alert with ID {alert_id} via API")
        return alert_id

    def get_alert(self, alert_id: str) -> Optional[Alert]:
        try:
            result = (self.client.table('symbolic_alerts')
                      .select('*')
                      .eq('id', alert_id)
                      .limit(1)
                      .execute())
        except Exception as e:
            logger.error(f"Failed to get alert via API: {e}")
            raise DatabaseOperationError('select', 'symbolic_alerts', e) from e

        return Alert.from_record(result.data[0]) if result.data else None

    def list_alerts(self, organization_id: str, unit_id: Optional[str] = None,
                    include_resolved: bool = False) -> List[Alert]:
        try:
            query = (self.client.table('symbolic_alerts')
                     .select('*')
                     .eq('organization_id', organization_id))
            if unit_id:
                query = query.eq('unit_id', unit_id)
            if not include_resolved:
                query = query.eq('is_resolved', False)
            result = query.order('created_at', desc=True).limit(100).execute()
        except Exception as e:
            logger.error(f"Failed to list alerts via API: {e}")
            raise DatabaseOperationError('select', 'symbolic_alerts', e) from e

        return [Alert.from_record(row) for row in result.data]

    def resolve_alert(self, alert_id: str) -> Alert:
        """
        Mark an open alert resolved.

        Raises:
            RecordNotFoundError: If the alert does not exist
            InvalidStateTransitionError: If it is already resolved
        """
        alert = self.get_alert(alert_id)
        if alert is None:
            raise RecordNotFoundError('symbolic_alerts', alert_id)
        alert.resolve()
        try:
            (self.client.table('symbolic_alerts')
             .update({'is_resolved': True, 'resolved_at': alert.resolved_at.isoformat()})
             .eq('id', alert_id)
             .execute())
        except Exception as e:
            logger.error(f"Failed to resolve alert via API: {e}")
            raise DatabaseOperationError('update', 'symbolic_alerts', e) from e
        logger.info(f"Resolved alert {alert_id} via API")
        return alert

    # Interventions

    def store_intervention(self, intervention: Intervention) -> str:
        try:
            result = (self.client.table('stabilization_interventions')
                      .insert(intervention.to_record())
                      .execute())
        except Exception as e:
            logger.error(f"Failed to store intervention via API: {e}")
            raise DatabaseOperationError('insert', 'stabilization_interventions', e) from e

        return str(result.data[0]['id'])

    def get_intervention(self, intervention_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = (self.client.table('stabilization_interventions')
                      .select('*')
                      .eq('id', intervention_id)
                      .limit(1)
                      .execute())
        except Exception as e:
            logger.error(f"Failed to get intervention via API: {e}")
            raise DatabaseOperationError('select', 'stabilization_interventions', e) from e

        return result.data[0] if result.data else None

    def list_interventions(self, alert_id: str) -> List[Dict[str, Any]]:
        try:
            return (self.client.table('stabilization_interventions')
                    .select('*')
                    .eq('alert_id', alert_id)
                    .order('created_at')
                    .execute()).data
        except Exception as e:
            logger.error(f"Failed to list interventions via API: {e}")
            raise DatabaseOperationError('select', 'stabilization_interventions', e) from e

    def update_intervention(self, intervention: Intervention) -> None:
        record = intervention.to_record()
        try:
            (self.client.table('stabilization_interventions')
             .update({
                 'implementation_status': record['implementation_status'],
                 'effectiveness_score': record['effectiveness_score'],
                 'implemented_at': record['implemented_at'],
             })
             .eq('id', intervention.intervention_id)
             .execute())
        except Exception as e:
            logger.error(f"Failed to update intervention via API: {e}")
            raise DatabaseOperationError('update', 'stabilization_interventions', e) from e

    # Health Check

    def health_check(self) -> Dict[str, Any]:
        """Check API connection health."""
        try:
            (self.client.table('communication_events')
             .select('id')
             .limit(1)
             .execute())

            tables = {}
            for table in ['communication_events', 'linguistic_analyses', 'symbolic_alerts']:
                try:
                    count_result = (self.client.table(table)
                                    .select('id', count='exact')
                                    .limit(1)
                                    .execute())
                    tables[table] = count_result.count
                except Exception as e:
                    logger.warning(f"Could not count rows in {table}: {e}")
                    tables[table] = "unknown"

            return {
                'connected': True,
                'connection_type': 'REST API',
                'tables': tables,
                'timestamp': datetime.now(timezone.utc).isoformat()
            }

        except Exception as e:
            logger.error(f"API health check failed: {e}")
            return {
                'connected': False,
                'connection_type': 'REST API',
                'error': str(e),
                'timestamp': datetime.now(timezone.utc).isoformat()
            }
