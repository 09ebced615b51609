#!/usr/bin/env python3
"""
Database Facade

Single store interface over the per-table services, backed by a direct
PostgreSQL connection. SupabaseApiAdapter exposes the same methods over the
REST API.
"""

import logging
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional

from ..exceptions import RecordNotFoundError
from ..models.alert import Alert
from ..models.features import Baseline
from ..models.intervention import Intervention
from .connection_manager import ConnectionManager
from .sample_service import SampleService
from .analysis_service import AnalysisService
from .baseline_service import BaselineService
from .alert_service import AlertService
from .intervention_service import InterventionService
from .organization_service import OrganizationService

logger = logging.getLogger(__name__)


class DatabaseFacade:
    """Unified database interface using modular services."""

    def __init__(self, config, connection_manager: Optional[ConnectionManager] = None):
        """
        Initialize database facade with configuration.

        Args:
            config: DatabaseConfig
            connection_manager: Pre-built connection manager (mainly for tests)
        """
        self.config = config
        self.connection_manager = connection_manager or ConnectionManager(config)

        self.samples = SampleService(self.connection_manager)
        self.analyses = AnalysisService(self.connection_manager)
        self.baselines = BaselineService(self.connection_manager)
        self.alerts = AlertService(self.connection_manager)
        self.interventions = InterventionService(self.connection_manager)
        self.organizations = OrganizationService(self.connection_manager)

    # Samples

    def register_sample(self, record: Dict[str, Any]) -> Optional[str]:
        """Register a sample; None when its fingerprint was already seen."""
        return self.samples.register_sample(record)

    # Reference data

    def get_latest_baseline(self, organization_id: str, unit_id: Optional[str] = None,
                            baseline_type: str = 'comprehensive') -> Optional[Baseline]:
        return self.baselines.get_latest_baseline(organization_id, unit_id, baseline_type)

    def get_mission_statement(self, organization_id: str) -> Optional[str]:
        return self.organizations.get_mission_statement(organization_id)

    # Analyses

    def store_analysis(self, record: Dict[str, Any]) -> str:
        return self.analyses.store_analysis(record)

    # Alerts

    def store_alert(self, alert: Alert) -> str:
        return self.alerts.store_alert(alert)

    def get_alert(self, alert_id: str) -> Optional[Alert]:
        return self.alerts.get_alert(alert_id)

    def list_alerts(self, organization_id: str, unit_id: Optional[str] = None,
                    include_resolved: bool = False) -> List[Alert]:
        return self.alerts.list_alerts(organization_id, unit_id, include_resolved)

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
        self.alerts.update_resolution(alert)
        logger.info(f"Resolved alert {alert_id}")
        return alert

    # Interventions

    def store_intervention(self, intervention: Intervention) -> str:
        return self.interventions.store_intervention(intervention)

    def get_intervention(self, intervention_id: str) -> Optional[Dict[str, Any]]:
        return self.interventions.get_intervention(intervention_id)

    def list_interventions(self, alert_id: str) -> List[Dict[str, Any]]:
        return self.interventions.list_for_alert(alert_id)

    def update_intervention(self, intervention: Intervention) -> None:
        self.interventions.update_intervention(intervention)

    # Health Check

    def health_check(self) -> Dict[str, Any]:
        """Check database connection and return status info with table counts."""
        health_info = self.connection_manager.health_check()
        if not health_info.get('connected', False):
            return health_info

        tables_info = {}
        for table, stats_call in (
            ('communication_events', self.samples.get_sample_stats),
            ('linguistic_analyses', self.analyses.get_analysis_stats),
            ('symbolic_alerts', self.alerts.get_alert_stats),
        ):
            try:
                tables_info[table] = stats_call()
            except Exception as e:
                logger.warning(f"Could not get {table} stats: {e}")
                tables_info[table] = {'error': str(e)}

        health_info['tables'] = tables_info
        health_info['timestamp'] = datetime.now(timezone.utc).isoformat()
        return health_info

    def close(self) -> None:
        self.connection_manager.close()
