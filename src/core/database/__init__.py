#!/usr/bin/env python3
"""
Database package for the drift engine.

Provides one service per table behind a single facade, plus store selection.
"""

from .connection_manager import ConnectionManager
from .sample_service import SampleService
from .analysis_service import AnalysisService
from .baseline_service import BaselineService
from .alert_service import AlertService
from .intervention_service import InterventionService
from .organization_service import OrganizationService
from .database_facade import DatabaseFacade
from .connection import get_database, close_database, reset_database_connection

__all__ = [
    'ConnectionManager',
    'SampleService',
    'AnalysisService',
    'BaselineService',
    'AlertService',
    'InterventionService',
    'OrganizationService',
    'DatabaseFacade',
    'get_database',
    'close_database',
    'reset_database_connection',
]
