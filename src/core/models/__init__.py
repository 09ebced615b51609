#!/usr/bin/env python3
"""
Core data models for linguistic drift analysis.

Contains all data structures used throughout the application.
"""

from .sample import CommunicationSample, generate_fingerprint, parse_timestamp
from .features import CoherenceFeatures, EntropyFeatures, FeatureSet, Baseline, MetricSnapshot
from .analysis import (
    AnalysisType, DriftResult, ResonanceResult, AnalysisResult,
    AnalysisRequest, AnalysisResponse
)
from .alert import Alert, AlertType, Severity, RecommendedActions
from .intervention import (
    Intervention, InterventionType, ImplementationStatus,
    EffectivenessAssessment, Recommendation
)

__all__ = [
    'CommunicationSample', 'generate_fingerprint', 'parse_timestamp',
    'CoherenceFeatures', 'EntropyFeatures', 'FeatureSet', 'Baseline', 'MetricSnapshot',
    'AnalysisType', 'DriftResult', 'ResonanceResult', 'AnalysisResult',
    'AnalysisRequest', 'AnalysisResponse',
    'Alert', 'AlertType', 'Severity', 'RecommendedActions',
    'Intervention', 'InterventionType', 'ImplementationStatus',
    'EffectivenessAssessment', 'Recommendation',
]
