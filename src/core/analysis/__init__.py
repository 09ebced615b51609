#!/usr/bin/env python3
"""
Linguistic drift and resonance analysis.

Feature extraction, drift detection, resonance scoring and alert rules,
composed by a pluggable stage pipeline and driven by LinguisticEngine.
"""

from .pipeline import AnalysisPipeline, AnalysisStage
from .features import FeatureExtractor, pronoun_cohesion
from .drift import DriftDetector, MetricDrift, trend
from .resonance import ResonanceScorer, extract_key_concepts
from .alerts import AlertRuleEngine
from .stages import build_default_pipeline
from .engine import LinguisticEngine

__all__ = [
    'AnalysisPipeline', 'AnalysisStage',
    'FeatureExtractor', 'pronoun_cohesion',
    'DriftDetector', 'MetricDrift', 'trend',
    'ResonanceScorer', 'extract_key_concepts',
    'AlertRuleEngine', 'build_default_pipeline',
    'LinguisticEngine',
]
