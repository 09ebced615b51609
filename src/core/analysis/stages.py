#!/usr/bin/env python3
"""
Pipeline stages for linguistic drift analysis.

The standard pipeline is:

    AnonymizationStage -> FeatureStage -> DriftStage
                       \\-> ResonanceStage  -> AlertStage

Context keys read: text, anonymized_text, analysis_type, baseline,
mission_statement, organization_id, unit_id.
Context keys written: anonymized_text, features, drift, resonance, alerts.
"""

import logging
from typing import List, Dict, Any

from ..anonymizer import anonymize_text
from ..models.analysis import AnalysisType
from .pipeline import AnalysisPipeline, AnalysisStage
from .features import FeatureExtractor
from .drift import DriftDetector
from .resonance import ResonanceScorer
from .alerts import AlertRuleEngine

logger = logging.getLogger(__name__)


def _analysis_type(context: Dict[str, Any]) -> AnalysisType:
    return context.get('analysis_type') or AnalysisType.FULL


class AnonymizationStage(AnalysisStage):
    """Replaces identifying substrings before any other stage sees the text."""

    def can_process(self, context: Dict[str, Any]) -> bool:
        # Callers that anonymized up front (to fingerprint and store) skip this
        return 'anonymized_text' not in context

    def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return {'anonymized_text': anonymize_text(context.get('text') or '')}


class FeatureStage(AnalysisStage):
    """Extracts the FeatureSet. Drift needs it even when coherence/entropy were not requested."""

    def __init__(self, extractor: FeatureExtractor = None, config: Dict[str, Any] = None):
        super().__init__(config)
        self.extractor = extractor or FeatureExtractor()

    def get_dependencies(self) -> List[str]:
        return ['AnonymizationStage']

    def can_process(self, context: Dict[str, Any]) -> bool:
        analysis_type = _analysis_type(context)
        return any(analysis_type.includes(part) for part in
                   (AnalysisType.COHERENCE, AnalysisType.ENTROPY, AnalysisType.DRIFT))

    def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return {'features': self.extractor.extract(context['anonymized_text'])}


class DriftStage(AnalysisStage):
    """Compares features with the baseline supplied in the context."""

    def __init__(self, detector: DriftDetector = None, config: Dict[str, Any] = None):
        super().__init__(config)
        self.detector = detector or DriftDetector()

    def get_dependencies(self) -> List[str]:
        return ['FeatureStage']

    def can_process(self, context: Dict[str, Any]) -> bool:
        return _analysis_type(context).includes(AnalysisType.DRIFT)

    def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return {'drift': self.detector.detect(context['features'], context.get('baseline'))}


class ResonanceStage(AnalysisStage):
    """Scores mission alignment of the anonymized text."""

    def __init__(self, scorer: ResonanceScorer = None, config: Dict[str, Any] = None):
        super().__init__(config)
        self.scorer = scorer or ResonanceScorer()

    def get_dependencies(self) -> List[str]:
        return ['AnonymizationStage']

    def can_process(self, context: Dict[str, Any]) -> bool:
        return _analysis_type(context).includes(AnalysisType.RESONANCE)

    def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        return {'resonance': self.scorer.score(context['anonymized_text'], context.get('mission_statement'))}


class AlertStage(AnalysisStage):
    """Applies the alert rules to whatever drift/resonance results exist."""

    def __init__(self, rules: AlertRuleEngine = None, config: Dict[str, Any] = None):
        super().__init__(config)
        self.rules = rules or AlertRuleEngine()

    def get_dependencies(self) -> List[str]:
        return ['DriftStage', 'ResonanceStage']

    def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        alerts = self.rules.evaluate(
            context.get('drift'),
            context.get('resonance'),
            organization_id=context.get('organization_id', ''),
            unit_id=context.get('unit_id'),
        )
        return {'alerts': alerts}


def build_default_pipeline() -> AnalysisPipeline:
    """Assemble the standard analysis pipeline."""
    return (AnalysisPipeline()
            .add_stage(AnonymizationStage())
            .add_stage(FeatureStage())
            .add_stage(DriftStage())
            .add_stage(ResonanceStage())
            .add_stage(AlertStage()))
