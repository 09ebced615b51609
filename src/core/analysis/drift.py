#!/usr/bin/env python3
"""
Symbolic drift detection against an organizational baseline.

Drift is the mean absolute delta of four tracked metrics. It is symmetric in
time order: swapping current and baseline yields the same score.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Union

from ..models.analysis import DriftResult
from ..models.features import Baseline, FeatureSet
from ..thresholds import (
    DRIFT_INDICATOR_RULES, DRIFT_CONFIDENCE_FACTOR, NO_BASELINE_CONFIDENCE,
    SIGNIFICANT_CHANGE, MetricCategory, classify_severity,
)
from .features import pronoun_cohesion

logger = logging.getLogger(__name__)

MetricSource = Union[FeatureSet, Baseline, Dict[str, Any]]

# (label, metric key, category) for the per-metric drift report
DISPLAY_METRICS = (
    ('Metaphor Coherence', 'metaphorDensity', MetricCategory.METAPHOR),
    ('Pronoun Distribution', 'pronounDistribution', MetricCategory.PRONOUN),
    ('Emotional Stability', 'emotionalStability', MetricCategory.EMOTIONAL),
    ('Narrative Continuity', 'coherenceScore', MetricCategory.NARRATIVE),
    ('Modal Certainty', 'modalDensity', MetricCategory.MODAL),
)


def _as_metrics(source: Optional[MetricSource]) -> Optional[Dict[str, Any]]:
    if source is None:
        return None
    if isinstance(source, FeatureSet):
        return source.to_metrics()
    if isinstance(source, Baseline):
        return source.metrics
    return source


def _scalar(metrics: Dict[str, Any], name: str) -> float:
    value = metrics.get(name)
    if name == 'pronounDistribution':
        return pronoun_cohesion(value or {})
    return float(value) if value is not None else 0.0


def trend(current: float, baseline: float) -> str:
    """Direction of a metric relative to its baseline."""
    diff = current - baseline
    if abs(diff) < SIGNIFICANT_CHANGE:
        return 'stable'
    return 'improving' if diff > 0 else 'degrading'


@dataclass(frozen=True)
class MetricDrift:
    """One row of the per-metric drift report."""
    metric: str
    current: float
    baseline: float
    drift: float
    severity: str
    trend: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'metric': self.metric,
            'current': self.current,
            'baseline': self.baseline,
            'drift': self.drift,
            'severity': self.severity,
            'trend': self.trend,
        }


class DriftDetector:
    """Compares current features with the latest stored baseline."""

    def detect(self, current: MetricSource, baseline: Optional[MetricSource]) -> DriftResult:
        """
        Compute drift score, fired indicators and confidence.

        Args:
            current: Current FeatureSet (or its metric mapping)
            baseline: Baseline record or metric mapping, None when unavailable

        Returns:
            DriftResult; without a baseline the score is 0 with confidence 0.1,
            meaning drift is unknown rather than absent
        """
        baseline_metrics = _as_metrics(baseline)
        if not baseline_metrics:
            logger.debug("No baseline available, drift unknown")
            return DriftResult(drift_score=0.0, indicators=(), confidence=NO_BASELINE_CONFIDENCE)

        current_metrics = _as_metrics(current)

        deltas: Dict[str, float] = {}
        severities: Dict[str, str] = {}
        indicators: List[str] = []
        for rule in DRIFT_INDICATOR_RULES:
            delta = abs(_scalar(current_metrics, rule.metric) - _scalar(baseline_metrics, rule.metric))
            deltas[rule.metric] = delta
            severities[rule.metric] = classify_severity(delta, rule.category).value
            if delta > rule.threshold:
                indicators.append(rule.indicator)

        drift_score = sum(deltas.values()) / len(deltas)

        logger.info(f"Drift score {drift_score:.3f} with indicators {indicators or 'none'}")

        return DriftResult(
            drift_score=drift_score,
            indicators=tuple(indicators),
            confidence=min(1.0, drift_score * DRIFT_CONFIDENCE_FACTOR),
            detailed_drift=deltas,
            metric_severities=severities,
        )

    def build_metric_report(self, current: MetricSource, baseline: Optional[MetricSource]) -> List[MetricDrift]:
        """
        Per-metric drift, severity and trend for display.

        A missing baseline compares against zeros.
        """
        current_metrics = _as_metrics(current) or {}
        baseline_metrics = _as_metrics(baseline) or {}

        report = []
        for label, key, category in DISPLAY_METRICS:
            current_value = _scalar(current_metrics, key)
            baseline_value = _scalar(baseline_metrics, key)
            drift = abs(current_value - baseline_value)
            report.append(MetricDrift(
                metric=label,
                current=current_value,
                baseline=baseline_value,
                drift=drift,
                severity=classify_severity(drift, category).value,
                trend=trend(current_value, baseline_value),
            ))
        return report
