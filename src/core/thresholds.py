#!/usr/bin/env python3
"""
Threshold tables for drift indicators, metric severities and alert rules.

Indicator thresholds decide which named drift indicators fire. The severity
families grade per-metric drift for display and differ per metric category.
Alert thresholds decide when the rule engine opens an alert.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .models.alert import AlertType, Severity


class MetricCategory(Enum):
    """Metric families with independent severity cut points."""
    METAPHOR = "metaphor"
    PRONOUN = "pronoun"
    EMOTIONAL = "emotional"
    NARRATIVE = "narrative"
    MODAL = "modal"


@dataclass(frozen=True)
class SeverityThresholds:
    """Cut points (inclusive) for medium/high/critical severity."""
    medium: float
    high: float
    critical: float

    def classify(self, drift: float) -> Severity:
        if drift >= self.critical:
            return Severity.CRITICAL
        if drift >= self.high:
            return Severity.HIGH
        if drift >= self.medium:
            return Severity.MEDIUM
        return Severity.LOW


SEVERITY_THRESHOLDS: Dict[MetricCategory, SeverityThresholds] = {
    MetricCategory.METAPHOR: SeverityThresholds(medium=0.10, high=0.20, critical=0.35),
    MetricCategory.PRONOUN: SeverityThresholds(medium=0.15, high=0.30, critical=0.50),
    MetricCategory.EMOTIONAL: SeverityThresholds(medium=0.10, high=0.25, critical=0.40),
    MetricCategory.NARRATIVE: SeverityThresholds(medium=0.10, high=0.20, critical=0.35),
    MetricCategory.MODAL: SeverityThresholds(medium=0.05, high=0.15, critical=0.25),
}


@dataclass(frozen=True)
class IndicatorRule:
    """Fires `indicator` when the absolute delta of `metric` exceeds `threshold`."""
    metric: str
    indicator: str
    threshold: float
    category: MetricCategory


# Order matters: indicators are reported in this order
DRIFT_INDICATOR_RULES = (
    IndicatorRule('metaphorDensity', 'metaphor_decay', 0.10, MetricCategory.METAPHOR),
    IndicatorRule('modalDensity', 'modal_compression', 0.10, MetricCategory.MODAL),
    IndicatorRule('coherenceScore', 'coherence_breakdown', 0.10, MetricCategory.NARRATIVE),
    IndicatorRule('entropy', 'emotional_instability', 0.50, MetricCategory.EMOTIONAL),
)

RESONANCE_INDICATOR_THRESHOLD = 0.30
RESONANCE_INDICATORS = ('mission_drift', 'semantic_distance')

# Drift confidence = min(1, drift_score * factor); no baseline -> fixed low value
DRIFT_CONFIDENCE_FACTOR = 2.0
NO_BASELINE_CONFIDENCE = 0.1

# Resonance confidence saturates once the sample reaches this many tokens
RESONANCE_SATURATION_TOKENS = 50
NEUTRAL_RESONANCE_SCORE = 0.5

# Trend band shared by drift reports and effectiveness assessment
SIGNIFICANT_CHANGE = 0.05


@dataclass(frozen=True)
class AlertRule:
    """Opens an alert of `alert_type` when the score crosses `threshold`."""
    alert_type: AlertType
    threshold: float
    critical_threshold: float
    base_severity: Severity
    fires_above: bool

    def breached(self, score: float) -> bool:
        if self.fires_above:
            return score > self.threshold
        return score < self.threshold

    def severity_for(self, score: float) -> Severity:
        critical = score > self.critical_threshold if self.fires_above else score < self.critical_threshold
        return Severity.CRITICAL if critical else self.base_severity


ALERT_RULES: Dict[AlertType, AlertRule] = {
    AlertType.DRIFT: AlertRule(AlertType.DRIFT, 0.70, 0.90, Severity.HIGH, fires_above=True),
    AlertType.RESONANCE: AlertRule(AlertType.RESONANCE, 0.30, 0.15, Severity.MEDIUM, fires_above=False),
}


def classify_severity(drift: float, category: MetricCategory) -> Severity:
    """Grade a per-metric drift using its category's cut points."""
    return SEVERITY_THRESHOLDS[category].classify(drift)
