#!/usr/bin/env python3
"""
Alert rule engine.

Drift and resonance rules are evaluated independently, so one sample can open
both alerts. Narratives and action lists are fixed templates keyed by alert
type; only the score and the fired indicator names are interpolated.
"""

import logging
from typing import List, Optional

from ..models.alert import Alert, AlertType, RecommendedActions
from ..models.analysis import DriftResult, ResonanceResult
from ..thresholds import ALERT_RULES

logger = logging.getLogger(__name__)

DRIFT_TEMPLATE = {
    'title': 'Symbolic Drift Detected',
    'description': 'Significant linguistic drift detected in organizational unit',
    'narrative': (
        "The symbolic patterns show {indicators} with a drift magnitude of {percent}%. "
        "This suggests the team's linguistic coherence is diverging from established baselines, "
        "potentially indicating cultural or operational misalignment."
    ),
    'immediate': ('Review recent communication patterns', 'Schedule team alignment session'),
    'stabilization': ('Implement narrative reset protocol', 'Conduct symbolic coherence workshop'),
}

RESONANCE_TEMPLATE = {
    'title': 'Mission Resonance Decline',
    'description': 'Team language showing drift from organizational mission',
    'narrative': (
        "Current communication patterns show only {percent}% alignment with the organizational mission. "
        "This linguistic distance suggests potential mission drift or unclear strategic messaging."
    ),
    'immediate': ('Review mission statement clarity', 'Analyze recent strategic communications'),
    'stabilization': ('Mission realignment workshop', 'Narrative coherence training'),
}

TEMPLATES = {
    AlertType.DRIFT: DRIFT_TEMPLATE,
    AlertType.RESONANCE: RESONANCE_TEMPLATE,
}


def _percent(score: float) -> str:
    return f"{score * 100:.1f}"


class AlertRuleEngine:
    """Turns drift and resonance results into alerts."""

    def evaluate(self, drift: Optional[DriftResult], resonance: Optional[ResonanceResult],
                 organization_id: str, unit_id: Optional[str] = None) -> List[Alert]:
        """
        Apply the firing rules.

        Args:
            drift: Drift result, None when drift was not computed
            resonance: Resonance result, None when resonance was not computed
            organization_id: Owning organization
            unit_id: Optional organizational unit

        Returns:
            Newly opened alerts, drift first
        """
        alerts = []

        if drift is not None:
            alert = self._build(AlertType.DRIFT, drift.drift_score, list(drift.indicators),
                                organization_id, unit_id)
            if alert:
                alerts.append(alert)

        if resonance is not None:
            alert = self._build(AlertType.RESONANCE, resonance.resonance_score, list(resonance.indicators),
                                organization_id, unit_id)
            if alert:
                alerts.append(alert)

        if alerts:
            logger.info(f"Opened {len(alerts)} alert(s) for organization {organization_id}: "
                        f"{[a.alert_type.value + '/' + a.severity.value for a in alerts]}")
        return alerts

    def _build(self, alert_type: AlertType, score: float, indicators: List[str],
               organization_id: str, unit_id: Optional[str]) -> Optional[Alert]:
        rule = ALERT_RULES[alert_type]
        if not rule.breached(score):
            return None

        template = TEMPLATES[alert_type]
        narrative = template['narrative'].format(
            indicators=', '.join(indicators),
            percent=_percent(score),
        )

        return Alert(
            alert_type=alert_type,
            severity=rule.severity_for(score),
            title=template['title'],
            description=template['description'],
            interpretive_analysis=narrative,
            recommended_actions=RecommendedActions(
                immediate=list(template['immediate']),
                stabilization=list(template['stabilization']),
                drift_indicators=indicators,
            ),
            organization_id=organization_id,
            unit_id=unit_id,
            trigger_score=score,
        )
