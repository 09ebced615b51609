#!/usr/bin/env python3
"""
Stabilization advisor.

Maps an alert to catalog interventions, tracks their implementation status
and scores their effectiveness from before/after metric snapshots.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional, Union, Iterable

from ..exceptions import InputValidationError, InterventionContentError, RecordNotFoundError
from ..models.alert import Alert
from ..models.features import FeatureSet, MetricSnapshot
from ..models.intervention import (
    Intervention, InterventionType, EffectivenessAssessment, Recommendation
)
from ..thresholds import SIGNIFICANT_CHANGE
from .catalog import (
    REPAIR_PROMPTS, RITUAL_RULES, REFRAMING_STRATEGIES, IMPLEMENTATION_PLAN,
    EFFECTIVENESS_METRICS, CONTINUE_ABOVE, MODIFY_ABOVE, UNAVAILABLE_CONTENT,
    RepairPrompt, AlignmentRitual, ReframingCategory,
)

logger = logging.getLogger(__name__)

MetricInput = Union[MetricSnapshot, FeatureSet, Dict[str, Any], None]


def _as_snapshot(metrics: MetricInput) -> MetricSnapshot:
    if isinstance(metrics, MetricSnapshot):
        return metrics
    if isinstance(metrics, FeatureSet):
        return MetricSnapshot.from_feature_set(metrics)
    return MetricSnapshot(dict(metrics or {}))


@dataclass
class InterventionPackage:
    """Everything generated for one alert."""
    alert_id: Optional[str]
    repair_prompts: List[RepairPrompt]
    alignment_rituals: List[AlignmentRitual]
    reframing_strategies: List[ReframingCategory]
    implementation_plan: Dict[str, str]
    interventions: List[Intervention] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'repairPrompts': [p.to_dict() for p in self.repair_prompts],
            'alignmentRituals': [r.to_dict() for r in self.alignment_rituals],
            'reframingStrategies': [s.to_dict() for s in self.reframing_strategies],
            'implementationPlan': dict(self.implementation_plan),
        }


class StabilizationAdvisor:
    """Pure catalog lookups and effectiveness scoring."""

    def generate_repair_prompts(self, indicators: Iterable[str]) -> List[RepairPrompt]:
        """Repair prompts for the given indicators; unknown indicators are dropped."""
        prompts = []
        for indicator in indicators:
            prompt = REPAIR_PROMPTS.get(indicator)
            if prompt is None:
                logger.debug(f"No repair prompt for indicator {indicator}")
                continue
            prompts.append(prompt)
        return prompts

    def generate_alignment_rituals(self, severity: str) -> List[AlignmentRitual]:
        """Rituals for an alert severity; the reflective query practice is always included."""
        return [ritual for ritual, severities in RITUAL_RULES
                if severities is None or severity in severities]

    def generate_reframing_strategies(self) -> List[ReframingCategory]:
        return list(REFRAMING_STRATEGIES)

    def generate_interventions(self, alert: Alert) -> InterventionPackage:
        """
        Build the full intervention package for an alert.

        Prompts and rituals become suggested Intervention records owned by
        the alert. Reframing strategies are advisory only.

        Args:
            alert: Alert carrying its fired drift indicators

        Returns:
            InterventionPackage
        """
        severity = alert.severity.value
        prompts = self.generate_repair_prompts(alert.drift_indicators)
        rituals = self.generate_alignment_rituals(severity)

        interventions = [
            Intervention(alert_id=alert.alert_id, intervention_type=InterventionType.PROMPT,
                         content=prompt.to_dict())
            for prompt in prompts
        ]
        interventions.extend(
            Intervention(alert_id=alert.alert_id, intervention_type=InterventionType.RITUAL,
                         content=ritual.to_dict())
            for ritual in rituals
        )

        logger.info(f"Generated {len(prompts)} prompt(s) and {len(rituals)} ritual(s) "
                    f"for {alert.alert_type.value} alert {alert.alert_id} ({severity})")

        return InterventionPackage(
            alert_id=alert.alert_id,
            repair_prompts=prompts,
            alignment_rituals=rituals,
            reframing_strategies=self.generate_reframing_strategies(),
            implementation_plan=dict(IMPLEMENTATION_PLAN),
            interventions=interventions,
        )

    def assess_effectiveness(self, before: MetricInput, after: MetricInput) -> EffectivenessAssessment:
        """
        Compare before/after metrics.

        A metric whose change exceeds the significance band counts as an
        improvement (up) or degradation (down). Missing metrics read as 0.

        Args:
            before: Metrics before the intervention
            after: Metrics after the intervention

        Returns:
            EffectivenessAssessment with score in [0, 1]
        """
        before_snapshot = _as_snapshot(before)
        after_snapshot = _as_snapshot(after)

        improvements: Dict[str, float] = {}
        degradations: Dict[str, float] = {}
        for metric in EFFECTIVENESS_METRICS:
            change = after_snapshot.get(metric) - before_snapshot.get(metric)
            if abs(change) > SIGNIFICANT_CHANGE:
                if change > 0:
                    improvements[metric] = change
                else:
                    degradations[metric] = abs(change)

        net = (len(improvements) - len(degradations)) / len(EFFECTIVENESS_METRICS)
        if net > CONTINUE_ABOVE:
            recommendation = Recommendation.CONTINUE
        elif net > MODIFY_ABOVE:
            recommendation = Recommendation.MODIFY
        else:
            recommendation = Recommendation.DISCONTINUE

        return EffectivenessAssessment(
            effectiveness_score=max(0.0, min(1.0, (net + 1) / 2)),
            improvements=improvements,
            degradations=degradations,
            recommendation=recommendation,
        )

    def mark_implemented(self, intervention: Intervention, when: Optional[datetime] = None) -> Intervention:
        intervention.mark_implemented(when)
        return intervention

    def record_assessment(self, intervention: Intervention, before: MetricInput,
                          after: MetricInput) -> EffectivenessAssessment:
        """Assess and complete the intervention with the resulting score."""
        assessment = self.assess_effectiveness(before, after)
        intervention.complete(assessment.effectiveness_score)
        return assessment

    @staticmethod
    def parse_content(raw: Any) -> Dict[str, Any]:
        """
        Parse stored intervention content.

        Raises:
            InterventionContentError: If the content is not a JSON object
        """
        if isinstance(raw, dict):
            return raw
        try:
            content = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise InterventionContentError(e) from e
        if not isinstance(content, dict):
            raise InterventionContentError(TypeError(f"expected object, got {type(content).__name__}"))
        return content

    def render_content(self, raw: Any) -> Dict[str, Any]:
        """Stored content for display; unreadable content degrades to a placeholder."""
        try:
            return self.parse_content(raw)
        except InterventionContentError as e:
            logger.warning(f"{e.message}: {e.context.get('original_error')}")
            return dict(UNAVAILABLE_CONTENT)


class StabilizationService:
    """Store-backed stabilization actions."""

    ACTIONS = ('generate_interventions', 'assess_effectiveness', 'mark_implemented')

    def __init__(self, store, advisor: Optional[StabilizationAdvisor] = None):
        """
        Initialize service.

        Args:
            store: Persistence facade
            advisor: Stabilization advisor (default instance when None)
        """
        self.store = store
        self.advisor = advisor or StabilizationAdvisor()

    def handle(self, action: str, alert_id: Optional[str] = None, intervention_id: Optional[str] = None,
               before_metrics: MetricInput = None, after_metrics: MetricInput = None) -> Dict[str, Any]:
        """
        Dispatch a stabilization action.

        Returns:
            Response dictionary with success, action and the action's payload

        Raises:
            InputValidationError: On unknown action or missing identifiers
            RecordNotFoundError: If the alert or intervention does not exist
        """
        if action not in self.ACTIONS:
            raise InputValidationError(f"Unknown action: {action}", fields=['action'])

        logger.info(f"Processing stabilization request, action: {action}")
        response: Dict[str, Any] = {'success': True, 'action': action}

        if action == 'generate_interventions':
            if not alert_id:
                raise InputValidationError("Missing required parameters: alertId", fields=['alertId'])
            package = self.generate_interventions(alert_id)
            response['alertId'] = alert_id
            response.update(package.to_dict())
            return response

        if not intervention_id:
            raise InputValidationError("Missing required parameters: interventionId", fields=['interventionId'])
        response['interventionId'] = intervention_id

        if action == 'assess_effectiveness':
            assessment = self.assess_effectiveness(intervention_id, before_metrics, after_metrics)
            response['assessment'] = assessment.to_dict()
        else:
            self.mark_implemented(intervention_id)
            response['message'] = 'Intervention marked as implemented'
        return response

    def generate_interventions(self, alert_id: str) -> InterventionPackage:
        """Generate and store the intervention package of a stored alert."""
        alert = self.store.get_alert(alert_id)
        if alert is None:
            raise RecordNotFoundError('symbolic_alerts', alert_id)

        package = self.advisor.generate_interventions(alert)
        for intervention in package.interventions:
            intervention.intervention_id = self.store.store_intervention(intervention)
        return package

    def load_intervention(self, intervention_id: str) -> Intervention:
        record = self.store.get_intervention(intervention_id)
        if record is None:
            raise RecordNotFoundError('stabilization_interventions', intervention_id)
        return Intervention.from_record(record, self.advisor.render_content(record.get('content')))

    def assess_effectiveness(self, intervention_id: str, before: MetricInput,
                             after: MetricInput) -> EffectivenessAssessment:
        intervention = self.load_intervention(intervention_id)
        assessment = self.advisor.record_assessment(intervention, before, after)
        self.store.update_intervention(intervention)
        logger.info(f"Intervention {intervention_id} effectiveness {assessment.effectiveness_score:.2f}, "
                    f"recommendation {assessment.recommendation.value}")
        return assessment

    def mark_implemented(self, intervention_id: str) -> Intervention:
        intervention = self.load_intervention(intervention_id)
        self.advisor.mark_implemented(intervention)
        self.store.update_intervention(intervention)
        return intervention
