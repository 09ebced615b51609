#!/usr/bin/env python3
"""
Stabilization intervention data models.

Each intervention belongs to exactly one alert and moves forward through
suggested -> implemented -> completed.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from ..exceptions import InvalidStateTransitionError
from .sample import parse_timestamp


class InterventionType(Enum):
    """Catalog families an intervention can come from."""
    PROMPT = "prompt"
    RITUAL = "ritual"
    REFRAMING = "reframing"


class ImplementationStatus(Enum):
    """Implementation lifecycle of an intervention."""
    SUGGESTED = "suggested"
    IMPLEMENTED = "implemented"
    COMPLETED = "completed"


# Allowed forward transitions
_TRANSITIONS = {
    ImplementationStatus.SUGGESTED: {ImplementationStatus.IMPLEMENTED, ImplementationStatus.COMPLETED},
    ImplementationStatus.IMPLEMENTED: {ImplementationStatus.COMPLETED},
    ImplementationStatus.COMPLETED: set(),
}


class Recommendation(Enum):
    """Outcome of an effectiveness assessment."""
    CONTINUE = "continue"
    MODIFY = "modify"
    DISCONTINUE = "discontinue"


@dataclass
class EffectivenessAssessment:
    """Before/after comparison result for an intervention."""
    effectiveness_score: float
    improvements: Dict[str, float]
    degradations: Dict[str, float]
    recommendation: Recommendation

    def to_dict(self) -> Dict[str, Any]:
        return {
            'effectivenessScore': self.effectiveness_score,
            'improvements': dict(self.improvements),
            'degradations': dict(self.degradations),
            'recommendation': self.recommendation.value,
        }


@dataclass
class Intervention:
    """A catalog-sourced corrective action attached to one alert."""
    alert_id: Optional[str]
    intervention_type: InterventionType
    content: Dict[str, Any]
    implementation_status: ImplementationStatus = ImplementationStatus.SUGGESTED
    effectiveness_score: Optional[float] = None
    implemented_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    intervention_id: Optional[str] = None

    def transition_to(self, status: ImplementationStatus) -> None:
        """Move to a later lifecycle state."""
        if status not in _TRANSITIONS[self.implementation_status]:
            raise InvalidStateTransitionError(
                'intervention', self.implementation_status.value, status.value
            )
        self.implementation_status = status

    def mark_implemented(self, when: Optional[datetime] = None) -> None:
        self.transition_to(ImplementationStatus.IMPLEMENTED)
        self.implemented_at = when or datetime.now(timezone.utc)

    def complete(self, effectiveness_score: float) -> None:
        self.transition_to(ImplementationStatus.COMPLETED)
        self.effectiveness_score = max(0.0, min(1.0, effectiveness_score))

    def to_record(self) -> Dict[str, Any]:
        """Build the stabilization_interventions row (content stored as JSON text)."""
        return {
            'alert_id': self.alert_id,
            'intervention_type': self.intervention_type.value,
            'content': json.dumps(self.content),
            'implementation_status': self.implementation_status.value,
            'effectiveness_score': self.effectiveness_score,
            'implemented_at': self.implemented_at.isoformat() if self.implemented_at else None,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any], content: Dict[str, Any]) -> 'Intervention':
        """
        Create Intervention from a stored row.

        Args:
            record: stabilization_interventions row
            content: Already-parsed content (see StabilizationAdvisor.render_content)
        """
        return cls(
            alert_id=record.get('alert_id'),
            intervention_type=InterventionType(record.get('intervention_type', 'prompt')),
            content=content,
            implementation_status=ImplementationStatus(record.get('implementation_status', 'suggested')),
            effectiveness_score=record.get('effectiveness_score'),
            implemented_at=parse_timestamp(record.get('implemented_at')),
            created_at=parse_timestamp(record.get('created_at')) or datetime.now(timezone.utc),
            intervention_id=record.get('id'),
        )
