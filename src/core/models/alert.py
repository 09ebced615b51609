#!/usr/bin/env python3
"""
Alert data model.

Alerts are opened by the alert rule engine when a drift or resonance
threshold is crossed and are resolved by an external actor.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

from ..exceptions import InvalidStateTransitionError
from .sample import parse_timestamp


class AlertType(Enum):
    """Kinds of alerts the engine can open."""
    DRIFT = "drift"
    RESONANCE = "resonance"


class Severity(Enum):
    """Alert and metric severity levels, lowest first."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class RecommendedActions:
    """Two-tier action list attached to every alert."""
    immediate: List[str]
    stabilization: List[str]
    drift_indicators: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'immediate': list(self.immediate),
            'stabilization': list(self.stabilization),
            'drift_indicators': list(self.drift_indicators),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RecommendedActions':
        data = data or {}
        return cls(
            immediate=list(data.get('immediate') or []),
            stabilization=list(data.get('stabilization') or []),
            drift_indicators=list(data.get('drift_indicators') or []),
        )


@dataclass
class Alert:
    """A threshold breach for one organization/unit."""
    alert_type: AlertType
    severity: Severity
    title: str
    description: str
    interpretive_analysis: str
    recommended_actions: RecommendedActions
    organization_id: str = ""
    unit_id: Optional[str] = None
    trigger_score: float = 0.0
    is_resolved: bool = False
    resolved_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    alert_id: Optional[str] = None

    @property
    def drift_indicators(self) -> List[str]:
        return self.recommended_actions.drift_indicators

    def resolve(self, resolved_at: Optional[datetime] = None) -> None:
        """Close the alert (open -> resolved)."""
        if self.is_resolved:
            raise InvalidStateTransitionError('alert', 'resolved', 'resolved')
        self.is_resolved = True
        self.resolved_at = resolved_at or datetime.now(timezone.utc)

    def to_record(self) -> Dict[str, Any]:
        """Build the symbolic_alerts row."""
        return {
            'organization_id': self.organization_id,
            'unit_id': self.unit_id,
            'alert_type': self.alert_type.value,
            'severity': self.severity.value,
            'title': self.title,
            'description': self.description,
            'interpretive_analysis': self.interpretive_analysis,
            'recommended_actions': self.recommended_actions.to_dict(),
            'is_resolved': self.is_resolved,
            'resolved_at': self.resolved_at.isoformat() if self.resolved_at else None,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Alert':
        """Create Alert from a symbolic_alerts row."""
        return cls(
            alert_type=AlertType(record['alert_type']),
            severity=Severity(record['severity']),
            title=record.get('title', ''),
            description=record.get('description', ''),
            interpretive_analysis=record.get('interpretive_analysis') or '',
            recommended_actions=RecommendedActions.from_dict(record.get('recommended_actions')),
            organization_id=record.get('organization_id', ''),
            unit_id=record.get('unit_id'),
            is_resolved=bool(record.get('is_resolved', False)),
            resolved_at=parse_timestamp(record.get('resolved_at')),
            created_at=parse_timestamp(record.get('created_at')) or datetime.now(timezone.utc),
            alert_id=record.get('id'),
        )

    def __repr__(self):
        return f"Alert(type='{self.alert_type.value}', severity='{self.severity.value}', id='{self.alert_id}')"
