#!/usr/bin/env python3
"""
Analysis result data models.

Contains the drift, resonance and bundled analysis results plus the
request/response shapes of a single engine invocation.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple
from dataclasses import dataclass, field

from .features import CoherenceFeatures, EntropyFeatures
from .sample import CommunicationSample

# Sub-results without their own confidence notion count as this value
DEFAULT_SUB_CONFIDENCE = 0.5


class AnalysisType(Enum):
    """Selector restricting which sub-analyses run."""
    FULL = "full"
    COHERENCE = "coherence"
    ENTROPY = "entropy"
    DRIFT = "drift"
    RESONANCE = "resonance"

    def includes(self, part: 'AnalysisType') -> bool:
        return self is AnalysisType.FULL or self is part


@dataclass(frozen=True)
class DriftResult:
    """Deviation of current features from the stored baseline."""
    drift_score: float
    indicators: Tuple[str, ...]
    confidence: float
    detailed_drift: Dict[str, float] = field(default_factory=dict)
    metric_severities: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'driftScore': self.drift_score,
            'driftIndicators': list(self.indicators),
            'confidence': self.confidence,
        }
        if self.detailed_drift:
            data['detailedDrift'] = dict(self.detailed_drift)
            data['metricSeverities'] = dict(self.metric_severities)
        return data


@dataclass(frozen=True)
class ResonanceResult:
    """Alignment of the sample with the organization's mission statement."""
    resonance_score: float
    confidence: float
    indicators: Tuple[str, ...] = ()
    semantic_alignment: Optional[float] = None
    concept_alignment: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'resonanceScore': self.resonance_score,
            'confidence': self.confidence,
            'driftIndicators': list(self.indicators),
        }
        if self.semantic_alignment is not None:
            data['semanticAlignment'] = self.semantic_alignment
            data['conceptAlignment'] = self.concept_alignment
        return data


@dataclass
class AnalysisResult:
    """Immutable historical record of one invocation."""
    organization_id: str
    analysis_type: AnalysisType
    coherence: Optional[CoherenceFeatures] = None
    entropy: Optional[EntropyFeatures] = None
    drift: Optional[DriftResult] = None
    resonance: Optional[ResonanceResult] = None
    unit_id: Optional[str] = None
    baseline_metrics: Optional[Dict[str, Any]] = None
    fingerprint: Optional[str] = None
    vocabulary_version: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def _sub_confidences(self) -> List[float]:
        values = []
        for part in (self.coherence, self.entropy):
            if part is not None:
                values.append(DEFAULT_SUB_CONFIDENCE)
        for part in (self.drift, self.resonance):
            if part is not None:
                values.append(part.confidence)
        return values

    @property
    def confidence(self) -> float:
        """Maximum of the sub-component confidences."""
        values = self._sub_confidences()
        return max(values) if values else 0.0

    @property
    def variance_score(self) -> float:
        """The drift score, or 0 when drift was not computed."""
        return self.drift.drift_score if self.drift is not None else 0.0

    def metrics(self) -> Dict[str, Any]:
        """Requested sub-results keyed the way callers consume them."""
        data: Dict[str, Any] = {}
        if self.coherence is not None:
            data['coherence'] = self.coherence.to_dict()
        if self.entropy is not None:
            data['entropy'] = self.entropy.to_dict()
        if self.drift is not None:
            data['drift'] = self.drift.to_dict()
        if self.resonance is not None:
            data['resonance'] = self.resonance.to_dict()
        return data

    def to_record(self) -> Dict[str, Any]:
        """Build the linguistic_analyses row."""
        timestamp = self.created_at.isoformat()
        return {
            'organization_id': self.organization_id,
            'unit_id': self.unit_id,
            'analysis_type': self.analysis_type.value,
            'time_window_start': timestamp,
            'time_window_end': timestamp,
            'metrics': self.metrics(),
            'baseline_metrics': self.baseline_metrics,
            'variance_score': self.variance_score,
            'confidence_level': self.confidence,
            'content_hash': self.fingerprint,
            'vocabulary_version': self.vocabulary_version,
        }


@dataclass
class AnalysisRequest:
    """Input of one engine invocation."""
    text: str
    organization_id: str
    unit_id: Optional[str] = None
    mission_statement: Optional[str] = None
    analysis_type: str = "full"
    source_id: Optional[str] = None
    occurred_at: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_sample(self) -> CommunicationSample:
        return CommunicationSample(
            text=self.text,
            organization_id=self.organization_id,
            source_id=self.source_id,
            unit_id=self.unit_id,
            occurred_at=self.occurred_at,
            metadata=dict(self.metadata),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisRequest':
        """Create request from the JSON payload accepted by the processor."""
        return cls(
            text=data.get('text') or '',
            organization_id=data.get('organizationId') or data.get('organization_id') or '',
            unit_id=data.get('unitId') or data.get('unit_id'),
            mission_statement=data.get('missionStatement') or data.get('mission_statement'),
            analysis_type=data.get('analysisType') or data.get('analysis_type') or 'full',
            source_id=data.get('sourceId') or data.get('source_id'),
            occurred_at=data.get('occurredAt') or data.get('occurred_at'),
            metadata=data.get('metadata') or {},
        )


@dataclass
class AnalysisResponse:
    """Output of one engine invocation."""
    success: bool
    result: Optional[AnalysisResult] = None
    alerts: List[Any] = field(default_factory=list)
    duplicate: bool = False
    error: Optional[str] = None
    persisted: bool = False

    @property
    def alerts_opened(self) -> int:
        return len(self.alerts)

    @property
    def confidence(self) -> float:
        return self.result.confidence if self.result else 0.0

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {'success': False, 'error': self.error}
        if self.duplicate:
            return {'success': True, 'duplicate': True, 'analysis': {}, 'alerts': 0, 'confidence': 0.0}
        return {
            'success': True,
            'analysis': self.result.metrics(),
            'alerts': self.alerts_opened,
            'confidence': self.confidence,
        }

    @classmethod
    def failure(cls, message: str) -> 'AnalysisResponse':
        return cls(success=False, error=message)
