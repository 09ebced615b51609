#!/usr/bin/env python3
"""
Linguistic feature data models.

FeatureSet instances are derived once per analysis run and never mutated.
Dictionary forms use the camelCase metric names stored in the
linguistic_analyses and symbolic_baselines tables.
"""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass(frozen=True)
class CoherenceFeatures:
    """Output of the coherence sub-analysis."""
    metaphor_density: float
    pronoun_distribution: Dict[str, float]
    modal_density: float
    avg_sentence_length: float
    coherence_score: float
    word_count: int
    sentence_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'metaphorDensity': self.metaphor_density,
            'pronounDistribution': dict(self.pronoun_distribution),
            'modalDensity': self.modal_density,
            'avgSentenceLength': self.avg_sentence_length,
            'coherenceScore': self.coherence_score,
            'wordCount': self.word_count,
            'sentenceCount': self.sentence_count,
        }


@dataclass(frozen=True)
class EntropyFeatures:
    """Output of the sentiment entropy sub-analysis."""
    entropy: float
    sentiment_distribution: Dict[str, int]
    fragmentation_score: float
    emotional_stability: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entropy': self.entropy,
            'sentimentDistribution': dict(self.sentiment_distribution),
            'fragmentationScore': self.fragmentation_score,
            'emotionalStability': self.emotional_stability,
        }


@dataclass(frozen=True)
class FeatureSet:
    """
    Complete, fixed-shape set of linguistic metrics for one text sample.

    Ratio metrics (densities, pronoun shares, fragmentation) lie in [0, 1].
    Entropy lies in [0, log2(3)] and emotional stability is the unclamped
    linear transform 1 - entropy / 2.
    """
    coherence: CoherenceFeatures
    entropy: EntropyFeatures

    @property
    def metaphor_density(self) -> float:
        return self.coherence.metaphor_density

    @property
    def modal_density(self) -> float:
        return self.coherence.modal_density

    @property
    def coherence_score(self) -> float:
        return self.coherence.coherence_score

    @property
    def entropy_value(self) -> float:
        return self.entropy.entropy

    @property
    def emotional_stability(self) -> float:
        return self.entropy.emotional_stability

    def to_metrics(self) -> Dict[str, Any]:
        """Flatten into the baseline-compatible metric mapping."""
        metrics = self.coherence.to_dict()
        metrics.update(self.entropy.to_dict())
        return metrics


@dataclass
class Baseline:
    """Reference metrics for an organization/unit, maintained externally."""
    organization_id: str
    metrics: Dict[str, Any]
    unit_id: str = None
    baseline_type: str = "comprehensive"
    time_period_days: int = 30
    established_at: Any = None
    last_updated: Any = None
    baseline_id: str = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Baseline':
        """Create Baseline from a symbolic_baselines row."""
        return cls(
            organization_id=record.get('organization_id', ''),
            unit_id=record.get('unit_id'),
            metrics=record.get('baseline_data') or {},
            baseline_type=record.get('baseline_type', 'comprehensive'),
            time_period_days=record.get('time_period_days', 30),
            established_at=record.get('established_at'),
            last_updated=record.get('last_updated'),
            baseline_id=record.get('id'),
        )


@dataclass
class MetricSnapshot:
    """Flat metric mapping used for before/after effectiveness comparisons."""
    values: Dict[str, float] = field(default_factory=dict)

    def get(self, name: str) -> float:
        value = self.values.get(name)
        return float(value) if value is not None else 0.0

    @classmethod
    def from_feature_set(cls, features: FeatureSet, resonance_score: float = None) -> 'MetricSnapshot':
        values = {
            'coherenceScore': features.coherence_score,
            'metaphorDensity': features.metaphor_density,
            'modalDensity': features.modal_density,
            'emotionalStability': features.emotional_stability,
        }
        if resonance_score is not None:
            values['resonanceScore'] = resonance_score
        return cls(values)
