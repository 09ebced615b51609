#!/usr/bin/env python3
"""
Formatting utilities for analysis results, alerts and interventions.
"""

from typing import List, Dict, Any

from core.analysis.drift import MetricDrift
from core.models.alert import Alert
from core.models.analysis import AnalysisResponse


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def format_analysis(response: AnalysisResponse) -> str:
    """Format one analysis response for terminal display."""
    if not response.success:
        return f"Analysis failed: {response.error}"
    if response.duplicate:
        return "Sample already processed; no new analysis recorded."

    result = response.result
    lines = [
        "\n=== Linguistic Analysis ===",
        f"Organization: {result.organization_id}" + (f" / unit {result.unit_id}" if result.unit_id else ""),
        f"Analysis type: {result.analysis_type.value}",
        f"Confidence: {result.confidence:.2f}",
    ]

    if result.coherence is not None:
        c = result.coherence
        lines.extend([
            "",
            "Coherence:",
            f"  words {c.word_count}, sentences {c.sentence_count}, avg sentence length {c.avg_sentence_length:.1f}",
            f"  metaphor density {c.metaphor_density:.3f}, modal density {c.modal_density:.3f}",
            f"  coherence score {c.coherence_score:.3f}",
        ])

    if result.entropy is not None:
        e = result.entropy
        lines.extend([
            "",
            "Entropy:",
            f"  entropy {e.entropy:.3f}, emotional stability {e.emotional_stability:.3f}",
            f"  fragmentation {e.fragmentation_score:.3f}, sentiment {e.sentiment_distribution}",
        ])

    if result.drift is not None:
        d = result.drift
        lines.extend([
            "",
            "Drift:",
            f"  score {_pct(d.drift_score)}, confidence {d.confidence:.2f}",
            f"  indicators: {', '.join(d.indicators) or 'none'}",
        ])

    if result.resonance is not None:
        r = result.resonance
        lines.extend([
            "",
            "Mission resonance:",
            f"  score {_pct(r.resonance_score)}, confidence {r.confidence:.2f}",
        ])
        if r.indicators:
            lines.append(f"  indicators: {', '.join(r.indicators)}")

    if response.alerts:
        lines.extend(["", f"Alerts opened ({len(response.alerts)}):"])
        lines.extend(f"  {format_alert(alert)}" for alert in response.alerts)

    lines.append("=" * 50)
    return "\n".join(lines)


def format_alert(alert: Alert) -> str:
    """One-line alert summary."""
    status = "resolved" if alert.is_resolved else "open"
    identifier = f"[{alert.alert_id}] " if alert.alert_id else ""
    return f"{identifier}{alert.severity.value.upper()} {alert.alert_type.value}: {alert.title} ({status})"


def format_metric_report(report: List[MetricDrift]) -> str:
    """Per-metric drift table."""
    lines = [f"{'Metric':<22} {'Current':>8} {'Baseline':>9} {'Drift':>7}  Severity  Trend"]
    for row in report:
        lines.append(
            f"{row.metric:<22} {row.current:>8.3f} {row.baseline:>9.3f} {row.drift:>7.3f}  "
            f"{row.severity:<8}  {row.trend}"
        )
    return "\n".join(lines)


def format_intervention_package(package: Dict[str, Any]) -> str:
    """Human-readable intervention package (as produced by InterventionPackage.to_dict)."""
    lines = ["\n=== Stabilization Interventions ==="]

    prompts = package.get('repairPrompts', [])
    lines.append(f"\nRepair prompts ({len(prompts)}):")
    for prompt in prompts:
        lines.append(f"  * {prompt['title']} ({prompt['timeframe']})")
        lines.extend(f"      - {action}" for action in prompt['actions'])

    rituals = package.get('alignmentRituals', [])
    lines.append(f"\nAlignment rituals ({len(rituals)}):")
    for ritual in rituals:
        lines.append(f"  * {ritual['name']} ({ritual['duration']}, {ritual['frequency']})")

    strategies = package.get('reframingStrategies', [])
    lines.append(f"\nReframing strategies ({len(strategies)}):")
    for strategy in strategies:
        lines.append(f"  * {strategy['category']}: {strategy['description']}")

    plan = package.get('implementationPlan', {})
    if plan:
        lines.append("\nImplementation plan:")
        lines.extend(f"  {phase}: {step}" for phase, step in plan.items())

    lines.append("=" * 50)
    return "\n".join(lines)
