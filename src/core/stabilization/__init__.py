#!/usr/bin/env python3
"""
Narrative stabilization toolkit.

Catalog-driven interventions for opened alerts and their effectiveness
assessment.
"""

from .advisor import StabilizationAdvisor, StabilizationService, InterventionPackage
from .catalog import (
    REPAIR_PROMPTS, REFRAMING_STRATEGIES, IMPLEMENTATION_PLAN,
    RepairPrompt, AlignmentRitual, ReframingCategory,
)

__all__ = [
    'StabilizationAdvisor', 'StabilizationService', 'InterventionPackage',
    'REPAIR_PROMPTS', 'REFRAMING_STRATEGIES', 'IMPLEMENTATION_PLAN',
    'RepairPrompt', 'AlignmentRitual', 'ReframingCategory',
]
