#!/usr/bin/env python3
"""
Stabilization content catalogs.

Repair prompts keyed by drift indicator, alignment rituals selected by alert
severity, and the unconditional reframing-strategy catalog. Entries are
frozen and built once at import time; the text is a content catalog and is
reproduced exactly as written.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Any, Tuple


@dataclass(frozen=True)
class RepairPrompt:
    """Targeted corrective prompt for one drift indicator."""
    title: str
    description: str
    actions: Tuple[str, ...]
    timeframe: str
    success_indicators: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'description': self.description,
            'actions': list(self.actions),
            'timeframe': self.timeframe,
            'success_indicators': list(self.success_indicators),
        }


@dataclass(frozen=True)
class AlignmentRitual:
    """Facilitated group practice for restoring symbolic alignment."""
    name: str
    description: str
    process: Tuple[str, ...]
    facilitator_notes: str
    duration: str
    frequency: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'description': self.description,
            'process': list(self.process),
            'facilitator_notes': self.facilitator_notes,
            'duration': self.duration,
            'frequency': self.frequency,
        }


@dataclass(frozen=True)
class ReframingCategory:
    """A family of language substitutions."""
    category: str
    description: str
    strategies: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'category': self.category,
            'description': self.description,
            'strategies': list(self.strategies),
        }


REPAIR_PROMPTS = MappingProxyType({
    'metaphor_decay': RepairPrompt(
        title="Metaphor Realignment Protocol",
        description="Your team's shared symbolic language is becoming fragmented. Reconnect through intentional metaphor building.",
        actions=(
            "Begin your next team meeting by asking: 'What metaphor best describes our current project state?'",
            "Create a shared visual metaphor board where team members can contribute images that represent the work",
            "Use consistent metaphorical language in communications (e.g., if the project is a 'journey', maintain navigation language)",
            "Establish weekly 'metaphor check-ins' to ensure shared symbolic understanding",
        ),
        timeframe="Implement over 2-3 weeks",
        success_indicators=("Increased metaphor consistency", "Shared symbolic vocabulary", "Clearer conceptual alignment"),
    ),
    'pronoun_fragmentation': RepairPrompt(
        title="Collective Identity Restoration",
        description="Language patterns suggest weakening team cohesion. Rebuild collective identity through intentional pronoun practice.",
        actions=(
            "Practice 'we-first' communication in all team updates",
            "Create shared ownership statements: 'We own this challenge together'",
            "Establish team rituals that reinforce collective identity",
            "Replace individual blame language with collective problem-solving language",
        ),
        timeframe="Daily practice for 4 weeks",
        success_indicators=("Increased 'we' usage", "Reduced individual isolation language", "Stronger collective ownership"),
    ),
    'emotional_instability': RepairPrompt(
        title="Emotional Coherence Protocol",
        description="Communication shows emotional fragmentation. Stabilize through structured emotional alignment.",
        actions=(
            "Implement daily emotional weather reports at start of meetings",
            "Create safe spaces for expressing uncertainty without judgment",
            "Establish clear communication protocols for difficult conversations",
            "Practice collective emotional regulation through breathing or grounding exercises",
        ),
        timeframe="6-8 weeks of consistent practice",
        success_indicators=("Reduced emotional volatility", "Increased emotional vocabulary", "Better conflict resolution"),
    ),
    'mission_drift': RepairPrompt(
        title="Mission Reconnection Ritual",
        description="Team language is drifting from organizational mission. Restore connection through targeted realignment.",
        actions=(
            "Read the mission statement aloud at the start of each significant meeting",
            "Create personal mission connection statements: 'This work connects to our mission by...'",
            "Develop project milestone language that explicitly references mission elements",
            "Schedule monthly 'mission alignment' discussions",
        ),
        timeframe="Ongoing practice, evaluate after 6 weeks",
        success_indicators=("Increased mission vocabulary", "Clearer purpose connection", "Aligned decision-making language"),
    ),
    'coherence_breakdown': RepairPrompt(
        title="Narrative Coherence Restoration",
        description="Team communications lack coherent storyline. Rebuild shared narrative through structured storytelling.",
        actions=(
            "Establish clear beginning-middle-end structures in project communications",
            "Create shared project story artifacts (timelines, narrative summaries)",
            "Practice collective storytelling in retrospectives",
            "Develop consistent language for describing project phases and milestones",
        ),
        timeframe="8-10 weeks of structured practice",
        success_indicators=("Coherent project narratives", "Shared story vocabulary", "Clear temporal language"),
    ),
})

EMERGENCY_NARRATIVE_RESET = AlignmentRitual(
    name="Emergency Narrative Reset",
    description="A structured 2-hour session to rebuild foundational linguistic alignment",
    process=(
        "Silent individual reflection: 'What story are we telling ourselves about this work?'",
        "Pair sharing of individual narratives",
        "Group identification of narrative conflicts and overlaps",
        "Collective creation of new shared story",
        "Commitment ceremony to the new narrative",
    ),
    facilitator_notes="Requires neutral facilitator. Focus on story, not blame.",
    duration="2-3 hours",
    frequency="One-time intensive, then monthly check-ins",
)

NAMING_CEREMONY = AlignmentRitual(
    name="Naming Ceremony",
    description="Collective process to name and claim the current organizational moment",
    process=(
        "Individual writing: 'If this moment had a name, what would it be?'",
        "Small group clustering of similar names/themes",
        "Large group dialogue about emerging themes",
        "Consensus selection of 1-3 names for the current period",
        "Ritual adoption of the chosen names into regular communication",
    ),
    facilitator_notes="Names should be descriptive, not evaluative. Focus on what IS, not what should be.",
    duration="90 minutes",
    frequency="Quarterly or during major transitions",
)

REFLECTIVE_QUERY_PRACTICE = AlignmentRitual(
    name="Reflective Query Practice",
    description="Regular practice of asking questions that reveal and align symbolic understanding",
    process=(
        "Weekly team question: 'What metaphor captures our current reality?'",
        "Individual reflection before sharing",
        "Group dialogue without immediate problem-solving",
        "Identification of shared vs. divergent symbolic understanding",
        "Agreement on language to use going forward",
    ),
    facilitator_notes="Questions are for exploration, not answers. Create psychological safety.",
    duration="30 minutes weekly",
    frequency="Weekly for 8 weeks, then biweekly",
)

# (ritual, severities that receive it), in presentation order
RITUAL_RULES = (
    (EMERGENCY_NARRATIVE_RESET, frozenset({'critical'})),
    (NAMING_CEREMONY, frozenset({'high', 'critical'})),
    (REFLECTIVE_QUERY_PRACTICE, None),
)

REFRAMING_STRATEGIES = (
    ReframingCategory(
        category="Temporal Reframing",
        description="Shift perspective on time and progress",
        strategies=(
            "Replace 'behind schedule' with 'learning what the timeline really needs'",
            "Replace 'deadline pressure' with 'approaching clarity point'",
            "Replace 'slow progress' with 'thorough foundation building'",
            "Replace 'time crunch' with 'focus intensification'",
        ),
    ),
    ReframingCategory(
        category="Challenge Reframing",
        description="Transform problem language into growth language",
        strategies=(
            "Replace 'this is broken' with 'this is showing us what needs attention'",
            "Replace 'we failed' with 'we discovered what doesn't work'",
            "Replace 'it's impossible' with 'we haven't found the path yet'",
            "Replace 'we're stuck' with 'we're in a discovery phase'",
        ),
    ),
    ReframingCategory(
        category="Collective Reframing",
        description="Strengthen team identity and shared ownership",
        strategies=(
            "Replace 'your project' with 'our shared work'",
            "Replace 'individual responsibility' with 'collective stewardship'",
            "Replace 'blame assignment' with 'pattern understanding'",
            "Replace 'personal failure' with 'team learning opportunity'",
        ),
    ),
    ReframingCategory(
        category="Purpose Reframing",
        description="Reconnect daily work with larger meaning",
        strategies=(
            "Begin status updates with 'In service of [mission], today we...'",
            "Replace 'task completion' with 'mission advancement'",
            "Replace 'work requirements' with 'contribution opportunities'",
            "Replace 'job responsibilities' with 'stewardship commitments'",
        ),
    ),
)

IMPLEMENTATION_PLAN = MappingProxyType({
    'immediate': "Choose 1-2 repair prompts to implement this week",
    'shortTerm': "Begin one alignment ritual within 2 weeks",
    'longTerm': "Integrate reframing strategies into daily communication",
    'evaluation': "Assess effectiveness after 4-6 weeks of consistent practice",
})

# Metrics compared by the effectiveness assessment
EFFECTIVENESS_METRICS = (
    'coherenceScore',
    'metaphorDensity',
    'modalDensity',
    'emotionalStability',
    'resonanceScore',
)

# Net effectiveness cut points for the recommendation
CONTINUE_ABOVE = 0.2
MODIFY_ABOVE = -0.2

UNAVAILABLE_CONTENT = MappingProxyType({
    'title': "Content unavailable",
    'description': "The stored intervention content could not be read.",
})
