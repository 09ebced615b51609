#!/usr/bin/env python3
"""
Stabilize command for narrative stabilization interventions.

Generates catalog interventions for stored alerts, tracks implementation and
assesses effectiveness from before/after metric files.
"""

from argparse import Namespace

from .base import BaseCommand
from core.formatters import format_intervention_package
from core.stabilization import InterventionPackage, IMPLEMENTATION_PLAN


class StabilizeCommand(BaseCommand):
    """Generate, implement and assess stabilization interventions."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute stabilize subcommand."""
        try:
            if subcommand == "generate":
                return self.generate(args)
            elif subcommand == "implement":
                return self.implement(args)
            elif subcommand == "assess":
                return self.assess(args)
            elif subcommand == "catalog":
                return self.catalog(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"stabilize {subcommand}")

    def generate(self, args: Namespace) -> int:
        """Generate and store interventions for an alert."""
        response = self.stabilization.handle('generate_interventions', alert_id=args.alert_id)

        if args.json:
            self.print_json(response)
        else:
            print(format_intervention_package(response))
        return 0

    def implement(self, args: Namespace) -> int:
        response = self.stabilization.handle('mark_implemented', intervention_id=args.intervention_id)
        if args.json:
            self.print_json(response)
        else:
            print(f"Intervention {args.intervention_id}: {response['message']}")
        return 0

    def assess(self, args: Namespace) -> int:
        """Score an intervention from before/after metric JSON files."""
        response = self.stabilization.handle(
            'assess_effectiveness',
            intervention_id=args.intervention_id,
            before_metrics=self.read_json(args.before),
            after_metrics=self.read_json(args.after),
        )

        if args.json:
            self.print_json(response)
            return 0

        assessment = response['assessment']
        print(f"\n=== Effectiveness of {args.intervention_id} ===")
        print(f"Score: {assessment['effectivenessScore']:.2f}")
        print(f"Improved: {', '.join(assessment['improvements']) or 'none'}")
        print(f"Degraded: {', '.join(assessment['degradations']) or 'none'}")
        print(f"Recommendation: {assessment['recommendation']}")
        return 0

    def catalog(self, args: Namespace) -> int:
        """Preview the package an alert with these indicators and severity would receive."""
        indicators = [item.strip() for item in (args.indicators or '').split(',') if item.strip()]
        advisor = self.advisor

        package = InterventionPackage(
            alert_id=None,
            repair_prompts=advisor.generate_repair_prompts(indicators),
            alignment_rituals=advisor.generate_alignment_rituals(args.severity),
            reframing_strategies=advisor.generate_reframing_strategies(),
            implementation_plan=dict(IMPLEMENTATION_PLAN),
            interventions=[],
        )

        if args.json:
            self.print_json(package.to_dict())
        else:
            print(format_intervention_package(package.to_dict()))
        return 0
