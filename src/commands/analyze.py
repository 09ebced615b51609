#!/usr/bin/env python3
"""
Analyze command for running the linguistic engine on text samples.
"""

import logging
from argparse import Namespace

from .base import BaseCommand
from core.analysis import FeatureExtractor, LinguisticEngine
from core.formatters import format_analysis, format_metric_report
from core.models.analysis import AnalysisRequest
from core.models.features import Baseline


class AnalyzeCommand(BaseCommand):
    """Run drift and resonance analysis on communication text."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute analyze subcommand."""
        try:
            if getattr(args, 'verbose', False):
                logging.getLogger().setLevel(logging.DEBUG)

            if subcommand == "text":
                return self.text(args)
            elif subcommand == "features":
                return self.features(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"analyze {subcommand}")

    def text(self, args: Namespace) -> int:
        """Analyze one sample and report metrics and alerts."""
        if not self.validate_args(args, ['org']):
            return 1

        mission = args.mission
        if getattr(args, 'mission_file', None):
            mission = self.read_text(args.mission_file).strip()

        request = AnalysisRequest(
            text=self.read_text(args.file),
            organization_id=args.org,
            unit_id=args.unit,
            mission_statement=mission,
            analysis_type=args.type,
            source_id=getattr(args, 'source', None),
        )

        engine = self._select_engine(args)
        response = engine.process(request)

        if args.json:
            self.print_json(response.to_dict())
        else:
            print(format_analysis(response))
            if response.success and not response.persisted and engine.persisting:
                print("Warning: results were not persisted (see log for details)")

        return 0 if response.success else 1

    def features(self, args: Namespace) -> int:
        """Extract features offline, optionally comparing against a baseline file."""
        text = self.read_text(args.file)
        feature_set = FeatureExtractor().extract(text)

        baseline = None
        if args.baseline:
            baseline = Baseline(organization_id='local', metrics=self.read_json(args.baseline))

        report = self._container.get('drift_detector').build_metric_report(feature_set, baseline)

        if args.json:
            self.print_json({
                'features': feature_set.to_metrics(),
                'report': [row.to_dict() for row in report],
            })
            return 0

        print("\n=== Linguistic Features ===")
        for name, value in feature_set.to_metrics().items():
            print(f"  {name}: {value}")
        print()
        print(format_metric_report(report))
        if baseline is None:
            print("(no baseline supplied; drift is measured against zero)")
        return 0

    def _select_engine(self, args: Namespace) -> LinguisticEngine:
        """Shared engine, or an offline one when --no-store is given."""
        if args.no_store:
            return LinguisticEngine(store=None, config=self.config.engine)
        return self.engine
