#!/usr/bin/env python3
"""
CLI Router for the Linguistic Drift & Resonance Analysis Engine.

Routes `<command> <subcommand>` invocations to the command classes.
"""

import argparse
import logging
import sys
from typing import Optional, List

from commands import get_command, COMMANDS
from core.config import get_config_manager

logger = logging.getLogger(__name__)

ANALYSIS_TYPES = ['full', 'coherence', 'entropy', 'drift', 'resonance']
SEVERITIES = ['low', 'medium', 'high', 'critical']


class CLIRouter:
    """
    CLI router for drift engine commands.

    Command structure:
    - drift-engine analyze text --org ORG --file memo.txt
    - drift-engine stabilize generate --alert-id ID
    - drift-engine alerts list --org ORG
    - drift-engine health check
    """

    def __init__(self, container=None):
        """
        Initialize CLI router.

        Args:
            container: Optional DI container handed to every command
        """
        self.container = container
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            prog='drift-engine',
            description="Linguistic drift and mission resonance analysis for organizational communication",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_analyze_parser(subparsers)
        self._add_stabilize_parser(subparsers)
        self._add_alerts_parser(subparsers)
        self._add_health_parser(subparsers)

        return parser

    def _add_analyze_parser(self, subparsers):
        """Add analyze command parser."""
        analyze_parser = subparsers.add_parser(
            'analyze',
            help='Run linguistic analysis on text samples'
        )

        analyze_subparsers = analyze_parser.add_subparsers(
            dest='subcommand',
            help='Analysis operations',
            metavar='{text,features}'
        )

        text_parser = analyze_subparsers.add_parser('text', help='Analyze a sample for drift and resonance')
        text_parser.add_argument('--org', required=True, help='Organization ID')
        text_parser.add_argument('--unit', help='Unit ID within the organization')
        mission = text_parser.add_mutually_exclusive_group()
        mission.add_argument('--mission', help='Mission statement text')
        mission.add_argument('--mission-file', help='File holding the mission statement')
        text_parser.add_argument('--type', choices=ANALYSIS_TYPES, default='full', help='Analysis type (default: full)')
        text_parser.add_argument('--file', help='Text file to analyze (default: stdin)')
        text_parser.add_argument('--source', help='Source identifier recorded with the sample')
        text_parser.add_argument('--no-store', action='store_true', help='Run offline without persisting results')
        text_parser.add_argument('--json', action='store_true', help='Print the JSON response')
        text_parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

        features_parser = analyze_subparsers.add_parser('features', help='Extract features offline')
        features_parser.add_argument('--file', help='Text file to analyze (default: stdin)')
        features_parser.add_argument('--baseline', help='JSON file of baseline metrics to compare against')
        features_parser.add_argument('--json', action='store_true', help='Print JSON output')

    def _add_stabilize_parser(self, subparsers):
        """Add stabilize command parser."""
        stabilize_parser = subparsers.add_parser(
            'stabilize',
            help='Narrative stabilization interventions'
        )

        stabilize_subparsers = stabilize_parser.add_subparsers(
            dest='subcommand',
            help='Stabilization operations',
            metavar='{generate,implement,assess,catalog}'
        )

        generate_parser = stabilize_subparsers.add_parser('generate', help='Generate interventions for an alert')
        generate_parser.add_argument('--alert-id', required=True, help='Alert ID')
        generate_parser.add_argument('--json', action='store_true', help='Print JSON output')

        implement_parser = stabilize_subparsers.add_parser('implement', help='Mark an intervention implemented')
        implement_parser.add_argument('--intervention-id', required=True, help='Intervention ID')
        implement_parser.add_argument('--json', action='store_true', help='Print JSON output')

        assess_parser = stabilize_subparsers.add_parser('assess', help='Assess intervention effectiveness')
        assess_parser.add_argument('--intervention-id', required=True, help='Intervention ID')
        assess_parser.add_argument('--before', required=True, help='JSON file of metrics before the intervention')
        assess_parser.add_argument('--after', required=True, help='JSON file of metrics after the intervention')
        assess_parser.add_argument('--json', action='store_true', help='Print JSON output')

        catalog_parser = stabilize_subparsers.add_parser('catalog', help='Preview catalog interventions offline')
        catalog_parser.add_argument('--indicators', help='Comma-separated drift indicators')
        catalog_parser.add_argument('--severity', choices=SEVERITIES, default='medium', help='Alert severity (default: medium)')
        catalog_parser.add_argument('--json', action='store_true', help='Print JSON output')

    def _add_alerts_parser(self, subparsers):
        """Add alerts command parser."""
        alerts_parser = subparsers.add_parser(
            'alerts',
            help='Review and resolve alerts'
        )

        alerts_subparsers = alerts_parser.add_subparsers(
            dest='subcommand',
            help='Alert operations',
            metavar='{list,resolve}'
        )

        list_parser = alerts_subparsers.add_parser('list', help='List alerts for an organization')
        list_parser.add_argument('--org', required=True, help='Organization ID')
        list_parser.add_argument('--unit', help='Unit ID')
        list_parser.add_argument('--all', action='store_true', help='Include resolved alerts')
        list_parser.add_argument('--json', action='store_true', help='Print JSON output')

        resolve_parser = alerts_subparsers.add_parser('resolve', help='Resolve an open alert')
        resolve_parser.add_argument('--alert-id', required=True, help='Alert ID')

    def _add_health_parser(self, subparsers):
        """Add health command parser."""
        health_parser = subparsers.add_parser(
            'health',
            help='System health monitoring and diagnostics'
        )

        health_subparsers = health_parser.add_subparsers(
            dest='subcommand',
            help='Health operations',
            metavar='{check,database,integrations}'
        )

        health_subparsers.add_parser('check', help='Run comprehensive health check')
        health_subparsers.add_parser('database', help='Check database health')
        integrations_parser = health_subparsers.add_parser('integrations', help='Check integration health')
        integrations_parser.add_argument('--test', action='store_true', help='Send a Slack test message')

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
Examples:
  # Analyze a memo against the stored baseline and mission
  drift-engine analyze text --org acme --unit support --file memo.txt

  # Offline analysis with an explicit mission statement
  drift-engine analyze text --org acme --mission "We empower customers" --no-store --file memo.txt
  drift-engine analyze features --file memo.txt --baseline baseline.json

  # Stabilization
  drift-engine stabilize generate --alert-id 42
  drift-engine stabilize assess --intervention-id 7 --before before.json --after after.json
  drift-engine stabilize catalog --indicators metaphor_decay,mission_drift --severity high

  # Alerts and health
  drift-engine alerts list --org acme
  drift-engine health check

"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            parsed_args = self.parser.parse_args(args)

            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0
        except Exception as e:
            logger.error(f"CLI routing error: {e}", exc_info=True)
            return 1

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Dispatch a parsed command to its command class."""
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            self.parser.parse_args([args.command, '--help'])
            return 1

        try:
            command = get_command(args.command, self.container)
            return command.execute(subcommand, args)
        except Exception as e:
            logger.error(f"Error executing {args.command} {subcommand}: {e}", exc_info=True)
            return 1


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # LOG_LEVEL / VERBOSE_LOGGING; invalid config is reported by the command itself
    try:
        get_config_manager(requires_database=False).update_logging()
    except ValueError as e:
        logger.debug(f"Logging configuration skipped: {e}")

    router = CLIRouter()
    return router.route_command(args)


if __name__ == '__main__':
    sys.exit(main())
