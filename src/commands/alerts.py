#!/usr/bin/env python3
"""
Alerts command for reviewing and resolving drift and resonance alerts.
"""

from argparse import Namespace

from .base import BaseCommand
from core.formatters import format_alert


class AlertsCommand(BaseCommand):
    """List and resolve stored alerts."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute alerts subcommand."""
        try:
            if subcommand == "list":
                return self.list(args)
            elif subcommand == "resolve":
                return self.resolve(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"alerts {subcommand}")

    def list(self, args: Namespace) -> int:
        """List alerts of an organization, newest first."""
        alerts = self.database.list_alerts(args.org, args.unit, include_resolved=args.all)

        if args.json:
            self.print_json([{'id': alert.alert_id, **alert.to_record()} for alert in alerts])
            return 0

        if not alerts:
            print("No alerts found")
            return 0

        scope = "all" if args.all else "open"
        print(f"\n{len(alerts)} {scope} alert(s) for {args.org}:")
        for alert in alerts:
            created = alert.created_at.strftime('%Y-%m-%d %H:%M') if alert.created_at else '-'
            print(f"  {created}  {format_alert(alert)}")
        return 0

    def resolve(self, args: Namespace) -> int:
        alert = self.database.resolve_alert(args.alert_id)
        print(f"Resolved: {format_alert(alert)}")
        return 0
