#!/usr/bin/env python3
"""
Health check command for monitoring system status.

Checks configuration, the store and the Slack integration.
"""

from argparse import Namespace
from typing import Tuple

from .base import BaseCommand
from core.exceptions import DatabaseError, ConfigurationError
from core.vocabulary import VOCABULARY_VERSION


class HealthCommand(BaseCommand):
    """Handle system health monitoring and diagnostics."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute health subcommand."""
        try:
            if subcommand == "check":
                return self.check(args)
            elif subcommand == "database":
                return self.database_status(args)
            elif subcommand == "integrations":
                return self.integrations(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"health {subcommand}")

    def check(self, args: Namespace) -> int:
        """Run comprehensive health check."""
        print("System Health Check")
        print("=" * 50)

        overall_healthy = True

        print("\nConfiguration:")
        try:
            config = self.config
            print(f"  OK  environment {config.environment}, vocabulary {VOCABULARY_VERSION}")
            print(f"  OK  max text length {config.engine.max_text_length}, "
                  f"baseline type {config.engine.baseline_type}")
        except ValueError as e:
            print(f"  FAIL {e}")
            print("\n" + "=" * 50)
            print("Overall Status: UNHEALTHY")
            return 1

        print("\nDatabase:")
        healthy, message = self._database_health()
        print(f"  {'OK' if healthy else 'FAIL'}  {message}")
        overall_healthy = overall_healthy and healthy

        print("\nIntegrations:")
        if config.has_slack():
            print("  OK  Slack webhook configured")
        else:
            print("  --  Slack webhook not configured")
        if config.engine.notify_alerts:
            print("  OK  Alert notifications enabled")

        print("\n" + "=" * 50)
        if overall_healthy:
            print("Overall Status: HEALTHY")
            return 0
        print("Overall Status: UNHEALTHY")
        return 1

    def database_status(self, args: Namespace) -> int:
        """Check database health and print table statistics."""
        healthy, message = self._database_health()
        print(f"{'OK' if healthy else 'FAIL'}  {message}")
        return 0 if healthy else 1

    def integrations(self, args: Namespace) -> int:
        """Check integrations; --test sends a real Slack test message."""
        if not self.config.has_slack():
            print("--  Slack webhook not configured")
            return 0

        if not getattr(args, 'test', False):
            print("OK  Slack webhook configured (use --test to send a test message)")
            return 0

        notifier = self._container.get('slack_notifier')
        if notifier.test_connection():
            print("OK  Slack test message sent")
            return 0
        print("FAIL Slack test message failed")
        return 1

    def _database_health(self) -> Tuple[bool, str]:
        if not self.config.has_database():
            return False, "database is not configured (set SUPABASE_URL)"

        try:
            health = self.database.health_check()
        except (DatabaseError, ConfigurationError) as e:
            return False, str(e)

        if not health.get('connected'):
            return False, f"connection failed: {health.get('error', 'unknown error')}"

        tables = health.get('tables', {})
        summary = ", ".join(f"{table}: {stats}" for table, stats in tables.items())
        return True, f"connected via {health.get('connection_type')}" + (f" ({summary})" if summary else "")
