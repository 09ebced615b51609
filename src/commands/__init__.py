#!/usr/bin/env python3
"""
Command endpoints for the drift engine CLI.

Each major area (analysis, stabilization, alerts, health) is handled by a
dedicated command class registered below.
"""

from typing import Dict, Type
from .base import BaseCommand
from .analyze import AnalyzeCommand
from .stabilize import StabilizeCommand
from .alerts import AlertsCommand
from .health import HealthCommand

# Command registry for easy extension
COMMANDS: Dict[str, Type[BaseCommand]] = {
    'analyze': AnalyzeCommand,
    'stabilize': StabilizeCommand,
    'alerts': AlertsCommand,
    'health': HealthCommand,
}


def get_command(command_name: str, container=None) -> BaseCommand:
    """Get a command instance by name."""
    if command_name not in COMMANDS:
        available = ', '.join(COMMANDS.keys())
        raise ValueError(f"Unknown command '{command_name}'. Available: {available}")

    return COMMANDS[command_name](container)
