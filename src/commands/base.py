#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides the interface every command implements plus shared error handling
and input helpers. Services come from the dependency injection container.
"""

import json
import logging
import sys
from abc import ABC, abstractmethod
from argparse import Namespace
from typing import Any, Dict, List, Optional

from core.container import get_container
from core.exceptions import (
    DriftEngineError, InputValidationError, ConfigurationError, RecordNotFoundError,
    InvalidStateTransitionError, DatabaseError, NotificationError
)

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Commands reach configuration, the store and the engines through the
    container so tests can inject fakes.
    """

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def database(self):
        """Get the store from container."""
        return self._container.get('database')

    @property
    def engine(self):
        """Get the linguistic engine from container."""
        return self._container.get('engine')

    @property
    def stabilization(self):
        """Get the store-backed stabilization service from container."""
        return self._container.get('stabilization_service')

    @property
    def advisor(self):
        """Get the stabilization advisor from container."""
        return self._container.get('stabilization_advisor')

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Args:
            subcommand: The specific action to perform
            args: Parsed command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def get_available_subcommands(self) -> List[str]:
        """Public methods of the concrete command, minus the base helpers."""
        base_members = set(dir(BaseCommand))
        return sorted(
            name for name in dir(self)
            if not name.startswith('_') and name not in base_members and callable(getattr(self, name))
        )

    def handle_error(self, error: Exception, context: str = "") -> int:
        """
        Standard error handling for commands.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Appropriate exit code
        """
        error_msg = f"{context}: {error}" if context else str(error)

        # Expected failures get a clean message; anything else a traceback
        if isinstance(error, DriftEngineError):
            self.logger.error(error_msg)
            self.logger.debug(f"Error details: {error.to_dict()}")
        else:
            self.logger.error(error_msg, exc_info=True)

        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return 130
        elif isinstance(error, (FileNotFoundError, RecordNotFoundError)):
            return 2
        elif isinstance(error, PermissionError):
            return 13
        elif isinstance(error, (ValueError, InputValidationError, ConfigurationError,
                                InvalidStateTransitionError)):
            return 22
        elif isinstance(error, (DatabaseError, NotificationError)):
            return 3
        else:
            return 1

    def validate_args(self, args: Namespace, required_args: List[str] = None) -> bool:
        """
        Validate that required arguments are present.

        Args:
            args: Parsed arguments
            required_args: List of required argument names

        Returns:
            True if valid, False otherwise
        """
        if not required_args:
            return True

        missing = [name for name in required_args if getattr(args, name, None) is None]
        if missing:
            self.logger.error(f"Missing required arguments: {', '.join(missing)}")
            return False

        return True

    @staticmethod
    def read_text(path: Optional[str]) -> str:
        """Read a text file, or stdin when no path is given."""
        if path:
            with open(path, 'r', encoding='utf-8') as handle:
                return handle.read()
        return sys.stdin.read()

    @staticmethod
    def read_json(path: str) -> Dict[str, Any]:
        """Load a JSON object from a file."""
        with open(path, 'r', encoding='utf-8') as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object")
        return data

    @staticmethod
    def print_json(payload: Any) -> None:
        print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
