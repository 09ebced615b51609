#!/usr/bin/env python3
"""
Standardized exception hierarchy for the drift analysis engine.

Provides specific exception types for different error conditions with
proper error context and recovery suggestions.
"""

from typing import Optional, Dict, Any, List


class DriftEngineError(Exception):
    """Base exception for all drift engine errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Input-related exceptions
class InputValidationError(DriftEngineError):
    """Invocation input is missing or malformed. Never retried."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        context = {'fields': fields or []}
        super().__init__(message, context=context)


class MissingFieldError(InputValidationError):
    """One or more required request fields are absent."""

    def __init__(self, missing_fields: List[str]):
        message = f"Missing required parameters: {' and '.join(missing_fields)}"
        super().__init__(message, fields=missing_fields)


# Database-related exceptions
class DatabaseError(DriftEngineError):
    """Base exception for database errors."""
    pass


class DatabaseConnectionError(DatabaseError):
    """Failed to connect to database."""

    def __init__(self, connection_type: str, original_error: Exception):
        message = f"Failed to connect to database via {connection_type}"
        context = {
            'connection_type': connection_type,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class DatabaseOperationError(DatabaseError):
    """Database operation failed."""

    def __init__(self, operation: str, table: str, original_error: Exception):
        message = f"Database {operation} failed on table {table}"
        context = {
            'operation': operation,
            'table': table,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class RecordNotFoundError(DatabaseError):
    """Requested record does not exist."""

    def __init__(self, table: str, record_id: str):
        message = f"{table} record {record_id} not found"
        context = {'table': table, 'record_id': record_id}
        super().__init__(message, context=context)


# Analysis-related exceptions
class AnalysisError(DriftEngineError):
    """Base exception for analysis errors."""
    pass


class PipelineStageError(AnalysisError):
    """A pipeline stage failed; the whole invocation fails with it."""

    def __init__(self, stage_name: str, original_error: Exception):
        message = f"Analysis stage {stage_name} failed: {original_error}"
        context = {
            'stage_name': stage_name,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Lifecycle exceptions
class InvalidStateTransitionError(DriftEngineError):
    """Record lifecycle transition is not allowed."""

    def __init__(self, entity: str, current_state: str, target_state: str):
        message = f"Cannot move {entity} from {current_state} to {target_state}"
        context = {
            'entity': entity,
            'current_state': current_state,
            'target_state': target_state
        }
        super().__init__(message, context=context)


class InterventionContentError(DriftEngineError):
    """Stored intervention content could not be parsed."""

    def __init__(self, original_error: Exception):
        message = "Intervention content is malformed"
        context = {'original_error': str(original_error)}
        super().__init__(message, context=context)


# Notification-related exceptions
class NotificationError(DriftEngineError):
    """Alert notification delivery failed."""

    def __init__(self, channel: str, original_error: Exception):
        message = f"Notification delivery failed for channel {channel}"
        context = {
            'channel': channel,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Configuration-related exceptions
class ConfigurationError(DriftEngineError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)
