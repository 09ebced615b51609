#!/usr/bin/env python3
"""
Communication sample data model.

A sample is the immutable input unit of the engine. Its raw text is never
persisted; only the anonymized form and a content fingerprint are stored.
"""

import hashlib
from datetime import datetime
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

import pytz
from dateutil import parser as date_parser


def generate_fingerprint(content: str) -> str:
    """Deterministic SHA-256 fingerprint of the original content."""
    return hashlib.sha256(content.encode('utf-8')).hexdigest()


def _ensure_utc(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            value = date_parser.parse(value)
        except (ValueError, OverflowError):
            value = None
    if not isinstance(value, datetime):
        return datetime.now(pytz.UTC)
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Normalize a stored timestamp (string or datetime) to aware UTC; None stays None."""
    if value is None or value == '':
        return None
    return _ensure_utc(value)


@dataclass(frozen=True)
class CommunicationSample:
    """A single organizational text sample (message, document, transcript)."""
    text: str
    organization_id: str
    source_id: Optional[str] = None
    unit_id: Optional[str] = None
    event_type: str = "message"
    occurred_at: datetime = field(default_factory=lambda: datetime.now(pytz.UTC))
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'occurred_at', _ensure_utc(self.occurred_at))

    @property
    def fingerprint(self) -> str:
        return generate_fingerprint(self.text)

    def to_record(self, anonymized_text: str,
                  anonymization_counts: Optional[Dict[str, int]] = None) -> Dict[str, Any]:
        """
        Build the communication_events row. The raw text is deliberately absent.

        Args:
            anonymized_text: Text after anonymization
            anonymization_counts: Replacements per category, kept in metadata
                under 'anonymization'
        """
        metadata = dict(self.metadata)
        if anonymization_counts:
            metadata['anonymization'] = dict(anonymization_counts)
        return {
            'organization_id': self.organization_id,
            'unit_id': self.unit_id,
            'source_id': self.source_id,
            'event_type': self.event_type,
            'content_hash': self.fingerprint,
            'anonymized_content': anonymized_text,
            'metadata': metadata,
            'occurred_at': self.occurred_at.isoformat(),
            'processed_at': datetime.now(pytz.UTC).isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CommunicationSample':
        """Create sample from an external payload (camelCase or snake_case keys)."""
        return cls(
            text=data.get('text') or data.get('content') or '',
            organization_id=data.get('organizationId') or data.get('organization_id') or '',
            source_id=data.get('sourceId') or data.get('source_id'),
            unit_id=data.get('unitId') or data.get('unit_id'),
            event_type=data.get('eventType') or data.get('event_type') or 'message',
            occurred_at=data.get('occurredAt') or data.get('occurred_at'),
            metadata=data.get('metadata') or {},
        )

    def __repr__(self):
        return (f"CommunicationSample(fingerprint='{self.fingerprint[:12]}', "
                f"organization_id='{self.organization_id}', unit_id='{self.unit_id}')")
