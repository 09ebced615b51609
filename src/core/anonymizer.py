#!/usr/bin/env python3
"""
Text anonymization for organizational communication samples.

Replaces identifiable substrings with fixed category placeholders before any
analysis or storage. Replacements keep sentence structure and roughly the
same word count so downstream linguistic features stay meaningful.
"""

import re
import logging
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

# Applied in order. Organizational names run before person names so that
# "Platform Team" is tagged [TEAM] rather than [PERSON]. Placeholders are
# bracketed upper-case words, which none of these patterns match.
ANONYMIZATION_PATTERNS: Tuple[Tuple[str, re.Pattern, str], ...] = (
    ('team', re.compile(r'\b[A-Z][a-z]+\sTeam\b'), '[TEAM]'),
    ('department', re.compile(r'\b[A-Z][a-z]+\sDepartment\b'), '[DEPARTMENT]'),
    ('project', re.compile(r'\b[A-Z][a-z]+\sProject\b'), '[PROJECT]'),
    ('email', re.compile(r'\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'), '[EMAIL]'),
    ('phone', re.compile(r'\b\d{3}-\d{3}-\d{4}\b'), '[PHONE]'),
    ('date', re.compile(r'\b\d{4}-\d{2}-\d{2}\b'), '[DATE]'),
    ('time', re.compile(r'\b\d{1,2}:\d{2}\b'), '[TIME]'),
    ('amount', re.compile(r'\$\d+(?:,\d{3})*(?:\.\d{2})?\b'), '[AMOUNT]'),
    ('person', re.compile(r'\b[A-Z][a-z]+\s[A-Z][a-z]+\b'), '[PERSON]'),
)


def anonymize_with_report(text: str) -> Tuple[str, Dict[str, int]]:
    """
    Anonymize text and report how many substrings each category replaced.

    Args:
        text: Raw sample text

    Returns:
        Tuple of (anonymized_text, replacement_counts)
    """
    counts: Dict[str, int] = {}
    if not text:
        return text, counts

    anonymized = text
    for category, pattern, placeholder in ANONYMIZATION_PATTERNS:
        anonymized, replaced = pattern.subn(placeholder, anonymized)
        if replaced:
            counts[category] = replaced

    if counts:
        logger.debug("Anonymized %d substrings: %s", sum(counts.values()), counts)

    return anonymized, counts


def anonymize_text(text: str) -> str:
    """
    Replace identifying substrings with category placeholders.

    Deterministic and total: any string (including empty) is accepted and
    applying it twice yields the same result as applying it once.

    Args:
        text: Raw sample text

    Returns:
        Anonymized text
    """
    anonymized, _ = anonymize_with_report(text)
    return anonymized
