#!/usr/bin/env python3
"""
Slack integration for alert notifications.

Posts newly opened drift and resonance alerts to a Slack channel via an
incoming webhook.
"""

import os
import logging
from typing import List, Dict, Optional, Any
from datetime import datetime
import requests

from core.exceptions import NotificationError
from core.models.alert import Alert, Severity

logger = logging.getLogger(__name__)

SEVERITY_EMOJI = {
    Severity.LOW: ":information_source:",
    Severity.MEDIUM: ":warning:",
    Severity.HIGH: ":rotating_light:",
    Severity.CRITICAL: ":red_circle:",
}


class SlackNotifier:
    """Handles sending alert notifications to Slack."""

    def __init__(self, webhook_url: Optional[str] = None, session: Optional[requests.Session] = None):
        """
        Initialize Slack notifier.

        Args:
            webhook_url: Slack webhook URL. If None, tries to get from environment.
            session: requests session (a new one when None)
        """
        self.webhook_url = webhook_url or os.getenv('SLACK_WEBHOOK_URL')
        if not self.webhook_url:
            raise ValueError("Slack webhook URL not provided and not found in SLACK_WEBHOOK_URL environment variable")

        self.session = session or requests.Session()
        self.timeout = 10
        self.max_message_length = 3000

    def notify_alerts(self, alerts: List[Alert]) -> None:
        """
        Send one message listing every alert.

        Raises:
            NotificationError: If Slack rejects or cannot be reached
        """
        if not alerts:
            return
        self._send_webhook_message(self.format_alerts(alerts))
        logger.info(f"Sent {len(alerts)} alert(s) to Slack")

    def format_alerts(self, alerts: List[Alert]) -> Dict[str, Any]:
        """Build a Block Kit payload for the alerts."""
        blocks: List[Dict[str, Any]] = [{
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"Linguistic drift: {len(alerts)} new alert(s)",
                "emoji": True
            }
        }]

        for alert in alerts:
            emoji = SEVERITY_EMOJI.get(alert.severity, ":warning:")
            scope = alert.organization_id + (f" / {alert.unit_id}" if alert.unit_id else "")
            narrative = alert.interpretive_analysis
            if len(narrative) > self.max_message_length:
                narrative = narrative[:self.max_message_length - 3] + "..."

            blocks.append({
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"{emoji} *{alert.title}* ({alert.severity.value})\n_{scope}_\n{narrative}"
                }
            })

            immediate = alert.recommended_actions.immediate
            if immediate:
                blocks.append({
                    "type": "context",
                    "elements": [{
                        "type": "mrkdwn",
                        "text": "Immediate: " + "; ".join(immediate)
                    }]
                })

        blocks.append({"type": "divider"})

        return {
            "text": f"{len(alerts)} new linguistic drift alert(s)",
            "blocks": blocks,
            "username": "DriftBot",
            "icon_emoji": ":compass:"
        }

    def _send_webhook_message(self, payload: Dict[str, Any]) -> None:
        try:
            response = self.session.post(
                self.webhook_url,
                json=payload,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"}
            )
        except requests.RequestException as e:
            logger.error(f"Failed to send Slack message: {e}")
            raise NotificationError('slack', e) from e

        if response.status_code != 200:
            logger.error(f"Slack webhook failed with status {response.status_code}: {response.text}")
            raise NotificationError('slack', RuntimeError(f"HTTP {response.status_code}"))

    def test_connection(self) -> bool:
        """Test Slack webhook connection."""
        test_message = {
            "text": f"Test message from drift engine - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "username": "DriftBot Test",
            "icon_emoji": ":test_tube:"
        }

        try:
            self._send_webhook_message(test_message)
        except NotificationError:
            logger.error("Slack connection test failed")
            return False

        logger.info("Slack connection test successful")
        return True
