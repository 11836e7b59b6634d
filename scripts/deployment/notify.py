"""
Slack notification of deployment results
"""

import logging

import requests

from .runner import RunOutcome

logger = logging.getLogger(__name__)


def build_slack_payload(outcome: RunOutcome) -> dict:
    """Build a Slack webhook payload summarising a run"""
    fields = []
    for result in outcome.results:
        fields.append({
            "title": result.spec.name,
            "value": result.address if result.succeeded else f"FAILED: {result.error}",
            "short": False
        })

    status = "succeeded" if outcome.success else "failed"
    return {
        "text": f"Nalnda contract deployment {status}",
        "attachments": [{"fields": fields}]
    }


def notify_slack(webhook: str, outcome: RunOutcome) -> bool:
    """Send the run summary to Slack; returns False if the post failed"""
    try:
        response = requests.post(webhook, json=build_slack_payload(outcome), timeout=10)
        response.raise_for_status()
        logger.info("Slack notification sent successfully")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to send Slack notification: {e}")
        return False
