"""Outbound webhook notification for new submissions (single best-effort POST)."""

from __future__ import annotations

import logging

import httpx

from checkup.config import WebhookConfig
from checkup.schemas.submission import SubmissionCreate

logger = logging.getLogger(__name__)


def build_payload(data: SubmissionCreate) -> dict:
    body = data.model_dump(mode="json", by_alias=True, exclude_none=True)
    return {
        "reporterName": body["reporterName"],
        "branchName": body["branchName"],
        "submissionDate": body["submissionDate"],
        "properties": body["properties"],
        "additionalComments": body.get("additionalComments"),
        "metadata": body.get("metadata"),
    }


async def notify_submission(
    data: SubmissionCreate,
    config: WebhookConfig,
    client: httpx.AsyncClient | None = None,
) -> str | None:
    """POST the submission to the webhook. Returns a warning on failure, else None."""
    if not config.url:
        return None

    headers = {"Content-Type": "application/json"}
    if config.key:
        headers["Authorization"] = f"Bearer {config.key}"

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=config.timeout) as c:
                response = await c.post(config.url, json=build_payload(data), headers=headers)
        else:
            response = await client.post(config.url, json=build_payload(data), headers=headers)
    except httpx.HTTPError as e:
        logger.warning("Webhook request to %s failed: %s", config.url, e)
        return "Submission saved, but the notification webhook could not be reached"

    if response.is_error:
        logger.warning("Webhook returned %s: %s", response.status_code, response.text[:500])
        return f"Submission saved, but the notification webhook returned {response.status_code}"
    return None
