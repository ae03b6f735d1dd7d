import logging
import httpx
from typing import Optional, Dict, Any
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


class WebhookResponseError(Exception):
    """The sink answered with a non-success status."""

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Webhook responded with status {status_code}")


def _mask_url(url: Optional[str]) -> str:
    if not url:
        return "<no-url>"
    try:
        parts = urlsplit(url)
    except ValueError:
        return url[:8] + "..."
    if not parts.netloc:
        return url[:8] + "..."
    path = parts.path
    if len(path) > 12:
        path = path[:8] + "..." + path[-4:]
    return f"{parts.scheme}://{parts.netloc}{path}"


async def post_row(client: httpx.AsyncClient, url: str, row: Dict[str, Any]) -> Any:
    """POST one row to the webhook as JSON. Returns the decoded body on success or raises.

    Transport faults propagate as httpx exceptions; a non-2xx answer raises
    WebhookResponseError. The URL is masked in the logs.
    """
    logger.info("Webhook send -> url=%s business=%s", _mask_url(url), row.get("business_name"))

    resp = await client.post(url, json=row, headers={"Content-Type": "application/json"})
    content = None
    try:
        content = resp.json()
    except ValueError:
        content = {"raw": resp.text}

    if resp.is_success:
        logger.info("Webhook success status=%s", resp.status_code)
        return content
    else:
        logger.error("Webhook error status=%s body=%s", resp.status_code, content)
        raise WebhookResponseError(resp.status_code, content)
