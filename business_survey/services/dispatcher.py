import logging
import httpx
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union
from pydantic import BaseModel
from business_survey.config.settings import DEFAULT_TIMESTAMP_FORMAT
from business_survey.models.business import BusinessRecord
from business_survey.models.schemas import DispatchResult, RespondentSubmission
from business_survey.utils.webhook import WebhookResponseError, post_row, _mask_url

logger = logging.getLogger(__name__)

# Record fields forwarded 1:1; business_link is joined separately
SCALAR_FIELDS = (
    "business_name",
    "business_category",
    "business_website",
    "business_number",
    "business_address",
    "business_note",
    "business_owner_name",
    "business_owner_relation",
)
LINK_SEPARATOR = ", "
DELIVERY_FAILED_MESSAGE = "Failed to forward a business record to webhook"

BusinessInput = Union[BusinessRecord, Mapping[str, Any]]


class WebhookNotConfiguredError(Exception):
    """No sink URL is configured; nothing was sent."""
    pass


class WebhookDeliveryError(Exception):
    """A row could not be delivered; the batch stopped at `index`.

    Rows before `index` (there are `delivered` of them) already reached the
    sink and are not rolled back.
    """

    def __init__(self, index: int, delivered: int, message: str = DELIVERY_FAILED_MESSAGE):
        self.index = index
        self.delivered = delivered
        super().__init__(message)


def _text(value: Any) -> Any:
    return "" if value is None else value


def join_links(links: Any) -> str:
    if not isinstance(links, (list, tuple)):
        return ""
    return LINK_SEPARATOR.join("" if link is None else str(link) for link in links)


def build_row(business: BusinessInput, name: Optional[str], timestamp: str) -> Dict[str, Any]:
    """Flatten one business record into the row the sink stores."""
    if isinstance(business, BaseModel):
        business = business.model_dump()

    row: Dict[str, Any] = {
        "date_and_time": timestamp,
        "name": _text(name),
    }
    for field in SCALAR_FIELDS:
        row[field] = _text(business.get(field))
    row["business_link"] = join_links(business.get("business_link"))
    return row


class SubmissionDispatcher:
    """Forwards every business of a submission to the webhook, one request at a time."""

    def __init__(
        self,
        webhook_url: Optional[str],
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Optional[Callable[[], datetime]] = None,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.transport = transport
        self.clock = clock or datetime.now
        self.timestamp_format = timestamp_format

    @property
    def configured(self) -> bool:
        return bool(self.webhook_url and self.webhook_url.strip())

    def timestamp(self) -> str:
        return self.clock().strftime(self.timestamp_format)

    def build_rows(self, name: Optional[str], businesses: Sequence[BusinessInput], timestamp: Optional[str] = None) -> List[Dict[str, Any]]:
        # One timestamp for the whole batch
        now = timestamp or self.timestamp()
        return [build_row(business, name, now) for business in businesses]

    async def dispatch(self, name: Optional[str], businesses: Sequence[BusinessInput]) -> DispatchResult:
        """
        Send one row per business, in order, waiting for each answer before the next.

        Stops at the first failed row and raises WebhookDeliveryError; rows
        already sent stay sent. No retries.
        """
        if not self.configured:
            logger.error("Missing webhook configuration: GOOGLE_WEBHOOK_URL")
            raise WebhookNotConfiguredError("Webhook URL not set")

        now = self.timestamp()
        rows = self.build_rows(name, businesses, now)
        target = _mask_url(self.webhook_url)
        logger.info(f"[{target}] Dispatching {len(rows)} row(s) for respondent {name!r}")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for index, row in enumerate(rows):
                try:
                    await post_row(client, self.webhook_url, row)
                except (WebhookResponseError, httpx.HTTPError, httpx.InvalidURL) as e:
                    logger.error(f"[{target}] ❌ Row {index + 1}/{len(rows)} failed, aborting batch: {e}", exc_info=True)
                    raise WebhookDeliveryError(index=index, delivered=index) from e
                logger.info(f"[{target}] ✅ Row {index + 1}/{len(rows)} delivered")

        logger.info(f"[{target}] Batch complete: {len(rows)} row(s) delivered")
        return DispatchResult(delivered=len(rows), date_and_time=now)

    async def dispatch_submission(self, submission: RespondentSubmission) -> DispatchResult:
        return await self.dispatch(submission.name, submission.businesses)
