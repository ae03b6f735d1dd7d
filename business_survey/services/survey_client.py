import logging
import httpx
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence
from business_survey.services.validation import validate_submission

logger = logging.getLogger(__name__)

SUCCESS_NOTICE = "اطلاعات ثبت شد!"
SAVE_FAILED_NOTICE = "خطا در ذخیره اطلاعات"
SEND_FAILED_NOTICE = "خطا در ارسال داده"


@dataclass
class SubmitOutcome:
    success: bool
    notice: str
    status_code: Optional[int] = None


class SurveyClient:
    """Front-end side of the survey: validate locally, then submit once.

    The user only ever sees one notice per submit, never per-business details.
    """

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    async def submit(self, name: str, businesses: Sequence[Dict[str, Any]]) -> SubmitOutcome:
        # Raises SubmissionValidationError before anything is sent
        submission = validate_submission({"name": name, "businesses": list(businesses)})
        payload = submission.model_dump()

        try:
            async with self._client() as client:
                resp = await client.post("/api/submit", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Submit request failed: {e}")
            return SubmitOutcome(success=False, notice=SEND_FAILED_NOTICE)

        if resp.is_success:
            return SubmitOutcome(success=True, notice=SUCCESS_NOTICE, status_code=resp.status_code)
        logger.warning(f"Submit rejected status={resp.status_code} body={resp.text}")
        return SubmitOutcome(success=False, notice=SAVE_FAILED_NOTICE, status_code=resp.status_code)

    async def fetch_options(self) -> Dict[str, Any]:
        async with self._client() as client:
            resp = await client.get("/api/form/options")
            resp.raise_for_status()
            return resp.json()

    async def fetch_business_template(self) -> Dict[str, Any]:
        async with self._client() as client:
            resp = await client.get("/api/form/business-template")
            resp.raise_for_status()
            return resp.json()
