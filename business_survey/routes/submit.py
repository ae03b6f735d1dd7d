from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse
import logging
from business_survey.config.settings import Settings, get_settings
from business_survey.models.schemas import SubmitResponse
from business_survey.services.dispatcher import (
    SubmissionDispatcher,
    WebhookDeliveryError,
)

logger = logging.getLogger(__name__)

submit_router = APIRouter(prefix="/api", tags=["Submit"])


def get_dispatcher(settings: Settings = Depends(get_settings)) -> SubmissionDispatcher:
    return SubmissionDispatcher(
        settings.webhook_url,
        timeout=settings.webhook_timeout,
        timestamp_format=settings.timestamp_format,
    )


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@submit_router.post("/submit", response_model=SubmitResponse, response_model_exclude_none=True)
async def submit(request: Request, dispatcher: SubmissionDispatcher = Depends(get_dispatcher)):
    """
    Forward each business of the submission to the configured webhook.

    The body is only checked loosely here (an object with a `businesses`
    list); field validation happens before the form is ever submitted.
    """
    try:
        body = await request.json()
    except ValueError:
        return _failure(400, "Invalid request body")
    if not isinstance(body, dict):
        return _failure(400, "Invalid request body")

    if not dispatcher.configured:
        logger.error("Submit refused: GOOGLE_WEBHOOK_URL is not set")
        return _failure(500, "Webhook URL not set")

    name = body.get("name")
    businesses = body.get("businesses")
    if not isinstance(businesses, list) or not all(isinstance(b, dict) for b in businesses):
        return _failure(400, "Invalid businesses format")

    try:
        result = await dispatcher.dispatch(name, businesses)
    except WebhookDeliveryError as e:
        logger.warning(f"Submission aborted at row {e.index}; {e.delivered} row(s) were already delivered")
        return _failure(502, str(e))
    except Exception:
        logger.exception("Unexpected error while dispatching submission")
        return _failure(500, "Internal server error")

    logger.info(f"Submission forwarded: {result.delivered} row(s) at {result.date_and_time}")
    return {"success": True}
