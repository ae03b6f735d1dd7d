from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging
from business_survey.config.settings import Settings, get_settings
from business_survey.utils.webhook import _mask_url

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/")
async def home():
    return JSONResponse(content={"message": "Business survey backend is running!"})


@router.get("/debug/webhook")
async def debug_webhook(settings: Settings = Depends(get_settings)):
    if not settings.webhook_configured:
        logger.warning("debug_webhook: GOOGLE_WEBHOOK_URL is not set")
    return {
        "configured": settings.webhook_configured,
        "webhook_url": _mask_url(settings.webhook_url),
        "timeout": settings.webhook_timeout,
    }
