from dotenv import load_dotenv, find_dotenv

# Find and load the .env file
dotenv_path = find_dotenv()
load_dotenv(dotenv_path)

import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from business_survey.config.settings import get_settings
from business_survey.routes.submit import submit_router
from business_survey.routes.validation import validation_router
from business_survey.routes.form import form_router
from business_survey.routes.diagnostics import router as diagnostics_router

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Business Survey",
    description="Collects a respondent's acquaintances' businesses and forwards each one to a webhook.",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
    )

app.include_router(diagnostics_router)
app.include_router(form_router)
app.include_router(validation_router)
app.include_router(submit_router)

if not settings.webhook_configured:
    logger.warning("GOOGLE_WEBHOOK_URL is not set; /api/submit will refuse submissions")
