from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from typing import Any, Callable
from business_survey.services.validation import (
    SubmissionValidationError,
    validate_submission,
    validate_respondent,
    validate_businesses,
)

validation_router = APIRouter(prefix="/api/validate", tags=["Validation"])


async def _run(request: Request, validator: Callable[[Any], Any]) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(status_code=400, content={"success": False, "message": "Invalid request body"})

    try:
        model = validator(body)
    except SubmissionValidationError as e:
        return JSONResponse(status_code=422, content={"success": False, "errors": e.errors})
    return JSONResponse(status_code=200, content={"success": True, "data": model.model_dump()})


@validation_router.post("")
async def validate_all(request: Request):
    """Validate a whole submission and return it normalized, or every field error."""
    return await _run(request, validate_submission)


@validation_router.post("/respondent")
async def validate_respondent_step(request: Request):
    return await _run(request, validate_respondent)


@validation_router.post("/businesses")
async def validate_businesses_step(request: Request):
    return await _run(request, validate_businesses)
