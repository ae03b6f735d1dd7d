from fastapi import APIRouter
from business_survey.config.option_loader import option_loader
from business_survey.models.business import blank_business

form_router = APIRouter(prefix="/api/form", tags=["Form"])

@form_router.get("/options")
async def get_options():
    """Closed option sets for the category and owner-relation dropdowns."""
    return option_loader.as_dict()

@form_router.get("/business-template")
async def get_business_template():
    return blank_business()
