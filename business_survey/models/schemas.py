from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Optional, List
from business_survey.models.business import BusinessRecord, REQUIRED_MESSAGES, require_text


class RespondentStep(BaseModel):
    """First wizard step: who is answering the survey."""
    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return require_text(v, "name")


def _require_businesses(businesses: List[BusinessRecord]) -> List[BusinessRecord]:
    if not businesses:
        raise PydanticCustomError("businesses_empty", REQUIRED_MESSAGES["businesses"])
    return businesses


class BusinessesStep(BaseModel):
    """Third wizard step: the list of businesses, at least one."""
    businesses: List[BusinessRecord]

    @field_validator("businesses")
    @classmethod
    def check_businesses(cls, v: List[BusinessRecord]) -> List[BusinessRecord]:
        return _require_businesses(v)


class RespondentSubmission(RespondentStep):
    """Everything the respondent sends with the final submit."""
    businesses: List[BusinessRecord]

    @field_validator("businesses")
    @classmethod
    def check_businesses(cls, v: List[BusinessRecord]) -> List[BusinessRecord]:
        return _require_businesses(v)


class SubmitResponse(BaseModel):
    success: bool
    message: Optional[str] = None


class DispatchResult(BaseModel):
    delivered: int = Field(..., description="Number of rows the sink accepted")
    date_and_time: str
