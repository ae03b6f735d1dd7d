import logging
from typing import Any, Dict, Type, TypeVar
from pydantic import BaseModel, ValidationError
from business_survey.models.schemas import RespondentStep, BusinessesStep, RespondentSubmission
from business_survey.utils.helpers import flatten_errors

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SubmissionValidationError(Exception):
    """Raised when a submission fails the schema; carries every field-level error."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(f"{len(errors)} invalid field(s): {', '.join(errors)}")


def _validate(model: Type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = flatten_errors(e)
        logger.info(f"{model.__name__} rejected: {list(errors)}")
        raise SubmissionValidationError(errors) from e


def validate_respondent(data: Any) -> RespondentStep:
    return _validate(RespondentStep, data)


def validate_businesses(data: Any) -> BusinessesStep:
    return _validate(BusinessesStep, data)


def validate_submission(data: Any) -> RespondentSubmission:
    """
    Validate a whole respondent submission.

    Returns the normalized submission (business numbers already in +98 form)
    or raises SubmissionValidationError with a {field path: message} mapping.
    Nothing from a rejected submission may be forwarded.
    """
    return _validate(RespondentSubmission, data)
