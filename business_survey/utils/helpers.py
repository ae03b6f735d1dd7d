from typing import Dict, Any, Iterable, Union
from pydantic import ValidationError
from business_survey.models.business import REQUIRED_MESSAGES, TYPE_MESSAGES

def error_path(loc: Iterable[Union[str, int]]) -> str:
    """Join a pydantic error location into a dotted form path, e.g. businesses.2.business_number."""
    return ".".join(str(part) for part in loc)

def _error_message(error: Dict[str, Any]) -> str:
    field = error["loc"][-1] if error["loc"] else None
    # A missing or null required field gets the same message as an empty one
    if field in REQUIRED_MESSAGES and (error["type"] == "missing" or error.get("input") is None):
        return REQUIRED_MESSAGES[field]
    return TYPE_MESSAGES.get(error["type"], error["msg"])

def flatten_errors(exc: ValidationError) -> Dict[str, str]:
    """
    Turn a pydantic ValidationError into a {field path: message} mapping.
    - every failing field is reported
    - when one path fails several checks, the first reported one is kept
    """
    out: Dict[str, str] = {}
    for error in exc.errors():
        path = error_path(error["loc"]) or "__root__"
        out.setdefault(path, _error_message(error))
    return out
