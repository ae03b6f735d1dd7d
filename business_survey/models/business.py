import re
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Optional, List
from business_survey.config.option_loader import option_loader

PHONE_PATTERN = re.compile(r"09[0-9]{9}")
PHONE_LENGTH = 11
PHONE_COUNTRY_PREFIX = "+98"

# Messages shown next to the offending form field
REQUIRED_MESSAGES = {
    "name": "نام و نام خانوادگی الزامی است",
    "businesses": "حداقل یک کسب و کار را وارد کنید",
    "business_name": "نام کسب و کار الزامی است",
    "business_number": "شماره تماس کسب و کار الزامی است",
    "business_address": "آدرس کسب و کار الزامی است",
    "business_owner_name": "نام صاحب کسب و کار الزامی است",
}
PHONE_LENGTH_MESSAGE = "شماره تماس باید ۱۱ رقم باشد"
PHONE_PATTERN_MESSAGE = "شماره تماس باید با 09 شروع شده و ۱۱ رقم باشد"
CATEGORY_MESSAGE = "دسته‌بندی کسب و کار نامعتبر است"
RELATION_MESSAGE = "نسبت با صاحب کسب و کار نامعتبر است"

# Input of the wrong JSON type, e.g. a number where text is expected
TYPE_MESSAGES = {
    "string_type": "مقدار این فیلد باید متن باشد",
    "list_type": "مقدار این فیلد باید فهرست باشد",
    "model_type": "ساختار اطلاعات ارسالی نامعتبر است",
}


def require_text(value: str, field_name: str) -> str:
    if not value:
        raise PydanticCustomError("required", REQUIRED_MESSAGES[field_name])
    return value


def normalize_phone_number(value: str) -> str:
    """Validate a local mobile number (09xxxxxxxxx) and rewrite it to +98 form.

    Anything that is not exactly 11 ASCII digits starting with "09" is
    rejected as-is; the rewrite only happens after the checks pass.
    """
    if len(value) != PHONE_LENGTH:
        raise PydanticCustomError("phone_length", PHONE_LENGTH_MESSAGE)
    if not PHONE_PATTERN.fullmatch(value):
        raise PydanticCustomError("phone_pattern", PHONE_PATTERN_MESSAGE)
    return PHONE_COUNTRY_PREFIX + value[1:]


class BusinessRecord(BaseModel):
    business_name: str
    business_category: Optional[str] = None
    business_link: List[Optional[str]] = Field(default_factory=list)
    business_website: Optional[str] = None
    business_number: str = Field(..., description="Local mobile number, stored in +98 form after validation")
    business_address: str
    business_note: Optional[str] = None
    business_owner_name: str
    business_owner_relation: Optional[str] = None

    @field_validator("business_name", "business_address", "business_owner_name")
    @classmethod
    def check_required_text(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("business_number")
    @classmethod
    def check_business_number(cls, v: str) -> str:
        return normalize_phone_number(v)

    @field_validator("business_category")
    @classmethod
    def check_business_category(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in option_loader.get_business_categories():
            raise PydanticCustomError("business_category", CATEGORY_MESSAGE)
        return v

    @field_validator("business_owner_relation")
    @classmethod
    def check_business_owner_relation(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in option_loader.get_owner_relations():
            raise PydanticCustomError("business_owner_relation", RELATION_MESSAGE)
        return v


def blank_business() -> dict:
    """Placeholder values for a business the respondent has just added."""
    default = option_loader.get_default()
    return {
        "business_name": "",
        "business_category": default,
        "business_link": [],
        "business_website": "",
        "business_number": "",
        "business_address": "",
        "business_note": "",
        "business_owner_name": "",
        "business_owner_relation": default,
    }
