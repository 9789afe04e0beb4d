import logging
from typing import Any, Mapping

from email_validator import EmailNotValidError
from email_validator.syntax import validate_email_domain_name, validate_email_local_part
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from railbook.errors import ValidationError

logger = logging.getLogger(__name__)

MAX_EMAIL_LENGTH = 255

_MESSAGES = {
    ("name", "string_too_short"): "Name must be at least 2 characters",
    ("name", "string_too_long"): "Name must be at most 100 characters",
    ("age", "greater_than_equal"): "Age must be at least 1",
    ("age", "less_than_equal"): "Age must be at most 120",
}

_FALLBACK = {
    "name": "Name is required",
    "age": "Age must be a whole number",
    "email": "Invalid email address",
}


class PassengerIn(BaseModel):
    """Passenger details after validation. Field order is the order rules are checked in."""

    name: str = Field(..., min_length=2, max_length=100)
    age: int = Field(..., ge=1, le=120)
    email: str

    @field_validator("name", mode="before")
    @classmethod
    def _trim_name(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("age", mode="before")
    @classmethod
    def _reject_bool_age(cls, value):
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value):
        if not isinstance(value, str):
            raise PydanticCustomError("email_invalid", "Invalid email address")
        value = value.strip()
        if len(value) > MAX_EMAIL_LENGTH:
            raise PydanticCustomError("email_too_long", "Email must be at most 255 characters")
        local, at, domain = value.rpartition("@")
        if not at or not domain:
            raise PydanticCustomError("email_invalid", "Invalid email address")
        # syntax only: validate_email would also cap the whole address at 254
        try:
            validate_email_local_part(local)
            validate_email_domain_name(domain)
        except EmailNotValidError:
            raise PydanticCustomError("email_invalid", "Invalid email address")
        # keep what the passenger typed; email_validator would normalise the domain
        return value


def _first_message(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    field = error["loc"][0] if error["loc"] else ""
    if error["type"] in ("email_invalid", "email_too_long"):
        return error["msg"]
    return _MESSAGES.get((field, error["type"]), _FALLBACK.get(field, "Invalid passenger details"))


def validate_passenger(raw: Mapping[str, Any]) -> PassengerIn:
    """Check name, age and email in that order.

    Raises ``ValidationError`` naming only the first rule that failed.
    """
    try:
        return PassengerIn.model_validate(dict(raw))
    except PydanticValidationError as exc:
        message = _first_message(exc)
        logger.info("passenger rejected: %s", message)
        raise ValidationError(message) from exc
