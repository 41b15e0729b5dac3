# app/system_models/patient_model/patient_schemas.py
import re
from datetime import datetime
from typing import List

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
PHONE_NUMBER_PATTERN = re.compile(r"^\+?1?\s*\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}$")
EMAIL_MAX_LENGTH = 100

REQUIRED_MESSAGES = {
    "first_name": "First name is required.",
    "last_name": "Last name is required.",
    "address": "Address is required",
    "city": "City is required",
    "state": "State is required",
    "zip_code": "ZIP code is required",
    "phone_number": "Phone number is required",
    "email": "Email is required",
}


class PatientBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., description="Patient's first name", examples=["Jane"])
    last_name: str = Field(..., description="Patient's last name", examples=["Doe"])
    address: str = Field(..., description="Residential address", examples=["158 Main Street"])
    city: str = Field(..., description="City of residence", examples=["Springfield"])
    state: str = Field(..., description="State of residence", examples=["IL"])
    zip_code: str = Field(..., max_length=10, description="US ZIP code, 12345 or 12345-6789", examples=["62704"])
    phone_number: str = Field(..., max_length=20, description="US phone number", examples=["217-555-0134"])
    email: str = Field(..., description="Unique contact email", examples=["jane.doe@example.com"])

    @field_validator(
        "first_name", "last_name", "address", "city", "state", "zip_code", "phone_number",
        mode="before",
    )
    def require_text(cls, v, info):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        return v

    @field_validator("email", mode="before")
    def strip_email(cls, v):
        # No case-folding: uniqueness is exact, as stored.
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(REQUIRED_MESSAGES["email"])
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("zip_code")
    def validate_zip_code(cls, v):
        if not ZIP_CODE_PATTERN.match(v):
            raise ValueError("ZIP code must be in format 12345 or 12345-6789")
        return v

    @field_validator("phone_number")
    def validate_phone_number(cls, v):
        if not PHONE_NUMBER_PATTERN.match(v):
            raise ValueError("Phone number must be valid (e.g., 123-456-7890)")
        return v

    @field_validator("email")
    def validate_email_address(cls, v):
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must not exceed {EMAIL_MAX_LENGTH} characters")
        # syntax check only, the stored value is the trimmed input as given
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("Email should be valid")
        return v


class PatientCreate(PatientBase):
    # re-check instances too, a caller may hand over a model_construct()-ed object
    model_config = ConfigDict(str_strip_whitespace=True, revalidate_instances="always")


PatientUpdate = PatientCreate


class PatientRecord(PatientBase):
    """
    A patient as held by the store.

    Two records compare equal when their emails are equal, whatever their other
    fields hold. Use it for value comparison only, never as a lookup key.
    """
    model_config = ConfigDict(str_strip_whitespace=True, from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, PatientRecord):
            return NotImplemented
        return self.email == other.email

    def __hash__(self):
        return hash(self.email)

    def __repr__(self):
        return (
            f"PatientRecord(id={self.id}, first_name='{self.first_name}', "
            f"last_name='{self.last_name}', email='{self.email}', "
            f"city='{self.city}', state='{self.state}')"
        )


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    detail: str
    errors: List[FieldError] = []


def field_errors(exc: ValidationError) -> List[dict]:
    """Flatten a pydantic ValidationError into [{"field", "message"}] pairs."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        message = err.get("msg", "Invalid value")
        # "Value error, ZIP code must be ..." -> "ZIP code must be ..."
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": ".".join(loc) or "body", "message": message})
    return errors
