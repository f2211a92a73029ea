"""Contact form submission model."""

from typing import Any
from pydantic import BaseModel, Field, StrictBool, StrictStr, field_validator

from sharpchoice.utils.sanitize import sanitize


class Contact(BaseModel):
    """Message sent through the public contact form."""
    name: StrictStr = Field(..., min_length=1, description="Sender name")
    email: StrictStr = Field(..., min_length=3, description="Sender email (used as reply-to)")
    message: StrictStr = Field(..., min_length=1, description="Message body")
    opt_in: StrictBool = Field(..., description="Privacy policy consent, must be true")

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def sanitize_text(cls, value: Any) -> Any:
        return sanitize(value)

    @field_validator("opt_in")
    @classmethod
    def require_consent(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("Privacy consent is required")
        return value

    def to_record(self) -> dict:
        """Row to insert into the contacts table."""
        return self.model_dump()
