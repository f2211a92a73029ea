"""Review model - customer testimonial shown on the homepage."""

from typing import Any, Optional, Union
from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator

from sharpchoice.utils.sanitize import parse_number, sanitize


class Review(BaseModel):
    """Customer testimonial with a star rating."""
    id: Optional[Union[int, str]] = Field(None, description="Review ID (assigned by Supabase)")
    author_name: StrictStr = Field(..., min_length=1, description="Name shown under the quote")
    comment: StrictStr = Field(..., min_length=1, description="Testimonial text")
    rating: StrictInt = Field(..., ge=0, le=5, description="Star rating (0-5)")
    created_at: Optional[str] = None

    @field_validator("author_name", "comment", mode="before")
    @classmethod
    def sanitize_text(cls, value: Any) -> Any:
        return sanitize(value)

    @field_validator("rating", mode="before")
    @classmethod
    def parse_rating(cls, value: Any) -> Any:
        return parse_number(value)

    def to_record(self) -> dict:
        """Row to insert into the reviews table."""
        return self.model_dump(mode="json", include={"author_name", "comment", "rating"})
