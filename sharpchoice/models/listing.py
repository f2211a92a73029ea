"""Listing models."""

from enum import Enum
from typing import Annotated, Any, Optional, Union
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

from sharpchoice.utils.sanitize import parse_number, sanitize, sanitize_mapping


NonNegativeNumber = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)],
]

TEXT_FIELDS = ("address", "city", "state", "zip")
NUMERIC_FIELDS = ("price", "beds", "baths", "sqft")
STORE_FIELDS = ("id", "created_at", "updated_at")


class ListingStatus(str, Enum):
    """Listing status values."""
    ACTIVE = "active"
    CLOSED = "closed"


def _clean_text(value: Any) -> Any:
    # zip codes often arrive as JSON numbers from <input type="number">
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    return sanitize(value)


def _clean_metadata(value: Any) -> Any:
    if value is None:
        return {}
    return sanitize_mapping(value)


class ListingPhoto(BaseModel):
    """Photo attached to a listing, in display order."""
    url: StrictStr = Field(..., min_length=1, description="Public URL in the listings-images bucket")
    caption: Optional[StrictStr] = Field(None, description="Caption shown under the photo")

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("caption", mode="before")
    @classmethod
    def sanitize_caption(cls, value: Any) -> Any:
        return sanitize(value)


class Listing(BaseModel):
    """Property-for-sale record."""
    id: Optional[Union[int, str]] = Field(None, description="Listing ID (assigned by Supabase)")
    address: StrictStr = Field(..., min_length=1, description="Street address")
    city: StrictStr = Field(..., min_length=1)
    state: StrictStr = Field(..., min_length=1)
    zip: StrictStr = Field(..., min_length=1, description="Postal code")
    price: NonNegativeNumber = Field(..., description="Asking or sold price (USD)")
    beds: NonNegativeNumber
    baths: NonNegativeNumber
    sqft: NonNegativeNumber
    status: ListingStatus = Field(default=ListingStatus.ACTIVE, description="active or closed")
    photos: list[ListingPhoto] = Field(default_factory=list, description="Ordered photos")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Additional metadata")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def sanitize_text(cls, value: Any) -> Any:
        return _clean_text(value)

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def parse_numeric(cls, value: Any) -> Any:
        return parse_number(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def sanitize_metadata(cls, value: Any) -> Any:
        return _clean_metadata(value)

    @field_validator("photos", mode="before")
    @classmethod
    def default_photos(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_record(self) -> dict:
        """Row to insert into the listings table (store-assigned fields omitted)."""
        return self.model_dump(mode="json", exclude=set(STORE_FIELDS))


class ListingUpdate(BaseModel):
    """Partial update applied by PATCH /api/listings/:id."""
    model_config = ConfigDict(extra="forbid")

    address: Optional[StrictStr] = Field(None, min_length=1)
    city: Optional[StrictStr] = Field(None, min_length=1)
    state: Optional[StrictStr] = Field(None, min_length=1)
    zip: Optional[StrictStr] = Field(None, min_length=1)
    price: Optional[NonNegativeNumber] = None
    beds: Optional[NonNegativeNumber] = None
    baths: Optional[NonNegativeNumber] = None
    sqft: Optional[NonNegativeNumber] = None
    status: Optional[ListingStatus] = None
    photos: Optional[list[ListingPhoto]] = None
    metadata: Optional[dict[str, Any]] = None

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def sanitize_text(cls, value: Any) -> Any:
        return _clean_text(value)

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def parse_numeric(cls, value: Any) -> Any:
        return parse_number(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def sanitize_metadata(cls, value: Any) -> Any:
        return _clean_metadata(value)

    @model_validator(mode="after")
    def reject_empty_and_nulls(self) -> "ListingUpdate":
        if not self.model_fields_set:
            raise ValueError("No fields to update")
        for name in sorted(self.model_fields_set):
            if getattr(self, name) is None and name != "photos":
                raise ValueError(f"{name} cannot be null")
        return self

    def to_record(self) -> dict:
        """Only the fields present in the request body."""
        record = self.model_dump(mode="json", exclude_unset=True)
        if "photos" in record and record["photos"] is None:
            record["photos"] = []
        return record
