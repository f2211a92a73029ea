"""Image upload request model."""

import base64
import binascii
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class ImageUpload(BaseModel):
    """Base64-encoded listing photo posted by the admin dashboard."""
    model_config = ConfigDict(populate_by_name=True)

    file_name: StrictStr = Field(..., alias="fileName", min_length=1, description="Object name in the bucket")
    file_data: StrictStr = Field(..., alias="fileData", min_length=1, description="Base64 image bytes")

    @field_validator("file_name", mode="before")
    @classmethod
    def check_file_name(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = value.strip()
        if "/" in value or "\\" in value or value in (".", ".."):
            raise ValueError("fileName must not contain path separators")
        return value

    @field_validator("file_data")
    @classmethod
    def check_base64(cls, value: str) -> str:
        # Browsers hand us data URLs from FileReader.readAsDataURL
        if value.startswith("data:") and "," in value:
            value = value.split(",", 1)[1]
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("fileData must be base64 encoded")
        return value

    def content(self) -> bytes:
        """Decoded image bytes."""
        return base64.b64decode(self.file_data)
