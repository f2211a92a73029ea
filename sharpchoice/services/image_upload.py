"""Listing photo upload to Supabase Storage."""

import mimetypes
from typing import Any

from pydantic import ValidationError

from sharpchoice.models.upload import ImageUpload
from sharpchoice.services.supabase_client import upload_listing_image
from sharpchoice.utils.errors import InvalidInputError
from sharpchoice.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"


def guess_content_type(file_name: str) -> str:
    """Content type from the file extension; the dashboard resizes to JPEG by default."""
    content_type, _ = mimetypes.guess_type(file_name)
    if content_type and content_type.startswith("image/"):
        return content_type
    return DEFAULT_CONTENT_TYPE


async def upload_image(payload: Any) -> str:
    """Store a base64 image in the listings bucket and return its public URL."""
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")
    try:
        upload = ImageUpload.model_validate(payload)
    except ValidationError as e:
        if any(err["type"] == "missing" or err["type"] == "string_too_short" for err in e.errors()):
            raise InvalidInputError("Missing file")
        raise InvalidInputError(e.errors()[0]["msg"])

    content = upload.content()
    content_type = guess_content_type(upload.file_name)

    with log_timing("storage.upload", logger=logger, file_name=upload.file_name, size_bytes=len(content)):
        url = await upload_listing_image(upload.file_name, content, content_type)

    logger.info("Image uploaded", file_name=upload.file_name, content_type=content_type)
    return url
