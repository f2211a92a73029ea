"""Submission pipeline (validate, sanitize, persist, notify) and read endpoints."""

from typing import Any, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError

from sharpchoice.config import AppConfig
from sharpchoice.models.contact import Contact
from sharpchoice.models.listing import Listing, ListingStatus, ListingUpdate
from sharpchoice.models.review import Review
from sharpchoice.services import supabase_client as store
from sharpchoice.services.mailer import send_email
from sharpchoice.utils.errors import InvalidInputError, NotFoundError
from sharpchoice.utils.logging import get_structured_logger, log_timing, mask_email

logger = get_structured_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

CONTACT_REQUIRED_MESSAGE = "All fields are required, including privacy consent."
REVIEW_REQUIRED_MESSAGE = "Missing fields: author_name, comment, or rating"
LISTING_REQUIRED_MESSAGE = "Missing required fields"
INVALID_STATUS_MESSAGE = "Invalid status. Use 'active' or 'closed'"


def describe_validation_error(exc: ValidationError, missing_message: str) -> str:
    """Turn a pydantic ValidationError into the single message returned to the client."""
    errors = exc.errors()
    for error in errors:
        if error["type"] == "missing" or error["type"] == "string_too_short":
            return missing_message
        if error["loc"] and error["loc"][0] == "status":
            return INVALID_STATUS_MESSAGE
    first = errors[0]
    field = ".".join(str(part) for part in first["loc"])
    detail = first["msg"]
    return f"Invalid {field}: {detail}" if field else detail


def _validate(model: Type[ModelT], payload: Any, missing_message: str, collapse: bool = False) -> ModelT:
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        if collapse:
            raise InvalidInputError(missing_message)
        raise InvalidInputError(describe_validation_error(e, missing_message))


def business_alert_html(contact: Contact) -> str:
    """Notification sent to the business inbox."""
    consent = "✅ Yes" if contact.opt_in else "❌ No"
    return (
        f"<h2>New Message from {contact.name}</h2>"
        f"<p><strong>Email:</strong> {contact.email}</p>"
        f"<p>{contact.message}</p>"
        "<hr>"
        f"<p><strong>Privacy Consent:</strong> {consent}</p>"
    )


def auto_reply_html(contact: Contact) -> str:
    """Acknowledgement sent back to the person who filled in the form."""
    return (
        f"<p>Hi {contact.name},</p>"
        "<p>We've received your message and will get back to you shortly.</p>"
        f"<p>– {AppConfig.AUTO_REPLY_SIGNATURE}</p>"
    )


async def submit_contact(payload: Any) -> Contact:
    """
    Process a contact form submission.

    Persists the message, then emails the business and auto-replies to the
    sender. If either email fails the contact row stays in the database and
    EmailDeliveryError propagates.
    """
    contact = _validate(Contact, payload, CONTACT_REQUIRED_MESSAGE, collapse=True)

    with log_timing("contacts.insert", logger=logger):
        await store.insert_contact(contact.to_record())

    await send_email(
        to=AppConfig.CONTACT_TO_ADDRESS,
        subject=f"New Contact from {contact.name}",
        html=business_alert_html(contact),
        sender=AppConfig.CONTACT_FROM_ADDRESS,
        reply_to=contact.email,
    )
    await send_email(
        to=contact.email,
        subject="Thanks for reaching out!",
        html=auto_reply_html(contact),
        sender=AppConfig.AUTO_REPLY_FROM_ADDRESS,
    )

    logger.info("Contact submission processed", email=mask_email(contact.email))
    return contact


async def submit_review(payload: Any) -> dict:
    """Validate and store a review created from the admin dashboard."""
    review = _validate(Review, payload, REVIEW_REQUIRED_MESSAGE)

    with log_timing("reviews.insert", logger=logger):
        row = await store.insert_review(review.to_record())

    logger.info("Review added", rating=review.rating)
    return row


async def create_listing(payload: Any) -> dict:
    """Validate and store a new listing. Returns the stored row including its id."""
    listing = _validate(Listing, payload, LISTING_REQUIRED_MESSAGE)

    with log_timing("listings.insert", logger=logger):
        row = await store.insert_listing(listing.to_record())

    logger.info("Listing created", listing_id=row.get("id"), status=listing.status.value)
    return row


async def update_listing(listing_id: str, payload: Any) -> dict:
    """Apply a partial update to a listing."""
    if not listing_id:
        raise InvalidInputError("Listing id is required")
    update = _validate(ListingUpdate, payload, "Updated fields cannot be empty")

    with log_timing("listings.update", logger=logger, listing_id=listing_id):
        row = await store.update_listing(listing_id, update.to_record())

    if row is None:
        raise NotFoundError("Listing not found")

    logger.info("Listing updated", listing_id=listing_id, fields=sorted(update.model_fields_set))
    return row


def parse_status_filter(status: Optional[str]) -> Optional[str]:
    """Validate the ?status= query parameter."""
    if not status:
        return None
    try:
        return ListingStatus(status).value
    except ValueError:
        raise InvalidInputError(INVALID_STATUS_MESSAGE)


async def fetch_listings(status: Optional[str] = None) -> list[dict]:
    """All listings (optionally filtered by status), newest first."""
    status = parse_status_filter(status)
    with log_timing("listings.select", logger=logger, status=status):
        return await store.list_listings(status)


async def fetch_listing(listing_id: str) -> dict:
    """Single listing by id."""
    if not listing_id:
        raise InvalidInputError("Listing id is required")
    listing = await store.get_listing_by_id(listing_id)
    if listing is None:
        raise NotFoundError("Listing not found")
    return listing


async def fetch_reviews() -> list[dict]:
    """All reviews, newest first."""
    with log_timing("reviews.select", logger=logger):
        return await store.list_reviews()
