"""Transactional email through the Resend HTTP API."""

from typing import Optional
import httpx

from sharpchoice.config import AppConfig
from sharpchoice.utils.errors import EmailDeliveryError
from sharpchoice.utils.logging import get_structured_logger, log_timing, mask_email

logger = get_structured_logger(__name__)


async def send_email(
    to: str,
    subject: str,
    html: str,
    sender: str,
    reply_to: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Send one email via Resend.

    Returns the Resend message id. Raises EmailDeliveryError on any failure;
    nothing is retried.
    """
    api_key = AppConfig.resend_api_key()
    if not api_key:
        raise EmailDeliveryError("RESEND_API_KEY must be set")

    payload = {
        "from": sender,
        "to": [to],
        "subject": subject,
        "html": html,
    }
    if reply_to:
        payload["reply_to"] = reply_to

    headers = {"Authorization": f"Bearer {api_key}"}

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=AppConfig.RESEND_TIMEOUT_SECONDS)

    try:
        with log_timing("resend.send_email", logger=logger, to=mask_email(to)):
            response = await client.post(AppConfig.RESEND_API_URL, json=payload, headers=headers)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise EmailDeliveryError(
            f"Resend rejected email ({e.response.status_code}): {e.response.text[:200]}"
        )
    except httpx.HTTPError as e:
        raise EmailDeliveryError(f"Resend request failed: {e}")
    finally:
        if owns_client:
            await client.aclose()

    message_id = response.json().get("id", "")
    logger.info("Email sent", to=mask_email(to), message_id=message_id)
    return message_id
