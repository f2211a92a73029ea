"""Application configuration read from environment variables."""

import os


class AppConfig:
    """Centralized application configuration."""

    SERVICE_NAME = os.environ.get("SERVICE_NAME", "sharpchoice-backend")

    # Supabase table and bucket names
    CONTACTS_TABLE = "contacts"
    REVIEWS_TABLE = "reviews"
    LISTINGS_TABLE = "listings"
    LISTINGS_IMAGES_BUCKET = os.environ.get("LISTINGS_IMAGES_BUCKET", "listings-images")

    # Resend
    RESEND_API_URL = os.environ.get("RESEND_API_URL", "https://api.resend.com/emails")
    RESEND_TIMEOUT_SECONDS = float(os.environ.get("RESEND_TIMEOUT_SECONDS", "10"))
    CONTACT_FROM_ADDRESS = os.environ.get(
        "CONTACT_FROM_ADDRESS",
        "Website Contact <contact@sharpchoicerealestate.com>",
    )
    CONTACT_TO_ADDRESS = os.environ.get("CONTACT_TO_ADDRESS", "sharpchoicerealestate@gmail.com")
    AUTO_REPLY_FROM_ADDRESS = os.environ.get(
        "AUTO_REPLY_FROM_ADDRESS",
        "Sharp Choice Real Estate <no-reply@sharpchoicerealestate.com>",
    )
    AUTO_REPLY_SIGNATURE = os.environ.get("AUTO_REPLY_SIGNATURE", "Stephanie Sharp")

    # Request bodies carry base64 images, so allow up to 10 MB
    MAX_BODY_BYTES = int(os.environ.get("MAX_BODY_BYTES", str(10 * 1024 * 1024)))

    @staticmethod
    def resend_api_key() -> str:
        """Get Resend API key from environment."""
        return os.environ.get("RESEND_API_KEY", "").strip()
