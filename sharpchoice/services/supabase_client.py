"""Supabase client wrapper with async context manager support."""

import os
from typing import Any, Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from sharpchoice.config import AppConfig
from sharpchoice.utils.errors import SupabaseError, StorageError
import logging

logger = logging.getLogger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        # Service-role client: never persist or refresh a user session
        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", extra={"url": url})

    return _client


def reset_supabase_client() -> None:
    """Drop the cached client (tests and credential rotation)."""
    global _client
    _client = None


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        """Enter async context."""
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context."""
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        return False


# Contacts table operations
async def insert_contact(contact_data: dict) -> None:
    """Insert a contact form submission."""
    async with SupabaseClient() as client:
        try:
            client.table(AppConfig.CONTACTS_TABLE).insert(contact_data).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to insert contact: {e}")


# Reviews table operations
async def insert_review(review_data: dict) -> dict:
    """Create a new review."""
    async with SupabaseClient() as client:
        try:
            result = client.table(AppConfig.REVIEWS_TABLE).insert(review_data).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to insert review: {e}")
        return result.data[0] if result.data else review_data


async def list_reviews() -> list[dict]:
    """Get all reviews, newest first."""
    async with SupabaseClient() as client:
        try:
            result = (
                client.table(AppConfig.REVIEWS_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            return result.data if result.data else []
        except Exception as e:
            raise SupabaseError(f"Failed to fetch reviews: {e}")


# Listings table operations
async def insert_listing(listing_data: dict) -> dict:
    """Create a new listing and return the stored row."""
    async with SupabaseClient() as client:
        try:
            result = client.table(AppConfig.LISTINGS_TABLE).insert(listing_data).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to create listing: {e}")
        if result.data and len(result.data) > 0:
            return result.data[0]
        raise SupabaseError("Failed to create listing: no data returned")


async def list_listings(status: Optional[str] = None) -> list[dict]:
    """Get listings, optionally filtered by status, newest first."""
    async with SupabaseClient() as client:
        try:
            query = client.table(AppConfig.LISTINGS_TABLE).select("*")
            if status:
                query = query.eq("status", status)
            result = query.order("created_at", desc=True).execute()
            return result.data if result.data else []
        except Exception as e:
            raise SupabaseError(f"Failed to fetch listings: {e}")


async def get_listing_by_id(listing_id: str) -> Optional[dict]:
    """Get listing by ID."""
    async with SupabaseClient() as client:
        try:
            result = client.table(AppConfig.LISTINGS_TABLE).select("*").eq("id", listing_id).execute()
            return result.data[0] if result.data and len(result.data) > 0 else None
        except Exception as e:
            raise SupabaseError(f"Failed to get listing: {e}")


async def update_listing(listing_id: str, updates: dict) -> Optional[dict]:
    """Update a listing. Returns None when no row matched."""
    async with SupabaseClient() as client:
        try:
            result = client.table(AppConfig.LISTINGS_TABLE).update(updates).eq("id", listing_id).execute()
            return result.data[0] if result.data and len(result.data) > 0 else None
        except Exception as e:
            raise SupabaseError(f"Failed to update listing: {e}")


# Auth
async def get_user_for_token(token: str) -> Optional[Any]:
    """Resolve an access token to a Supabase Auth user (None if rejected)."""
    async with SupabaseClient() as client:
        response = client.auth.get_user(token)
        return getattr(response, "user", None) if response else None


# Storage
async def upload_listing_image(file_name: str, content: bytes, content_type: str = "image/jpeg") -> str:
    """Upload (or overwrite) an image in the listings bucket and return its public URL."""
    async with SupabaseClient() as client:
        bucket = client.storage.from_(AppConfig.LISTINGS_IMAGES_BUCKET)
        try:
            bucket.upload(
                file_name,
                content,
                file_options={"content-type": content_type, "upsert": "true"},
            )
            return bucket.get_public_url(file_name)
        except Exception as e:
            raise StorageError(f"Failed to upload image {file_name}: {e}")
