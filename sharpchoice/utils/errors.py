"""Error handling utilities."""


class SharpChoiceError(Exception):
    """Base exception for the Sharp Choice backend."""
    pass


class InvalidInputError(SharpChoiceError):
    """Request payload failed validation."""
    pass


class AuthError(SharpChoiceError):
    """Bearer token missing or rejected by Supabase Auth."""
    pass


class NotFoundError(SharpChoiceError):
    """Requested record does not exist."""
    pass


class SupabaseError(SharpChoiceError):
    """Supabase operation error."""
    pass


class StorageError(SharpChoiceError):
    """Supabase Storage upload error."""
    pass


class EmailDeliveryError(SharpChoiceError):
    """Resend email delivery error."""
    pass
