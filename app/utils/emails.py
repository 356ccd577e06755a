"""Email helpers."""


def normalize_email(email: str) -> str:
    """Canonical form used for storage, lookups and the uniqueness check."""
    return email.strip().lower()
