from app.utils.emails import normalize_email

__all__ = [
    "normalize_email",
]
