"""
Utility helpers shared across services.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email


def absolute_url(path: str, base: Optional[str] = None) -> str:
    """
    Join a relative path onto the public base URL.
    """
    base_url = (base or "").rstrip("/")
    if not path:
        return base_url + "/"
    if path.startswith("http://") or path.startswith("https://"):
        return path
    if not path.startswith("/"):
        path = "/" + path
    return base_url + path


def is_email(value: str | None) -> bool:
    """Format-only check; no DNS lookups."""
    if not value or "@" not in value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
