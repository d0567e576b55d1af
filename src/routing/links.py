"""
Link interception rules.

Only plain primary-button clicks on relative links are taken over by the
router; everything else keeps the host's default behaviour.
"""

from typing import Optional
from urllib.parse import urljoin, urlsplit

from src.models.routing import LinkClick


PRIMARY_BUTTON = 0


def is_internal_href(href: Optional[str]) -> bool:
    """
    True for hrefs the router should handle itself.
    
    External URLs (any scheme such as http:, mailto:, tel:), protocol-relative
    URLs ("//host/...") and fragment-only links are left to the host.
    """
    if not href or not href.strip():
        return False
    
    href = href.strip()
    if href.startswith("#"):
        return False
    
    parts = urlsplit(href)
    return not parts.scheme and not parts.netloc


def should_intercept(click: LinkClick) -> bool:
    """Decide whether a click is taken over by the router."""
    if click.default_prevented:
        return False
    if click.button != PRIMARY_BUTTON:
        return False
    if click.has_modifier:
        return False
    return is_internal_href(click.href)


def resolve_href(href: str, current_path: str) -> str:
    """Resolve a relative href ("acme/edit") against the current path."""
    href = href.strip()
    if href.startswith("/"):
        return href
    return urljoin(current_path or "/", href)
