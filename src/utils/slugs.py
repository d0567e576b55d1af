"""
Slug, identifier and display helpers for projects.
"""

import hashlib
import random
import re
import string
import time
from typing import Iterable, Optional

_SPECIAL_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")

FALLBACK_SLUG = "project"

PROJECT_COLORS = [
    "#DA1829", "#10b981", "#3b82f6", "#f59e0b",
    "#8b5cf6", "#ef4444", "#06b6d4", "#84cc16",
    "#f97316", "#ec4899", "#6366f1", "#14b8a6",
]


def generate_slug(text: str) -> str:
    """Build a URL-safe slug from a project name."""
    if not text:
        return ""
    
    slug = text.lower().strip()
    slug = _SPECIAL_CHARS.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    return _EDGE_HYPHENS.sub("", slug)


def is_slug_unique(
    slug: str,
    existing_projects: Iterable,
    exclude_id: Optional[str] = None,
) -> bool:
    """True if no project other than ``exclude_id`` already uses ``slug``."""
    for project in existing_projects:
        if project.slug == slug and project.id != exclude_id:
            return False
    return True


def generate_unique_slug(
    base_name: str,
    existing_projects: Iterable,
    exclude_id: Optional[str] = None,
) -> str:
    """
    Slugify ``base_name`` and append ``-1``, ``-2``... until it is unique.
    
    Names with nothing to slugify (no ASCII letters or digits) start from
    ``FALLBACK_SLUG``.
    
    Args:
        base_name: Project name to slugify
        existing_projects: Records with ``id`` and ``slug`` attributes
        exclude_id: Project allowed to keep its own slug (for renames)
    """
    existing = list(existing_projects)
    base = generate_slug(base_name) or FALLBACK_SLUG
    slug = base
    counter = 1
    
    while not is_slug_unique(slug, existing, exclude_id):
        slug = f"{base}-{counter}"
        counter += 1
    
    return slug


def generate_project_id() -> str:
    """Generate a project id like ``proj_1704067200000_k3j9x0a2b``."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"proj_{int(time.time() * 1000)}_{suffix}"


def project_color(project_name: str) -> str:
    """Pick a stable avatar colour from the palette by hashing the name."""
    digest = hashlib.md5((project_name or "").encode("utf-8")).hexdigest()
    return PROJECT_COLORS[int(digest[:8], 16) % len(PROJECT_COLORS)]


def project_initials(project_name: str) -> str:
    """Up to two upper-case initials from the project name."""
    if not project_name:
        return "P"
    
    words = project_name.split()
    return "".join(word[0] for word in words[:2]).upper()
