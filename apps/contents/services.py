"""
Content lookups used by the rating engine.

The rating engine never reads content metadata; it only needs to know
whether an identifier is well-formed and whether it names stored content.
"""

import uuid

from .models import Content


def is_valid_id(content_id) -> bool:
    """True iff ``content_id`` is in the accepted identifier format (UUID)."""
    if isinstance(content_id, uuid.UUID):
        return True
    if not isinstance(content_id, str):
        return False
    try:
        uuid.UUID(content_id)
    except ValueError:
        return False
    return True


def content_exists(content_id) -> bool:
    """True iff ``content_id`` is well-formed and references stored content."""
    if not is_valid_id(content_id):
        return False
    return Content.objects.filter(pk=content_id).exists()


def get_content(*, content_id) -> Content:
    """
    Fetch a content item.

    Raises:
        Content.DoesNotExist: If no content has this id
    """
    return Content.objects.get(pk=content_id)
