"""Rating ledger - durable, append-only store of individual ratings."""

import logging

from django.db import transaction, IntegrityError
from django.db.models import Count, QuerySet

from ..models import IndividualRating
from .exceptions import AlreadyRatedError

logger = logging.getLogger(__name__)


def exists(*, content_id, user_id) -> bool:
    """Return True if the user already rated this content."""
    return IndividualRating.objects.filter(content_id=content_id, user_id=user_id).exists()


def record(*, content_id, user_id, stars: int) -> IndividualRating:
    """
    Insert a new rating.

    The (content, user) unique constraint is the uniqueness gate, so two
    racing inserts for the same pair can never both succeed.

    Args:
        content_id: UUID of rated content
        user_id: UUID of rating author
        stars: Star value, already validated by the caller

    Returns:
        Created IndividualRating (not yet folded into the aggregate)

    Raises:
        AlreadyRatedError: If the pair already has a rating
    """
    try:
        with transaction.atomic():
            return IndividualRating.objects.create(
                content_id=content_id,
                user_id=user_id,
                stars=stars,
            )
    except IntegrityError:
        logger.warning("Duplicate rating rejected by constraint: content=%s user=%s", content_id, user_id)
        raise AlreadyRatedError()


def find_by_content(*, content_id) -> QuerySet:
    """All ratings recorded for a content item, oldest first."""
    return IndividualRating.objects.filter(content_id=content_id).order_by('created_at')


def find_pending(*, content_id=None) -> QuerySet:
    """Ratings not yet folded into their aggregate."""
    queryset = IndividualRating.objects.filter(is_aggregated=False)
    if content_id is not None:
        queryset = queryset.filter(content_id=content_id)
    return queryset.order_by('created_at')


def star_histogram(*, content_id) -> dict:
    """Map of star value -> number of recorded ratings for the content."""
    rows = (
        IndividualRating.objects
        .filter(content_id=content_id)
        .values_list('stars')
        .annotate(count=Count('id'))
        .order_by()
    )
    return {stars: count for stars, count in rows}
