"""
Aggregate maintainer - keeps each content's star histogram and average
consistent with the rating ledger.

Concurrency model:
    Every write runs in one transaction that first locks the Content row
    (select_for_update), so load-increment-store on one content's aggregate
    is serialized while other content ids proceed independently. The ledger
    insert and the aggregate fold commit together or not at all.

    Folding is claimed per rating through the ``is_aggregated`` flag, so
    replaying a fold (repair tooling, retries) never counts a rating twice.
"""

import logging
from contextlib import contextmanager

from django.db import transaction, DatabaseError

from apps.contents.models import Content
from apps.contents.services import content_exists, is_valid_id
from ..models import AggregateRating, IndividualRating, MIN_STARS, MAX_STARS
from . import rating_ledger
from .exceptions import (
    RatingValidationError,
    MalformedIdError,
    ContentNotFoundError,
    AlreadyRatedError,
    RatingStorageError,
)

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(action, content_id):
    try:
        yield
    except DatabaseError as e:
        logger.exception("Storage failure during %s for content %s", action, content_id)
        raise RatingStorageError() from e


def _validate_stars(stars):
    if stars is None:
        raise RatingValidationError({'stars': ['This field is required.']})
    # bool is an int subclass but never a star value
    if isinstance(stars, bool) or not isinstance(stars, int):
        raise RatingValidationError({'stars': ['Stars must be a whole number.']})
    if not MIN_STARS <= stars <= MAX_STARS:
        raise RatingValidationError({'stars': [f'Stars must be between {MIN_STARS} and {MAX_STARS}.']})


def _ensure_content(content_id):
    # A malformed id cannot name stored content; report the format problem
    # rather than a plain miss.
    if not content_exists(content_id):
        if not is_valid_id(content_id):
            raise MalformedIdError()
        raise ContentNotFoundError()


def _lock_content(content_id):
    try:
        Content.objects.select_for_update().only('id').get(pk=content_id)
    except Content.DoesNotExist:
        raise ContentNotFoundError()


def _fold(rating):
    """Apply one rating to its aggregate. Caller holds the content lock."""
    claimed = (
        IndividualRating.objects
        .filter(pk=rating.pk, is_aggregated=False)
        .update(is_aggregated=True)
    )
    aggregate = AggregateRating.objects.filter(content_id=rating.content_id).first()
    if aggregate is None:
        aggregate = AggregateRating.empty(rating.content_id)

    if claimed:
        aggregate.add_stars(rating.stars)
        aggregate.save()
        rating.is_aggregated = True

    return aggregate, bool(claimed)


def submit_rating(*, content_id, user_id, stars: int) -> AggregateRating:
    """
    Record a user's rating and return the updated aggregate.

    Checks run before any write, first failure wins:
        1. stars is an integer in 1..5
        2. content exists (a malformed id fails as MalformedIdError)
        3. the user has not rated this content yet

    Args:
        content_id: UUID of content being rated
        user_id: UUID of the authenticated rating author
        stars: Star value (1-5)

    Returns:
        Saved AggregateRating reflecting this rating

    Raises:
        RatingValidationError: If stars is missing, not an integer or out of range
        MalformedIdError: If content_id is not a valid identifier
        ContentNotFoundError: If content doesn't exist
        AlreadyRatedError: If the user already rated this content
        RatingStorageError: If the database fails
    """
    _validate_stars(stars)

    with _storage_errors('submit', content_id):
        _ensure_content(content_id)

        if rating_ledger.exists(content_id=content_id, user_id=user_id):
            raise AlreadyRatedError()

        with transaction.atomic():
            _lock_content(content_id)
            rating = rating_ledger.record(
                content_id=content_id,
                user_id=user_id,
                stars=stars,
            )
            aggregate, _ = _fold(rating)

    logger.info(
        "Rating accepted: content=%s user=%s stars=%s total=%s average=%s",
        content_id, user_id, stars, aggregate.total_stars_count, aggregate.average,
    )
    return aggregate


def fetch_aggregate(*, content_id) -> AggregateRating:
    """
    Current aggregate for a content item.

    Existing content without ratings yields an unsaved zero-state aggregate
    (all counts 0, average 0.0); callers tell it apart by total_stars_count.

    Raises:
        MalformedIdError: If content_id is not a valid identifier
        ContentNotFoundError: If content doesn't exist
        RatingStorageError: If the database fails
    """
    with _storage_errors('fetch', content_id):
        _ensure_content(content_id)
        aggregate = AggregateRating.objects.filter(content_id=content_id).first()

    return aggregate or AggregateRating.empty(content_id)


def fold_rating(*, rating: IndividualRating) -> AggregateRating:
    """Fold a single recorded rating into its aggregate. Idempotent."""
    with _storage_errors('fold', rating.content_id):
        with transaction.atomic():
            _lock_content(rating.content_id)
            aggregate, _ = _fold(rating)
    return aggregate


def fold_pending_ratings(*, content_id=None) -> int:
    """
    Fold every rating the aggregates have not absorbed yet.

    Returns:
        Number of ratings folded by this call
    """
    folded = 0
    for rating in rating_ledger.find_pending(content_id=content_id):
        with _storage_errors('fold', rating.content_id):
            with transaction.atomic():
                _lock_content(rating.content_id)
                _, claimed = _fold(rating)
        folded += claimed

    if folded:
        logger.info("Folded %s pending rating(s)", folded)
    return folded


def rebuild_aggregate(*, content_id):
    """
    Recompute a content's aggregate from the full ledger.

    Repair path for aggregates that drifted from the ledger. Marks every
    rating of the content as folded.

    Returns:
        Saved AggregateRating, or None if the content has no ratings
        (any stale aggregate row is removed)

    Raises:
        MalformedIdError: If content_id is not a valid identifier
        ContentNotFoundError: If content doesn't exist
        RatingStorageError: If the database fails
    """
    with _storage_errors('rebuild', content_id):
        _ensure_content(content_id)

        with transaction.atomic():
            _lock_content(content_id)
            counts = rating_ledger.star_histogram(content_id=content_id)
            rating_ledger.find_pending(content_id=content_id).update(is_aggregated=True)

            if not counts:
                AggregateRating.objects.filter(content_id=content_id).delete()
                logger.info("Rebuilt aggregate for content %s: no ratings", content_id)
                return None

            aggregate = AggregateRating.objects.filter(content_id=content_id).first()
            if aggregate is None:
                aggregate = AggregateRating.empty(content_id)
            aggregate.set_counts(counts)
            aggregate.save()

    logger.info(
        "Rebuilt aggregate for content %s: total=%s average=%s",
        content_id, aggregate.total_stars_count, aggregate.average,
    )
    return aggregate
