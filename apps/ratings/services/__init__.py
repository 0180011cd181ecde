"""
Ratings services - Business logic layer.

This package contains the rating aggregation engine:
- Rating ledger (append-only individual ratings, one per user per content)
- Aggregate maintainer (per-content star histogram and average)
"""

from . import rating_ledger

from .aggregate_maintainer import (
    submit_rating,
    fetch_aggregate,
    fold_rating,
    fold_pending_ratings,
    rebuild_aggregate,
)

from .exceptions import (
    RatingsServiceError,
    RatingValidationError,
    MalformedIdError,
    ContentNotFoundError,
    AlreadyRatedError,
    UnauthorizedRatingError,
    RatingStorageError,
)

__all__ = [
    # Ledger
    'rating_ledger',
    # Aggregate Maintainer
    'submit_rating',
    'fetch_aggregate',
    'fold_rating',
    'fold_pending_ratings',
    'rebuild_aggregate',
    # Exceptions
    'RatingsServiceError',
    'RatingValidationError',
    'MalformedIdError',
    'ContentNotFoundError',
    'AlreadyRatedError',
    'UnauthorizedRatingError',
    'RatingStorageError',
]
