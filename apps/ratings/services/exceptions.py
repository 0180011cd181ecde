"""
Domain exceptions for the ratings app.

Every failure kind carries a stable machine-readable ``code``; the REST
layer turns the code into a status and message.
"""


class RatingsServiceError(Exception):
    """Base exception for all ratings service errors."""
    code = 'ratingsError'
    default_detail = 'Rating operation failed.'

    def __init__(self, detail=None):
        self.detail = detail if detail is not None else self.default_detail
        super().__init__(self.detail)


class RatingValidationError(RatingsServiceError):
    """Submission input is malformed or out of range; ``detail`` maps field -> messages."""
    code = 'validationErrors'
    default_detail = {}

    def __str__(self):
        return '; '.join(
            f"{field}: {' '.join(messages) if isinstance(messages, (list, tuple)) else messages}"
            for field, messages in self.detail.items()
        )


class MalformedIdError(RatingsServiceError):
    """Content id is not in the accepted identifier format."""
    code = 'objectId'
    default_detail = 'Content id is not a valid identifier.'


class ContentNotFoundError(RatingsServiceError):
    """Referenced content does not exist."""
    code = 'notFound'
    default_detail = 'Content not found.'


class AlreadyRatedError(RatingsServiceError):
    """User already rated this content."""
    code = 'alreadyRated'
    default_detail = 'You have already rated this content.'


class UnauthorizedRatingError(RatingsServiceError):
    """Submitted userId does not match the authenticated identity."""
    code = 'unauthorized'
    default_detail = 'You can only submit ratings as yourself.'


class RatingStorageError(RatingsServiceError):
    """Underlying persistence failed."""
    code = 'storageFailure'
    default_detail = 'Rating storage is unavailable.'
