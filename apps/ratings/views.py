from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from .serializers import RatingSubmitSerializer, AggregateRatingSerializer
from .services import submit_rating, fetch_aggregate
from .services.exceptions import (
    RatingsServiceError,
    RatingValidationError,
    MalformedIdError,
    ContentNotFoundError,
    AlreadyRatedError,
    UnauthorizedRatingError,
    RatingStorageError,
)


ERROR_STATUS = {
    RatingValidationError: status.HTTP_400_BAD_REQUEST,
    MalformedIdError: status.HTTP_400_BAD_REQUEST,
    ContentNotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyRatedError: status.HTTP_409_CONFLICT,
    UnauthorizedRatingError: status.HTTP_401_UNAUTHORIZED,
    RatingStorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    errors = drf_serializers.DictField()


def _error_response(error):
    return Response(
        {'errors': {error.code: error.detail}},
        status=ERROR_STATUS.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def _check_rating_author(user, user_id):
    """The submitted userId must be the caller's own identity."""
    if user.pk != user_id:
        raise UnauthorizedRatingError()


@extend_schema(
    request=RatingSubmitSerializer,
    responses={
        200: AggregateRatingSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
        503: ErrorResponseSerializer,
    },
    description="Rate a content item 1-5 stars (once per user) and receive the updated aggregate.",
    tags=['ratings'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit(request):
    """Submit a rating. Accepts a JSON body or query string parameters."""
    payload = request.data or request.query_params
    serializer = RatingSubmitSerializer(data=payload)

    if not serializer.is_valid():
        return _error_response(RatingValidationError(serializer.errors))

    data = serializer.validated_data

    try:
        _check_rating_author(request.user, data['userId'])
        aggregate = submit_rating(
            content_id=data['contentId'],
            user_id=data['userId'],
            stars=data.get('stars'),
        )
    except RatingsServiceError as e:
        return _error_response(e)

    return Response(AggregateRatingSerializer(aggregate).data)


@extend_schema(
    responses={
        200: AggregateRatingSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        503: ErrorResponseSerializer,
    },
    description="Current rating aggregate for a content item. Unrated content returns zero counts.",
    tags=['ratings'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def rating_detail(request, content_id):
    """Get the rating aggregate for a content item."""
    try:
        aggregate = fetch_aggregate(content_id=content_id)
    except RatingsServiceError as e:
        return _error_response(e)

    return Response(AggregateRatingSerializer(aggregate).data)
