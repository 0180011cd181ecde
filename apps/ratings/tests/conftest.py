import pytest
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.contents.models import Content
from apps.ratings.services import submit_rating


def authenticated_client(user, header_type='Bearer'):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'{header_type} {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def rating_user(db):
    """Create and return the user who rated the seeded content."""
    return User.objects.create_user(
        email='rater@example.com',
        password='TestPass123!',
        display_name='First Rater',
    )


@pytest.fixture
def rating_other_user(db):
    """Create and return a user who has not rated anything yet."""
    return User.objects.create_user(
        email='another_rater@example.com',
        password='TestPass123!',
        display_name='Another Rater',
    )


@pytest.fixture
def rating_auth_client(rating_user):
    """Return API client authenticated as rating user."""
    return authenticated_client(rating_user)


@pytest.fixture
def rating_other_client(rating_other_user):
    """Return API client authenticated as the other user."""
    return authenticated_client(rating_other_user)


@pytest.fixture
def content(db):
    """Create and return a content item with no ratings."""
    return Content.objects.create(
        title='Superman',
        genre='Action',
        release_date=date(1978, 12, 21),
    )


@pytest.fixture
def another_content(db):
    """Create and return a second unrated content item."""
    return Content.objects.create(
        title='Superman II',
        genre='Action',
        release_date=date(1980, 12, 4),
    )


@pytest.fixture
def rated_content(content, rating_user):
    """Content with a single five star rating from rating_user."""
    submit_rating(content_id=content.id, user_id=rating_user.id, stars=5)
    return content


@pytest.fixture
def make_users(db):
    """Factory creating ``count`` users with distinct emails."""
    def _make(count, prefix='user'):
        return User.objects.bulk_create([
            User(email=f'{prefix}{i}@example.com')
            for i in range(count)
        ])
    return _make
