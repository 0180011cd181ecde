import pytest
import uuid
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.ratings.models import IndividualRating, AggregateRating


# =============================================================================
# Rating Detail Tests
# =============================================================================

@pytest.mark.django_db
class TestRatingDetail:
    """Tests for GET /api/v1/ratings/{content_id}/"""

    def test_get_rating(self, api_client, rated_content):
        """Public endpoint returns the aggregate."""
        url = reverse('ratings:rating-detail', kwargs={'content_id': rated_content.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['contentId'] == str(rated_content.id)
        assert response.data['average'] == 5

    def test_get_rating_counts(self, api_client, rated_content):
        url = reverse('ratings:rating-detail', kwargs={'content_id': rated_content.id})
        response = api_client.get(url)

        assert response.data['oneStarCount'] == 0
        assert response.data['twoStarsCount'] == 0
        assert response.data['threeStarsCount'] == 0
        assert response.data['fourStarsCount'] == 0
        assert response.data['fiveStarsCount'] == 1
        assert response.data['totalStarsCount'] == 1

    def test_get_rating_unrated_content(self, api_client, content):
        """Existing content without ratings is a zero state, not a 404."""
        url = reverse('ratings:rating-detail', kwargs={'content_id': content.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['totalStarsCount'] == 0
        assert response.data['average'] == 0.0

    def test_get_rating_nonexistent_content(self, api_client, rated_content):
        url = reverse('ratings:rating-detail', kwargs={'content_id': uuid.uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'notFound' in response.data['errors']

    def test_get_rating_invalid_id_format(self, api_client, db):
        url = reverse('ratings:rating-detail', kwargs={'content_id': '111'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'objectId' in response.data['errors']


# =============================================================================
# Rating Submit Tests
# =============================================================================

@pytest.mark.django_db
class TestRatingSubmit:
    """Tests for POST /api/v1/ratings/"""

    def _payload(self, content, user, stars=3):
        return {
            'contentId': str(content.id),
            'userId': str(user.id),
            'stars': stars,
        }

    def test_submit_rating(self, rating_other_client, rated_content, rating_other_user):
        url = reverse('ratings:rating-submit')
        response = rating_other_client.post(url, self._payload(rated_content, rating_other_user), format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['average'] == 4
        assert response.data['totalStarsCount'] == 2

    def test_submit_rating_counts(self, rating_other_client, rated_content, rating_other_user):
        url = reverse('ratings:rating-submit')
        response = rating_other_client.post(url, self._payload(rated_content, rating_other_user), format='json')

        assert response.data['oneStarCount'] == 0
        assert response.data['twoStarsCount'] == 0
        assert response.data['threeStarsCount'] == 1
        assert response.data['fourStarsCount'] == 0
        assert response.data['fiveStarsCount'] == 1

    def test_first_rating_of_content(self, rating_auth_client, content, rating_user):
        url = reverse('ratings:rating-submit')
        response = rating_auth_client.post(url, self._payload(content, rating_user), format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['average'] == 3
        assert response.data['contentId'] == str(content.id)
        assert AggregateRating.objects.filter(content=content).exists()

    def test_submit_via_query_string(self, rating_other_client, rated_content, rating_other_user):
        url = reverse('ratings:rating-submit')
        query = f'?contentId={rated_content.id}&userId={rating_other_user.id}&stars=3'
        response = rating_other_client.post(url + query)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['average'] == 4

    def test_jwt_header_type_accepted(self, rated_content, rating_other_user):
        client = APIClient()
        token = RefreshToken.for_user(rating_other_user).access_token
        client.credentials(HTTP_AUTHORIZATION=f'JWT {token}')

        url = reverse('ratings:rating-submit')
        response = client.post(url, self._payload(rated_content, rating_other_user), format='json')

        assert response.status_code == status.HTTP_200_OK

    def test_duplicate_rating(self, rating_auth_client, rated_content, rating_user):
        url = reverse('ratings:rating-submit')
        response = rating_auth_client.post(url, self._payload(rated_content, rating_user), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert 'alreadyRated' in response.data['errors']
        aggregate = AggregateRating.objects.get(content=rated_content)
        assert aggregate.total_stars_count == 1
        assert aggregate.average == 5

    def test_mismatched_user(self, rating_auth_client, rated_content, rating_other_user):
        """Token user and userId must match."""
        url = reverse('ratings:rating-submit')
        response = rating_auth_client.post(url, self._payload(rated_content, rating_other_user), format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'unauthorized' in response.data['errors']
        assert not IndividualRating.objects.filter(user=rating_other_user).exists()

    def test_missing_authorization(self, api_client, rated_content, rating_other_user):
        url = reverse('ratings:rating-submit')
        response = api_client.post(url, self._payload(rated_content, rating_other_user), format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_content_id_format(self, rating_other_client, rated_content, rating_other_user):
        url = reverse('ratings:rating-submit')
        data = self._payload(rated_content, rating_other_user)
        data['contentId'] = '111'
        response = rating_other_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'objectId' in response.data['errors']

    def test_nonexistent_content(self, rating_auth_client, rated_content, rating_user):
        url = reverse('ratings:rating-submit')
        data = self._payload(rated_content, rating_user)
        data['contentId'] = str(uuid.uuid4())
        response = rating_auth_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'notFound' in response.data['errors']

    def test_missing_stars(self, rating_other_client, rated_content, rating_other_user):
        url = reverse('ratings:rating-submit')
        data = self._payload(rated_content, rating_other_user)
        del data['stars']
        response = rating_other_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'stars' in response.data['errors']['validationErrors']

    @pytest.mark.parametrize('stars', [0, 6, 'five', 2.5])
    def test_stars_out_of_range(self, rating_other_client, rated_content, rating_other_user, stars):
        url = reverse('ratings:rating-submit')
        data = self._payload(rated_content, rating_other_user, stars=stars)
        response = rating_other_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'stars' in response.data['errors']['validationErrors']
        assert AggregateRating.objects.get(content=rated_content).total_stars_count == 1

    def test_missing_content_id(self, rating_other_client, rating_other_user):
        url = reverse('ratings:rating-submit')
        response = rating_other_client.post(url, {'userId': str(rating_other_user.id), 'stars': 3}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'contentId' in response.data['errors']['validationErrors']

    def test_end_to_end_scenario(self, rating_auth_client, rating_other_client, rated_content,
                                 rating_user, rating_other_user, api_client):
        url = reverse('ratings:rating-submit')
        detail_url = reverse('ratings:rating-detail', kwargs={'content_id': rated_content.id})

        response = rating_other_client.post(url, self._payload(rated_content, rating_other_user, 3), format='json')
        assert response.status_code == status.HTTP_200_OK

        response = rating_auth_client.post(url, self._payload(rated_content, rating_user, 1), format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

        response = api_client.get(detail_url)
        assert response.data['average'] == 4
        assert response.data['totalStarsCount'] == 2
        assert response.data['threeStarsCount'] == 1
        assert response.data['fiveStarsCount'] == 1
