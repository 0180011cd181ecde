import pytest
import uuid

from apps.contents.services import is_valid_id, content_exists, get_content
from apps.contents.models import Content


class TestIsValidId:
    """Identifier format checks need no database."""

    def test_uuid_string_is_valid(self):
        assert is_valid_id(str(uuid.uuid4())) is True

    def test_uuid_instance_is_valid(self):
        assert is_valid_id(uuid.uuid4()) is True

    @pytest.mark.parametrize('value', ['111', '', 'not-a-uuid', None, 111])
    def test_malformed_ids_are_rejected(self, value):
        assert is_valid_id(value) is False


@pytest.mark.django_db
class TestContentExists:

    def test_existing_content(self, content):
        assert content_exists(content.id) is True
        assert content_exists(str(content.id)) is True

    def test_unknown_content(self, content):
        assert content_exists(str(uuid.uuid4())) is False

    def test_malformed_id_does_not_hit_database(self, django_assert_num_queries):
        with django_assert_num_queries(0):
            assert content_exists('111') is False

    def test_get_content(self, content):
        assert get_content(content_id=content.id) == content

    def test_get_content_missing(self, db):
        with pytest.raises(Content.DoesNotExist):
            get_content(content_id=uuid.uuid4())
