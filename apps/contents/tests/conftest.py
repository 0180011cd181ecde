import pytest
from datetime import date
from apps.contents.models import Content


@pytest.fixture
def content(db):
    """Create and return a test content item."""
    return Content.objects.create(
        title='Superman',
        genre='Action',
        release_date=date(1978, 12, 21),
    )
