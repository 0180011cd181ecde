import pytest
import uuid
from io import StringIO
from django.core.management import call_command
from django.core.management.base import CommandError
from apps.ratings.models import IndividualRating, AggregateRating
from apps.ratings.services import rating_ledger


def run_command(*args):
    out = StringIO()
    call_command('rebuild_ratings', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestRebuildRatingsCommand:

    def test_clean_ledger(self, rated_content):
        output = run_command()

        assert 'All aggregates match the ledger.' in output

    def test_rebuilds_tampered_aggregate(self, rated_content):
        AggregateRating.objects.filter(content=rated_content).update(
            five_stars_count=3, total_stars_count=3, average=1.0,
        )

        output = run_command()

        assert 'Rebuilt 1 aggregate(s).' in output
        aggregate = AggregateRating.objects.get(content=rated_content)
        assert aggregate.five_stars_count == 1
        assert aggregate.total_stars_count == 1
        assert aggregate.average == 5

    def test_detects_wrong_average_only(self, rated_content):
        AggregateRating.objects.filter(content=rated_content).update(average=2.0)

        output = run_command()

        assert 'Rebuilt 1 aggregate(s).' in output
        assert AggregateRating.objects.get(content=rated_content).average == 5

    def test_dry_run_makes_no_changes(self, rated_content):
        AggregateRating.objects.filter(content=rated_content).update(total_stars_count=9)

        output = run_command('--dry-run')

        assert '--dry-run mode' in output
        assert AggregateRating.objects.get(content=rated_content).total_stars_count == 9

    def test_restricted_to_one_content(self, rated_content, another_content, rating_user):
        IndividualRating.objects.create(content=another_content, user=rating_user, stars=2)
        AggregateRating.objects.filter(content=rated_content).update(total_stars_count=9)

        output = run_command('--content', str(another_content.id))

        assert 'Rebuilt 1 aggregate(s).' in output
        assert AggregateRating.objects.get(content=another_content).average == 2
        assert AggregateRating.objects.get(content=rated_content).total_stars_count == 9

    def test_removes_orphan_aggregate(self, content):
        AggregateRating.objects.create(
            content=content, three_stars_count=1, total_stars_count=1, average=3.0,
        )

        output = run_command()

        assert 'Rebuilt 1 aggregate(s).' in output
        assert not AggregateRating.objects.filter(content=content).exists()

    def test_invalid_content_id(self, db):
        with pytest.raises(CommandError):
            run_command('--content', '111')

    def test_unknown_content_id(self, db):
        with pytest.raises(CommandError):
            run_command('--content', str(uuid.uuid4()))


@pytest.mark.django_db
class TestRebuildRatingsPending:

    def test_nothing_pending(self, rated_content):
        output = run_command('--pending')

        assert 'No pending ratings. All good!' in output

    def test_folds_pending(self, content, rating_user, rating_other_user):
        IndividualRating.objects.create(content=content, user=rating_user, stars=4)
        IndividualRating.objects.create(content=content, user=rating_other_user, stars=2)

        output = run_command('--pending')

        assert 'Found 2 pending rating(s).' in output
        assert 'Folded 2 rating(s).' in output
        aggregate = AggregateRating.objects.get(content=content)
        assert aggregate.total_stars_count == 2
        assert aggregate.average == 3
        assert not rating_ledger.find_pending(content_id=content.id).exists()

    def test_pending_dry_run(self, content, rating_user):
        IndividualRating.objects.create(content=content, user=rating_user, stars=4)

        output = run_command('--pending', '--dry-run')

        assert 'Found 1 pending rating(s).' in output
        assert not AggregateRating.objects.filter(content=content).exists()
        assert rating_ledger.find_pending(content_id=content.id).count() == 1
