"""
Management command to repair rating aggregates from the ledger.

Recomputes each content's star histogram and average from its individual
ratings, or with --pending only folds ratings the aggregates have not
absorbed yet.

Usage:
    python manage.py rebuild_ratings
    python manage.py rebuild_ratings --content <uuid> --dry-run
    python manage.py rebuild_ratings --pending
"""

from django.core.management.base import BaseCommand, CommandError

from apps.contents.models import Content
from apps.contents.services import get_content, is_valid_id
from apps.ratings.models import AggregateRating
from apps.ratings.services import (
    rating_ledger,
    rebuild_aggregate,
    fold_pending_ratings,
    RatingsServiceError,
)


class Command(BaseCommand):
    help = 'Rebuild rating aggregates from individual ratings'

    def add_arguments(self, parser):
        parser.add_argument(
            '--content',
            dest='content_id',
            help='Only repair this content id',
        )
        parser.add_argument(
            '--pending',
            action='store_true',
            help='Only fold ratings not yet counted in their aggregate',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show stale aggregates without making changes',
        )

    def handle(self, *args, **options):
        content_id = options['content_id']
        dry_run = options['dry_run']

        if content_id is not None:
            if not is_valid_id(content_id):
                raise CommandError(f'"{content_id}" is not a valid content id')
            try:
                get_content(content_id=content_id)
            except Content.DoesNotExist:
                raise CommandError(f'Content {content_id} does not exist')

        if options['pending']:
            self._fold_pending(content_id, dry_run)
        else:
            self._rebuild(content_id, dry_run)

    def _fold_pending(self, content_id, dry_run):
        pending = rating_ledger.find_pending(content_id=content_id).count()

        if pending == 0:
            self.stdout.write(self.style.SUCCESS('No pending ratings. All good!'))
            return

        self.stdout.write(f'Found {pending} pending rating(s).')

        if dry_run:
            self.stdout.write(self.style.WARNING('--dry-run mode: No changes made.'))
            return

        try:
            folded = fold_pending_ratings(content_id=content_id)
        except RatingsServiceError as e:
            raise CommandError(f'Folding failed: {e}')

        self.stdout.write(self.style.SUCCESS(f'Folded {folded} rating(s).'))

    def _rebuild(self, content_id, dry_run):
        if content_id is not None:
            content_ids = [content_id]
        else:
            # Content with ratings, plus content holding an aggregate with no ratings left
            content_ids = sorted(
                set(Content.objects.filter(ratings__isnull=False).values_list('id', flat=True))
                | set(AggregateRating.objects.values_list('content_id', flat=True)),
                key=str,
            )

        stale = []
        for cid in content_ids:
            expected = AggregateRating.empty(cid)
            expected.set_counts(rating_ledger.star_histogram(content_id=cid))
            aggregate = AggregateRating.objects.filter(content_id=cid).first()
            if aggregate is None and not expected.total_stars_count:
                continue
            if aggregate is not None and self._snapshot(aggregate) == self._snapshot(expected):
                continue
            stale.append(cid)
            current = self._snapshot(aggregate) if aggregate is not None else 'missing'
            self.stdout.write(f'  - {cid}: aggregate {current} != ledger {self._snapshot(expected)}')

        if not stale:
            self.stdout.write(self.style.SUCCESS('All aggregates match the ledger.'))
            return

        if dry_run:
            self.stdout.write(
                self.style.WARNING(f'--dry-run mode: {len(stale)} stale aggregate(s), no changes made.')
            )
            return

        for cid in stale:
            try:
                rebuild_aggregate(content_id=cid)
            except RatingsServiceError as e:
                raise CommandError(f'Rebuild of {cid} failed: {e}')

        self.stdout.write(self.style.SUCCESS(f'Rebuilt {len(stale)} aggregate(s).'))

    @staticmethod
    def _snapshot(aggregate):
        return (aggregate.star_counts, aggregate.total_stars_count, aggregate.average)
