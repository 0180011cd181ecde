# ==========================================
# apps/ratings/models.py
# ==========================================

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid

MIN_STARS = 1
MAX_STARS = 5

# Star value -> AggregateRating counter field
STAR_COUNT_FIELDS = {
    1: 'one_star_count',
    2: 'two_stars_count',
    3: 'three_stars_count',
    4: 'four_stars_count',
    5: 'five_stars_count',
}


class IndividualRating(models.Model):
    """One user's star rating for one content item. Append-only."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    content = models.ForeignKey('contents.Content', on_delete=models.CASCADE, related_name='ratings')
    user = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='ratings')
    stars = models.PositiveSmallIntegerField(validators=[MinValueValidator(MIN_STARS), MaxValueValidator(MAX_STARS)])
    is_aggregated = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'individual_ratings'
        unique_together = [['content', 'user']]
        indexes = [
            models.Index(fields=['content', 'is_aggregated'], name='ratings_content_folded_idx'),
        ]
        ordering = ['created_at']
    
    def __str__(self):
        return f"{self.user_id} -> {self.content_id} ({self.stars}★)"


class AggregateRating(models.Model):
    """
    Star histogram and mean for a content item.

    A row exists only once the content has at least one rating. The average
    is always recomputed from the counters, never adjusted incrementally.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    content = models.OneToOneField('contents.Content', on_delete=models.CASCADE, related_name='aggregate_rating')
    one_star_count = models.PositiveIntegerField(default=0)
    two_stars_count = models.PositiveIntegerField(default=0)
    three_stars_count = models.PositiveIntegerField(default=0)
    four_stars_count = models.PositiveIntegerField(default=0)
    five_stars_count = models.PositiveIntegerField(default=0)
    total_stars_count = models.PositiveIntegerField(default=0)
    average = models.FloatField(default=0.0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'aggregate_ratings'
        indexes = [
            models.Index(fields=['average'], name='aggregate_average_idx'),
        ]
    
    def __str__(self):
        return f"{self.content_id}: {self.average} ({self.total_stars_count})"
    
    @classmethod
    def empty(cls, content_id):
        """Unsaved zero-state aggregate for content that has no ratings yet."""
        return cls(content_id=content_id)
    
    @property
    def star_counts(self):
        return {stars: getattr(self, field) for stars, field in STAR_COUNT_FIELDS.items()}
    
    def add_stars(self, stars):
        field = STAR_COUNT_FIELDS[stars]
        setattr(self, field, getattr(self, field) + 1)
        self.recompute()
    
    def set_counts(self, counts):
        for stars, field in STAR_COUNT_FIELDS.items():
            setattr(self, field, counts.get(stars, 0))
        self.recompute()
    
    def recompute(self):
        counts = self.star_counts
        total = sum(counts.values())
        self.total_stars_count = total
        if not total:
            self.average = 0.0
            return
        average = sum(stars * count for stars, count in counts.items()) / total
        precision = settings.RATINGS_AVERAGE_PRECISION
        if precision is not None:
            average = round(average, precision)
        self.average = average
