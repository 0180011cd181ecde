from rest_framework import serializers
from .models import AggregateRating


class RatingSubmitSerializer(serializers.Serializer):
    """
    Input for a rating submission.

    Only shape is checked here. Star range and content id format belong to
    the rating engine so its failure kinds stay authoritative.
    """
    
    contentId = serializers.CharField(help_text="UUID of the content being rated")
    userId = serializers.UUIDField(help_text="UUID of the authenticated rating author")
    stars = serializers.IntegerField(required=False, allow_null=True, help_text="Star value 1-5")


class AggregateRatingSerializer(serializers.ModelSerializer):
    """Public view of a content's rating aggregate."""
    
    contentId = serializers.UUIDField(source='content_id', read_only=True)
    totalStarsCount = serializers.IntegerField(source='total_stars_count', read_only=True)
    oneStarCount = serializers.IntegerField(source='one_star_count', read_only=True)
    twoStarsCount = serializers.IntegerField(source='two_stars_count', read_only=True)
    threeStarsCount = serializers.IntegerField(source='three_stars_count', read_only=True)
    fourStarsCount = serializers.IntegerField(source='four_stars_count', read_only=True)
    fiveStarsCount = serializers.IntegerField(source='five_stars_count', read_only=True)
    
    class Meta:
        model = AggregateRating
        fields = [
            'contentId',
            'average',
            'totalStarsCount',
            'oneStarCount',
            'twoStarsCount',
            'threeStarsCount',
            'fourStarsCount',
            'fiveStarsCount',
        ]
        read_only_fields = fields
