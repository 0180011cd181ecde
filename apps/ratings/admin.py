from django.contrib import admin, messages
from .models import IndividualRating, AggregateRating
from .services import rebuild_aggregate, RatingsServiceError


@admin.register(IndividualRating)
class IndividualRatingAdmin(admin.ModelAdmin):
    """Read-only view of the rating ledger."""
    
    list_display = ['content', 'user', 'stars', 'is_aggregated', 'created_at']
    list_filter = ['stars', 'is_aggregated', 'created_at']
    search_fields = ['content__title', 'user__email']
    ordering = ['-created_at']
    list_select_related = ['content', 'user']
    
    # Ledger is append-only and written by the rating engine
    def has_add_permission(self, request):
        return False
    
    def has_change_permission(self, request, obj=None):
        return False
    
    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AggregateRating)
class AggregateRatingAdmin(admin.ModelAdmin):
    """Admin interface for per-content aggregates."""
    
    list_display = [
        'content',
        'average',
        'total_stars_count',
        'one_star_count',
        'two_stars_count',
        'three_stars_count',
        'four_stars_count',
        'five_stars_count',
        'updated_at',
    ]
    search_fields = ['content__title']
    ordering = ['-average', '-total_stars_count']
    list_select_related = ['content']
    readonly_fields = [field.name for field in AggregateRating._meta.fields]
    actions = ['rebuild_from_ledger']
    
    def has_add_permission(self, request):
        return False
    
    @admin.action(description='Rebuild selected aggregates from ledger')
    def rebuild_from_ledger(self, request, queryset):
        rebuilt = 0
        for content_id in list(queryset.values_list('content_id', flat=True)):
            try:
                rebuild_aggregate(content_id=content_id)
            except RatingsServiceError as e:
                self.message_user(request, f'Failed to rebuild {content_id}: {e}', level=messages.ERROR)
                continue
            rebuilt += 1
        self.message_user(request, f'Rebuilt {rebuilt} aggregate(s).')
