from django.contrib import admin
from .models import Content


@admin.register(Content)
class ContentAdmin(admin.ModelAdmin):
    """Admin interface for rateable content."""
    
    list_display = ['title', 'genre', 'release_date', 'average', 'total_stars', 'created_at']
    list_filter = ['genre', 'release_date']
    search_fields = ['title', 'description']
    ordering = ['-created_at']
    readonly_fields = ['id', 'created_at', 'updated_at']
    
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('aggregate_rating')
    
    def average(self, obj):
        aggregate = getattr(obj, 'aggregate_rating', None)
        return aggregate.average if aggregate else '-'
    average.short_description = 'Average'
    
    def total_stars(self, obj):
        aggregate = getattr(obj, 'aggregate_rating', None)
        return aggregate.total_stars_count if aggregate else 0
    total_stars.short_description = 'Ratings'
