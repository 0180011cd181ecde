# ==========================================
# apps/contents/models.py
# ==========================================

from django.db import models
import uuid


class Content(models.Model):
    """A rateable content item (movie, show, ...)."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True)
    genre = models.CharField(max_length=100, blank=True)
    release_date = models.DateField(null=True, blank=True)
    thumbnail = models.URLField(blank=True, max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'contents'
        ordering = ['-created_at']
    
    def __str__(self):
        return self.title
