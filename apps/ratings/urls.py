from django.urls import path
from . import views

app_name = 'ratings'

urlpatterns = [
    # POST   /api/v1/ratings/               - Submit rating
    # GET    /api/v1/ratings/{content_id}/  - Get content aggregate
    path('', views.submit, name='rating-submit'),
    path('<str:content_id>/', views.rating_detail, name='rating-detail'),
]
