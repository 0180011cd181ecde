from django.db import connection, DatabaseError
from django.http import JsonResponse


def health_check(request):
    """Liveness probe that also verifies the database answers."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        return JsonResponse({'status': 'unavailable'}, status=503)
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """JSON 404 in the same errors shape the API endpoints return."""
    return JsonResponse({
        'errors': {'notFound': 'Resource not found.'}
    }, status=404)


def error_500(request):
    """JSON 500 in the same errors shape the API endpoints return."""
    return JsonResponse({
        'errors': {'serverError': 'Internal server error.'}
    }, status=500)
