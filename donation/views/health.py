from django.conf import settings
from django.db import DatabaseError, connections
from django.http import JsonResponse


def healthz(request):
    """Liveness probe: database round-trip plus the configured broadcast backend."""
    backend = settings.CHANNEL_LAYERS.get('default', {}).get('BACKEND', '')
    body = {'channelLayer': backend.rsplit('.', 1)[-1] or None, 'broadcastGroup': settings.BROADCAST_GROUP}
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError as e:
        return JsonResponse({'ok': False, 'db': False, 'error': str(e), **body}, status=503)
    return JsonResponse({'ok': True, 'db': bool(row and row[0] == 1), **body})
