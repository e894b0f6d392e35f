from django.http import JsonResponse

from ..realtime.hub import hub
from ..store import get_store


def healthz(request):
    try:
        counts = get_store().counts()
    except Exception as e:
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
    return JsonResponse({'ok': True, 'store': counts, 'displays': hub.client_count})
