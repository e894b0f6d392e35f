"""
URL mappings for the front-desk API.

Paths mirror the ones the display and staff front-ends already call, so
trailing slashes are deliberately omitted.
"""
from django.urls import path, include

from .views import activity, alerts, departments, doctors, health, medicines, tokens


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Departments & doctors
    path('api/departments', departments.departments),
    path('api/doctors', doctors.doctors),
    path('api/doctors/<int:pk>/next-token', doctors.doctor_next_token),
    # Token queues
    path('api/tokens', tokens.tokens),
    path('api/tokens/active', tokens.active_tokens),
    path('api/tokens/department/<int:department_id>', tokens.department_tokens),
    path('api/tokens/ot/next', tokens.ot_next),
    path('api/tokens/ot/reset', tokens.ot_reset),
    # Pharmacy
    path('api/medicines', medicines.medicines),
    path('api/medicines/low-stock', medicines.low_stock),
    path('api/medicines/<int:pk>/update-stock', medicines.update_stock),
    # Emergency alerts
    path('api/emergency-alerts', alerts.emergency_alerts),
    path('api/emergency-alerts/<int:pk>/dismiss', alerts.dismiss_alert),
    # Activity
    path('api/activity-logs', activity.activity_logs),
]
