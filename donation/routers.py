"""
URL mappings for the blood-donation API.

Paths mirror the mobile client's endpoint table; trailing slashes are
deliberately omitted.
"""
from django.urls import path, include

from .views import health
from .views.admin import approve_user_view, pending_users_view, resolve_request_view, user_status_view
from .views.requests import create_request_view, list_requests_view, sync_storage_view
from .views.users import donors_view, login_view, register_view

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Registration / login
    path('api/auth/register', register_view, name='register'),
    path('api/auth/login', login_view, name='login'),
    # Donor discovery
    path('api/donors', donors_view, name='donors'),
    # Requests
    path('api/request', create_request_view, name='create_request'),
    path('api/requests', list_requests_view, name='list_requests'),
    # Full snapshot for client resync
    path('api/sync-storage', sync_storage_view, name='sync_storage'),
    # Admin (shared secret)
    path('api/admin/pending-users', pending_users_view, name='admin_pending_users'),
    path('api/admin/users/<str:user_id>/status', user_status_view, name='admin_user_status'),
    path('api/admin/approve-user/<str:user_id>', approve_user_view, name='admin_approve_user'),
    path('api/admin/approve-request/<int:request_id>', resolve_request_view, name='admin_resolve_request'),
]
