"""
Django admin registrations for donors, hospitals and blood requests.

Lets staff inspect records via ``/admin/``.  Status changes made here
bypass the lifecycle services, so no events are broadcast and request
mirrors are not updated; use the API for real moderation.
"""
from django.contrib import admin

from .models import BloodRequest, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('user_id', 'name', 'phone', 'user_role', 'blood_type', 'pin_code', 'status', 'is_request_active')
    list_filter = ('user_role', 'status', 'blood_type', 'is_request_active')
    search_fields = ('user_id', 'name', 'phone', 'pin_code')
    readonly_fields = ('is_request_active', 'blood_type_needed', 'request_pin_code', 'created_at', 'updated_at')


@admin.register(BloodRequest)
class BloodRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'requester_id', 'name', 'blood_type_needed', 'pin_code', 'status', 'created_at')
    list_filter = ('status', 'blood_type_needed')
    search_fields = ('requester_id', 'name', 'phone', 'pin_code')
    ordering = ('-created_at',)
