"""
Database models for the blood-donation backend.

Two collections make up the whole system: :class:`User` (donors and
hospitals) and :class:`BloodRequest` (requests for blood filed by
hospitals).  Requests reference their hospital by ``userId`` string and
carry a snapshot of the hospital's details taken at creation time.
"""
from __future__ import annotations

import secrets

from django.db import models


def generate_user_id() -> str:
    """Short url-safe identifier for callers that do not supply one."""
    return secrets.token_urlsafe(6)


class User(models.Model):
    """A registered donor or hospital.

    ``status`` is changed only by admin verification.  The request mirror
    fields (``is_request_active``, ``blood_type_needed``,
    ``request_pin_code``) are written only by request approval/denial.
    """
    ROLE_DONOR = 'Donor'
    ROLE_HOSPITAL = 'Hospital'
    ROLE_CHOICES = [
        (ROLE_DONOR, 'Donor'),
        (ROLE_HOSPITAL, 'Hospital'),
    ]

    STATUS_PENDING = 'PENDING_VERIFICATION'
    STATUS_VERIFIED = 'VERIFIED'
    STATUS_DENIED = 'DENIED'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending verification'),
        (STATUS_VERIFIED, 'Verified'),
        (STATUS_DENIED, 'Denied'),
    ]

    user_id = models.CharField(max_length=64, unique=True, default=generate_user_id)
    # Uniqueness is checked before insert, not by a constraint.
    phone = models.CharField(max_length=32, db_index=True)
    name = models.CharField(max_length=255, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    age = models.PositiveIntegerField(null=True, blank=True)
    weight = models.FloatField(null=True, blank=True)
    user_role = models.CharField(max_length=10, choices=ROLE_CHOICES, db_index=True)
    blood_type = models.CharField(max_length=5, blank=True, db_index=True)
    pin_code = models.CharField(max_length=12, blank=True, db_index=True)
    status = models.CharField(max_length=24, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    is_request_active = models.BooleanField(default=False)
    blood_type_needed = models.CharField(max_length=5, null=True, blank=True)
    request_pin_code = models.CharField(max_length=12, null=True, blank=True)

    # Epoch milliseconds as sent by the mobile client.
    last_donation_time = models.BigIntegerField(null=True, blank=True)
    blood_report_link = models.CharField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self) -> str:
        return f"{self.name or self.phone} ({self.user_role}, {self.user_id})"

    @property
    def is_hospital(self) -> bool:
        return self.user_role == self.ROLE_HOSPITAL

    def clear_request_mirror(self) -> None:
        self.is_request_active = False
        self.blood_type_needed = None
        self.request_pin_code = None

    def mirror_request(self, req: 'BloodRequest') -> None:
        self.is_request_active = True
        self.blood_type_needed = req.blood_type_needed
        self.request_pin_code = req.pin_code


class BloodRequest(models.Model):
    """A hospital's request for blood.

    Created ``PENDING`` and resolved exactly once to ``APPROVED`` or
    ``DENIED``.  The name/phone/role/pin code fields are a snapshot of the
    payload at creation time and are never re-synced with the user.
    """
    STATUS_PENDING = 'PENDING'
    STATUS_APPROVED = 'APPROVED'
    STATUS_DENIED = 'DENIED'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_DENIED, 'Denied'),
    ]

    requester_id = models.CharField(max_length=64, db_index=True)
    name = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    user_role = models.CharField(max_length=10, blank=True)
    pin_code = models.CharField(max_length=12, blank=True, db_index=True)
    blood_type_needed = models.CharField(max_length=5, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['requester_id', 'status'], name='request_requester_status_idx'),
        ]

    def __str__(self) -> str:
        return f"#{self.pk} {self.blood_type_needed} @ {self.pin_code} ({self.status})"

    @property
    def is_resolved(self) -> bool:
        return self.status != self.STATUS_PENDING
