"""
Integration tests for the blood-donation API.

These exercise the full donor/hospital lifecycle over HTTP: registration,
admin verification, donor discovery, request filing and resolution, and
the request mirror written back onto the hospital's user record.

To run the tests:

```
pytest -q donation/tests
```
"""
from unittest import mock

from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from ..models import BloodRequest, User
from .conftest import ADMIN_SECRET


@mock.patch('donation.services.events.send_now', return_value=True)
class BloodLinkAPITests(APITestCase):
    def setUp(self) -> None:
        self.client = APIClient()
        self.admin = APIClient()
        self.admin.credentials(HTTP_X_ADMIN_SECRET=ADMIN_SECRET)
        self.hospital = User.objects.create(
            user_id="H1",
            phone="9000000001",
            name="City General",
            user_role=User.ROLE_HOSPITAL,
            pin_code="500001",
            status=User.STATUS_VERIFIED,
        )

    def admin_settings(self):
        return self.settings(ADMIN_SECRET=ADMIN_SECRET)

    def file_request(self, blood_type="O+", pin_code="500001", requester_id="H1"):
        return self.client.post(
            "/api/request",
            {
                "requesterId": requester_id,
                "name": "City General",
                "phone": "9000000001",
                "userRole": "Hospital",
                "pinCode": pin_code,
                "bloodTypeNeeded": blood_type,
            },
            format="json",
        )

    def test_donor_becomes_discoverable_only_after_verification(self, send_now):
        """Registered donors are hidden from discovery until an admin approves them."""
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                "/api/auth/register",
                {"phone": "111", "pinCode": "500001", "bloodType": "O+", "userRole": "Donor", "name": "Asha"},
                format="json",
            )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        donor = response.data["user"]
        self.assertEqual(donor["status"], "PENDING_VERIFICATION")
        self.assertTrue(donor["userId"])
        send_now.assert_called_once()
        self.assertEqual(send_now.call_args[0][0], "userRegistered")
        self.assertEqual(send_now.call_args[0][1]["userId"], donor["userId"])

        listed = self.client.get("/api/donors", {"pin": "500001", "bloodType": "O+"})
        self.assertEqual(listed.status_code, status.HTTP_200_OK)
        self.assertEqual(listed.data["donors"], [])

        with self.admin_settings():
            approved = self.admin.put(f"/api/admin/approve-user/{donor['userId']}", format="json")
        self.assertEqual(approved.status_code, status.HTTP_200_OK)
        self.assertEqual(approved.data["user"]["status"], "VERIFIED")

        listed = self.client.get("/api/donors", {"pin": "500001", "bloodType": "O+"})
        self.assertEqual([d["userId"] for d in listed.data["donors"]], [donor["userId"]])

    def test_register_duplicate_phone_is_rejected(self, send_now):
        payload = {"phone": "9000000001", "userRole": "Donor"}
        response = self.client.post("/api/auth/register", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"]["code"], "duplicate_phone")
        self.assertEqual(User.objects.filter(phone="9000000001").count(), 1)

    def test_register_ignores_client_supplied_status(self, send_now):
        response = self.client.post(
            "/api/auth/register",
            {"phone": "222", "userRole": "Donor", "status": "VERIFIED", "isRequestActive": True},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        user = User.objects.get(phone="222")
        self.assertEqual(user.status, User.STATUS_PENDING)
        self.assertFalse(user.is_request_active)

    def test_login_by_phone(self, send_now):
        response = self.client.post("/api/auth/login", {"phone": "9000000001"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["userId"], "H1")

        missing = self.client.post("/api/auth/login", {"phone": "0000"}, format="json")
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data["ok"], False)
        self.assertEqual(missing.data["error"]["code"], "not_found")

    def test_donors_requires_pin(self, send_now):
        response = self.client.get("/api/donors")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "invalid_input")

    def test_request_approve_then_deny_new_request(self, send_now):
        """Approval mirrors the request onto the hospital; denying a newer request clears it."""
        created = self.file_request()
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        self.assertEqual(created.data["request"]["status"], "PENDING")
        self.hospital.refresh_from_db()
        self.assertFalse(self.hospital.is_request_active)

        with self.admin_settings():
            approved = self.admin.put(
                f"/api/admin/approve-request/{created.data['request']['id']}", {"action": "approve"}, format="json"
            )
        self.assertEqual(approved.status_code, status.HTTP_200_OK)
        self.assertEqual(approved.data["request"]["status"], "APPROVED")
        self.assertTrue(approved.data["userSynced"])
        self.hospital.refresh_from_db()
        self.assertTrue(self.hospital.is_request_active)
        self.assertEqual(self.hospital.blood_type_needed, "O+")
        self.assertEqual(self.hospital.request_pin_code, "500001")

        second = self.file_request(blood_type="A-")
        self.assertEqual(second.status_code, status.HTTP_201_CREATED)
        with self.admin_settings():
            denied = self.admin.put(
                f"/api/admin/approve-request/{second.data['request']['id']}", {"action": "deny"}, format="json"
            )
        self.assertEqual(denied.data["request"]["status"], "DENIED")
        self.hospital.refresh_from_db()
        self.assertFalse(self.hospital.is_request_active)
        self.assertIsNone(self.hospital.blood_type_needed)
        self.assertIsNone(self.hospital.request_pin_code)
        self.assertEqual(
            BloodRequest.objects.get(pk=created.data["request"]["id"]).status, BloodRequest.STATUS_APPROVED
        )

    def test_donor_cannot_file_request(self, send_now):
        response = self.client.post(
            "/api/request",
            {"requesterId": "D9", "userRole": "Donor", "pinCode": "500001", "bloodTypeNeeded": "O+"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"]["code"], "forbidden")
        self.assertFalse(BloodRequest.objects.exists())

    def test_second_pending_request_is_rejected(self, send_now):
        self.assertEqual(self.file_request().status_code, status.HTTP_201_CREATED)
        response = self.file_request(blood_type="B+")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"]["code"], "duplicate_pending")
        self.assertEqual(BloodRequest.objects.count(), 1)

    def test_list_requests_newest_first_and_pin_filter(self, send_now):
        older = BloodRequest.objects.create(requester_id="H1", pin_code="500001", blood_type_needed="O+",
                                            status=BloodRequest.STATUS_DENIED)
        middle = BloodRequest.objects.create(requester_id="H2", pin_code="500002", blood_type_needed="A+")
        newest = BloodRequest.objects.create(requester_id="H3", pin_code="500001", blood_type_needed="B+")

        response = self.client.get("/api/requests")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["id"] for r in response.data["requests"]], [newest.id, middle.id, older.id])

        filtered = self.client.get("/api/requests", {"pinCode": "500001"})
        self.assertEqual([r["id"] for r in filtered.data["requests"]], [newest.id, older.id])

    def test_sync_storage_returns_everything(self, send_now):
        User.objects.create(user_id="D1", phone="333", user_role=User.ROLE_DONOR)
        self.file_request()
        response = self.client.get("/api/sync-storage")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({u["userId"] for u in response.data["users"]}, {"H1", "D1"})
        self.assertEqual(len(response.data["requests"]), 1)

    def test_pending_users_lists_only_unverified(self, send_now):
        User.objects.create(user_id="D1", phone="333", user_role=User.ROLE_DONOR)
        with self.admin_settings():
            response = self.admin.get("/api/admin/pending-users")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([u["userId"] for u in response.data["users"]], ["D1"])

    def test_resolve_unknown_request(self, send_now):
        with self.admin_settings():
            response = self.admin.put("/api/admin/approve-request/9999", {"action": "approve"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
