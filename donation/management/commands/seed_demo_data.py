from django.core.management.base import BaseCommand

from donation.models import User

DEMO_USERS = [
    # user_id, phone, name, role, blood type, pin code, status
    ("H1", "9000000001", "City General Hospital", User.ROLE_HOSPITAL, "", "500001", User.STATUS_VERIFIED),
    ("D1", "9000000011", "Asha", User.ROLE_DONOR, "O+", "500001", User.STATUS_VERIFIED),
    ("D2", "9000000012", "Ravi", User.ROLE_DONOR, "A+", "500001", User.STATUS_VERIFIED),
    ("D3", "9000000013", "Meena", User.ROLE_DONOR, "O+", "500002", User.STATUS_PENDING),
]


class Command(BaseCommand):
    help = "Ensure demo donors and a hospital exist (idempotent)."

    def handle(self, *args, **opts):
        for user_id, phone, name, role, blood_type, pin_code, status in DEMO_USERS:
            u, created = User.objects.update_or_create(
                user_id=user_id,
                defaults={
                    "phone": phone,
                    "name": name,
                    "user_role": role,
                    "blood_type": blood_type,
                    "pin_code": pin_code,
                    "status": status,
                },
            )
            verb = "created" if created else "updated"
            self.stdout.write(self.style.SUCCESS(f"{verb}: {u}"))
        self.stdout.write(self.style.SUCCESS("Demo data ensured."))
