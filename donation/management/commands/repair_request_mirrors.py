from django.core.management.base import BaseCommand
from django.utils import timezone

from donation.models import User
from donation.services import events
from donation.services.requests import repair_hospital_mirror


class Command(BaseCommand):
    help = "Recompute every hospital's request mirror from its request history; broadcast the repaired ids."

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Report stale users without writing.")

    def handle(self, *args, **options):
        now = timezone.now()
        dry_run = options["dry_run"]
        stale = []
        for user in User.objects.filter(user_role=User.ROLE_HOSPITAL).iterator():
            if repair_hospital_mirror(user, commit=not dry_run):
                stale.append(user.user_id)
                self.stdout.write(f"stale: {user.user_id}")

        if dry_run:
            self.stdout.write(self.style.WARNING(f"{len(stale)} stale hospital mirror(s), nothing written"))
            return
        if stale:
            events.send_now(events.MIRRORS_REPAIRED, {"userIds": stale[:50], "ts": now.isoformat()})
        self.stdout.write(self.style.SUCCESS(f"Repaired {len(stale)} hospital mirror(s) at {now}"))
