import pytest
from django.core.cache import cache

ADMIN_SECRET = 'test-admin-secret'


@pytest.fixture(autouse=True)
def _admin_secret_and_clean_throttle(settings):
    settings.ADMIN_SECRET = ADMIN_SECRET
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def published(monkeypatch):
    """Record broadcast events instead of pushing them to the channel layer."""
    from donation.services import events

    sent = []

    def fake_send_now(event, payload):
        sent.append((event, payload))
        return True

    monkeypatch.setattr(events, 'send_now', fake_send_now)
    return sent


@pytest.fixture
def admin_client():
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(HTTP_X_ADMIN_SECRET=ADMIN_SECRET)
    return client
