"""Pytest configuration and shared fixtures."""

import itertools
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from eventhub.domain import Session
from eventhub.models import Event, EventRating, EventRegistration, Profile
from eventhub.stores.django_store import DjangoBackendGateway

PASSWORD = "s3cret-pass"

_counter = itertools.count(1)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture
def gateway() -> DjangoBackendGateway:
    return DjangoBackendGateway()


@pytest.fixture
def make_profile(db):
    def _make(full_name: str = "Ada Host", email: str | None = None) -> Profile:
        email = email or f"user{next(_counter)}@example.com"
        user = get_user_model().objects.create_user(
            username=email, email=email, password=PASSWORD
        )
        profile = user.profile
        profile.full_name = full_name
        profile.save()
        return profile

    return _make


@pytest.fixture
def make_event(db):
    def _make(
        host: Profile,
        title: str = "Board games night",
        description: str = "Bring your favourite game",
        category: str = "Social",
        capacity: int = 10,
        starts_in: timedelta = timedelta(days=1),
        location_name: str = "Community hall",
    ) -> Event:
        return Event.objects.create(
            host=host,
            title=title,
            description=description,
            category=category,
            capacity=capacity,
            event_date=timezone.now() + starts_in,
            location_name=location_name,
        )

    return _make


@pytest.fixture
def register(db):
    def _register(event: Event, profile: Profile) -> EventRegistration:
        return EventRegistration.objects.create(event=event, user=profile)

    return _register


@pytest.fixture
def rate(db):
    def _rate(host: Profile, score: int, event: Event | None = None) -> EventRating:
        return EventRating.objects.create(host=host, score=score, event=event)

    return _rate


@pytest.fixture
def sign_in(gateway):
    def _sign_in(profile: Profile) -> Session:
        return gateway.authenticate(profile.user.email, PASSWORD)

    return _sign_in


@pytest.fixture
def host(make_profile) -> Profile:
    return make_profile(full_name="Hana Host")


@pytest.fixture
def attendee(make_profile) -> Profile:
    return make_profile(full_name="Avery Attendee")


@pytest.fixture
def authed_client(api_client, sign_in):
    def _authed(profile: Profile) -> APIClient:
        session = sign_in(profile)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {session.token}")
        return api_client

    return _authed
