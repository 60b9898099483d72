"""Integration tests for the HTTP API.

Run with: pytest tests/test_api.py -v
"""

import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from eventhub.models import Event, EventRegistration


@pytest.mark.django_db
class TestAuth:
    """Tests for POST /api/auth/sign-up and /api/auth/sign-in"""

    def test_sign_up_then_sign_in(self, api_client: APIClient):
        """A new account can sign in and gets a token."""
        response = api_client.post(
            "/api/auth/sign-up",
            {"email": "new@example.com", "password": "longenough", "full_name": "New"},
            format="json",
        )
        assert response.status_code == 201
        user_id = response.json()["user_id"]

        response = api_client.post(
            "/api/auth/sign-in",
            {"email": "new@example.com", "password": "longenough"},
            format="json",
        )
        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == user_id
        assert body["token"]

    def test_sign_in_bad_credentials(self, api_client: APIClient):
        """Unknown credentials return 401 INVALID_CREDENTIALS."""
        response = api_client.post(
            "/api/auth/sign-in",
            {"email": "nobody@example.com", "password": "whatever"},
            format="json",
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    def test_duplicate_sign_up_conflicts(self, api_client: APIClient, host):
        """Signing up an existing email returns 409."""
        response = api_client.post(
            "/api/auth/sign-up",
            {"email": host.user.email, "password": "longenough", "full_name": "Again"},
            format="json",
        )
        assert response.status_code == 409

    def test_feed_requires_authentication(self, api_client: APIClient):
        """The feed returns 401 without a token."""
        response = api_client.get("/api/events")
        assert response.status_code == 401

    def test_invalid_token_rejected(self, api_client: APIClient):
        """A malformed bearer token returns 401."""
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        response = api_client.get("/api/events")
        assert response.status_code == 401


@pytest.mark.django_db
class TestEventList:
    """Tests for GET and POST /api/events"""

    def test_list_events_returns_paginated_results(self, authed_client, host, make_event):
        """GET /api/events returns a window with aggregates and the total."""
        for day in range(1, 4):
            make_event(host, title=f"Event {day}", starts_in=timedelta(days=day))
        client = authed_client(host)

        response = client.get("/api/events", {"limit": 2, "offset": 0})

        assert response.status_code == 200
        body = response.json()
        assert body["total_count"] == 3
        assert [event["title"] for event in body["events"]] == ["Event 1", "Event 2"]
        first = body["events"][0]
        assert first["registration_count"] == 0
        assert first["is_full"] is False
        assert first["host_full_name"] == "Hana Host"

    def test_list_events_empty_catalog(self, authed_client, host):
        """An empty catalog returns no events and a zero total."""
        response = authed_client(host).get("/api/events")
        assert response.status_code == 200
        assert response.json() == {"events": [], "total_count": 0}

    def test_search_and_category_params(self, authed_client, host, make_event):
        """search and category query params filter the feed."""
        make_event(host, title="Jazz brunch", category="Food")
        make_event(host, title="Jazz gig", category="Music")

        response = authed_client(host).get("/api/events", {"search": "JAZZ", "category": "Music"})

        assert [event["title"] for event in response.json()["events"]] == ["Jazz gig"]

    def test_limit_above_maximum(self, authed_client, host):
        """A limit above the maximum returns 400 INVALID_PAGINATION."""
        response = authed_client(host).get("/api/events", {"limit": 500})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PAGINATION"

    def test_create_event(self, authed_client, host):
        """POST /api/events creates an event hosted by the caller."""
        payload = {
            "title": "Pickup basketball",
            "description": "Weekend game",
            "event_date": (timezone.now() + timedelta(days=2)).isoformat(),
            "location_name": "Central Park",
            "category": "Sports",
            "capacity": 10,
        }

        response = authed_client(host).post("/api/events", payload, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["host_id"] == str(host.id)
        assert Event.objects.filter(pk=body["id"], host=host).exists()

    def test_create_event_in_past(self, authed_client, host):
        """A past event date returns 400 INVALID_EVENT."""
        payload = {
            "title": "Too late",
            "description": "Already happened",
            "event_date": (timezone.now() - timedelta(days=1)).isoformat(),
            "location_name": "Nowhere",
            "category": "Other",
            "capacity": 5,
        }
        response = authed_client(host).post("/api/events", payload, format="json")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_EVENT"


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{id}"""

    def test_get_event_returns_details(self, authed_client, host, attendee, make_event, register):
        """GET /api/events/{id} returns aggregates and the caller's status."""
        event = make_event(host, capacity=1)
        register(event, attendee)

        response = authed_client(attendee).get(f"/api/events/{event.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["registration_count"] == 1
        assert body["is_full"] is True
        assert body["is_registered"] is True

    def test_get_event_not_found(self, authed_client, host):
        """An unknown event id returns 404 EVENT_NOT_FOUND."""
        response = authed_client(host).get(f"/api/events/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "EVENT_NOT_FOUND"

    def test_get_event_invalid_id_format(self, authed_client, host):
        """A malformed event id returns 400."""
        response = authed_client(host).get("/api/events/not-a-uuid")
        assert response.status_code == 400


@pytest.mark.django_db
class TestRegistration:
    """Tests for PUT and DELETE /api/events/{id}/registration"""

    def test_register_and_unregister(self, authed_client, host, attendee, make_event):
        """PUT and DELETE registration update the status and count."""
        event = make_event(host)
        client = authed_client(attendee)
        url = f"/api/events/{event.id}/registration"

        response = client.put(url)
        assert response.status_code == 200
        assert response.json()["is_registered"] is True
        assert response.json()["registration_count"] == 1
        assert client.get(f"/api/events/{event.id}").json()["registration_count"] == 1

        response = client.delete(url)
        assert response.status_code == 200
        assert response.json()["is_registered"] is False
        assert client.get(f"/api/events/{event.id}").json()["registration_count"] == 0

    def test_register_twice_conflicts(self, authed_client, host, attendee, make_event):
        """A second PUT returns 409 ALREADY_REGISTERED."""
        event = make_event(host)
        client = authed_client(attendee)
        client.put(f"/api/events/{event.id}/registration")

        response = client.put(f"/api/events/{event.id}/registration")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ALREADY_REGISTERED"
        assert EventRegistration.objects.filter(event=event).count() == 1

    def test_register_full_event_conflicts(
        self, authed_client, host, attendee, make_event, register
    ):
        """Registering for a full event returns 409 EVENT_FULL."""
        event = make_event(host, capacity=1)
        register(event, host)

        response = authed_client(attendee).put(f"/api/events/{event.id}/registration")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EVENT_FULL"


@pytest.mark.django_db
class TestMyEventsAndProfile:
    """Tests for GET /api/me/events and /api/profiles/{id}"""

    def test_my_events(self, authed_client, host, attendee, make_event, register):
        """GET /api/me/events splits hosting and attending."""
        event = make_event(host, title="Hosted")
        register(event, attendee)

        hosting = authed_client(host).get("/api/me/events").json()
        assert [e["title"] for e in hosting["hosting"]] == ["Hosted"]
        assert hosting["attending"] == []

    def test_profile_read_and_overwrite(self, authed_client, attendee):
        """PUT /api/profiles/{id} overwrites interests."""
        client = authed_client(attendee)
        url = f"/api/profiles/{attendee.id}"
        client.put(url, {"full_name": "Avery", "bio": "", "interests": ["Art"]}, format="json")

        response = client.put(
            url,
            {"full_name": "Avery", "bio": "Hi", "interests": ["Music", "Tech"]},
            format="json",
        )

        assert response.status_code == 200
        assert client.get(url).json()["interests"] == ["Music", "Tech"]

    def test_profile_update_requires_all_fields(self, authed_client, attendee):
        """A partial profile update returns 400."""
        response = authed_client(attendee).put(
            f"/api/profiles/{attendee.id}", {"full_name": "Avery"}, format="json"
        )
        assert response.status_code == 400

    def test_cannot_update_someone_elses_profile(self, authed_client, host, attendee):
        """Updating another user's profile returns 403."""
        response = authed_client(attendee).put(
            f"/api/profiles/{host.id}",
            {"full_name": "Mallory", "bio": "", "interests": []},
            format="json",
        )
        assert response.status_code == 403


@pytest.mark.django_db
class TestAdmin:
    """Tests for the Django admin."""

    def test_event_changelist_loads(self, admin_client, host, make_event):
        """The event changelist renders."""
        make_event(host)
        response = admin_client.get("/admin/eventhub/event/")
        assert response.status_code == 200
