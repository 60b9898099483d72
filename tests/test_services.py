"""Unit tests for the services against gateway doubles.

These test error handling, domain error mapping and the fail-soft read paths.
Run with: pytest tests/test_services.py -v
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from eventhub.domain import EventDraft, EventId, EventPage, MyEvents, Session, UserId
from eventhub.domain.errors import (
    BackendUnavailableError,
    EventNotFoundError,
    InvalidEventError,
    InvalidEventIdError,
    InvalidPaginationError,
    InvalidUserIdError,
    NotAuthenticatedError,
)
from eventhub.services import (
    EventFeedService,
    EventService,
    MyEventsService,
    ProfileService,
    RegistrationService,
)
from eventhub.stores.django_store import DjangoBackendGateway

NOW = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


class UnavailableGateway(DjangoBackendGateway):
    """Every call the services make fails as if the backend were down."""

    def list_events_with_details(self, *args, **kwargs):
        raise BackendUnavailableError()

    def get_my_events(self, *args, **kwargs):
        raise BackendUnavailableError()

    def get_event_with_details(self, event_id):
        raise BackendUnavailableError()

    def delete_registration(self, *args, **kwargs):
        raise BackendUnavailableError()

    def update_profile(self, *args, **kwargs):
        raise BackendUnavailableError()


class MissingEventGateway(DjangoBackendGateway):
    def get_event_with_details(self, event_id):
        return None


class RecordingGateway(DjangoBackendGateway):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[dict] = []

    def list_events_with_details(self, **kwargs):
        self.calls.append(kwargs)
        return EventPage.empty()


@pytest.fixture
def session() -> Session:
    return Session(user_id=UserId(uuid.uuid4()), email="someone@example.com", token="t")


def _draft(**overrides) -> EventDraft:
    fields = {
        "title": "Jazz jam",
        "description": "Open stage",
        "event_date": NOW + timedelta(days=3),
        "location_name": "Blue Note",
        "category": "Music",
        "capacity": 20,
    }
    fields.update(overrides)
    return EventDraft(**fields)


class TestFailSoftReads:
    """Read paths degrade to empty results instead of raising."""

    def test_list_events_backend_error_yields_empty_page(self):
        """A backend error on the feed yields an empty page."""
        page = EventFeedService(UnavailableGateway(), clock=fixed_clock).list_events(
            search_text="jazz"
        )
        assert page.events == ()
        assert page.total_count == 0

    def test_my_events_backend_error_yields_empty_lists(self):
        """A backend error on my-events yields empty lists."""
        my_events = MyEventsService(UnavailableGateway()).get_my_events(str(uuid.uuid4()))
        assert my_events == MyEvents()


class TestFailLoudWrites:
    """Write paths propagate backend failures."""

    def test_unregister_backend_error_propagates(self, session):
        """A backend error on unregister is raised."""
        gateway = UnavailableGateway()
        service = RegistrationService(gateway, EventService(gateway))
        with pytest.raises(BackendUnavailableError):
            service.set_registration(session, str(uuid.uuid4()), False)

    def test_update_profile_backend_error_propagates(self, session):
        """A backend error on profile update is raised."""
        with pytest.raises(BackendUnavailableError):
            ProfileService(UnavailableGateway()).update_profile(
                session, session.user_id, "Name", "", ["Art"]
            )

    def test_get_event_backend_error_propagates(self):
        """A backend error on event detail is raised."""
        with pytest.raises(BackendUnavailableError):
            EventService(UnavailableGateway()).get_event(str(uuid.uuid4()))


class TestEventService:
    """Tests for EventService."""

    def test_get_event_invalid_id_raises_error(self):
        """get_event raises InvalidEventIdError for malformed UUID."""
        with pytest.raises(InvalidEventIdError):
            EventService(MissingEventGateway()).get_event("not-a-uuid")

    def test_get_event_not_found_raises_error(self):
        """get_event raises EventNotFoundError when store returns None."""
        event_id = str(uuid.uuid4())
        with pytest.raises(EventNotFoundError) as excinfo:
            EventService(MissingEventGateway()).get_event(event_id)
        assert excinfo.value.event_id == event_id

    def test_create_event_requires_session(self):
        """create_event raises NotAuthenticatedError without a session."""
        with pytest.raises(NotAuthenticatedError):
            EventService(MissingEventGateway(), clock=fixed_clock).create_event(None, _draft())

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": "  "},
            {"description": ""},
            {"location_name": " "},
            {"category": "Knitting"},
            {"capacity": 0},
            {"event_date": NOW - timedelta(minutes=1)},
            {"event_date": datetime(2030, 2, 1, 18, 0)},
        ],
    )
    def test_create_event_rejects_invalid_draft(self, session, overrides):
        """create_event raises InvalidEventError for each invalid field."""
        service = EventService(MissingEventGateway(), clock=fixed_clock)
        with pytest.raises(InvalidEventError):
            service.create_event(session, _draft(**overrides))


class TestRegistrationService:
    """Tests for RegistrationService input handling."""

    def test_set_registration_requires_session(self):
        """set_registration raises NotAuthenticatedError without a session."""
        gateway = MissingEventGateway()
        service = RegistrationService(gateway, EventService(gateway))
        with pytest.raises(NotAuthenticatedError):
            service.set_registration(None, str(uuid.uuid4()), True)

    def test_register_for_missing_event_raises_not_found(self, session):
        """Registering for a missing event raises EventNotFoundError."""
        gateway = MissingEventGateway()
        service = RegistrationService(gateway, EventService(gateway))
        with pytest.raises(EventNotFoundError):
            service.set_registration(session, EventId(uuid.uuid4()), True)

    def test_is_registered_invalid_user_id(self):
        """is_registered raises InvalidUserIdError for a malformed user id."""
        gateway = MissingEventGateway()
        service = RegistrationService(gateway, EventService(gateway))
        with pytest.raises(InvalidUserIdError):
            service.is_registered(str(uuid.uuid4()), "nope")


class TestFeedParameters:
    """Tests for how feed parameters reach the gateway."""

    def test_blank_search_and_category_impose_no_filter(self):
        """Blank search and category reach the gateway as None."""
        gateway = RecordingGateway()
        EventFeedService(gateway, clock=fixed_clock).list_events(
            search_text="   ", category="", limit=5, offset=10
        )
        assert gateway.calls == [
            {"now": NOW, "limit": 5, "offset": 10, "search_text": None, "category": None}
        ]

    def test_search_text_is_passed_through_verbatim(self):
        """Non-blank search text reaches the gateway with its whitespace."""
        gateway = RecordingGateway()
        EventFeedService(gateway, clock=fixed_clock).list_events(search_text=" Jazz ")
        assert gateway.calls[0]["search_text"] == " Jazz "
        assert gateway.calls[0]["limit"] == 20

    @pytest.mark.parametrize("limit,offset", [(0, 0), (101, 0), (10, -1)])
    def test_invalid_window_raises(self, limit, offset):
        """An out-of-range limit or negative offset raises InvalidPaginationError."""
        with pytest.raises(InvalidPaginationError):
            EventFeedService(RecordingGateway()).list_events(limit=limit, offset=offset)
