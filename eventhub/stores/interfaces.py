"""Store interfaces (repository pattern).

The backend gateway owns durability, authorization and aggregation.
Implementations must be swappable and return domain models. Infrastructure
failures surface as BackendUnavailableError.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from eventhub.domain import (
    Event,
    EventDraft,
    EventId,
    EventPage,
    Interests,
    MyEvents,
    Profile,
    Session,
    UserId,
)


class BackendGateway(ABC):
    """Interface for the remote backend the client talks to."""

    @abstractmethod
    def authenticate(self, email: str, password: str) -> Session:
        """Issue a session, or raise InvalidCredentialsError."""
        ...

    @abstractmethod
    def register(self, email: str, password: str, full_name: str) -> UserId:
        """Create an account and its profile.

        Raises AccountExistsError or InvalidAccountError.
        """
        ...

    @abstractmethod
    def validate_session(self, token: str) -> Session | None:
        """Return the session for a token, or None if invalid or expired."""
        ...

    @abstractmethod
    def list_events_with_details(
        self,
        now: datetime,
        limit: int,
        offset: int,
        search_text: str | None = None,
        category: str | None = None,
    ) -> EventPage:
        """Return upcoming events ordered by event_date ascending.

        The page also carries the filtered total and the earliest event date
        of the whole filtered set.
        """
        ...

    @abstractmethod
    def get_event_with_details(self, event_id: EventId) -> Event | None:
        """Return an aggregated event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_my_events(self, user_id: UserId, now: datetime) -> MyEvents:
        """Return upcoming hosted and attended events, each ascending."""
        ...

    @abstractmethod
    def get_host_rating(self, host_id: UserId) -> float | None:
        """Return the mean rating of a host, or None without ratings."""
        ...

    @abstractmethod
    def get_profile_details(self, user_id: UserId) -> Profile | None:
        """Return a profile with rating aggregates, or None if not found."""
        ...

    @abstractmethod
    def is_registered(self, event_id: EventId, user_id: UserId) -> bool:
        """Check if a registration exists for the pair."""
        ...

    @abstractmethod
    def insert_registration(
        self, actor: UserId, event_id: EventId, user_id: UserId
    ) -> None:
        """Create a registration.

        Raises PermissionDeniedError, EventNotFoundError, EventFullError or
        AlreadyRegisteredError.
        """
        ...

    @abstractmethod
    def delete_registration(
        self, actor: UserId, event_id: EventId, user_id: UserId
    ) -> bool:
        """Delete a registration. Return False if there was none."""
        ...

    @abstractmethod
    def insert_event(self, actor: UserId, draft: EventDraft) -> Event:
        """Create an event hosted by the actor."""
        ...

    @abstractmethod
    def update_profile(
        self,
        actor: UserId,
        user_id: UserId,
        full_name: str,
        bio: str,
        interests: Interests,
    ) -> None:
        """Overwrite a profile's editable fields."""
        ...
