"""Profile service - read and overwrite a user's profile."""

import logging
from collections.abc import Iterable

from eventhub import cache
from eventhub.domain import Interests, Profile, Session, UserId
from eventhub.domain.errors import InvalidProfileError, ProfileNotFoundError
from eventhub.services.common import parse_user_id, require_session
from eventhub.stores.interfaces import BackendGateway

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for profiles and host ratings."""

    def __init__(self, gateway: BackendGateway) -> None:
        self._gateway = gateway

    def get_profile(self, user_id: str | UserId) -> Profile:
        """Return a profile with its rating aggregates.

        Raises:
            InvalidUserIdError: If the user_id is not a valid UUID.
            ProfileNotFoundError: If the profile does not exist.
        """
        parsed = parse_user_id(user_id)
        profile = cache.get_or_load(
            cache.profile_key(parsed),
            lambda: self._gateway.get_profile_details(parsed),
        )
        if profile is None:
            raise ProfileNotFoundError(str(parsed))
        return profile

    def get_host_rating(self, host_id: str | UserId) -> float | None:
        return self._gateway.get_host_rating(parse_user_id(host_id))

    def update_profile(
        self,
        session: Session | None,
        user_id: str | UserId,
        full_name: str,
        bio: str | None,
        interests: Interests | Iterable[str],
    ) -> Profile:
        """Replace full_name, bio and interests; nothing is merged.

        Raises:
            NotAuthenticatedError: If there is no session.
            InvalidProfileError: If full_name is blank.
            PermissionDeniedError: If the profile is not the session user's.
        """
        session = require_session(session)
        parsed = parse_user_id(user_id)
        full_name = full_name.strip()
        if not full_name:
            raise InvalidProfileError("Full name is required")
        if not isinstance(interests, Interests):
            interests = Interests(tuple(interests))

        self._gateway.update_profile(
            session.user_id, parsed, full_name, (bio or "").strip(), interests
        )
        cache.invalidate_profile(parsed)
        logger.info("User %s updated their profile", parsed)
        return self.get_profile(parsed)
