"""Session context: the current user, passed explicitly to what needs it.

Listeners are told about every change of the current session, including an
expiry noticed by ``current()``.
"""

import logging
import threading
from collections.abc import Callable

from eventhub.domain import Session, UserId
from eventhub.services.common import require_session
from eventhub.stores.interfaces import BackendGateway

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session | None], None]


class SessionContext:
    def __init__(self, gateway: BackendGateway, session: Session | None = None) -> None:
        self._gateway = gateway
        self._session = session
        self._listeners: list[SessionListener] = []
        self._lock = threading.Lock()

    def current(self) -> Session | None:
        """Return the live session, dropping it if the backend no longer accepts it."""
        session = self._session
        if session is None:
            return None
        if self._gateway.validate_session(session.token) is None:
            logger.info("Session for %s expired", session.user_id)
            self._set(None)
            return None
        return session

    def require(self) -> Session:
        """Return the live session or raise NotAuthenticatedError."""
        return require_session(self.current())

    def sign_up(self, email: str, password: str, full_name: str) -> UserId:
        """Create an account; the caller signs in separately."""
        return self._gateway.register(email, password, full_name)

    def sign_in(self, email: str, password: str) -> Session:
        session = self._gateway.authenticate(email, password)
        self._set(session)
        logger.info("User %s signed in", session.user_id)
        return session

    def sign_out(self) -> None:
        if self._session is not None:
            logger.info("User %s signed out", self._session.user_id)
            self._set(None)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener and return the function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _set(self, session: Session | None) -> None:
        with self._lock:
            if session == self._session:
                return
            self._session = session
            listeners = list(self._listeners)
        for listener in listeners:
            listener(session)
