"""Bearer-token authentication backed by the gateway's session tokens."""

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from eventhub.domain import Session
from eventhub.stores.django_store import DjangoBackendGateway


class SessionUser:
    """Stands in for request.user; the Session itself is request.auth."""

    is_authenticated = True
    is_anonymous = False

    def __init__(self, session: Session) -> None:
        self.session = session

    def __str__(self) -> str:
        return str(self.session.user_id)


class SessionTokenAuthentication(BaseAuthentication):
    """Authenticate ``Authorization: Bearer <token>`` headers."""

    keyword = "Bearer"

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise exceptions.AuthenticationFailed("Invalid token header")
        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed("Invalid token header") from None

        session = DjangoBackendGateway().validate_session(token)
        if session is None:
            raise exceptions.AuthenticationFailed("Invalid or expired session")
        return SessionUser(session), session

    def authenticate_header(self, request) -> str:
        return self.keyword
