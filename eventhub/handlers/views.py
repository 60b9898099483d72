"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to the exception handler in handlers/errors.py
- Never contain business logic
"""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from eventhub.handlers.serializers import (
    EventCreateSerializer,
    EventPageSerializer,
    EventSerializer,
    FeedQuerySerializer,
    MyEventsSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    RegistrationStateSerializer,
    SessionSerializer,
    SignInSerializer,
    SignUpSerializer,
)
from eventhub.services import (
    EventFeedService,
    EventService,
    MyEventsService,
    ProfileService,
    RegistrationService,
    SessionContext,
)
from eventhub.stores.django_store import DjangoBackendGateway
from eventhub.stores.interfaces import BackendGateway


def _gateway() -> BackendGateway:
    return DjangoBackendGateway()


def _registrations() -> RegistrationService:
    gateway = _gateway()
    return RegistrationService(gateway, EventService(gateway))


class SignUpView(APIView):
    """Handler for POST /api/auth/sign-up"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = SignUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_id = SessionContext(_gateway()).sign_up(**serializer.validated_data)
        return Response({"user_id": str(user_id)}, status=status.HTTP_201_CREATED)


class SignInView(APIView):
    """Handler for POST /api/auth/sign-in"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = SessionContext(_gateway()).sign_in(**serializer.validated_data)
        return Response(SessionSerializer(session).data)


class EventListView(APIView):
    """Handler for GET and POST /api/events"""

    def get(self, request: Request) -> Response:
        query = FeedQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        page = EventFeedService(_gateway()).list_events(
            search_text=params.get("search"),
            category=params.get("category"),
            limit=params.get("limit"),
            offset=params["offset"],
        )
        return Response(EventPageSerializer(page).data)

    def post(self, request: Request) -> Response:
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = EventService(_gateway()).create_event(request.auth, serializer.to_draft())
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        gateway = _gateway()
        events = EventService(gateway)
        event = events.get_event(event_id)
        registered = RegistrationService(gateway, events).is_registered(
            event.id, request.auth.user_id
        )
        data = EventSerializer(event).data
        data["is_registered"] = registered
        return Response(data)


class EventRegistrationView(APIView):
    """Handler for PUT and DELETE /api/events/{event_id}/registration"""

    def put(self, request: Request, event_id: str) -> Response:
        state = _registrations().set_registration(request.auth, event_id, True)
        return Response(RegistrationStateSerializer(state).data)

    def delete(self, request: Request, event_id: str) -> Response:
        state = _registrations().set_registration(request.auth, event_id, False)
        return Response(RegistrationStateSerializer(state).data)


class MyEventsView(APIView):
    """Handler for GET /api/me/events"""

    def get(self, request: Request) -> Response:
        my_events = MyEventsService(_gateway()).get_my_events(request.auth.user_id)
        return Response(MyEventsSerializer(my_events).data)


class ProfileView(APIView):
    """Handler for GET and PUT /api/profiles/{user_id}"""

    def get(self, request: Request, user_id: str) -> Response:
        profile = ProfileService(_gateway()).get_profile(user_id)
        return Response(ProfileSerializer(profile).data)

    def put(self, request: Request, user_id: str) -> Response:
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = ProfileService(_gateway()).update_profile(
            request.auth, user_id, **serializer.validated_data
        )
        return Response(ProfileSerializer(profile).data)
