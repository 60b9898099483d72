"""Django ORM implementation of the BackendGateway.

Plays the managed backend: aggregation is done in single queries with
subqueries, and uniqueness, capacity and row ownership are enforced here.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from django.contrib import auth
from django.contrib.auth.password_validation import validate_password
from django.core import signing
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import (
    Avg,
    Count,
    FloatField,
    IntegerField,
    Min,
    OuterRef,
    Q,
    QuerySet,
    Subquery,
)
from django.db.models.functions import Coalesce

from eventhub import models
from eventhub.conf import get_setting
from eventhub.domain import (
    Capacity,
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
from eventhub.domain.errors import (
    AccountExistsError,
    AlreadyRegisteredError,
    BackendUnavailableError,
    EventFullError,
    EventNotFoundError,
    InvalidAccountError,
    InvalidCredentialsError,
    InvalidEventError,
    PermissionDeniedError,
    ProfileNotFoundError,
)
from eventhub.stores.interfaces import BackendGateway

logger = logging.getLogger(__name__)

SESSION_SALT = "eventhub.session"


@contextmanager
def _backend_call(operation: str) -> Iterator[None]:
    try:
        yield
    except DatabaseError as exc:
        logger.error("Backend operation %s failed: %s", operation, exc)
        raise BackendUnavailableError() from exc


def _registration_count() -> Coalesce:
    registrations = (
        models.EventRegistration.objects.filter(event=OuterRef("pk"))
        .order_by()
        .values("event")
        .annotate(total=Count("pk"))
        .values("total")[:1]
    )
    return Coalesce(
        Subquery(registrations, output_field=IntegerField()),
        0,
        output_field=IntegerField(),
    )


def _host_rating() -> Subquery:
    ratings = (
        models.EventRating.objects.filter(host=OuterRef("host"))
        .order_by()
        .values("host")
        .annotate(mean=Avg("score"))
        .values("mean")[:1]
    )
    return Subquery(ratings, output_field=FloatField())


def _with_details(queryset: QuerySet) -> QuerySet:
    return queryset.select_related("host").annotate(
        registration_count=_registration_count(),
        host_rating=_host_rating(),
    )


def _to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        host_id=UserId(row.host_id),
        title=row.title,
        description=row.description,
        event_date=row.event_date,
        location_name=row.location_name,
        category=row.category,
        capacity=Capacity(row.capacity),
        image_url=row.image_url or None,
        registration_count=row.registration_count,
        host_full_name=row.host.full_name,
        host_rating=float(row.host_rating) if row.host_rating is not None else None,
    )


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _authorize(actor: UserId, owner: UserId, message: str) -> None:
    if actor != owner:
        raise PermissionDeniedError(message)


class DjangoBackendGateway(BackendGateway):
    """PostgreSQL-backed gateway using Django ORM and django.contrib.auth."""

    def __init__(self) -> None:
        self._signer = signing.TimestampSigner(salt=SESSION_SALT)

    def authenticate(self, email: str, password: str) -> Session:
        email = _normalize_email(email)
        with _backend_call("authenticate"):
            user = auth.authenticate(username=email, password=password)
            if user is None:
                raise InvalidCredentialsError()
            profile = models.Profile.objects.get(user=user)
        token = self._signer.sign_object({"uid": str(profile.id), "email": email})
        return Session(user_id=UserId(profile.id), email=email, token=token)

    def register(self, email: str, password: str, full_name: str) -> UserId:
        email = _normalize_email(email)
        full_name = full_name.strip()
        if not email:
            raise InvalidAccountError("Email is required")
        if not full_name:
            raise InvalidAccountError("Full name is required")
        try:
            validate_password(password)
        except ValidationError as exc:
            raise InvalidAccountError(" ".join(exc.messages)) from exc

        user_model = auth.get_user_model()
        with _backend_call("register"):
            if user_model.objects.filter(username=email).exists():
                raise AccountExistsError()
            try:
                with transaction.atomic():
                    user = user_model.objects.create_user(
                        username=email, email=email, password=password
                    )
            except IntegrityError as exc:
                raise AccountExistsError() from exc
            # post_save created the profile; the sign-up name wins.
            profile = user.profile
            profile.full_name = full_name
            profile.save(update_fields=["full_name", "updated_at"])
        logger.info("Registered account %s", profile.id)
        return UserId(profile.id)

    def validate_session(self, token: str) -> Session | None:
        try:
            payload = self._signer.unsign_object(
                token, max_age=get_setting("SESSION_MAX_AGE")
            )
            user_id = UserId.from_string(payload["uid"])
        except signing.BadSignature:
            return None
        except (KeyError, TypeError, ValueError):
            return None
        with _backend_call("validate_session"):
            active = models.Profile.objects.filter(
                pk=user_id.value, user__is_active=True
            ).exists()
        if not active:
            return None
        return Session(user_id=user_id, email=payload.get("email", ""), token=token)

    def list_events_with_details(
        self,
        now: datetime,
        limit: int,
        offset: int,
        search_text: str | None = None,
        category: str | None = None,
    ) -> EventPage:
        queryset = models.Event.objects.filter(event_date__gte=now)
        if search_text:
            queryset = queryset.filter(
                Q(title__icontains=search_text)
                | Q(description__icontains=search_text)
                | Q(category__icontains=search_text)
            )
        if category:
            queryset = queryset.filter(category=category)

        with _backend_call("list_events_with_details"):
            summary = queryset.aggregate(
                total_count=Count("id"), earliest_start=Min("event_date")
            )
            rows = list(
                _with_details(queryset).order_by("event_date", "id")[
                    offset : offset + limit
                ]
            )
        return EventPage(
            events=tuple(_to_domain(row) for row in rows),
            total_count=summary["total_count"],
            earliest_start=summary["earliest_start"],
        )

    def get_event_with_details(self, event_id: EventId) -> Event | None:
        with _backend_call("get_event_with_details"):
            row = _with_details(models.Event.objects.filter(pk=event_id.value)).first()
        return _to_domain(row) if row is not None else None

    def get_my_events(self, user_id: UserId, now: datetime) -> MyEvents:
        upcoming = models.Event.objects.filter(event_date__gte=now)
        with _backend_call("get_my_events"):
            hosting = list(
                _with_details(upcoming.filter(host_id=user_id.value)).order_by(
                    "event_date", "id"
                )
            )
            attending = list(
                _with_details(
                    upcoming.filter(registrations__user_id=user_id.value)
                ).order_by("event_date", "id")
            )
        return MyEvents(
            hosting=tuple(_to_domain(row) for row in hosting),
            attending=tuple(_to_domain(row) for row in attending),
        )

    def get_host_rating(self, host_id: UserId) -> float | None:
        with _backend_call("get_host_rating"):
            mean = models.EventRating.objects.filter(host_id=host_id.value).aggregate(
                mean=Avg("score")
            )["mean"]
        return float(mean) if mean is not None else None

    def get_profile_details(self, user_id: UserId) -> Profile | None:
        with _backend_call("get_profile_details"):
            row = models.Profile.objects.filter(pk=user_id.value).first()
            if row is None:
                return None
            stats = models.EventRating.objects.filter(host_id=user_id.value).aggregate(
                mean=Avg("score"), total=Count("pk")
            )
        return Profile(
            id=UserId(row.id),
            full_name=row.full_name,
            bio=row.bio or "",
            interests=Interests(tuple(row.interests or ())),
            host_rating=float(stats["mean"]) if stats["mean"] is not None else None,
            total_ratings=stats["total"],
        )

    def is_registered(self, event_id: EventId, user_id: UserId) -> bool:
        with _backend_call("is_registered"):
            return models.EventRegistration.objects.filter(
                event_id=event_id.value, user_id=user_id.value
            ).exists()

    def insert_registration(
        self, actor: UserId, event_id: EventId, user_id: UserId
    ) -> None:
        _authorize(actor, user_id, "Cannot register another user")
        with _backend_call("insert_registration"), transaction.atomic():
            event = (
                models.Event.objects.select_for_update()
                .filter(pk=event_id.value)
                .first()
            )
            if event is None:
                raise EventNotFoundError(str(event_id))
            if event.registrations.filter(user_id=user_id.value).exists():
                raise AlreadyRegisteredError(str(event_id))
            if event.registrations.count() >= event.capacity:
                raise EventFullError(str(event_id))
            try:
                with transaction.atomic():
                    models.EventRegistration.objects.create(
                        event=event, user_id=user_id.value
                    )
            except IntegrityError as exc:
                raise AlreadyRegisteredError(str(event_id)) from exc

    def delete_registration(
        self, actor: UserId, event_id: EventId, user_id: UserId
    ) -> bool:
        _authorize(actor, user_id, "Cannot unregister another user")
        with _backend_call("delete_registration"):
            deleted, _ = models.EventRegistration.objects.filter(
                event_id=event_id.value, user_id=user_id.value
            ).delete()
        return deleted > 0

    def insert_event(self, actor: UserId, draft: EventDraft) -> Event:
        with _backend_call("insert_event"):
            host = models.Profile.objects.filter(pk=actor.value).first()
            if host is None:
                raise ProfileNotFoundError(str(actor))
            try:
                with transaction.atomic():
                    row = models.Event.objects.create(
                        host=host,
                        title=draft.title,
                        description=draft.description,
                        event_date=draft.event_date,
                        location_name=draft.location_name,
                        category=draft.category,
                        capacity=draft.capacity,
                        image_url=draft.image_url,
                    )
            except IntegrityError as exc:
                raise InvalidEventError("Event violates a backend constraint") from exc
        event = self.get_event_with_details(EventId(row.id))
        if event is None:
            raise EventNotFoundError(str(row.id))
        return event

    def update_profile(
        self,
        actor: UserId,
        user_id: UserId,
        full_name: str,
        bio: str,
        interests: Interests,
    ) -> None:
        _authorize(actor, user_id, "Cannot update another user's profile")
        with _backend_call("update_profile"):
            row = models.Profile.objects.filter(pk=user_id.value).first()
            if row is None:
                raise ProfileNotFoundError(str(user_id))
            row.full_name = full_name
            row.bio = bio
            row.interests = interests.as_list()
            row.save(update_fields=["full_name", "bio", "interests", "updated_at"])
