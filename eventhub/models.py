"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models


class Profile(models.Model):
    """Persistence model for profiles, one per account."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile"
    )
    full_name = models.CharField(max_length=255)
    bio = models.TextField(blank=True, default="")
    interests = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.full_name


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    host = models.ForeignKey(
        Profile, on_delete=models.CASCADE, related_name="hosted_events"
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    event_date = models.DateTimeField()
    location_name = models.CharField(max_length=255)
    category = models.CharField(max_length=50)
    capacity = models.PositiveIntegerField()
    image_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["event_date"]
        indexes = [
            models.Index(fields=["event_date"], name="event_date_idx"),
            models.Index(fields=["host", "event_date"], name="event_host_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gte=1), name="event_capacity_positive"
            ),
        ]

    def __str__(self) -> str:
        return self.title


class EventRegistration(models.Model):
    """Persistence model for a user's registration to an event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        Event, on_delete=models.CASCADE, related_name="registrations"
    )
    user = models.ForeignKey(
        Profile, on_delete=models.CASCADE, related_name="registrations"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["event", "user"], name="unique_event_registration"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user} - {self.event}"


class EventRating(models.Model):
    """Persistence model for ratings a host received."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    host = models.ForeignKey(
        Profile, on_delete=models.CASCADE, related_name="ratings_received"
    )
    event = models.ForeignKey(
        Event,
        on_delete=models.SET_NULL,
        related_name="ratings",
        blank=True,
        null=True,
    )
    rater = models.ForeignKey(
        Profile,
        on_delete=models.SET_NULL,
        related_name="ratings_given",
        blank=True,
        null=True,
    )
    score = models.PositiveSmallIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["host"], name="rating_host_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(score__gte=1, score__lte=5),
                name="rating_score_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.host} - {self.score}"
