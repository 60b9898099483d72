"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from eventhub.domain import EventDraft


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    host_id = serializers.UUIDField(source="host_id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    event_date = serializers.DateTimeField()
    location_name = serializers.CharField()
    category = serializers.CharField()
    capacity = serializers.IntegerField(source="capacity.value")
    image_url = serializers.CharField(allow_null=True)
    registration_count = serializers.IntegerField()
    host_full_name = serializers.CharField()
    host_rating = serializers.FloatField(allow_null=True)
    is_full = serializers.BooleanField()
    spots_left = serializers.IntegerField()


class EventPageSerializer(serializers.Serializer):
    events = EventSerializer(many=True)
    total_count = serializers.IntegerField()


class MyEventsSerializer(serializers.Serializer):
    hosting = EventSerializer(many=True)
    attending = EventSerializer(many=True)


class ProfileSerializer(serializers.Serializer):
    """Serializer for Profile domain model."""

    id = serializers.UUIDField(source="id.value")
    full_name = serializers.CharField()
    bio = serializers.CharField(allow_blank=True)
    interests = serializers.ListField(child=serializers.CharField(), source="interests.tags")
    host_rating = serializers.FloatField(allow_null=True)
    total_ratings = serializers.IntegerField()


class RegistrationStateSerializer(serializers.Serializer):
    event_id = serializers.UUIDField(source="event_id.value")
    user_id = serializers.UUIDField(source="user_id.value")
    is_registered = serializers.BooleanField()
    registration_count = serializers.IntegerField()
    capacity = serializers.IntegerField(source="capacity.value")
    is_full = serializers.BooleanField()


class SessionSerializer(serializers.Serializer):
    token = serializers.CharField()
    user_id = serializers.UUIDField(source="user_id.value")
    email = serializers.EmailField()


class FeedQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    category = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    limit = serializers.IntegerField(required=False, min_value=1)
    offset = serializers.IntegerField(required=False, min_value=0, default=0)


class EventCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    event_date = serializers.DateTimeField()
    location_name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=50)
    capacity = serializers.IntegerField(min_value=1)
    image_url = serializers.URLField(
        max_length=500, required=False, allow_null=True, allow_blank=True
    )

    def to_draft(self) -> EventDraft:
        return EventDraft(**self.validated_data)


class ProfileUpdateSerializer(serializers.Serializer):
    """All fields are required: an update replaces the whole profile."""

    full_name = serializers.CharField(max_length=255)
    bio = serializers.CharField(allow_blank=True)
    interests = serializers.ListField(
        child=serializers.CharField(allow_blank=True), allow_empty=True
    )


class SignUpSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)
    full_name = serializers.CharField(max_length=255)


class SignInSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)
