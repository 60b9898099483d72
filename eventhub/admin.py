from django.contrib import admin

from eventhub.models import Event, EventRating, EventRegistration, Profile


class EventRegistrationInline(admin.TabularInline):
    model = EventRegistration
    extra = 0
    autocomplete_fields = ["user"]


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ["full_name", "user", "created_at"]
    search_fields = ["full_name", "user__email"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "category", "event_date", "location_name", "capacity", "host"]
    list_filter = ["category"]
    search_fields = ["title", "description", "location_name"]
    autocomplete_fields = ["host"]
    inlines = [EventRegistrationInline]


@admin.register(EventRegistration)
class EventRegistrationAdmin(admin.ModelAdmin):
    list_display = ["event", "user", "created_at"]
    list_filter = ["event__category"]
    autocomplete_fields = ["event", "user"]


@admin.register(EventRating)
class EventRatingAdmin(admin.ModelAdmin):
    list_display = ["host", "score", "event", "rater", "created_at"]
    list_filter = ["score"]
    autocomplete_fields = ["host", "event", "rater"]
