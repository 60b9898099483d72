from django.urls import path

from eventhub.handlers import (
    EventDetailView,
    EventListView,
    EventRegistrationView,
    MyEventsView,
    ProfileView,
    SignInView,
    SignUpView,
)

urlpatterns = [
    path("auth/sign-up", SignUpView.as_view(), name="sign-up"),
    path("auth/sign-in", SignInView.as_view(), name="sign-in"),
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/registration",
        EventRegistrationView.as_view(),
        name="event-registration",
    ),
    path("me/events", MyEventsView.as_view(), name="my-events"),
    path("profiles/<str:user_id>", ProfileView.as_view(), name="profile-detail"),
]
