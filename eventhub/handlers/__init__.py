from eventhub.handlers.views import (
    EventDetailView,
    EventListView,
    EventRegistrationView,
    MyEventsView,
    ProfileView,
    SignInView,
    SignUpView,
)

__all__ = [
    "EventDetailView",
    "EventListView",
    "EventRegistrationView",
    "MyEventsView",
    "ProfileView",
    "SignInView",
    "SignUpView",
]
