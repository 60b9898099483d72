from eventhub.services.event_service import EventService
from eventhub.services.feed import EventFeedService
from eventhub.services.my_events import MyEventsService
from eventhub.services.profile import ProfileService
from eventhub.services.registration import RegistrationService
from eventhub.services.session import SessionContext
from eventhub.services.view_scope import ViewScope

__all__ = [
    "EventService",
    "EventFeedService",
    "MyEventsService",
    "ProfileService",
    "RegistrationService",
    "SessionContext",
    "ViewScope",
]
