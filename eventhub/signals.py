"""Django signals for profile provisioning and cache invalidation.

Services invalidate the views their own writes make stale; these handlers
cover writes that bypass the services, such as the admin.
"""

from django.conf import settings
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from eventhub import cache
from eventhub.models import Event, EventRating, EventRegistration, Profile


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_profile_for_user(sender, instance, created, **kwargs):
    """Every new account gets its profile."""
    if created:
        Profile.objects.get_or_create(
            user=instance,
            defaults={"full_name": instance.get_full_name() or instance.get_username()},
        )


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate event views when an event is saved or deleted."""
    cache.invalidate_event_views()


@receiver([post_save, post_delete], sender=EventRegistration)
def invalidate_registration_cache(sender, instance, **kwargs):
    """Invalidate counts and the attendee's status when a registration changes."""
    cache.invalidate_registration(instance.event_id, instance.user_id)


@receiver([post_save, post_delete], sender=Profile)
def invalidate_profile_cache(sender, instance, **kwargs):
    """Invalidate the profile and the host names shown on event views."""
    cache.invalidate_profile(instance.pk)


@receiver([post_save, post_delete], sender=EventRating)
def invalidate_rating_cache(sender, instance, **kwargs):
    """Invalidate the host's profile and the ratings shown on event views."""
    cache.invalidate_profile(instance.host_id)
