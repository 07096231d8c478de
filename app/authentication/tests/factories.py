"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import UserFactory, set_device_token

    # Customer with an auto-created profile
    customer = UserFactory()

    # Mechanic with a registered device
    mechanic = UserFactory()
    set_device_token(mechanic, "fcm-token-123", role=Profile.Role.MECHANIC)
"""

import factory

from authentication.models import Profile, User


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    The Profile is created by the post_save signal, so it always exists
    once the factory returns.

    Examples:
        user = UserFactory()
        staff = UserFactory(is_staff=True)
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )


def set_device_token(user, token, **profile_fields):
    """Store an FCM token (and any other profile fields) on a user's profile."""
    Profile.objects.filter(user=user).update(fcm_token=token, **profile_fields)
    user.profile.refresh_from_db()
    return user.profile
