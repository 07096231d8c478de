"""
Authentication models.

This module defines the account models:
- User: Custom user model with email-based authentication (slim, auth-focused)
- Profile: Marketplace profile data (OneToOne with User), including the
  Firebase Cloud Messaging registration token used for push notifications

Related files:
    - managers.py: Custom user manager for email-based creation
    - signals.py: Auto-create profile on user creation
"""

import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from core.models import BaseModel
from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    The primary key is a UUID so that database-change webhooks and mobile
    clients can reference users by the same string identifiers.

    Fields:
        id: UUID primary key
        email: Primary identifier, unique, used for login
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    email = models.EmailField(
        unique=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Return the profile's full name, or email if not set."""
        try:
            return self.profile.full_name or self.email
        except Profile.DoesNotExist:
            return self.email

    def get_short_name(self):
        return self.email.split("@")[0]


class Profile(BaseModel):
    """
    Marketplace profile data.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        full_name: Display name
        phone_number: Contact number shown to the other party of a request
        role: Whether the user requests services or performs them
        fcm_token: Firebase Cloud Messaging registration token of the
            user's current device (null until the app registers one)

    Note:
        Profile is automatically created via signals when a User is created.
    """

    class Role(models.TextChoices):
        """Marketplace role choices."""

        CUSTOMER = "customer", "Customer"
        MECHANIC = "mechanic", "Mechanic"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        help_text="User this profile belongs to",
    )

    full_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="User's display name",
    )

    phone_number = models.CharField(
        max_length=32,
        blank=True,
        help_text="Contact phone number",
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
        db_index=True,
        help_text="Marketplace role",
    )

    fcm_token = models.CharField(
        max_length=512,
        blank=True,
        null=True,
        help_text="FCM registration token for push notifications",
    )

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"

    def __str__(self):
        return self.full_name or str(self.user)

    @property
    def has_device_token(self) -> bool:
        return bool(self.fcm_token)
