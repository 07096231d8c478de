"""
Authentication application.

Accounts and marketplace profiles for customers and mechanics.

Key components:
    - User model: Custom email-based user authentication (UUID primary key)
    - Profile model: Display data, role, and the FCM push token

Usage:
    from authentication.models import User, Profile
"""
