"""
Notifications app for push delivery through Firebase Cloud Messaging.

Usage:
    from notifications.services import PushNotificationService

    PushNotificationService.send_to_user(user_id, title, body, data)
"""
