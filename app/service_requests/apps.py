"""
Service requests app configuration.
"""

from django.apps import AppConfig


class ServiceRequestsConfig(AppConfig):
    """Configuration for the service requests application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "service_requests"
    verbose_name = "Service Requests"
