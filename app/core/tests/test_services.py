"""
Tests for ServiceResult and BaseService.
"""

import logging

import pytest

from core.exceptions import BaseApplicationError, NotFoundError
from core.services import BaseService, ServiceResult


class TestServiceResult:
    def test_success(self):
        result = ServiceResult.success({"id": 1})

        assert result
        assert result.data == {"id": 1}
        assert result.to_response() == {"success": True, "data": {"id": 1}}

    def test_failure(self):
        result = ServiceResult.failure(
            "Invalid amount",
            error_code="VALIDATION_ERROR",
            errors={"amount": ["Must be positive."]},
        )

        assert not result
        assert result.to_response() == {
            "error": "Invalid amount",
            "error_code": "VALIDATION_ERROR",
            "errors": {"amount": ["Must be positive."]},
        }

    def test_failure_without_code(self):
        assert ServiceResult.failure("Nope").to_response() == {"error": "Nope"}

    def test_from_application_error_keeps_message_and_code(self):
        exc = NotFoundError("Profile not found", error_code="PROFILE_NOT_FOUND")

        result = ServiceResult.from_exception(exc)

        assert result.error == "Profile not found"
        assert result.error_code == "PROFILE_NOT_FOUND"

    def test_from_plain_exception(self):
        result = ServiceResult.from_exception(KeyError("amount"))

        assert result.error == "'amount'"
        assert result.error_code == "KEYERROR"

    def test_explicit_code_wins(self):
        result = ServiceResult.from_exception(NotFoundError("x"), error_code="CUSTOM")

        assert result.error_code == "CUSTOM"


class ExampleService(BaseService):
    pass


class TestBaseService:
    def test_logger_is_named_after_service(self):
        assert ExampleService.get_logger().name == f"{__name__}.ExampleService"

    def test_handle_exception_logs_and_wraps(self, caplog):
        exc = BaseApplicationError("Gateway down", error_code="GATEWAY_DOWN")

        with caplog.at_level(logging.ERROR):
            result = ExampleService.handle_exception(exc, "checkout")

        assert result.error == "Gateway down"
        assert result.error_code == "GATEWAY_DOWN"
        assert "checkout: [GATEWAY_DOWN] Gateway down" in caplog.text

    def test_atomic_rolls_back(self, db):
        from authentication.models import User

        with pytest.raises(RuntimeError):
            with ExampleService.atomic():
                User.objects.create_user(email="rollback@example.com")
                raise RuntimeError("abort")

        assert not User.objects.filter(email="rollback@example.com").exists()
