"""
Tests for the ServiceRequest model.
"""

from service_requests.models import PaymentStatus, ServiceRequestStatus
from service_requests.tests.factories import ServiceRequestFactory


class TestServiceRequest:
    def test_defaults(self, db):
        service_request = ServiceRequestFactory()

        assert service_request.status == ServiceRequestStatus.PENDING
        assert service_request.payment_status == PaymentStatus.UNPAID
        assert service_request.mechanic is None
        assert service_request.is_cancelled is False
        assert service_request.is_paid is False

    def test_status_flags(self, db):
        service_request = ServiceRequestFactory(
            status=ServiceRequestStatus.CANCELLED,
            payment_status=PaymentStatus.PAID,
        )

        assert service_request.is_cancelled is True
        assert service_request.is_paid is True

    def test_deleting_mechanic_unassigns_request(self, db, mechanic):
        service_request = ServiceRequestFactory(mechanic=mechanic)

        mechanic.delete()
        service_request.refresh_from_db()

        assert service_request.mechanic is None

    def test_requester_relation(self, db, requester):
        service_request = ServiceRequestFactory(requester=requester)

        assert list(requester.service_requests.all()) == [service_request]
