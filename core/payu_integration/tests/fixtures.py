"""
Gemeinsame Testdaten für die PayU-Tests.

Creates a site administrator, a student, an editing teacher, one course and
a PayU enrolment instance (10.00 EUR, 30 days), plus helpers to build
notifications for them.
"""

from datetime import timedelta
from decimal import Decimal
from urllib.parse import urlencode

from django.contrib.auth.models import User

from core.payu_integration.config import PayuConfig
from core.payu_integration.gateway import VerificationOutcome
from core.payu_integration.messaging import MessageSink
from elearning.courses.models import Course, CourseRole, CourseRoleAssignment, EnrolmentInstance

BUSINESS = "shop@example.com"


class RecordingSink(MessageSink):
    """Keeps every message instead of delivering it."""

    def __init__(self):
        self.messages = []

    def send(self, message) -> bool:
        self.messages.append(message)
        return True

    @property
    def subjects(self):
        return [message.subject for message in self.messages]


class FakeGateway:
    def __init__(self, outcome=VerificationOutcome.VERIFIED):
        self.outcome = outcome
        self.calls = []

    def verify(self, echo):
        self.calls.append(echo)
        return self.outcome


def make_config(**overrides) -> PayuConfig:
    values = {
        "business": BUSINESS,
        "site_name": "DSP Test",
        "frontend_url": "http://frontend.test",
        "noreply_email": "noreply@example.com",
    }
    values.update(overrides)
    return PayuConfig(**values)


class PayuTestDataMixin:
    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_superuser(
            username="admin", email="admin@example.com", password="Adminpassword"
        )
        cls.student = User.objects.create_user(
            username="Max",
            email="max@example.com",
            password="Musterpassword",
            first_name="Max",
            last_name="Mustermann",
        )
        cls.teacher = User.objects.create_user(
            username="Erika", email="erika@example.com", password="Musterpassword"
        )
        cls.course = Course.objects.create(fullname="Python Grundlagen", shortname="PY101")
        cls.instance = EnrolmentInstance.objects.create(
            course=cls.course,
            cost=Decimal("10.00"),
            currency="EUR",
            enrol_period=timedelta(days=30),
        )
        CourseRoleAssignment.objects.create(
            course=cls.course, user=cls.teacher, role=CourseRole.EDITING_TEACHER
        )

    def notification_fields(self, **overrides):
        fields = {
            "txn_id": "TX-1000",
            "business": BUSINESS,
            "receiver_email": BUSINESS,
            "item_name": "Kurs",
            "payment_status": "Completed",
            "mc_gross": "10.00",
            "mc_currency": "EUR",
            "custom": f"{self.student.pk}-{self.course.pk}-{self.instance.pk}",
        }
        fields.update(overrides)
        return fields

    def form_body(self, **overrides) -> str:
        return urlencode(self.notification_fields(**overrides))
