"""
PayU Record Store

Point lookups and writes the IPN handler needs from the database. Keeping
them in one class gives the processor a single data-store handle that tests
can swap or inspect.
"""

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from elearning.courses.models import Course, EnrolmentInstance
from elearning.courses.services import CourseContext, EnrolmentService

from .exceptions import DuplicateTransactionError
from .models import PayuTransaction
from .notification import IncomingNotification

logger = logging.getLogger(__name__)
User = get_user_model()


def _fit(field_name: str, value: str) -> str:
    """Cut a value to the column length; ``payload`` keeps the full text."""
    return (value or "")[: PayuTransaction._meta.get_field(field_name).max_length]


class PayuRecordStore:
    def __init__(self, enrolments: Optional[EnrolmentService] = None):
        self.enrolments = enrolments or EnrolmentService()

    def get_user(self, user_id: int):
        return User.objects.filter(pk=user_id).first()

    def get_course(self, course_id: int) -> Optional[Course]:
        return Course.objects.filter(pk=course_id).first()

    def get_course_context(self, course_id: int) -> Optional[CourseContext]:
        return self.enrolments.get_course_context(course_id)

    def get_enabled_instance(self, instance_id: int) -> Optional[EnrolmentInstance]:
        instance = EnrolmentInstance.objects.select_related("course").filter(pk=instance_id).first()
        if instance is None or not instance.is_enabled:
            return None
        return instance

    def transaction_exists(self, txn_id: str) -> bool:
        return PayuTransaction.objects.filter(txn_id=_fit("txn_id", txn_id)).exists()

    def insert_transaction(self, notification: IncomingNotification, is_valid: bool) -> PayuTransaction:
        """
        Persist a notification.

        Raises:
            DuplicateTransactionError: if ``is_valid`` and a valid record with
                the same transaction id already exists
        """
        fields = notification.fields
        record = PayuTransaction(
            txn_id=_fit("txn_id", notification.txn_id),
            business=_fit("business", notification.business),
            receiver_email=_fit("receiver_email", fields.get("receiver_email", "")),
            item_name=_fit("item_name", notification.item_name or fields.get("item_name", "")),
            payment_status=_fit("payment_status", notification.payment_status),
            pending_reason=_fit("pending_reason", notification.pending_reason),
            payment_gross=_fit("payment_gross", notification.payment_gross),
            payment_currency=_fit("payment_currency", notification.payment_currency),
            user_id=notification.user_id,
            course_id=notification.course_id,
            instance_id=notification.instance_id,
            payload=notification.as_dict(),
            is_valid=is_valid,
            timeupdated=notification.timeupdated,
        )

        try:
            with transaction.atomic():
                record.save()
        except IntegrityError:
            logger.warning("Valid PayU transaction %s already stored.", notification.txn_id)
            raise DuplicateTransactionError(notification.txn_id)

        logger.info("Recorded PayU transaction %s (valid=%s).", record.txn_id, is_valid)
        return record
