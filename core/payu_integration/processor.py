"""
PayU IPN Processor
==================

Decision core of the PayU Instant Payment Notification endpoint.

Overview
--------
The view admits and parses the request (see ``notification.py``) and hands
the resulting ``IncomingNotification`` to ``IpnProcessor.process``. The
processor runs one straight pass of guard clauses and returns an explicit
``IpnResult`` instead of aborting the request:

1. Entity resolution: user → course → course context → enabled instance.
2. Gateway re-validation of the echo string.
3. VERIFIED: business rules, then record + enrol + notify.
   INVALID: store a failure record, warn the admin.
   Unreachable/empty: warn the admin.
   Anything else: ignore.

Business rules (VERIFIED only, in this order)
---------------------------------------------
- status must be Completed or Pending, otherwise unenrol + admin warning
- currency must equal the instance currency
- Pending for any reason but echeck: tell the user and the admin, stop
- only Completed or Pending/echeck continue (silent stop otherwise)
- a transaction id already on record is a replay
- ``business`` must match the configured PayU business (case-insensitive)
- user and course are looked up again
- paid amount must cover the instance cost (or the default cost),
  rounded to 2 decimals like on the enrolment form; overpayment is fine

Every failure after resolution is reported to the site administrator with
the complete notification; nothing is ever reported back to PayU.
"""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

from django.db import transaction

from .context import IpnContext
from .exceptions import DuplicateTransactionError
from .gateway import VerificationOutcome
from .models import PayuTransaction
from .notification import IncomingNotification

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "Completed"
STATUS_PENDING = "Pending"
PENDING_REASON_ECHECK = "echeck"

CENT = Decimal("0.01")


class IpnOutcome(enum.Enum):
    ENROLLED = "enrolled"
    INVALID_RECORDED = "invalid_recorded"
    REJECTED = "rejected"
    DUPLICATE = "duplicate"
    PENDING = "pending"
    IGNORED = "ignored"
    ENTITY_MISSING = "entity_missing"
    GATEWAY_UNREACHABLE = "gateway_unreachable"


@dataclass
class IpnResult:
    outcome: IpnOutcome
    reason: str = ""
    record: Optional[PayuTransaction] = None
    verification: Optional[VerificationOutcome] = None

    @property
    def gateway_unreachable(self) -> bool:
        return self.outcome is IpnOutcome.GATEWAY_UNREACHABLE


def required_cost(instance_cost, default_cost) -> Decimal:
    """Instance cost if positive, else the default cost, rounded half-up to cents."""
    cost = Decimal(str(instance_cost or 0))
    if cost <= 0:
        cost = Decimal(str(default_cost or 0))
    return cost.quantize(CENT, rounding=ROUND_HALF_UP)


def enrolment_window(now: datetime, enrol_period) -> Tuple[Optional[datetime], Optional[datetime]]:
    """(start, end) of a new enrolment; (None, None) means unlimited."""
    if enrol_period:
        return now, now + enrol_period
    return None, None


class IpnProcessor:
    def __init__(self, context: IpnContext):
        self.context = context
        self.store = context.store
        self.notifier = context.notifier

    def _report(self, outcome: IpnOutcome, reason: str, notification: IncomingNotification, **kwargs) -> IpnResult:
        self.notifier.error_to_admin(reason, notification)
        return IpnResult(outcome=outcome, reason=reason, **kwargs)

    def process(self, notification: IncomingNotification) -> IpnResult:
        """
        Handle one parsed notification.

        Args:
            notification: Parsed and admitted notification

        Returns:
            IpnResult describing what happened
        """
        user = self.store.get_user(notification.user_id)
        if user is None:
            return self._report(IpnOutcome.ENTITY_MISSING, "Not a valid user id", notification)

        course = self.store.get_course(notification.course_id)
        if course is None:
            return self._report(IpnOutcome.ENTITY_MISSING, "Not a valid course id", notification)

        course_context = self.store.get_course_context(course.pk)
        if course_context is None:
            return self._report(IpnOutcome.ENTITY_MISSING, "Not a valid context id", notification)

        instance = self.store.get_enabled_instance(notification.instance_id)
        if instance is None:
            return self._report(IpnOutcome.ENTITY_MISSING, "Not a valid instance id", notification)

        verification = self.context.gateway.verify(notification.echo)

        if verification in (VerificationOutcome.UNREACHABLE, VerificationOutcome.EMPTY):
            return self._report(
                IpnOutcome.GATEWAY_UNREACHABLE,
                "Could not access payu.com to verify payment",
                notification,
                verification=verification,
            )

        if verification is VerificationOutcome.VERIFIED:
            result = self._handle_verified(notification, user, course_context, instance)
            result.verification = verification
            return result

        if verification is VerificationOutcome.INVALID:
            record = self.store.insert_transaction(notification, is_valid=False)
            return self._report(
                IpnOutcome.INVALID_RECORDED,
                "Received an invalid payment notification!! (Fake payment?)",
                notification,
                record=record,
                verification=verification,
            )

        logger.info("Ignoring unrecognized PayU verdict for txn %s.", notification.txn_id)
        return IpnResult(
            outcome=IpnOutcome.IGNORED,
            reason="Unrecognized gateway response",
            verification=verification,
        )

    def _handle_verified(self, notification, user, course_context, instance) -> IpnResult:
        config = self.context.config
        status = notification.payment_status

        if status not in (STATUS_COMPLETED, STATUS_PENDING):
            self.context.enrolments.unenrol_user(instance, notification.user_id)
            return self._report(
                IpnOutcome.REJECTED,
                "Status not completed or pending. User unenrolled from course",
                notification,
            )

        if notification.payment_currency != instance.currency:
            return self._report(
                IpnOutcome.REJECTED,
                f"Currency does not match course settings, received: {notification.payment_currency}",
                notification,
            )

        if status == STATUS_PENDING and notification.pending_reason != PENDING_REASON_ECHECK:
            self.notifier.notify_pending(user, notification.course_id)
            return self._report(IpnOutcome.PENDING, "Payment pending", notification)

        # Redundant with the checks above; guards against new status codes
        if not (
            status == STATUS_COMPLETED
            or (status == STATUS_PENDING and notification.pending_reason == PENDING_REASON_ECHECK)
        ):
            return IpnResult(outcome=IpnOutcome.IGNORED, reason=f"Unhandled payment status {status}")

        if self.store.transaction_exists(notification.txn_id):
            return self._report(
                IpnOutcome.DUPLICATE,
                f"Transaction {notification.txn_id} is being repeated!",
                notification,
            )

        if notification.business.lower() != config.business.lower():
            return self._report(
                IpnOutcome.REJECTED,
                f"Business email is {notification.business} (not {config.business})",
                notification,
            )

        user = self.store.get_user(notification.user_id)
        if user is None:
            return self._report(
                IpnOutcome.ENTITY_MISSING, f"User {notification.user_id} doesn't exist", notification
            )

        course = self.store.get_course(notification.course_id)
        if course is None:
            return self._report(
                IpnOutcome.ENTITY_MISSING, f"Course {notification.course_id} doesn't exist", notification
            )

        cost = required_cost(instance.cost, config.default_cost)
        if notification.amount < cost:
            return self._report(
                IpnOutcome.REJECTED,
                f"Amount paid is not enough ({notification.payment_gross} < {cost})",
                notification,
            )

        notification.item_name = course.fullname

        try:
            with transaction.atomic():
                record = self.store.insert_transaction(notification, is_valid=True)
                time_start, time_end = enrolment_window(
                    self.context.clock(), instance.enrol_period if instance.has_enrol_period else None
                )
                self.context.enrolments.enrol_user(
                    instance, user.pk, instance.role, time_start, time_end
                )
        except DuplicateTransactionError as e:
            return self._report(IpnOutcome.DUPLICATE, e.message, notification)

        logger.info(
            "PayU payment %s accepted: user %s enrolled into course %s.",
            notification.txn_id, user.pk, course.pk,
        )

        teacher = self.context.enrolments.get_course_teacher(course_context)
        self.notifier.notify_enrolment(user, course, teacher)

        return IpnResult(outcome=IpnOutcome.ENROLLED, record=record)
