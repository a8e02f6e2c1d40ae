"""
PayU Transaction Records

Every notification that PayU confirms (VERIFIED and accepted) or rejects as
fake (INVALID) is stored here for reconciliation. Well-known fields get
their own columns; the complete notification is kept in ``payload``.

A transaction id may appear several times (e.g. repeated fake
notifications), but at most once with ``is_valid=True``.
"""

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _


class PayuTransaction(models.Model):
    """Stored PayU notification."""

    txn_id = models.CharField(max_length=255, blank=True, db_index=True, verbose_name=_("Transaction ID"))
    business = models.CharField(max_length=255, blank=True, verbose_name=_("Business"))
    receiver_email = models.CharField(max_length=255, blank=True, verbose_name=_("Receiver E-Mail"))
    item_name = models.CharField(max_length=255, blank=True, verbose_name=_("Item Name"))
    payment_status = models.CharField(max_length=50, blank=True, verbose_name=_("Payment Status"))
    pending_reason = models.CharField(max_length=50, blank=True, verbose_name=_("Pending Reason"))
    payment_gross = models.CharField(max_length=30, blank=True, verbose_name=_("Gross Amount"))
    payment_currency = models.CharField(max_length=10, blank=True, verbose_name=_("Currency"))

    user_id = models.BigIntegerField(default=0, verbose_name=_("User ID"))
    course_id = models.BigIntegerField(default=0, verbose_name=_("Course ID"))
    instance_id = models.BigIntegerField(default=0, verbose_name=_("Enrolment Instance ID"))

    payload = models.JSONField(default=dict, verbose_name=_("Payload"), help_text=_("Complete notification"))
    is_valid = models.BooleanField(
        default=True,
        verbose_name=_("Valid"),
        help_text=_("False for notifications PayU reported as INVALID"),
    )
    timeupdated = models.DateTimeField(verbose_name=_("Received At"))

    class Meta:
        verbose_name = _("PayU Transaction")
        verbose_name_plural = _("PayU Transactions")
        ordering = ["-timeupdated", "-id"]
        db_table = "payu_transaction"
        constraints = [
            models.UniqueConstraint(
                fields=["txn_id"],
                condition=Q(is_valid=True),
                name="payu_unique_valid_txn_id",
            ),
        ]

    def __str__(self):
        state = "valid" if self.is_valid else "invalid"
        return f"PayU {self.txn_id or '-'} ({state})"
