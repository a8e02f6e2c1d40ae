"""
PayU Integration Django Admin Configuration

Stored PayU notifications are evidence for reconciliation, so the admin
shows them read-only: no adding, no editing, no deleting.
"""

from typing import Optional

from django.contrib import admin
from django.http import HttpRequest

from .models import PayuTransaction


@admin.register(PayuTransaction)
class PayuTransactionAdmin(admin.ModelAdmin):
    """Read-only administration of PayU transaction records."""

    list_display = (
        "txn_id",
        "is_valid",
        "payment_status",
        "payment_gross",
        "payment_currency",
        "user_id",
        "course_id",
        "item_name",
        "timeupdated",
    )
    list_filter = ("is_valid", "payment_status", "payment_currency")
    search_fields = ("txn_id", "business", "receiver_email", "item_name")
    ordering = ("-timeupdated",)

    def get_readonly_fields(self, request: HttpRequest, obj: Optional[PayuTransaction] = None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_delete_permission(self, request: HttpRequest, obj: Optional[PayuTransaction] = None) -> bool:
        return False
