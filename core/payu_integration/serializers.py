from rest_framework import serializers

from .models import PayuTransaction


class PayuTransactionSerializer(serializers.ModelSerializer):
    """Read-only representation of stored PayU notifications."""

    class Meta:
        model = PayuTransaction
        fields = [
            "id",
            "txn_id",
            "business",
            "receiver_email",
            "item_name",
            "payment_status",
            "pending_reason",
            "payment_gross",
            "payment_currency",
            "user_id",
            "course_id",
            "instance_id",
            "is_valid",
            "timeupdated",
            "payload",
        ]
        read_only_fields = fields
