from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PayuTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("txn_id", models.CharField(blank=True, db_index=True, max_length=255, verbose_name="Transaction ID")),
                ("business", models.CharField(blank=True, max_length=255, verbose_name="Business")),
                ("receiver_email", models.CharField(blank=True, max_length=255, verbose_name="Receiver E-Mail")),
                ("item_name", models.CharField(blank=True, max_length=255, verbose_name="Item Name")),
                ("payment_status", models.CharField(blank=True, max_length=50, verbose_name="Payment Status")),
                ("pending_reason", models.CharField(blank=True, max_length=50, verbose_name="Pending Reason")),
                ("payment_gross", models.CharField(blank=True, max_length=30, verbose_name="Gross Amount")),
                ("payment_currency", models.CharField(blank=True, max_length=10, verbose_name="Currency")),
                ("user_id", models.BigIntegerField(default=0, verbose_name="User ID")),
                ("course_id", models.BigIntegerField(default=0, verbose_name="Course ID")),
                ("instance_id", models.BigIntegerField(default=0, verbose_name="Enrolment Instance ID")),
                ("payload", models.JSONField(default=dict, help_text="Complete notification", verbose_name="Payload")),
                ("is_valid", models.BooleanField(default=True, help_text="False for notifications PayU reported as INVALID", verbose_name="Valid")),
                ("timeupdated", models.DateTimeField(verbose_name="Received At")),
            ],
            options={
                "verbose_name": "PayU Transaction",
                "verbose_name_plural": "PayU Transactions",
                "db_table": "payu_transaction",
                "ordering": ["-timeupdated", "-id"],
            },
        ),
        migrations.AddConstraint(
            model_name="payutransaction",
            constraint=models.UniqueConstraint(
                condition=models.Q(("is_valid", True)),
                fields=("txn_id",),
                name="payu_unique_valid_txn_id",
            ),
        ),
    ]
