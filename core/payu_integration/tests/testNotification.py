from datetime import datetime, timezone
from decimal import Decimal

from django.http import QueryDict
from django.test import SimpleTestCase

from core.payu_integration.exceptions import InvalidNotificationError
from core.payu_integration.notification import (
    ARRAY_PARAM_MESSAGE,
    INVALID_KEY_MESSAGE,
    INVALID_USE_MESSAGE,
    check_admission,
    coerce_amount,
    coerce_int,
    fix_utf8,
    parse_notification,
    raw_form_values,
)

"""
    Tests für die Annahme und das Parsen von PayU-Benachrichtigungen.
    Eine Benachrichtigung wird geparst und gleichzeitig als Echo für die Validierung aufgebaut.
"""


class AdmissionTests(SimpleTestCase):
    def test_post_with_body_is_admitted(self):
        check_admission("POST", {}, {"txn_id": "1"})

    def test_get_is_rejected(self):
        with self.assertRaises(InvalidNotificationError) as ctx:
            check_admission("GET", {}, {"txn_id": "1"})
        self.assertEqual(ctx.exception.message, INVALID_USE_MESSAGE)
        self.assertEqual(ctx.exception.status_code, 400)

    def test_put_is_rejected(self):
        with self.assertRaises(InvalidNotificationError) as ctx:
            check_admission("PUT", {}, {"txn_id": "1"})
        self.assertEqual(ctx.exception.message, INVALID_USE_MESSAGE)

    def test_query_string_is_rejected(self):
        with self.assertRaises(InvalidNotificationError):
            check_admission("POST", QueryDict("debug=1"), {"txn_id": "1"})

    def test_empty_body_is_rejected(self):
        with self.assertRaises(InvalidNotificationError):
            check_admission("POST", QueryDict(""), QueryDict(""))


class ParseNotificationTests(SimpleTestCase):
    def test_echo_keeps_body_order_and_encodes_values(self):
        notification = parse_notification(
            QueryDict("item_name=Kurs+A%26B&custom=1-2-3&mc_gross=10.00")
        )
        self.assertEqual(
            notification.echo,
            "cmd=_notify-validate&item_name=Kurs+A%26B&custom=1-2-3&mc_gross=10.00",
        )
        self.assertEqual(list(notification.fields), ["item_name", "custom", "mc_gross"])
        self.assertEqual(notification.fields["item_name"], "Kurs A&B")

    def test_echo_uses_bytes_as_sent(self):
        body = b"first_name=M%FCller&memo=a%FFb"

        notification = parse_notification(
            QueryDict(body, encoding="windows-1252"), raw_body=body
        )

        self.assertEqual(notification.echo, "cmd=_notify-validate&first_name=M%FCller&memo=a%FFb")
        self.assertEqual(notification.fields["first_name"], "Müller")

    def test_raw_form_values(self):
        self.assertEqual(
            raw_form_values(b"first_name=M%FCller&x=a+b&x=c&&flag"),
            {b"first_name": b"M\xfcller", b"x": b"a b", b"flag": b""},
        )
        self.assertEqual(raw_form_values(None), {})

    def test_custom_is_split_into_ids(self):
        notification = parse_notification({"custom": "12-34-56"})
        self.assertEqual(
            (notification.user_id, notification.course_id, notification.instance_id),
            (12, 34, 56),
        )

    def test_custom_with_garbage_becomes_zero(self):
        notification = parse_notification({"custom": "12abc-x"})
        self.assertEqual(
            (notification.user_id, notification.course_id, notification.instance_id),
            (12, 0, 0),
        )

    def test_missing_custom_gives_zero_ids(self):
        notification = parse_notification({"txn_id": "TX"})
        self.assertEqual(notification.user_id, 0)
        self.assertEqual(notification.payment_gross, "")
        self.assertEqual(notification.payment_currency, "")

    def test_invalid_field_name_is_rejected(self):
        with self.assertRaises(InvalidNotificationError) as ctx:
            parse_notification({"txn_id": "1", "bad key": "x"})
        self.assertEqual(ctx.exception.message, INVALID_KEY_MESSAGE)

    def test_bracket_field_name_is_rejected(self):
        with self.assertRaises(InvalidNotificationError) as ctx:
            parse_notification(QueryDict("item%5B%5D=1"))
        self.assertEqual(ctx.exception.message, INVALID_KEY_MESSAGE)

    def test_repeated_field_is_an_array_param(self):
        with self.assertRaises(InvalidNotificationError) as ctx:
            parse_notification(QueryDict("txn_id=1&txn_id=2"))
        self.assertEqual(ctx.exception.message, ARRAY_PARAM_MESSAGE)

    def test_aliases_and_amount(self):
        notification = parse_notification({"mc_gross": "19.90", "mc_currency": "EUR"})
        self.assertEqual(notification.payment_gross, "19.90")
        self.assertEqual(notification.payment_currency, "EUR")
        self.assertEqual(notification.amount, Decimal("19.90"))

    def test_as_dict_contains_derived_values(self):
        now = datetime(2025, 10, 1, 12, 0, tzinfo=timezone.utc)
        notification = parse_notification({"custom": "1-2-3", "mc_gross": "5"}, now=now)
        notification.item_name = "Python Grundlagen"

        data = notification.as_dict()

        self.assertEqual(data["userid"], 1)
        self.assertEqual(data["courseid"], 2)
        self.assertEqual(data["instanceid"], 3)
        self.assertEqual(data["payment_gross"], "5")
        self.assertEqual(data["item_name"], "Python Grundlagen")
        self.assertEqual(data["timeupdated"], now.isoformat())


class CoercionTests(SimpleTestCase):
    def test_coerce_int(self):
        self.assertEqual(coerce_int("42"), 42)
        self.assertEqual(coerce_int(" 7"), 7)
        self.assertEqual(coerce_int("3rd"), 3)
        self.assertEqual(coerce_int("abc"), 0)
        self.assertEqual(coerce_int(""), 0)
        self.assertEqual(coerce_int(None), 0)

    def test_coerce_amount(self):
        self.assertEqual(coerce_amount("10.005"), Decimal("10.005"))
        self.assertEqual(coerce_amount("abc"), Decimal("0"))
        self.assertEqual(coerce_amount(""), Decimal("0"))
        self.assertEqual(coerce_amount("NaN"), Decimal("0"))

    def test_fix_utf8_drops_nul_and_surrogates(self):
        self.assertEqual(fix_utf8("a\x00b"), "ab")
        self.assertEqual(fix_utf8("a\ud800b"), "ab")
        self.assertEqual(fix_utf8("Müller"), "Müller")
