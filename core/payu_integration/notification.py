"""
PayU Notification Parsing
=========================

Turns the raw form body of an Instant Payment Notification into an
``IncomingNotification`` and, in the same pass, builds the echo string that
is posted back to PayU for validation.

Rules
-----
- Only POST bodies without query-string parameters are admitted.
- Every field name must consist of ``A-Z a-z 0-9 _ -`` only.
- A field sent more than once (array/container value) rejects the request.
- Values are echoed URL-encoded, in body order, after ``cmd=_notify-validate``,
  using the bytes PayU sent rather than the charset-decoded text.
- The ``custom`` field carries ``<userid>-<courseid>-<instanceid>``; parts
  that are missing or not numeric become 0.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple
from urllib.parse import quote_plus, unquote_to_bytes

from .exceptions import InvalidNotificationError

logger = logging.getLogger(__name__)

VALIDATE_COMMAND = "cmd=_notify-validate"

INVALID_USE_MESSAGE = "Sorry, you can not use the script that way."
INVALID_KEY_MESSAGE = "Sorry, Invalid request"
ARRAY_PARAM_MESSAGE = "Sorry, Unexpected array param"

_KEY_PATTERN = re.compile(r"[A-Za-z0-9_-]*")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def fix_utf8(value: str) -> str:
    """Drop code points that cannot be stored as UTF-8 and NUL bytes."""
    return value.encode("utf-8", "ignore").decode("utf-8").replace("\x00", "")


def coerce_int(value: Optional[str]) -> int:
    """Integer value of the leading digits of ``value``, 0 if there are none."""
    if not value:
        return 0
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


def coerce_amount(value: Optional[str]) -> Decimal:
    """Decimal amount of a gross field; unparsable amounts count as 0."""
    try:
        amount = Decimal((value or "").strip() or "0")
    except InvalidOperation:
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


@dataclass
class IncomingNotification:
    """
    One notification as received from PayU.

    ``fields`` keeps the body order. Only ``item_name`` and ``timeupdated``
    are changed after parsing.
    """

    fields: Dict[str, str]
    echo: str
    user_id: int = 0
    course_id: int = 0
    instance_id: int = 0
    timeupdated: Optional[datetime] = None
    item_name: Optional[str] = None

    def get(self, key: str, default: str = "") -> str:
        return self.fields.get(key, default)

    @property
    def txn_id(self) -> str:
        return self.get("txn_id")

    @property
    def payment_status(self) -> str:
        return self.get("payment_status")

    @property
    def pending_reason(self) -> str:
        return self.get("pending_reason")

    @property
    def business(self) -> str:
        return self.get("business")

    @property
    def payment_gross(self) -> str:
        return self.get("mc_gross")

    @property
    def payment_currency(self) -> str:
        return self.get("mc_currency")

    @property
    def amount(self) -> Decimal:
        return coerce_amount(self.payment_gross)

    def as_dict(self) -> Dict[str, Any]:
        """All received fields plus the derived values, as stored and reported."""
        data: Dict[str, Any] = dict(self.fields)
        if self.item_name is not None:
            data["item_name"] = self.item_name
        data.update(
            {
                "userid": self.user_id,
                "courseid": self.course_id,
                "instanceid": self.instance_id,
                "payment_gross": self.payment_gross,
                "payment_currency": self.payment_currency,
                "timeupdated": self.timeupdated.isoformat() if self.timeupdated else None,
            }
        )
        return data


def check_admission(method: str, query_params: Mapping, data: Mapping) -> None:
    """
    Keep out casual intruders: POST only, no GET parameters, non-empty body.

    Raises:
        InvalidNotificationError: if the request does not look like an IPN
    """
    if method.upper() != "POST" or query_params or not data:
        logger.warning(
            "Rejected PayU IPN request (method=%s, query_params=%d, fields=%d).",
            method, len(query_params or {}), len(data or {}),
        )
        raise InvalidNotificationError(INVALID_USE_MESSAGE)


def raw_form_values(body: Optional[bytes]) -> Dict[bytes, bytes]:
    """
    Field values of a form body as the bytes that were sent, before any
    charset decoding.
    """
    values: Dict[bytes, bytes] = {}
    for segment in (body or b"").split(b"&"):
        if not segment:
            continue
        key, _, value = segment.partition(b"=")
        key = unquote_to_bytes(key.replace(b"+", b" "))
        values.setdefault(key, unquote_to_bytes(value.replace(b"+", b" ")))
    return values


def _iter_fields(data: Mapping) -> Iterator[Tuple[str, Any]]:
    if hasattr(data, "lists"):
        # QueryDict: a key sent more than once is an array parameter
        for key, values in data.lists():
            yield key, values[0] if len(values) == 1 else list(values)
    else:
        yield from data.items()


def parse_notification(
    data: Mapping,
    now: Optional[datetime] = None,
    raw_body: Optional[bytes] = None,
) -> IncomingNotification:
    """
    Parse the form body and build the echo request in one pass.

    Args:
        data: Form fields (a ``QueryDict`` or a plain mapping)
        now: Timestamp stored as ``timeupdated``
        raw_body: Undecoded request body; echoed values are taken from it
            so PayU gets back exactly the bytes it sent

    Returns:
        The parsed IncomingNotification

    Raises:
        InvalidNotificationError: on the first bad field name or array value
    """
    echo: List[str] = [VALIDATE_COMMAND]
    fields: Dict[str, str] = {}
    raw_values = raw_form_values(raw_body)

    for key, value in _iter_fields(data):
        if not _KEY_PATTERN.fullmatch(key):
            logger.warning("Rejected PayU IPN with invalid field name %r.", key)
            raise InvalidNotificationError(INVALID_KEY_MESSAGE)
        if isinstance(value, (list, tuple, dict, set)):
            logger.warning("Rejected PayU IPN with array value for field %r.", key)
            raise InvalidNotificationError(ARRAY_PARAM_MESSAGE)

        value = "" if value is None else str(value)
        raw_value = raw_values.get(key.encode("ascii"), value.encode("utf-8"))
        echo.append(f"{key}={quote_plus(raw_value)}")
        fields[key] = fix_utf8(value)

    custom = fields.get("custom", "").split("-")
    custom += [""] * (3 - len(custom))

    return IncomingNotification(
        fields=fields,
        echo="&".join(echo),
        user_id=coerce_int(custom[0]),
        course_id=coerce_int(custom[1]),
        instance_id=coerce_int(custom[2]),
        timeupdated=now,
    )
