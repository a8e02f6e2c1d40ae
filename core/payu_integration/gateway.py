"""
PayU Gateway Client
===================

Posts the echo of a received notification back to PayU and interprets the
answer. PayU replies with the literal body ``VERIFIED`` or ``INVALID``;
anything else is reported as ``UNRECOGNIZED`` and left to the caller.

The request goes to ``https://<host>/cgi-bin/webscr`` with an explicit
``Host`` header, form content type and a fixed 30 second timeout.
``requests`` (via urllib3) always talks HTTP/1.1, so no protocol
negotiation is involved.
"""

import enum
import logging
from typing import Optional

import requests

from .config import VALIDATION_TIMEOUT, PayuConfig
from .exceptions import GatewayUnreachableError

logger = logging.getLogger(__name__)


class VerificationOutcome(enum.Enum):
    VERIFIED = "VERIFIED"
    INVALID = "INVALID"
    UNREACHABLE = "UNREACHABLE"
    EMPTY = "EMPTY"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def from_body(cls, body: Optional[str]) -> "VerificationOutcome":
        """Case-sensitive, exact comparison of the response body."""
        if not body:
            return cls.EMPTY
        if body == cls.VERIFIED.value:
            return cls.VERIFIED
        if body == cls.INVALID.value:
            return cls.INVALID
        return cls.UNRECOGNIZED


class PayuGatewayClient:
    """
    Validates notifications against PayU.

    Args:
        config: PayU configuration (selects sandbox or production host)
        session: Optional ``requests.Session``; the module-level ``requests``
            API is used when omitted
    """

    def __init__(self, config: PayuConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session

    def _post(self, url: str, **kwargs) -> requests.Response:
        if self.session is not None:
            return self.session.post(url, **kwargs)
        return requests.post(url, **kwargs)

    def fetch_verdict(self, echo: str) -> str:
        """
        Post the echo string to the validation endpoint.

        Returns:
            The raw response body

        Raises:
            GatewayUnreachableError: on transport failure or an empty body
        """
        location = self.config.validation_url
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Host": self.config.gateway_host,
        }

        try:
            logger.debug(f"Posting PayU validation request to: {location}")
            response = self._post(
                location,
                data=echo.encode("utf-8"),
                headers=headers,
                timeout=VALIDATION_TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"PayU validation request failed: {str(e)}")
            raise GatewayUnreachableError(location=location)

        body = response.text or ""
        if not body:
            logger.error(
                "PayU validation returned an empty body (status=%s).", response.status_code
            )
            raise GatewayUnreachableError(location=location, status_code=response.status_code)

        return body

    def verify(self, echo: str) -> VerificationOutcome:
        """Validate an echo string; never raises for transport problems."""
        try:
            body = self.fetch_verdict(echo)
        except GatewayUnreachableError as e:
            logger.warning("PayU validation unavailable: %s", e.to_dict())
            return VerificationOutcome.UNREACHABLE

        outcome = VerificationOutcome.from_body(body)
        logger.info("PayU validation verdict: %s", outcome.value)
        return outcome
