from unittest import mock

import requests
from django.test import SimpleTestCase

from core.payu_integration.config import PayuConfig
from core.payu_integration.exceptions import GatewayUnreachableError
from core.payu_integration.gateway import PayuGatewayClient, VerificationOutcome

ECHO = "cmd=_notify-validate&txn_id=TX-1&mc_gross=10.00"


def gateway_response(text, status_code=200):
    response = mock.Mock()
    response.text = text
    response.status_code = status_code
    return response


class GatewayClientTests(SimpleTestCase):
    def setUp(self):
        self.gateway = PayuGatewayClient(PayuConfig())

    @mock.patch("core.payu_integration.gateway.requests.post")
    def test_posts_echo_to_production_host(self, post):
        post.return_value = gateway_response("VERIFIED")

        self.assertEqual(self.gateway.verify(ECHO), VerificationOutcome.VERIFIED)

        post.assert_called_once_with(
            "https://www.payu.com/cgi-bin/webscr",
            data=ECHO.encode("utf-8"),
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Host": "www.payu.com",
            },
            timeout=30,
        )

    @mock.patch("core.payu_integration.gateway.requests.post")
    def test_sandbox_host(self, post):
        post.return_value = gateway_response("INVALID")
        client = PayuGatewayClient(PayuConfig(use_sandbox=True))

        self.assertEqual(client.verify(ECHO), VerificationOutcome.INVALID)

        args, kwargs = post.call_args
        self.assertEqual(args[0], "https://www.sandbox.payu.com/cgi-bin/webscr")
        self.assertEqual(kwargs["headers"]["Host"], "www.sandbox.payu.com")

    @mock.patch("core.payu_integration.gateway.requests.post")
    def test_transport_error_is_unreachable(self, post):
        post.side_effect = requests.exceptions.ConnectionError("boom")

        self.assertEqual(self.gateway.verify(ECHO), VerificationOutcome.UNREACHABLE)

    @mock.patch("core.payu_integration.gateway.requests.post")
    def test_unreachable_is_logged_with_error_details(self, post):
        post.side_effect = requests.exceptions.ConnectionError("boom")

        with self.assertLogs("core.payu_integration", level="WARNING") as logs:
            self.gateway.verify(ECHO)

        self.assertIn("GatewayUnreachableError", logs.output[-1])
        self.assertIn("https://www.payu.com/cgi-bin/webscr", logs.output[-1])

    @mock.patch("core.payu_integration.gateway.requests.post")
    def test_timeout_is_unreachable(self, post):
        post.side_effect = requests.exceptions.Timeout()

        with self.assertRaises(GatewayUnreachableError) as ctx:
            self.gateway.fetch_verdict(ECHO)
        self.assertEqual(ctx.exception.location, "https://www.payu.com/cgi-bin/webscr")

    @mock.patch("core.payu_integration.gateway.requests.post")
    def test_empty_body_is_unreachable(self, post):
        post.return_value = gateway_response("", status_code=502)

        with self.assertRaises(GatewayUnreachableError) as ctx:
            self.gateway.fetch_verdict(ECHO)
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(self.gateway.verify(ECHO), VerificationOutcome.UNREACHABLE)

    @mock.patch("core.payu_integration.gateway.requests.post")
    def test_verdict_comparison_is_exact(self, post):
        for body in ("verified", "VERIFIED\n", "Invalid", "<html>error</html>"):
            post.return_value = gateway_response(body)
            self.assertEqual(self.gateway.verify(ECHO), VerificationOutcome.UNRECOGNIZED, body)

    def test_session_is_used_when_given(self):
        session = mock.Mock(spec=requests.Session)
        session.post.return_value = gateway_response("VERIFIED")
        client = PayuGatewayClient(PayuConfig(), session=session)

        self.assertEqual(client.verify(ECHO), VerificationOutcome.VERIFIED)
        session.post.assert_called_once()
