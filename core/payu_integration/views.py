"""
PayU Integration Views (core.payu_integration)
==============================================

Endpoints
---------

1. PayuIpnView
   - URL: /api/payments/payu/ipn/
   - Method: POST (form-encoded, no query string); any other method gets
     the same generic 400 as a malformed POST
   - Auth: None (PayU calls this endpoint)
   - Purpose:
       Receives Instant Payment Notifications, validates them against PayU
       and enrols the paying user. The response body is empty in every
       case except a failed validation call.

2. PayuTransactionListView
   - URL: /api/payments/payu/transactions/
   - Method: GET
   - Auth: Staff only
   - Query: ?txn_id=...&is_valid=true|false&user_id=...
   - Purpose:
       Lists stored PayU notifications for manual reconciliation.

3. PayuTransactionDetailView
   - URL: /api/payments/payu/transactions/<id>/
   - Method: GET
   - Auth: Staff only

Security
--------
- PayU must never see error pages: admission problems get a short generic
  400 message, everything else is reported to the site administrator only.
- Unexpected exceptions are logged and answered with an empty 200.

Dependencies
------------
- Django REST Framework (API endpoints)
- requests (validation call, see gateway.py)

Author: DSP Development Team
Date: 2025-10-01
"""

import logging

from django.http import HttpResponse
from rest_framework import generics, status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.parsers import FormParser
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from .context import IpnContext
from .exceptions import InvalidNotificationError
from .models import PayuTransaction
from .notification import check_admission, parse_notification
from .processor import IpnProcessor
from .serializers import PayuTransactionSerializer

logger = logging.getLogger(__name__)

GATEWAY_UNREACHABLE_BODY = "<p>Error: could not access payu.com</p>"


class PayuIpnView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = [FormParser]

    def get_ipn_context(self) -> IpnContext:
        return IpnContext.from_settings()

    def http_method_not_allowed(self, request, *args, **kwargs):
        # Any other method gets the same generic answer as a malformed POST
        return self.post(request)

    def post(self, request):
        try:
            # Read before request.data so the raw bytes stay available
            raw_body = request.body
            try:
                data = request.data
            except (ParseError, UnsupportedMediaType):
                data = {}

            context = self.get_ipn_context()
            check_admission(request.method, request.query_params, data)
            notification = parse_notification(data, now=context.clock(), raw_body=raw_body)
            result = IpnProcessor(context).process(notification)

        except InvalidNotificationError as e:
            return Response({"detail": e.message}, status=status.HTTP_400_BAD_REQUEST)
        except Exception as exc:
            # Never leak errors to PayU, just log them
            logger.exception("Error handling PayU IPN: %s", exc)
            return Response(status=status.HTTP_200_OK)

        logger.info("[payu ipn] outcome=%s reason=%s", result.outcome.value, result.reason)

        if result.gateway_unreachable:
            return HttpResponse(GATEWAY_UNREACHABLE_BODY, content_type="text/html")
        return Response(status=status.HTTP_200_OK)


class PayuTransactionListView(generics.ListAPIView):
    serializer_class = PayuTransactionSerializer
    permission_classes = [IsAdminUser]

    def get_queryset(self):
        """
        Optionale Filterung nach txn_id, is_valid und user_id
        """
        queryset = PayuTransaction.objects.all()

        txn_id = self.request.query_params.get("txn_id")
        if txn_id:
            queryset = queryset.filter(txn_id=txn_id)

        is_valid = self.request.query_params.get("is_valid")
        if is_valid is not None:
            queryset = queryset.filter(is_valid=is_valid.lower() == "true")

        user_id = self.request.query_params.get("user_id")
        if user_id and user_id.isdigit():
            queryset = queryset.filter(user_id=int(user_id))

        return queryset


class PayuTransactionDetailView(generics.RetrieveAPIView):
    queryset = PayuTransaction.objects.all()
    serializer_class = PayuTransactionSerializer
    permission_classes = [IsAdminUser]
