"""
Backend URL Configuration

URL Structure:
- /admin/: Django admin (Jazzmin)
- /api/token/: JWT token management for staff API access
- /api/payments/: Payment integrations (PayU IPN and transaction records)

Author: DSP Development Team
Version: 1.0.0
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
    TokenVerifyView,
)

# --- Authentication and Token Management ---

token_urlpatterns = [
    path("", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("verify/", TokenVerifyView.as_view(), name="token_verify"),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/token/", include(token_urlpatterns)),
    # Zahlungsanbieter
    path("api/payments/", include("core.payu_integration.urls")),
]
