"""
PayU Integration AppConfig
==========================

Django application configuration for the local `core.payu_integration`
app. It only registers the app (name, verbose label, default PK field);
the IPN endpoint is wired through urls.py and needs no startup hooks.

Author: DSP Development Team
Date: 2025-10-01
"""

from django.apps import AppConfig


class PayuIntegrationConfig(AppConfig):
    """
    App configuration for the `core.payu_integration` package.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "core.payu_integration"
    label = "payu_integration"
    verbose_name = "PayU Integration"
