"""
PayU Integration Configuration

Reads the PayU related settings once per request so that every component of
the IPN handler works with the same, explicit configuration object.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.conf import settings

PRODUCTION_HOST = "www.payu.com"
SANDBOX_HOST = "www.sandbox.payu.com"
VALIDATION_PATH = "/cgi-bin/webscr"
VALIDATION_TIMEOUT = 30


def _to_decimal(value) -> Decimal:
    try:
        return Decimal(str(value).strip() or "0")
    except (InvalidOperation, ValueError):
        return Decimal("0")


@dataclass(frozen=True)
class PayuConfig:
    use_sandbox: bool = False
    business: str = ""
    default_cost: Decimal = Decimal("0")
    mail_students: bool = True
    mail_teachers: bool = True
    mail_admins: bool = True
    site_name: str = "DSP"
    frontend_url: str = ""
    noreply_email: str = ""

    @classmethod
    def from_settings(cls) -> "PayuConfig":
        return cls(
            use_sandbox=bool(getattr(settings, "PAYU_USE_SANDBOX", False)),
            business=getattr(settings, "PAYU_BUSINESS", "") or "",
            default_cost=_to_decimal(getattr(settings, "PAYU_DEFAULT_COST", "0")),
            mail_students=bool(getattr(settings, "PAYU_MAIL_STUDENTS", True)),
            mail_teachers=bool(getattr(settings, "PAYU_MAIL_TEACHERS", True)),
            mail_admins=bool(getattr(settings, "PAYU_MAIL_ADMINS", True)),
            site_name=getattr(settings, "SITE_NAME", "DSP"),
            frontend_url=getattr(settings, "FRONTEND_URL", ""),
            noreply_email=getattr(settings, "DEFAULT_FROM_EMAIL", ""),
        )

    @property
    def gateway_host(self) -> str:
        return SANDBOX_HOST if self.use_sandbox else PRODUCTION_HOST

    @property
    def validation_url(self) -> str:
        return f"https://{self.gateway_host}{VALIDATION_PATH}"
