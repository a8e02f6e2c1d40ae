"""
Request-scoped dependencies of the IPN handler.

One ``IpnContext`` is built per request and handed to the processor; it
carries the configuration, the data-store handle, the enrolment service,
the notifier and the gateway client. Tests build their own context with
fakes instead of patching module globals.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from django.utils import timezone

from elearning.courses.services import EnrolmentService

from .config import PayuConfig
from .gateway import PayuGatewayClient
from .messaging import EmailMessageSink, MessageSink, PayuNotifier
from .store import PayuRecordStore


@dataclass
class IpnContext:
    config: PayuConfig
    store: PayuRecordStore
    enrolments: EnrolmentService
    notifier: PayuNotifier
    gateway: PayuGatewayClient
    clock: Callable[[], datetime] = field(default=timezone.now)

    @classmethod
    def from_settings(
        cls,
        config: Optional[PayuConfig] = None,
        sink: Optional[MessageSink] = None,
        gateway: Optional[PayuGatewayClient] = None,
    ) -> "IpnContext":
        config = config or PayuConfig.from_settings()
        enrolments = EnrolmentService()
        sink = sink or EmailMessageSink(noreply_email=config.noreply_email)
        return cls(
            config=config,
            store=PayuRecordStore(enrolments),
            enrolments=enrolments,
            notifier=PayuNotifier(config, sink, enrolments),
            gateway=gateway or PayuGatewayClient(config),
        )
