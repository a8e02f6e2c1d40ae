"""
PayU Notification Messages
==========================

Everything the IPN handler tells humans goes through this module:

- ``Message`` / ``MessageSink``: a minimal message contract
  (from, to, subject, body, format) and the e-mail implementation
  backed by ``django.core.mail.send_mail``.
- ``PayuNotifier``: builds the concrete messages
  * admin diagnostics (``PAYU ERROR: ...`` with the full notification dump)
  * "payment pending" notice to the paying user
  * localized enrolment confirmations for student, teacher and admins

Delivery problems are logged and never propagate, so a broken mail server
cannot turn a processed payment into an error response.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from django.core.mail import send_mail
from django.utils.translation import gettext as _

from .config import PayuConfig

logger = logging.getLogger(__name__)

FORMAT_PLAIN = "plain"


@dataclass(frozen=True)
class Message:
    userfrom: Any
    userto: Any
    subject: str
    fullmessage: str
    format: str = FORMAT_PLAIN
    course_id: Optional[int] = None


class MessageSink:
    """Delivery interface used by the notifier."""

    def send(self, message: Message) -> bool:
        raise NotImplementedError


class EmailMessageSink(MessageSink):
    """
    Sends messages as plain-text e-mail.

    ``userfrom`` / ``userto`` may be user objects (their ``email`` is used)
    or plain address strings. A missing sender falls back to the no-reply
    address.
    """

    def __init__(self, noreply_email: str = ""):
        self.noreply_email = noreply_email

    @staticmethod
    def _address(party: Any) -> str:
        if party is None:
            return ""
        if isinstance(party, str):
            return party
        return getattr(party, "email", "") or ""

    def send(self, message: Message) -> bool:
        recipient = self._address(message.userto)
        if not recipient:
            logger.warning("Message '%s' not sent: recipient has no e-mail address.", message.subject)
            return False

        sender = self._address(message.userfrom) or self.noreply_email or None
        try:
            send_mail(
                message.subject,
                message.fullmessage,
                sender,
                [recipient],
                fail_silently=False,
            )
        except Exception as e:
            logger.error(f"Failed to send message '{message.subject}' to {recipient}: {str(e)}")
            return False

        logger.info("Message '%s' sent to %s.", message.subject, recipient)
        return True


def fullname(user) -> str:
    return user.get_full_name() or user.get_username()


def format_notification_dump(site_name: str, reason: str, data: Mapping[str, Any]) -> str:
    lines = [f"{site_name}:  Transaction failed.", "", reason, ""]
    lines.extend(f"{key} => {value}" for key, value in data.items())
    return "\n".join(lines) + "\n"


class PayuNotifier:
    """
    Builds and sends the messages of the IPN flow.

    Args:
        config: PayU configuration (site name, frontend URL, mail toggles)
        sink: Delivery channel
        enrolments: Enrolment service (admin lookup)
    """

    def __init__(self, config: PayuConfig, sink: MessageSink, enrolments):
        self.config = config
        self.sink = sink
        self.enrolments = enrolments

    def error_to_admin(self, reason: str, notification) -> None:
        """Admin-only diagnostic carrying the full notification."""
        data = notification.as_dict() if hasattr(notification, "as_dict") else dict(notification)
        logger.warning("PayU IPN problem: %s (txn_id=%s)", reason, data.get("txn_id", ""))

        admin = self.enrolments.get_primary_admin()
        if admin is None:
            logger.error("No site administrator to report PayU problem to: %s", reason)
            return

        self.sink.send(
            Message(
                userfrom=admin,
                userto=admin,
                subject=f"PAYU ERROR: {reason}",
                fullmessage=format_notification_dump(self.config.site_name, reason, data),
                course_id=data.get("courseid") or None,
            )
        )

    def notify_pending(self, user, course_id: Optional[int] = None) -> None:
        self.sink.send(
            Message(
                userfrom=self.enrolments.get_primary_admin(),
                userto=user,
                subject=_("%(site)s: payu payment") % {"site": self.config.site_name},
                fullmessage=_("Your payu payment is pending."),
                course_id=course_id or None,
            )
        )

    def notify_enrolment(self, user, course, teacher=None) -> List[Message]:
        """
        Fan out enrolment confirmations according to the mail toggles.

        Returns:
            The messages that were handed to the sink
        """
        sent: List[Message] = []
        subject = _("New enrolment in %(course)s") % {"course": course.shortname}
        notice = _('%(user)s has enrolled in course "%(course)s"') % {
            "user": fullname(user),
            "course": course.fullname,
        }

        if self.config.mail_students:
            welcome = _(
                "Welcome to %(coursename)s!\n\n"
                "If you have not done so already, you should edit your profile page "
                "so that we can learn more about you:\n\n  %(profileurl)s"
            ) % {
                "coursename": course.fullname,
                "profileurl": f"{self.config.frontend_url}/users/{user.pk}",
            }
            sent.append(
                Message(
                    userfrom=teacher or self.config.noreply_email,
                    userto=user,
                    subject=subject,
                    fullmessage=welcome,
                    course_id=course.pk,
                )
            )

        if self.config.mail_teachers and teacher is not None:
            sent.append(
                Message(userfrom=user, userto=teacher, subject=subject, fullmessage=notice, course_id=course.pk)
            )

        if self.config.mail_admins:
            for admin in self.enrolments.get_admins():
                sent.append(
                    Message(userfrom=user, userto=admin, subject=subject, fullmessage=notice, course_id=course.pk)
                )

        for message in sent:
            self.sink.send(message)
        return sent
