"""Outbound mail collaborator and account templates."""

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailMessage:
    """A rendered message ready for delivery."""

    to: str
    subject: str
    html: str


class Mailer(Protocol):
    """Delivers rendered messages."""

    async def send(self, message: MailMessage) -> None:
        """Send one message.

        Args:
            message: Rendered message
        """
        ...


class LoggingMailer:
    """Mailer that records messages in the application log instead of sending."""

    def __init__(self, sender: str) -> None:
        self._sender = sender

    async def send(self, message: MailMessage) -> None:
        """Log the envelope of the message; the body is never logged."""
        logger.info(
            "Mail queued: %s -> %s",
            message.subject,
            message.to,
            extra={"structured": {"from": self._sender, "to": message.to, "subject": message.subject}},
        )


def account_details_message(email: str, password: str) -> MailMessage:
    """Render the account-details message sent on registration."""
    html = (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head><meta charset=\"UTF-8\"><title>Account Details</title></head>\n"
        "<body>\n"
        "<p>Hi,</p>\n"
        "<p>Your account has been set up for you, and you can now log in "
        "using the details below:</p>\n"
        "<hr>\n"
        f"<p>Email: {email}</p>\n"
        f"<p>Password: {password}</p>\n"
        "<hr>\n"
        "<p>Sincerely,</p>\n"
        "<p>Your Team</p>\n"
        "</body>\n"
        "</html>\n"
    )
    return MailMessage(to=email, subject="Your Account Details", html=html)


def invitation_message(email: str, signup_url: str) -> MailMessage:
    """Render the invitation sent by POST /api/invite."""
    html = (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head><meta charset=\"UTF-8\"><title>You're Invited</title></head>\n"
        "<body>\n"
        "<p>Hi there,</p>\n"
        "<p>You have been invited to join your team's workforce management "
        "platform, where you can view your schedule, track time and attendance "
        "and manage your details.</p>\n"
        f'<p><a href="{signup_url}">Join now</a></p>\n'
        "<p>We look forward to having you on board!</p>\n"
        "<p>Your Team</p>\n"
        "</body>\n"
        "</html>\n"
    )
    return MailMessage(to=email, subject="You're Invited", html=html)
