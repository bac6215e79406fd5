"""Subscriber schedule notifications."""

from .composer import (
    DispatchReport,
    EmailSender,
    OutgoingEmail,
    Subscriber,
    compose_email,
    dispatch_notifications,
    group_by_email,
)

__all__ = [
    "DispatchReport",
    "EmailSender",
    "OutgoingEmail",
    "Subscriber",
    "compose_email",
    "dispatch_notifications",
    "group_by_email",
]
