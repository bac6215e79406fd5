"""Per-family schedule e-mails keyed by subscriber-entered swimmer names."""

from __future__ import annotations

from dataclasses import dataclass, field
import html
import logging
from typing import Iterable, Protocol, Sequence

from raceready.extraction.models import EventRecord
from raceready.matching.roster import event_label, find_swimmer_events

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Subscriber:
    email: str
    swimmer_name: str


@dataclass(frozen=True, slots=True)
class OutgoingEmail:
    to: str
    subject: str
    html: str


@dataclass(slots=True)
class DispatchReport:
    sent: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)


class EmailSender(Protocol):
    def send(self, message: OutgoingEmail) -> None:
        ...


def group_by_email(subscribers: Iterable[Subscriber]) -> dict[str, list[str]]:
    """Swimmer names per recipient, in subscription order."""

    grouped: dict[str, list[str]] = {}
    for subscriber in subscribers:
        grouped.setdefault(subscriber.email, []).append(subscriber.swimmer_name)
    return grouped


def _cell(value: object | None) -> str:
    return html.escape(str(value)) if value else "&mdash;"


def render_swimmer_section(swimmer_name: str, events: Sequence[EventRecord]) -> str:
    heading = f'<h2 style="color:#3b82f6;margin:20px 0 10px;">{html.escape(swimmer_name)}</h2>'
    matches = find_swimmer_events(events, swimmer_name)
    if not matches:
        return (
            heading
            + '<p style="color:#6b7280;">No matching events found for this swimmer. '
            "The name may not exactly match the meet sheet.</p>"
        )

    rows = [
        '<table style="width:100%;border-collapse:collapse;font-size:14px;">',
        '<tr style="background:#f3f4f6;"><th style="padding:8px;text-align:left;">Event</th>'
        '<th style="padding:8px;">Heat</th><th style="padding:8px;">Lane</th>'
        '<th style="padding:8px;">Seed Time</th></tr>',
    ]
    for event, athlete in matches:
        rows.append(
            '<tr style="border-bottom:1px solid #e5e7eb;">'
            f'<td style="padding:8px;">{html.escape(event_label(event))}</td>'
            f'<td style="padding:8px;text-align:center;">{_cell(athlete.heat)}</td>'
            f'<td style="padding:8px;text-align:center;">{_cell(athlete.lane)}</td>'
            f'<td style="padding:8px;text-align:center;">{_cell(athlete.seed_time)}</td>'
            "</tr>"
        )
    rows.append("</table>")
    return heading + "".join(rows)


def compose_email(meet_name: str, recipient: str, swimmer_names: Sequence[str], events: Sequence[EventRecord]) -> OutgoingEmail:
    sections = "".join(render_swimmer_section(name, events) for name in swimmer_names)
    body = (
        '<div style="font-family:sans-serif;max-width:600px;margin:0 auto;padding:20px;">'
        f'<h1 style="color:#1e293b;margin-bottom:4px;">{html.escape(meet_name)}</h1>'
        '<p style="color:#6b7280;margin-top:0;">Here\'s the schedule for your swimmer(s):</p>'
        f"{sections}"
        '<hr style="margin:30px 0;border:none;border-top:1px solid #e5e7eb;" />'
        '<p style="color:#9ca3af;font-size:12px;">Sent by RaceReady</p>'
        "</div>"
    )
    return OutgoingEmail(to=recipient, subject=f"{meet_name} - Swim Schedule", html=body)


def dispatch_notifications(
    meet_name: str,
    events: Sequence[EventRecord],
    subscribers: Iterable[Subscriber],
    sender: EmailSender,
) -> DispatchReport:
    """Send one schedule e-mail per recipient; a failed send does not stop the rest."""

    report = DispatchReport()
    for recipient, swimmer_names in group_by_email(subscribers).items():
        message = compose_email(meet_name, recipient, swimmer_names, events)
        try:
            sender.send(message)
        except Exception as exc:
            logger.error("Failed to send schedule to %s: %s", recipient, exc)
            report.failed += 1
            report.errors.append(f"{recipient}: {exc}")
            continue
        report.sent += 1
    return report
