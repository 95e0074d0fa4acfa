"""Text projection of client responses.

``render_*`` functions are pure: they take response values and return the
output lines. ``echo`` writes lines through ``click.echo`` byte for byte, so
tabs, carriage returns and other control characters in message text reach
stdout unchanged. Only the empty-state sentence goes through rich for its
colour.
"""

from __future__ import annotations

from datetime import datetime, timezone

import click
from rich.console import Console

from src.outlook.types import (
    Attachment,
    CalendarEvent,
    Contact,
    MailFolder,
    Message,
    Recipient,
    User,
)

console = Console(width=200)

NO_SUBJECT = "(no subject)"
NO_NAME = "(no name)"
UNKNOWN = "unknown"
UNREAD_LEGEND = "* = unread"


def echo(lines: list[str]) -> None:
    """Print each line exactly as given."""
    for line in lines:
        click.echo(line)


def echo_empty(sentence: str) -> None:
    """Print a command's empty-state sentence, yellow on a terminal."""
    console.print(
        sentence, style="yellow", markup=False, emoji=False, highlight=False, soft_wrap=True
    )


def format_received(received: datetime) -> str:
    """``2026-02-27 09:00:00 UTC``. Naive values are taken as UTC."""
    if received.tzinfo is None:
        received = received.replace(tzinfo=timezone.utc)
    return received.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S %Z")


def _sender_address(sender: Recipient | None) -> str:
    if sender is None or sender.email_address.address is None:
        return UNKNOWN
    return sender.email_address.address


# ── Mail ───────────────────────────────────────────────────────────────────────


def render_messages(messages: list[Message]) -> list[str]:
    """Numbered message list with an unread marker column and a trailing legend."""
    if not messages:
        return ["(no messages)"]

    lines: list[str] = []
    for i, msg in enumerate(messages, start=1):
        read_mark = " " if msg.is_read else "*"
        lines.append(f"{i:2}.{read_mark} {_sender_address(msg.sender)} - {msg.subject or NO_SUBJECT}")
        lines.append(f"      ID: {msg.id}")
    lines.append("")
    lines.append(UNREAD_LEGEND)
    return lines


def render_message_detail(msg: Message) -> list[str]:
    received = format_received(msg.received_date_time) if msg.received_date_time is not None else ""
    lines = [
        f"Subject: {msg.subject or NO_SUBJECT}",
        f"From: {_sender_address(msg.sender)}",
        f"Date: {received}",
        f"Read: {'Yes' if msg.is_read else 'No'}",
        "",
    ]
    if msg.body is not None:
        lines.append(msg.body.content)
    return lines


def render_folders(folders: list[MailFolder]) -> list[str]:
    lines = ["Mail Folders:", ""]
    for folder in folders:
        unread = folder.unread_item_count or 0
        total = folder.total_item_count or 0
        unread_str = f" ({unread} unread)" if unread > 0 else ""
        lines.append(f"  {folder.display_name} - {total} items{unread_str}")
    return lines


def render_user(user: User) -> list[str]:
    return [f"User: {user.display_name or ''}", f"Email: {user.mail or ''}"]


def render_attachments(attachments: list[Attachment]) -> list[str]:
    lines = ["Attachments:"]
    for att in attachments:
        size = f" ({att.size} bytes)" if att.size is not None else ""
        lines.append(f"  {att.id} - {att.name}{size}")
    return lines


# ── Calendar ───────────────────────────────────────────────────────────────────


def render_events(events: list[CalendarEvent]) -> list[str]:
    lines = ["Calendar Events:"]
    for event in events:
        start = event.start.date_time if event.start is not None else "?"
        lines.append(f"  {start} - {event.subject or NO_SUBJECT}")
        lines.append(f"    ID: {event.id}")
    return lines


def render_event_detail(event: CalendarEvent) -> list[str]:
    lines = [f"Subject: {event.subject or NO_SUBJECT}"]
    if event.start is not None:
        lines.append(f"Start: {event.start.date_time} ({event.start.time_zone})")
    if event.end is not None:
        lines.append(f"End: {event.end.date_time} ({event.end.time_zone})")
    if event.location is not None and event.location.display_name is not None:
        lines.append(f"Location: {event.location.display_name}")
    if event.attendees is not None:
        lines.append("Attendees:")
        for attendee in event.attendees:
            address = attendee.email_address.address if attendee.email_address else None
            lines.append(f"  - {address or UNKNOWN}")
    return lines


# ── Contacts ───────────────────────────────────────────────────────────────────


def render_contacts(contacts: list[Contact]) -> list[str]:
    lines = ["Contacts:"]
    for contact in contacts:
        first_email = ""
        if contact.email_addresses:
            first_email = contact.email_addresses[0].address or ""
        lines.append(f"  {contact.display_name or NO_NAME} - {first_email}")
        lines.append(f"    ID: {contact.id}")
    return lines


def render_contact_detail(contact: Contact) -> list[str]:
    lines = [f"Name: {contact.given_name or ''} {contact.surname or ''}"]
    for email in contact.email_addresses or []:
        if email.address is not None:
            lines.append(f"Email: {email.address}")
    if contact.mobile_phone is not None:
        lines.append(f"Mobile: {contact.mobile_phone}")
    if contact.company_name is not None:
        lines.append(f"Company: {contact.company_name}")
    if contact.job_title is not None:
        lines.append(f"Title: {contact.job_title}")
    return lines
