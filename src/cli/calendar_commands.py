"""Calendar commands."""

from __future__ import annotations

import logging

import click

from src.cli.commands import limit_option, split_csv
from src.cli.dispatch import dispatch
from src.cli.render import echo, echo_empty, render_event_detail, render_events
from src.outlook.auth import Credentials
from src.outlook.builders import NewCalendarEvent
from src.outlook.types import DateTimeTimeZone

logger = logging.getLogger(__name__)


@click.command()
@limit_option()
@click.option("--start", default=None, help="Range start (ISO 8601). Needs --end.")
@click.option("--end", default=None, help="Range end (ISO 8601). Needs --start.")
@click.pass_obj
def events(credentials: Credentials, limit: int, start: str | None, end: str | None) -> None:
    """List calendar events, optionally within a date range."""
    if start is not None and end is not None:
        result = dispatch(credentials, lambda client: client.list_events_range(start, end, limit))
    else:
        if start is not None or end is not None:
            logger.warning("--start and --end must be given together; listing without a range")
        result = dispatch(credentials, lambda client: client.list_events(limit))

    if not result:
        echo_empty("No events")
        return
    echo(render_events(result))


@click.command()
@click.argument("event_id", metavar="ID")
@click.pass_obj
def event(credentials: Credentials, event_id: str) -> None:
    """Show event details."""
    found = dispatch(credentials, lambda client: client.get_event(event_id))
    echo(render_event_detail(found))


@click.command(name="create-event")
@click.option("-s", "--subject", required=True, help="Event subject.")
@click.option("--start", required=True, help="Start datetime (ISO 8601).")
@click.option("--end", required=True, help="End datetime (ISO 8601).")
@click.option("--timezone", default="UTC", show_default=True, help="Time zone for start/end.")
@click.option("-l", "--location", default=None, help="Location.")
@click.option("-a", "--attendees", default=None, help="Attendee emails (comma-separated).")
@click.option("--all-day", is_flag=True, help="All-day event.")
@click.option("--online", is_flag=True, help="Create an online meeting.")
@click.pass_obj
def create_event(
    credentials: Credentials,
    subject: str,
    start: str,
    end: str,
    timezone: str,
    location: str | None,
    attendees: str | None,
    all_day: bool,
    online: bool,
) -> None:
    """Create a calendar event."""
    new_event = NewCalendarEvent(
        subject=subject,
        start=DateTimeTimeZone(start, timezone),
        end=DateTimeTimeZone(end, timezone),
    )
    if location is not None:
        new_event = new_event.with_location(location)
    if attendees is not None:
        new_event = new_event.with_attendees(split_csv(attendees))
    if all_day:
        new_event = new_event.as_all_day()
    if online:
        new_event = new_event.as_online_meeting()

    created = dispatch(credentials, lambda client: client.create_event(new_event))
    echo([f"Event created: {created.id}"])


@click.command(name="delete-event")
@click.argument("event_id", metavar="ID")
@click.pass_obj
def delete_event(credentials: Credentials, event_id: str) -> None:
    """Delete a calendar event."""
    dispatch(credentials, lambda client: client.delete_event(event_id))
    echo([f"Event deleted: {event_id}"])


@click.command(name="accept-event")
@click.argument("event_id", metavar="ID")
@click.option("-c", "--comment", default=None, help="Optional comment.")
@click.pass_obj
def accept_event(credentials: Credentials, event_id: str, comment: str | None) -> None:
    """Accept a calendar event invitation."""
    dispatch(credentials, lambda client: client.accept_event(event_id, comment))
    echo([f"Event accepted: {event_id}"])


@click.command(name="decline-event")
@click.argument("event_id", metavar="ID")
@click.option("-c", "--comment", default=None, help="Optional comment.")
@click.pass_obj
def decline_event(credentials: Credentials, event_id: str, comment: str | None) -> None:
    """Decline a calendar event invitation."""
    dispatch(credentials, lambda client: client.decline_event(event_id, comment))
    echo([f"Event declined: {event_id}"])
