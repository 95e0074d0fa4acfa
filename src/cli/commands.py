"""Mail and draft commands. Each dispatches one client call and renders the result."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from src.cli.dispatch import dispatch
from src.cli.render import (
    echo,
    echo_empty,
    render_attachments,
    render_folders,
    render_message_detail,
    render_messages,
    render_user,
)
from src.outlook.auth import Credentials
from src.outlook.builders import DraftMessage, NewMessage

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

F = TypeVar("F", bound=Callable[..., Any])


def split_csv(value: str) -> list[str]:
    """Split a comma-separated flag value, trimming each element.

    Empty elements are kept: ``"a,,b"`` gives ``["a", "", "b"]``.
    """
    return [part.strip() for part in value.split(",")]


def limit_option(default: int = DEFAULT_LIMIT) -> Callable[[F], F]:
    """The shared ``-l/--limit`` option for listing commands."""
    return click.option(
        "-l",
        "--limit",
        default=default,
        show_default=True,
        type=click.IntRange(min=1),
        help="Number of items to show.",
    )


# ── Listing ────────────────────────────────────────────────────────────────────


@click.command()
@limit_option()
@click.pass_obj
def inbox(credentials: Credentials, limit: int) -> None:
    """List inbox emails."""
    messages = dispatch(credentials, lambda client: client.inbox(limit))
    if not messages:
        echo_empty("(no messages)")
        return
    echo(render_messages(messages))


@click.command()
@limit_option()
@click.pass_obj
def unread(credentials: Credentials, limit: int) -> None:
    """List unread emails."""
    messages = dispatch(credentials, lambda client: client.unread(limit))
    if not messages:
        echo_empty("No unread messages")
        return
    echo(render_messages(messages))


@click.command()
@click.argument("query")
@limit_option()
@click.pass_obj
def search(credentials: Credentials, query: str, limit: int) -> None:
    """Search emails by subject."""
    messages = dispatch(credentials, lambda client: client.search_by_subject(query, limit))
    if not messages:
        echo_empty(f"No messages found for: {query}")
        return
    echo(render_messages(messages))


@click.command()
@click.argument("since")
@limit_option()
@click.pass_obj
def poll(credentials: Credentials, since: str, limit: int) -> None:
    """Poll for messages received after SINCE (ISO 8601)."""
    messages = dispatch(credentials, lambda client: client.poll_new_messages(since, limit))
    if not messages:
        echo_empty(f"No new messages since {since}")
        return
    echo([f"New messages since {since}:", *render_messages(messages)])


@click.command()
@click.pass_obj
def folders(credentials: Credentials) -> None:
    """List mail folders."""
    result = dispatch(credentials, lambda client: client.list_folders())
    if not result:
        echo_empty("No folders")
        return
    echo(render_folders(result))


@click.command(name="unread-count")
@click.pass_obj
def unread_count(credentials: Credentials) -> None:
    """Show the number of unread inbox messages."""
    count = dispatch(credentials, lambda client: client.unread_count())
    echo([f"Unread messages: {count}"])


@click.command()
@click.pass_obj
def me(credentials: Credentials) -> None:
    """Show the signed-in user."""
    user = dispatch(credentials, lambda client: client.get_me())
    echo(render_user(user))


# ── Single message ─────────────────────────────────────────────────────────────


@click.command()
@click.argument("message_id", metavar="ID")
@click.pass_obj
def read(credentials: Credentials, message_id: str) -> None:
    """Mark an email as read."""
    dispatch(credentials, lambda client: client.mark_as_read(message_id))
    echo([f"Marked as read: {message_id}"])


@click.command()
@click.argument("message_id", metavar="ID")
@click.pass_obj
def get(credentials: Credentials, message_id: str) -> None:
    """Show an email with its body."""
    msg = dispatch(credentials, lambda client: client.get_message_with_body(message_id))
    echo(render_message_detail(msg))


@click.command()
@click.argument("message_id", metavar="ID")
@click.pass_obj
def delete(credentials: Credentials, message_id: str) -> None:
    """Delete an email."""
    dispatch(credentials, lambda client: client.delete_message(message_id))
    echo([f"Deleted: {message_id}"])


@click.command()
@click.argument("message_id", metavar="ID")
@click.pass_obj
def attachments(credentials: Credentials, message_id: str) -> None:
    """List attachments of an email."""
    result = dispatch(credentials, lambda client: client.list_attachments(message_id))
    if not result:
        echo_empty("No attachments")
        return
    echo(render_attachments(result))


@click.command()
@click.option("-e", "--email-id", required=True, help="Email ID.")
@click.option("-a", "--attachment-id", required=True, help="Attachment ID.")
@click.option(
    "-o", "--output", required=True, type=click.Path(dir_okay=False), help="Output file path."
)
@click.pass_obj
def download(credentials: Credentials, email_id: str, attachment_id: str, output: str) -> None:
    """Download an attachment to a file."""
    data = dispatch(
        credentials, lambda client: client.download_attachment(email_id, attachment_id)
    )
    Path(output).write_bytes(data)
    logger.info("Wrote attachment %s to %s", attachment_id, output)
    echo([f"Downloaded {len(data)} bytes to: {output}"])


# ── Sending ────────────────────────────────────────────────────────────────────


@click.command()
@click.argument("to")
@click.option("-s", "--subject", required=True, help="Email subject.")
@click.option("-b", "--body", required=True, help="Email body.")
@click.option("--html", is_flag=True, help="Send as HTML (default: plain text).")
@click.pass_obj
def send(credentials: Credentials, to: str, subject: str, body: str, html: bool) -> None:
    """Send an email to TO."""
    message = NewMessage.html(to, subject, body) if html else NewMessage.text(to, subject, body)
    dispatch(credentials, lambda client: client.send_mail(message))
    echo([f"Email sent to: {to}"])


@click.command()
@click.argument("message_id", metavar="ID")
@click.option("-m", "--message", required=True, help="Reply message.")
@click.option("--all", "reply_all", is_flag=True, help="Reply to all recipients.")
@click.pass_obj
def reply(credentials: Credentials, message_id: str, message: str, reply_all: bool) -> None:
    """Reply to an email."""
    if reply_all:
        dispatch(credentials, lambda client: client.reply_all(message_id, message))
        echo([f"Replied all to: {message_id}"])
    else:
        dispatch(credentials, lambda client: client.reply(message_id, message))
        echo([f"Replied to: {message_id}"])


@click.command()
@click.argument("message_id", metavar="ID")
@click.option("-t", "--to", required=True, help="Recipient addresses (comma-separated).")
@click.option("-c", "--comment", default=None, help="Optional comment.")
@click.pass_obj
def forward(credentials: Credentials, message_id: str, to: str, comment: str | None) -> None:
    """Forward an email."""
    recipients = split_csv(to)
    dispatch(credentials, lambda client: client.forward(message_id, recipients, comment))
    echo([f"Forwarded to: {to}"])


# ── Drafts ─────────────────────────────────────────────────────────────────────


@click.command()
@limit_option()
@click.pass_obj
def drafts(credentials: Credentials, limit: int) -> None:
    """List draft emails."""
    messages = dispatch(credentials, lambda client: client.list_drafts(limit))
    if not messages:
        echo_empty("No drafts")
        return
    echo(["Drafts:", *render_messages(messages)])


@click.command(name="create-draft")
@click.option("-s", "--subject", default=None, help="Email subject.")
@click.option("-b", "--body", default=None, help="Email body.")
@click.option("-t", "--to", default=None, help="Recipients (comma-separated).")
@click.option("--html", is_flag=True, help="Body is HTML.")
@click.pass_obj
def create_draft(
    credentials: Credentials,
    subject: str | None,
    body: str | None,
    to: str | None,
    html: bool,
) -> None:
    """Create a draft email. Every field is optional."""
    draft = DraftMessage()
    if subject is not None:
        draft = draft.with_subject(subject)
    if body is not None:
        draft = draft.with_body_html(body) if html else draft.with_body_text(body)
    if to is not None:
        draft = draft.with_recipients(split_csv(to))
    created = dispatch(credentials, lambda client: client.create_draft(draft))
    echo([f"Draft created: {created.id}"])


@click.command(name="send-draft")
@click.argument("draft_id", metavar="ID")
@click.pass_obj
def send_draft(credentials: Credentials, draft_id: str) -> None:
    """Send a draft email."""
    dispatch(credentials, lambda client: client.send_draft(draft_id))
    echo([f"Draft sent: {draft_id}"])
