"""Outlook client: Microsoft Graph mail, calendar and contacts behind a typed async API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Protocol, runtime_checkable

import httpx

from src.outlook.auth import Credentials, acquire_access_token
from src.outlook.builders import DraftMessage, NewCalendarEvent, NewContact, NewMessage
from src.outlook.errors import OutlookError
from src.outlook.types import (
    ATTACHMENT_FIELDS,
    MESSAGE_DETAIL_FIELDS,
    MESSAGE_LIST_FIELDS,
    Attachment,
    CalendarEvent,
    Contact,
    MailFolder,
    Message,
    User,
)

logger = logging.getLogger(__name__)

GRAPH_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_TIMEOUT_SECONDS = 30.0

_NEWEST_FIRST = "receivedDateTime desc"
# Graph rejects $orderby on a property that is not also the first $filter term.
_UNREAD_FILTER = "receivedDateTime ge 1900-01-01T00:00:00Z and isRead eq false"


# ── Capability interface ───────────────────────────────────────────────────────


@runtime_checkable
class OutlookClient(Protocol):
    """One coroutine per operation the CLI can dispatch.

    Implementations raise :class:`OutlookError` on any failure; callers do not
    retry or inspect it.
    """

    # Mail
    async def inbox(self, limit: int) -> list[Message]: ...
    async def unread(self, limit: int) -> list[Message]: ...
    async def search_by_subject(self, query: str, limit: int) -> list[Message]: ...
    async def mark_as_read(self, message_id: str) -> None: ...
    async def list_folders(self) -> list[MailFolder]: ...
    async def get_me(self) -> User: ...
    async def send_mail(self, message: NewMessage) -> None: ...
    async def reply(self, message_id: str, comment: str) -> None: ...
    async def reply_all(self, message_id: str, comment: str) -> None: ...
    async def forward(
        self, message_id: str, recipients: list[str], comment: str | None
    ) -> None: ...
    async def delete_message(self, message_id: str) -> None: ...
    async def get_message_with_body(self, message_id: str) -> Message: ...
    async def list_attachments(self, message_id: str) -> list[Attachment]: ...
    async def download_attachment(self, message_id: str, attachment_id: str) -> bytes: ...
    async def poll_new_messages(self, since: str, limit: int) -> list[Message]: ...
    async def unread_count(self) -> int: ...

    # Drafts
    async def list_drafts(self, limit: int) -> list[Message]: ...
    async def create_draft(self, draft: DraftMessage) -> Message: ...
    async def send_draft(self, draft_id: str) -> None: ...

    # Calendar
    async def list_events(self, limit: int) -> list[CalendarEvent]: ...
    async def list_events_range(self, start: str, end: str, limit: int) -> list[CalendarEvent]: ...
    async def get_event(self, event_id: str) -> CalendarEvent: ...
    async def create_event(self, event: NewCalendarEvent) -> CalendarEvent: ...
    async def delete_event(self, event_id: str) -> None: ...
    async def accept_event(self, event_id: str, comment: str | None) -> None: ...
    async def decline_event(self, event_id: str, comment: str | None) -> None: ...

    # Contacts
    async def list_contacts(self, limit: int) -> list[Contact]: ...
    async def search_contacts(self, query: str, limit: int) -> list[Contact]: ...
    async def get_contact(self, contact_id: str) -> Contact: ...
    async def create_contact(self, contact: NewContact) -> Contact: ...
    async def delete_contact(self, contact_id: str) -> None: ...


# ── Graph implementation ───────────────────────────────────────────────────────


class GraphOutlookClient:
    """Thin async wrapper around the Microsoft Graph v1.0 REST API.

    Holds an authenticated ``httpx.AsyncClient`` whose ``base_url`` points at
    Graph. Every public method issues exactly one HTTP request and maps the
    JSON response into the types in ``src.outlook.types``. Use the
    ``outlook_client()`` context manager to construct and tear down correctly.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    # ── Mail ───────────────────────────────────────────────────────────────────

    async def inbox(self, limit: int) -> list[Message]:
        values = await self._list(
            "/me/mailFolders/inbox/messages",
            {"$top": limit, "$orderby": _NEWEST_FIRST, "$select": _select(MESSAGE_LIST_FIELDS)},
        )
        return [Message.from_graph(v) for v in values]

    async def unread(self, limit: int) -> list[Message]:
        values = await self._list(
            "/me/mailFolders/inbox/messages",
            {
                "$top": limit,
                "$filter": _UNREAD_FILTER,
                "$orderby": _NEWEST_FIRST,
                "$select": _select(MESSAGE_LIST_FIELDS),
            },
        )
        return [Message.from_graph(v) for v in values]

    async def search_by_subject(self, query: str, limit: int) -> list[Message]:
        """Search all folders by subject. Graph disallows ``$orderby`` with ``$search``."""
        escaped = query.replace('"', '\\"')
        values = await self._list(
            "/me/messages",
            {
                "$top": limit,
                "$search": f'"subject:{escaped}"',
                "$select": _select(MESSAGE_LIST_FIELDS),
            },
        )
        return [Message.from_graph(v) for v in values]

    async def mark_as_read(self, message_id: str) -> None:
        await self._request("PATCH", f"/me/messages/{message_id}", json={"isRead": True})
        logger.info("Marked message %s as read", message_id)

    async def list_folders(self) -> list[MailFolder]:
        values = await self._list("/me/mailFolders", {"$top": 100})
        return [MailFolder.from_graph(v) for v in values]

    async def get_me(self) -> User:
        return User.from_graph(await self._get_json("/me"))

    async def send_mail(self, message: NewMessage) -> None:
        await self._request(
            "POST",
            "/me/sendMail",
            json={"message": message.to_graph(), "saveToSentItems": True},
        )
        logger.info("Sent email to %s: %r", message.to, message.subject)

    async def reply(self, message_id: str, comment: str) -> None:
        await self._request("POST", f"/me/messages/{message_id}/reply", json={"comment": comment})
        logger.info("Replied to message %s", message_id)

    async def reply_all(self, message_id: str, comment: str) -> None:
        await self._request(
            "POST", f"/me/messages/{message_id}/replyAll", json={"comment": comment}
        )
        logger.info("Replied all to message %s", message_id)

    async def forward(self, message_id: str, recipients: list[str], comment: str | None) -> None:
        body: dict[str, Any] = {
            "toRecipients": [{"emailAddress": {"address": r}} for r in recipients],
        }
        if comment is not None:
            body["comment"] = comment
        await self._request("POST", f"/me/messages/{message_id}/forward", json=body)
        logger.info("Forwarded message %s to %d recipient(s)", message_id, len(recipients))

    async def delete_message(self, message_id: str) -> None:
        await self._request("DELETE", f"/me/messages/{message_id}")
        logger.info("Deleted message %s", message_id)

    async def get_message_with_body(self, message_id: str) -> Message:
        data = await self._get_json(
            f"/me/messages/{message_id}", {"$select": _select(MESSAGE_DETAIL_FIELDS)}
        )
        return Message.from_graph(data)

    async def list_attachments(self, message_id: str) -> list[Attachment]:
        values = await self._list(
            f"/me/messages/{message_id}/attachments", {"$select": _select(ATTACHMENT_FIELDS)}
        )
        return [Attachment.from_graph(v) for v in values]

    async def download_attachment(self, message_id: str, attachment_id: str) -> bytes:
        response = await self._request(
            "GET", f"/me/messages/{message_id}/attachments/{attachment_id}/$value"
        )
        return response.content

    async def poll_new_messages(self, since: str, limit: int) -> list[Message]:
        values = await self._list(
            "/me/mailFolders/inbox/messages",
            {
                "$top": limit,
                "$filter": f"receivedDateTime gt {since}",
                "$orderby": _NEWEST_FIRST,
                "$select": _select(MESSAGE_LIST_FIELDS),
            },
        )
        return [Message.from_graph(v) for v in values]

    async def unread_count(self) -> int:
        data = await self._get_json("/me/mailFolders/inbox", {"$select": "unreadItemCount"})
        return int(data.get("unreadItemCount") or 0)

    # ── Drafts ─────────────────────────────────────────────────────────────────

    async def list_drafts(self, limit: int) -> list[Message]:
        values = await self._list(
            "/me/mailFolders/drafts/messages",
            {"$top": limit, "$select": _select(MESSAGE_LIST_FIELDS)},
        )
        return [Message.from_graph(v) for v in values]

    async def create_draft(self, draft: DraftMessage) -> Message:
        response = await self._request("POST", "/me/messages", json=draft.to_graph())
        created = Message.from_graph(_json_object(response))
        logger.info("Created draft %s", created.id)
        return created

    async def send_draft(self, draft_id: str) -> None:
        await self._request("POST", f"/me/messages/{draft_id}/send")
        logger.info("Sent draft %s", draft_id)

    # ── Calendar ───────────────────────────────────────────────────────────────

    async def list_events(self, limit: int) -> list[CalendarEvent]:
        values = await self._list("/me/events", {"$top": limit, "$orderby": "start/dateTime"})
        return [CalendarEvent.from_graph(v) for v in values]

    async def list_events_range(self, start: str, end: str, limit: int) -> list[CalendarEvent]:
        values = await self._list(
            "/me/calendarView",
            {
                "startDateTime": start,
                "endDateTime": end,
                "$top": limit,
                "$orderby": "start/dateTime",
            },
        )
        return [CalendarEvent.from_graph(v) for v in values]

    async def get_event(self, event_id: str) -> CalendarEvent:
        return CalendarEvent.from_graph(await self._get_json(f"/me/events/{event_id}"))

    async def create_event(self, event: NewCalendarEvent) -> CalendarEvent:
        response = await self._request("POST", "/me/events", json=event.to_graph())
        created = CalendarEvent.from_graph(_json_object(response))
        logger.info("Created event %s", created.id)
        return created

    async def delete_event(self, event_id: str) -> None:
        await self._request("DELETE", f"/me/events/{event_id}")
        logger.info("Deleted event %s", event_id)

    async def accept_event(self, event_id: str, comment: str | None) -> None:
        await self._respond_to_event(event_id, "accept", comment)

    async def decline_event(self, event_id: str, comment: str | None) -> None:
        await self._respond_to_event(event_id, "decline", comment)

    # ── Contacts ───────────────────────────────────────────────────────────────

    async def list_contacts(self, limit: int) -> list[Contact]:
        values = await self._list("/me/contacts", {"$top": limit, "$orderby": "displayName"})
        return [Contact.from_graph(v) for v in values]

    async def search_contacts(self, query: str, limit: int) -> list[Contact]:
        q = query.replace("'", "''")
        values = await self._list(
            "/me/contacts",
            {
                "$top": limit,
                "$filter": (
                    f"startswith(displayName,'{q}') or startswith(givenName,'{q}') "
                    f"or startswith(surname,'{q}')"
                ),
            },
        )
        return [Contact.from_graph(v) for v in values]

    async def get_contact(self, contact_id: str) -> Contact:
        return Contact.from_graph(await self._get_json(f"/me/contacts/{contact_id}"))

    async def create_contact(self, contact: NewContact) -> Contact:
        response = await self._request("POST", "/me/contacts", json=contact.to_graph())
        created = Contact.from_graph(_json_object(response))
        logger.info("Created contact %s", created.id)
        return created

    async def delete_contact(self, contact_id: str) -> None:
        await self._request("DELETE", f"/me/contacts/{contact_id}")
        logger.info("Deleted contact %s", contact_id)

    # ── Internal helpers ───────────────────────────────────────────────────────

    async def _respond_to_event(self, event_id: str, action: str, comment: str | None) -> None:
        body: dict[str, Any] = {"sendResponse": True}
        if comment is not None:
            body["comment"] = comment
        await self._request("POST", f"/me/events/{event_id}/{action}", json=body)
        logger.info("Event %s: %s", event_id, action)

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        response = await self._request("GET", path, params=params)
        return _json_object(response)

    async def _list(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """GET a collection and return the first page of ``value`` items."""
        data = await self._get_json(path, params)
        values = data.get("value", [])
        if not isinstance(values, list):
            raise OutlookError(f"Unexpected collection response from {path}: {type(values)}")
        return [v for v in values if isinstance(v, dict)]

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one Graph request and return the response.

        Raises OutlookError on transport failures and non-2xx statuses.
        """
        logger.debug("Graph → %s %s %s", method, path, params or "")
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.RequestError as exc:
            raise OutlookError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise OutlookError(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )
        return response


def _select(fields: list[str]) -> str:
    return ",".join(fields)


def _json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise OutlookError(f"Response from {response.request.url} is not JSON") from exc
    if not isinstance(data, dict):
        raise OutlookError(f"Unexpected response type from {response.request.url}: {type(data)}")
    return data


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.code: error.message`` out of a Graph error body."""
    try:
        error = response.json().get("error", {})
    except (ValueError, AttributeError):
        return response.text or response.reason_phrase
    if not isinstance(error, dict):
        return response.text or response.reason_phrase
    code = error.get("code", "")
    message = error.get("message", "")
    return f"{code}: {message}" if code else str(message or response.reason_phrase)


@asynccontextmanager
async def outlook_client(
    credentials: Credentials,
    *,
    base_url: str = GRAPH_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> AsyncIterator[GraphOutlookClient]:
    """Async context manager that yields an authenticated GraphOutlookClient.

    Redeems the refresh token once, opens an ``httpx.AsyncClient`` carrying
    the bearer token, and closes it on exit.

    Example::

        async with outlook_client(Credentials(refresh_token=token)) as client:
            messages = await client.inbox(10)
    """
    access_token = await acquire_access_token(credentials)
    async with httpx.AsyncClient(
        base_url=base_url,
        headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
        timeout=timeout,
    ) as http:
        logger.debug("Graph client ready (%s)", base_url)
        yield GraphOutlookClient(http)
