"""Data types mirrored from Microsoft Graph mail, calendar and contact resources.

Every field the service may omit is ``None`` when absent. Rendering fallbacks
live in ``src.cli.render``; nothing here substitutes placeholder text.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class BodyType(str, Enum):
    """Content type of a message body, as Graph spells it."""

    TEXT = "text"
    HTML = "html"


def _parse_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _optional_str(value: Any) -> str | None:
    return str(value) if value is not None else None


def _optional_int(value: Any) -> int | None:
    return int(value) if value is not None else None


# ── Mail ───────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EmailAddress:
    address: str | None = None
    name: str | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> EmailAddress:
        return cls(
            address=_optional_str(data.get("address")),
            name=_optional_str(data.get("name")),
        )


@dataclass(frozen=True)
class Recipient:
    """A sender or recipient entry: ``{"emailAddress": {...}}``."""

    email_address: EmailAddress

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> Recipient:
        return cls(email_address=EmailAddress.from_graph(data.get("emailAddress") or {}))


@dataclass(frozen=True)
class ItemBody:
    content_type: BodyType
    content: str

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> ItemBody:
        raw_type = str(data.get("contentType", "text")).lower()
        content_type = BodyType.HTML if raw_type == BodyType.HTML else BodyType.TEXT
        return cls(content_type=content_type, content=str(data.get("content") or ""))


@dataclass(frozen=True)
class Message:
    """A message as returned by the list and get endpoints.

    ``body`` is only populated by ``get_message_with_body``; list calls
    select the lightweight fields.
    """

    id: str
    subject: str | None = None
    sender: Recipient | None = None
    body: ItemBody | None = None
    received_date_time: datetime | None = None
    is_read: bool | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> Message:
        sender_raw = data.get("from")
        body_raw = data.get("body")
        is_read = data.get("isRead")
        return cls(
            id=str(data.get("id", "")),
            subject=_optional_str(data.get("subject")),
            sender=Recipient.from_graph(sender_raw) if isinstance(sender_raw, dict) else None,
            body=ItemBody.from_graph(body_raw) if isinstance(body_raw, dict) else None,
            received_date_time=_parse_datetime(data.get("receivedDateTime")),
            is_read=bool(is_read) if is_read is not None else None,
        )


@dataclass(frozen=True)
class MailFolder:
    id: str
    display_name: str
    total_item_count: int | None = None
    unread_item_count: int | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> MailFolder:
        return cls(
            id=str(data.get("id", "")),
            display_name=str(data.get("displayName") or ""),
            total_item_count=_optional_int(data.get("totalItemCount")),
            unread_item_count=_optional_int(data.get("unreadItemCount")),
        )


@dataclass(frozen=True)
class Attachment:
    id: str
    name: str
    size: int | None = None
    content_type: str | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> Attachment:
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            size=_optional_int(data.get("size")),
            content_type=_optional_str(data.get("contentType")),
        )


@dataclass(frozen=True)
class User:
    """The signed-in user (``GET /me``)."""

    id: str
    display_name: str | None = None
    mail: str | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> User:
        return cls(
            id=str(data.get("id", "")),
            display_name=_optional_str(data.get("displayName")),
            mail=_optional_str(data.get("mail")),
        )


# ── Calendar ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DateTimeTimeZone:
    """A local ISO-8601 timestamp paired with a time zone identifier."""

    date_time: str
    time_zone: str

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> DateTimeTimeZone:
        return cls(
            date_time=str(data.get("dateTime") or ""),
            time_zone=str(data.get("timeZone") or ""),
        )

    def to_graph(self) -> dict[str, str]:
        return {"dateTime": self.date_time, "timeZone": self.time_zone}


@dataclass(frozen=True)
class Location:
    display_name: str | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> Location:
        return cls(display_name=_optional_str(data.get("displayName")))


@dataclass(frozen=True)
class Attendee:
    email_address: EmailAddress | None = None
    type: str | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> Attendee:
        address_raw = data.get("emailAddress")
        return cls(
            email_address=(
                EmailAddress.from_graph(address_raw) if isinstance(address_raw, dict) else None
            ),
            type=_optional_str(data.get("type")),
        )


@dataclass(frozen=True)
class CalendarEvent:
    id: str
    subject: str | None = None
    start: DateTimeTimeZone | None = None
    end: DateTimeTimeZone | None = None
    location: Location | None = None
    attendees: list[Attendee] | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> CalendarEvent:
        start_raw = data.get("start")
        end_raw = data.get("end")
        location_raw = data.get("location")
        attendees_raw = data.get("attendees")
        return cls(
            id=str(data.get("id", "")),
            subject=_optional_str(data.get("subject")),
            start=DateTimeTimeZone.from_graph(start_raw) if isinstance(start_raw, dict) else None,
            end=DateTimeTimeZone.from_graph(end_raw) if isinstance(end_raw, dict) else None,
            location=Location.from_graph(location_raw) if isinstance(location_raw, dict) else None,
            attendees=(
                [Attendee.from_graph(a) for a in attendees_raw if isinstance(a, dict)]
                if isinstance(attendees_raw, list)
                else None
            ),
        )


# ── Contacts ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Contact:
    id: str
    display_name: str | None = None
    given_name: str | None = None
    surname: str | None = None
    email_addresses: list[EmailAddress] | None = None
    mobile_phone: str | None = None
    company_name: str | None = None
    job_title: str | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> Contact:
        emails_raw = data.get("emailAddresses")
        return cls(
            id=str(data.get("id", "")),
            display_name=_optional_str(data.get("displayName")),
            given_name=_optional_str(data.get("givenName")),
            surname=_optional_str(data.get("surname")),
            email_addresses=(
                [EmailAddress.from_graph(e) for e in emails_raw if isinstance(e, dict)]
                if isinstance(emails_raw, list)
                else None
            ),
            mobile_phone=_optional_str(data.get("mobilePhone")),
            company_name=_optional_str(data.get("companyName")),
            job_title=_optional_str(data.get("jobTitle")),
        )


#: Graph ``$select`` lists; kept next to the types they populate.
MESSAGE_LIST_FIELDS: list[str] = ["id", "subject", "from", "receivedDateTime", "isRead"]
MESSAGE_DETAIL_FIELDS: list[str] = [*MESSAGE_LIST_FIELDS, "body"]
ATTACHMENT_FIELDS: list[str] = ["id", "name", "size", "contentType"]
