"""Request builders: accumulate optional fields into outgoing Graph payloads.

Every builder is an immutable value. Each ``with_*`` / ``as_*`` call returns a
copy with one field overwritten, so repeated calls are last-write-wins and the
order of unrelated calls does not change the final payload.

Usage::

    draft = DraftMessage().with_subject("Hi").with_body_text("Hello")
    payload = draft.to_graph()
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from src.outlook.types import BodyType, DateTimeTimeZone


def _recipients(addresses: tuple[str, ...]) -> list[dict[str, Any]]:
    return [{"emailAddress": {"address": address}} for address in addresses]


def _body(content_type: BodyType, content: str) -> dict[str, str]:
    return {"contentType": content_type.value, "content": content}


@dataclass(frozen=True)
class NewMessage:
    """A message sent immediately via ``sendMail``.

    Pick the representation once with :meth:`text` or :meth:`html`.
    """

    to: str
    subject: str
    body: str
    content_type: BodyType = BodyType.TEXT

    @classmethod
    def text(cls, to: str, subject: str, body: str) -> NewMessage:
        return cls(to=to, subject=subject, body=body, content_type=BodyType.TEXT)

    @classmethod
    def html(cls, to: str, subject: str, body: str) -> NewMessage:
        return cls(to=to, subject=subject, body=body, content_type=BodyType.HTML)

    def to_graph(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "body": _body(self.content_type, self.body),
            "toRecipients": _recipients((self.to,)),
        }


@dataclass(frozen=True)
class DraftMessage:
    """A draft saved to the Drafts folder. Every field is optional."""

    subject: str | None = None
    body: str | None = None
    content_type: BodyType = BodyType.TEXT
    recipients: tuple[str, ...] | None = None

    def with_subject(self, subject: str) -> DraftMessage:
        return replace(self, subject=subject)

    def with_body_text(self, body: str) -> DraftMessage:
        return replace(self, body=body, content_type=BodyType.TEXT)

    def with_body_html(self, body: str) -> DraftMessage:
        return replace(self, body=body, content_type=BodyType.HTML)

    def with_recipients(self, recipients: list[str]) -> DraftMessage:
        return replace(self, recipients=tuple(recipients))

    def to_graph(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.subject is not None:
            payload["subject"] = self.subject
        if self.body is not None:
            payload["body"] = _body(self.content_type, self.body)
        if self.recipients is not None:
            payload["toRecipients"] = _recipients(self.recipients)
        return payload


@dataclass(frozen=True)
class NewCalendarEvent:
    subject: str
    start: DateTimeTimeZone
    end: DateTimeTimeZone
    location: str | None = None
    attendees: tuple[str, ...] | None = None
    is_all_day: bool = False
    is_online_meeting: bool = False

    def with_location(self, location: str) -> NewCalendarEvent:
        return replace(self, location=location)

    def with_attendees(self, attendees: list[str]) -> NewCalendarEvent:
        return replace(self, attendees=tuple(attendees))

    def as_all_day(self) -> NewCalendarEvent:
        return replace(self, is_all_day=True)

    def as_online_meeting(self) -> NewCalendarEvent:
        return replace(self, is_online_meeting=True)

    def to_graph(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "subject": self.subject,
            "start": self.start.to_graph(),
            "end": self.end.to_graph(),
        }
        if self.location is not None:
            payload["location"] = {"displayName": self.location}
        if self.attendees is not None:
            payload["attendees"] = [
                {"emailAddress": {"address": address}, "type": "required"}
                for address in self.attendees
            ]
        if self.is_all_day:
            payload["isAllDay"] = True
        if self.is_online_meeting:
            payload["isOnlineMeeting"] = True
            payload["onlineMeetingProvider"] = "teamsForBusiness"
        return payload


@dataclass(frozen=True)
class NewContact:
    given_name: str
    surname: str
    email: str | None = None
    mobile_phone: str | None = None
    company_name: str | None = None
    job_title: str | None = None

    def with_email(self, email: str) -> NewContact:
        return replace(self, email=email)

    def with_mobile(self, mobile_phone: str) -> NewContact:
        return replace(self, mobile_phone=mobile_phone)

    def with_company(self, company_name: str) -> NewContact:
        return replace(self, company_name=company_name)

    def with_job_title(self, job_title: str) -> NewContact:
        return replace(self, job_title=job_title)

    def to_graph(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"givenName": self.given_name, "surname": self.surname}
        if self.email is not None:
            payload["emailAddresses"] = [
                {"address": self.email, "name": f"{self.given_name} {self.surname}"}
            ]
        if self.mobile_phone is not None:
            payload["mobilePhone"] = self.mobile_phone
        if self.company_name is not None:
            payload["companyName"] = self.company_name
        if self.job_title is not None:
            payload["jobTitle"] = self.job_title
        return payload
