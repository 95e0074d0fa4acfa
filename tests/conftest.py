"""Shared pytest fixtures."""

from typing import Any

import pytest


@pytest.fixture
def graph_message() -> dict[str, Any]:
    """A message as Graph returns it from ``GET /me/messages/{id}``."""
    return {
        "id": "AAMkAGI2-msg-001",
        "subject": "Q2 budget review",
        "from": {"emailAddress": {"name": "Alice", "address": "alice@example.com"}},
        "body": {"contentType": "text", "content": "Please review the figures by Friday."},
        "receivedDateTime": "2026-02-27T09:00:00Z",
        "isRead": False,
    }


@pytest.fixture
def graph_event() -> dict[str, Any]:
    return {
        "id": "AAMkAGI2-evt-001",
        "subject": "Planning",
        "start": {"dateTime": "2024-01-10T09:00:00.0000000", "timeZone": "UTC"},
        "end": {"dateTime": "2024-01-10T10:00:00.0000000", "timeZone": "UTC"},
        "location": {"displayName": "Room 4"},
        "attendees": [
            {"emailAddress": {"address": "bob@example.com"}, "type": "required"},
            {"emailAddress": {"address": "carol@example.com"}, "type": "optional"},
        ],
    }


@pytest.fixture
def graph_contact() -> dict[str, Any]:
    return {
        "id": "AAMkAGI2-con-001",
        "displayName": "Jane Doe",
        "givenName": "Jane",
        "surname": "Doe",
        "emailAddresses": [{"address": "jane@example.com", "name": "Jane Doe"}],
        "mobilePhone": "+1 555 0100",
        "companyName": "Contoso",
        "jobTitle": "Engineer",
    }
