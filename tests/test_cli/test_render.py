"""Tests for the pure render functions."""

from datetime import datetime, timedelta, timezone

from src.cli.render import (
    UNREAD_LEGEND,
    format_received,
    render_attachments,
    render_contacts,
    render_event_detail,
    render_folders,
    render_message_detail,
    render_messages,
    render_user,
)
from src.outlook.types import (
    Attachment,
    BodyType,
    CalendarEvent,
    Contact,
    EmailAddress,
    ItemBody,
    MailFolder,
    Message,
    Recipient,
    User,
)


class TestRenderMessages:
    def test_empty_list(self) -> None:
        assert render_messages([]) == ["(no messages)"]

    def test_legend_appears_once_after_items(self) -> None:
        lines = render_messages([Message(id="m1", is_read=True), Message(id="m2", is_read=True)])
        assert lines.count(UNREAD_LEGEND) == 1
        assert lines[-2:] == ["", UNREAD_LEGEND]

    def test_numbering_is_right_aligned(self) -> None:
        messages = [Message(id=f"m{i}", subject="s", is_read=True) for i in range(1, 11)]
        lines = render_messages(messages)
        assert lines[0].startswith(" 1.")
        assert lines[18].startswith("10.")

    def test_unknown_read_state_is_marked_unread(self) -> None:
        assert render_messages([Message(id="m1")])[0] == " 1.* unknown - (no subject)"

    def test_sender_without_address(self) -> None:
        msg = Message(id="m1", sender=Recipient(EmailAddress(name="No Reply")), is_read=True)
        assert render_messages([msg])[0] == " 1.  unknown - (no subject)"


class TestRenderMessageDetail:
    def test_without_body(self) -> None:
        lines = render_message_detail(Message(id="m1", subject="Hi", is_read=False))
        assert lines == ["Subject: Hi", "From: unknown", "Date: ", "Read: No", ""]

    def test_received_date_in_utc(self) -> None:
        received = datetime(2026, 2, 27, 10, 0, tzinfo=timezone(timedelta(hours=1)))
        lines = render_message_detail(Message(id="m1", received_date_time=received))
        assert lines[2] == "Date: 2026-02-27 09:00:00 UTC"

    def test_naive_received_date_taken_as_utc(self) -> None:
        assert format_received(datetime(2026, 2, 27, 9, 0)) == "2026-02-27 09:00:00 UTC"

    def test_body_printed_verbatim(self) -> None:
        msg = Message(id="m1", body=ItemBody(BodyType.HTML, "<p>[bold]x[/bold]</p>"))
        assert render_message_detail(msg)[-1] == "<p>[bold]x[/bold]</p>"


class TestRenderMisc:
    def test_folder_without_unread(self) -> None:
        lines = render_folders([MailFolder(id="f1", display_name="Sent", total_item_count=5, unread_item_count=0)])
        assert lines == ["Mail Folders:", "", "  Sent - 5 items"]

    def test_user_without_mail(self) -> None:
        assert render_user(User(id="u1")) == ["User: ", "Email: "]

    def test_attachment_size_zero_is_shown(self) -> None:
        assert render_attachments([Attachment(id="a1", name="empty", size=0)])[1] == "  a1 - empty (0 bytes)"

    def test_contact_with_empty_email_list(self) -> None:
        lines = render_contacts([Contact(id="c1", display_name="Jane", email_addresses=[])])
        assert lines[1] == "  Jane - "

    def test_event_with_empty_attendee_list(self) -> None:
        lines = render_event_detail(CalendarEvent(id="e1", subject="Solo", attendees=[]))
        assert lines == ["Subject: Solo", "Attendees:"]
