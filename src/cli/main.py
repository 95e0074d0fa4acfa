"""CLI entry point for the Outlook command-line client."""

import logging

import click
from dotenv import load_dotenv

from src.cli.calendar_commands import (
    accept_event,
    create_event,
    decline_event,
    delete_event,
    event,
    events,
)
from src.cli.commands import (
    attachments,
    create_draft,
    delete,
    download,
    drafts,
    folders,
    forward,
    get,
    inbox,
    me,
    poll,
    read,
    reply,
    search,
    send,
    send_draft,
    unread,
    unread_count,
)
from src.cli.contact_commands import (
    contact,
    contacts,
    create_contact,
    delete_contact,
)
from src.outlook.auth import DEFAULT_CLIENT_ID, Credentials
from src.outlook.errors import OutlookError

logger = logging.getLogger(__name__)


class OutlookGroup(click.Group):
    """Command group that reports client and file failures as ``Error: ...``.

    Click prints a ClickException to stderr and exits 1; usage errors keep
    click's own exit code 2.
    """

    def invoke(self, ctx: click.Context) -> object:
        try:
            return super().invoke(ctx)
        except (OutlookError, OSError) as exc:
            logger.debug("Command failed", exc_info=True)
            raise click.ClickException(str(exc)) from exc


@click.group(cls=OutlookGroup)
@click.option(
    "-t",
    "--token",
    envvar="OUTLOOK_REFRESH_TOKEN",
    required=True,
    help="Microsoft OAuth refresh token.",
)
@click.option(
    "-c",
    "--client-id",
    envvar="OUTLOOK_CLIENT_ID",
    default=DEFAULT_CLIENT_ID,
    show_default=True,
    help="Azure AD application ID.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log Graph requests to stderr.")
@click.pass_context
def cli(ctx: click.Context, token: str, client_id: str, verbose: bool) -> None:
    """Outlook mail, calendar and contacts from the command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,  # stdout stays command output only
        format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
    )
    ctx.obj = Credentials(refresh_token=token, client_id=client_id)


for _command in (
    inbox,
    unread,
    search,
    read,
    folders,
    me,
    send,
    reply,
    forward,
    delete,
    get,
    attachments,
    download,
    poll,
    unread_count,
    drafts,
    create_draft,
    send_draft,
    events,
    event,
    create_event,
    delete_event,
    accept_event,
    decline_event,
    contacts,
    contact,
    create_contact,
    delete_contact,
):
    cli.add_command(_command)


def main() -> None:
    """Console-script entry point: load ``.env`` before options read the environment."""
    load_dotenv()
    cli()
