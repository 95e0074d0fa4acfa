"""Contact commands."""

from __future__ import annotations

import click

from src.cli.commands import limit_option
from src.cli.dispatch import dispatch
from src.cli.render import echo, echo_empty, render_contact_detail, render_contacts
from src.outlook.auth import Credentials
from src.outlook.builders import NewContact

DEFAULT_CONTACT_LIMIT = 20


@click.command()
@limit_option(DEFAULT_CONTACT_LIMIT)
@click.option("-s", "--search", default=None, help="Only contacts whose name starts with this.")
@click.pass_obj
def contacts(credentials: Credentials, limit: int, search: str | None) -> None:
    """List contacts, or search them by name."""
    if search is not None:
        result = dispatch(credentials, lambda client: client.search_contacts(search, limit))
    else:
        result = dispatch(credentials, lambda client: client.list_contacts(limit))

    if not result:
        echo_empty("No contacts")
        return
    echo(render_contacts(result))


@click.command()
@click.argument("contact_id", metavar="ID")
@click.pass_obj
def contact(credentials: Credentials, contact_id: str) -> None:
    """Show contact details."""
    found = dispatch(credentials, lambda client: client.get_contact(contact_id))
    echo(render_contact_detail(found))


@click.command(name="create-contact")
@click.option("--first-name", required=True, help="First name.")
@click.option("--last-name", required=True, help="Last name.")
@click.option("-e", "--email", default=None, help="Email address.")
@click.option("-m", "--mobile", default=None, help="Mobile phone.")
@click.option("-c", "--company", default=None, help="Company name.")
@click.option("-j", "--job-title", default=None, help="Job title.")
@click.pass_obj
def create_contact(
    credentials: Credentials,
    first_name: str,
    last_name: str,
    email: str | None,
    mobile: str | None,
    company: str | None,
    job_title: str | None,
) -> None:
    """Create a contact."""
    new_contact = NewContact(given_name=first_name, surname=last_name)
    if email is not None:
        new_contact = new_contact.with_email(email)
    if mobile is not None:
        new_contact = new_contact.with_mobile(mobile)
    if company is not None:
        new_contact = new_contact.with_company(company)
    if job_title is not None:
        new_contact = new_contact.with_job_title(job_title)

    created = dispatch(credentials, lambda client: client.create_contact(new_contact))
    echo([f"Contact created: {created.id}"])


@click.command(name="delete-contact")
@click.argument("contact_id", metavar="ID")
@click.pass_obj
def delete_contact(credentials: Credentials, contact_id: str) -> None:
    """Delete a contact."""
    dispatch(credentials, lambda client: client.delete_contact(contact_id))
    echo([f"Contact deleted: {contact_id}"])
