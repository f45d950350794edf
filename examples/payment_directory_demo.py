#!/usr/bin/env python3
"""
Payment directory demo for Paykit

Publishes two endpoints for the session owner, lists them from the public side,
removes one again and prints the known contacts.

Environment:
    PAYKIT_HOMESERVER_URL   homeserver to talk to (e.g. http://localhost:6286)
    PAYKIT_SESSION_COOKIE   cookie of an already established session
    PAYKIT_DEMO_PUBLIC_KEY  z-base-32 public key owning that session
"""

import asyncio
import os

from rich.console import Console
from rich.table import Table

from paykit import (
    PubkyAuthenticatedTransport,
    PubkySession,
    PubkyUnauthenticatedTransport,
    PublicKey,
    SupportedPayments,
    get_known_contacts,
    get_payment_list,
    remove_payment_endpoint,
    set_payment_endpoint,
)
from paykit.utils.config import PaykitSettings
from paykit.utils.logging import configure_from_settings

console = Console()


def render(title: str, payments: SupportedPayments) -> None:
    table = Table(title=title)
    table.add_column("Method", style="cyan")
    table.add_column("Endpoint", style="white")
    for method, data in sorted(payments.entries.items(), key=lambda item: item[0].value):
        table.add_row(method.value, data.value)
    if payments.is_empty:
        table.add_row("-", "[dim]nothing published[/dim]")
    console.print(table)


async def main() -> None:
    settings = PaykitSettings()
    configure_from_settings(settings)

    owner = PublicKey.from_str(os.environ["PAYKIT_DEMO_PUBLIC_KEY"])
    if settings.session_cookie is None:
        raise SystemExit("PAYKIT_SESSION_COOKIE is required for the write half of the demo")

    session = PubkySession.from_cookie(owner, settings.session_cookie.get_secret_value(), settings)
    writer = PubkyAuthenticatedTransport(session)
    reader = PubkyUnauthenticatedTransport.try_new(settings)

    try:
        await set_payment_endpoint(writer, "onchain", '{"address":"bc1..."}')
        await set_payment_endpoint(writer, "lightning", '{"bolt11":"ln..."}')
        render("Published endpoints", await get_payment_list(reader, owner))

        await remove_payment_endpoint(writer, "onchain")
        render("After removing onchain", await get_payment_list(reader, owner))

        contacts = await get_known_contacts(reader, owner)
        console.print(f"\n[bold]Known contacts:[/bold] {len(contacts)}")
        for contact in contacts:
            console.print(f"  • {contact}")

        await remove_payment_endpoint(writer, "lightning")
    finally:
        await session.aclose()
        await reader.inner.aclose()


if __name__ == "__main__":
    asyncio.run(main())
