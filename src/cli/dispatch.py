"""Dispatcher that runs exactly one client operation per command invocation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from src.outlook.auth import Credentials
from src.outlook.client import OutlookClient, outlook_client

logger = logging.getLogger(__name__)

T = TypeVar("T")

#: A single client call, e.g. ``lambda client: client.inbox(10)``.
Operation = Callable[[OutlookClient], Awaitable[T]]


def dispatch(credentials: Credentials, operation: Operation[T]) -> T:
    """Open a client, await ``operation`` on it and return the result.

    Failures are not caught here; they propagate to the click group.
    """
    return asyncio.run(_dispatch_async(credentials, operation))


async def _dispatch_async(credentials: Credentials, operation: Operation[T]) -> T:
    async with outlook_client(credentials) as client:
        return await operation(client)
