"""Fixtures for command tests: a fake OutlookClient and a CliRunner wrapper."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner, Result

from src.outlook.client import GraphOutlookClient

Invoke = Callable[..., Result]


@pytest.fixture
def client() -> AsyncMock:
    """An OutlookClient stand-in: every operation is an AsyncMock."""
    return AsyncMock(spec=GraphOutlookClient)


@pytest.fixture
def factory(client: AsyncMock) -> MagicMock:
    """Replacement for ``outlook_client()`` that yields ``client``."""
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=client)
    session.__aexit__ = AsyncMock(return_value=None)
    return MagicMock(return_value=session)


@pytest.fixture
def invoke(factory: MagicMock) -> Invoke:
    """Run the CLI with a refresh token set and the client factory patched."""

    def _invoke(*args: str) -> Result:
        from src.cli.main import cli

        runner = CliRunner()
        with patch("src.cli.dispatch.outlook_client", factory):
            return runner.invoke(cli, ["--token", "refresh-token", *args])

    return _invoke
