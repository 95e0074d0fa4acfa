"""Tests for the one-operation-per-invocation dispatcher."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.cli.dispatch import dispatch
from src.outlook.auth import Credentials
from src.outlook.errors import OutlookError

CREDENTIALS = Credentials(refresh_token="rt")


class TestDispatch:
    def test_returns_operation_result(self, factory: MagicMock, client: AsyncMock) -> None:
        client.unread_count.return_value = 3
        with patch("src.cli.dispatch.outlook_client", factory):
            assert dispatch(CREDENTIALS, lambda c: c.unread_count()) == 3
        factory.assert_called_once_with(CREDENTIALS)

    def test_session_closed_after_operation(self, factory: MagicMock, client: AsyncMock) -> None:
        client.list_folders.return_value = []
        with patch("src.cli.dispatch.outlook_client", factory):
            dispatch(CREDENTIALS, lambda c: c.list_folders())
        factory.return_value.__aexit__.assert_awaited_once()

    def test_operation_error_propagates(self, factory: MagicMock, client: AsyncMock) -> None:
        client.delete_message.side_effect = OutlookError("gone", status_code=404)
        with patch("src.cli.dispatch.outlook_client", factory):
            with pytest.raises(OutlookError, match="gone"):
                dispatch(CREDENTIALS, lambda c: c.delete_message("m1"))
        factory.return_value.__aexit__.assert_awaited_once()

    def test_auth_error_skips_operation(self, factory: MagicMock, client: AsyncMock) -> None:
        factory.return_value.__aenter__.side_effect = OutlookError("Token exchange failed (invalid_grant)")
        with patch("src.cli.dispatch.outlook_client", factory):
            with pytest.raises(OutlookError):
                dispatch(CREDENTIALS, lambda c: c.inbox(10))
        client.inbox.assert_not_awaited()
