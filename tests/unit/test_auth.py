"""Tests for the auth gate."""

from __future__ import annotations

import pytest

from things_mcp.core.auth import AuthGate
from things_mcp.core.errors import ThingsAuthError


class TestGetToken:
    def test_returns_token(self, auth_token: str) -> None:
        assert AuthGate().get_token() == auth_token

    def test_missing_token(self, no_auth_token: None) -> None:
        with pytest.raises(ThingsAuthError, match="THINGS_AUTH_TOKEN not configured"):
            AuthGate().get_token()

    def test_empty_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THINGS_AUTH_TOKEN", "")
        with pytest.raises(ThingsAuthError, match="not configured"):
            AuthGate().get_token()

    def test_short_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THINGS_AUTH_TOKEN", "abc123")
        with pytest.raises(ThingsAuthError, match="Invalid auth token format"):
            AuthGate().get_token()

    def test_bad_characters(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THINGS_AUTH_TOKEN", "abcdef1234!@#$")
        with pytest.raises(ThingsAuthError, match="Invalid auth token format"):
            AuthGate().get_token()

    def test_read_on_every_call(self, monkeypatch: pytest.MonkeyPatch) -> None:
        gate = AuthGate()
        monkeypatch.setenv("THINGS_AUTH_TOKEN", "first-token-123")
        assert gate.get_token() == "first-token-123"
        monkeypatch.setenv("THINGS_AUTH_TOKEN", "second-token-456")
        assert gate.get_token() == "second-token-456"

    def test_custom_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_THINGS_TOKEN", "custom_token_value")
        gate = AuthGate(token_env="MY_THINGS_TOKEN")
        assert gate.token_env == "MY_THINGS_TOKEN"
        assert gate.get_token() == "custom_token_value"

    def test_custom_variable_named_in_message(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MY_THINGS_TOKEN", "short")
        with pytest.raises(ThingsAuthError) as exc_info:
            AuthGate(token_env="MY_THINGS_TOKEN").get_token()
        assert "Please check your MY_THINGS_TOKEN" in exc_info.value.message
        assert "THINGS_AUTH_TOKEN" not in exc_info.value.message
        assert exc_info.value.details == {"token_env": "MY_THINGS_TOKEN"}


class TestPolicy:
    def test_default_commands(self) -> None:
        gate = AuthGate()
        assert gate.requires_auth("update")
        assert gate.requires_auth("update-project")
        assert not gate.requires_auth("add")
        assert not gate.requires_auth("show")
        assert not gate.requires_auth("search")

    def test_custom_commands(self) -> None:
        gate = AuthGate(commands=["show"])
        assert gate.requires_auth("show")
        assert not gate.requires_auth("update")

    def test_items_need_auth_when_any_update(self) -> None:
        gate = AuthGate()
        items = [
            {"type": "to-do", "attributes": {"title": "a"}},
            {"type": "project", "operation": "update", "id": "x"},
        ]
        assert gate.requires_auth_for_items(items)

    def test_items_without_update(self) -> None:
        gate = AuthGate()
        items = [
            {"type": "to-do", "attributes": {"title": "a"}},
            {"type": "project", "operation": "create", "attributes": {}},
        ]
        assert not gate.requires_auth_for_items(items)
