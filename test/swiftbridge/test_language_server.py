"""
Tests for the resolution of the SourceKit-LSP command.

The binary is taken from the settings if configured, else from the worktree's search path,
and finally from the xcrun dispatcher.
"""

from unittest.mock import MagicMock

import pytest

from swiftbridge.constants import XCRUN_PATH
from swiftbridge.exceptions import SettingsError
from swiftbridge.language_server import SourceKitLsp
from swiftbridge.settings import DictSettingsStore
from test.swiftbridge.conftest import FakeWorktree

SERVER_ID = SourceKitLsp.SERVER_ID


def _lsp(settings: dict | None = None) -> SourceKitLsp:
    return SourceKitLsp(DictSettingsStore({SERVER_ID: settings} if settings is not None else {}))


class TestLanguageServerBinary:
    def test_configured_path_overrides_search_path(self) -> None:
        worktree = FakeWorktree(executables={"sourcekit-lsp": "/usr/local/bin/sourcekit-lsp"})
        lsp = _lsp({"binary": {"path": "/opt/swift/usr/bin/sourcekit-lsp", "arguments": ["--log-level", "debug"], "env": {"A": "1"}}})

        binary = lsp.language_server_binary(SERVER_ID, worktree)

        assert binary.path == "/opt/swift/usr/bin/sourcekit-lsp"
        assert binary.args == ["--log-level", "debug"]
        assert binary.env == {"A": "1"}

    def test_configured_path_without_arguments_or_env(self) -> None:
        worktree = FakeWorktree(executables={"sourcekit-lsp": "/usr/local/bin/sourcekit-lsp"})
        lsp = _lsp({"binary": {"path": "/custom/sourcekit-lsp"}})

        binary = lsp.language_server_binary(SERVER_ID, worktree)

        assert binary.path == "/custom/sourcekit-lsp"
        assert binary.args is None
        assert binary.env == {}
        assert worktree.which_calls == []

    def test_binary_settings_without_path_fall_through_to_search_path(self) -> None:
        worktree = FakeWorktree(executables={"sourcekit-lsp": "/usr/local/bin/sourcekit-lsp"})
        lsp = _lsp({"binary": {"arguments": ["--unused"]}})

        binary = lsp.language_server_binary(SERVER_ID, worktree)

        assert binary.path == "/usr/local/bin/sourcekit-lsp"
        assert binary.args is None

    def test_search_path_uses_full_shell_env(self) -> None:
        env = {"PATH": "/usr/local/bin:/usr/bin", "TOOLCHAINS": "swift", "HOME": "/home/dev"}
        worktree = FakeWorktree(executables={"sourcekit-lsp": "/usr/local/bin/sourcekit-lsp"}, env=env)

        binary = _lsp().language_server_binary(SERVER_ID, worktree)

        assert binary.path == "/usr/local/bin/sourcekit-lsp"
        assert binary.path != XCRUN_PATH
        assert binary.env == env

    def test_falls_back_to_xcrun(self) -> None:
        worktree = FakeWorktree()

        binary = _lsp().language_server_binary(SERVER_ID, worktree)

        assert binary.path == XCRUN_PATH
        assert binary.args == ["sourcekit-lsp"]
        assert binary.env == {}
        assert worktree.which_calls == ["sourcekit-lsp"]

    def test_invalid_settings_are_reported(self) -> None:
        lsp = _lsp({"binary": {"path": "/custom/sourcekit-lsp", "arguments": "--log-level debug"}})

        with pytest.raises(SettingsError, match="list of strings"):
            lsp.language_server_binary(SERVER_ID, FakeWorktree())

    def test_settings_are_requested_for_server_and_worktree(self) -> None:
        worktree = FakeWorktree()
        store = MagicMock()
        store.lsp_settings.return_value.binary = None

        SourceKitLsp(store).language_server_binary(SERVER_ID, worktree)

        store.lsp_settings.assert_called_once_with(SERVER_ID, worktree)


class TestLanguageServerCommand:
    def test_default_arguments_applied_when_none_given(self) -> None:
        worktree = FakeWorktree(executables={"sourcekit-lsp": "/usr/local/bin/sourcekit-lsp"})

        command = _lsp().language_server_command(SERVER_ID, worktree)

        assert command.command == "/usr/local/bin/sourcekit-lsp"
        assert command.args == SourceKitLsp.get_executable_args()

    def test_configured_arguments_are_kept(self) -> None:
        command = _lsp({"binary": {"path": "/custom/sourcekit-lsp", "arguments": ["-Xswiftc", "-DDEBUG"]}}).language_server_command(
            SERVER_ID, FakeWorktree()
        )

        assert command.command == "/custom/sourcekit-lsp"
        assert command.args == ["-Xswiftc", "-DDEBUG"]

    def test_xcrun_command(self) -> None:
        command = _lsp().language_server_command(SERVER_ID, FakeWorktree())

        assert command.to_dict() == {"command": XCRUN_PATH, "args": ["sourcekit-lsp"], "env": {}}
