import os
from pathlib import Path

import pytest

from swiftbridge.exceptions import SettingsError
from swiftbridge.settings import BinarySettings, DictSettingsStore, LspSettings, YamlSettingsStore
from swiftbridge.worktree import LocalWorktree
from test.swiftbridge.conftest import FakeWorktree


class TestLspSettings:
    def test_from_dict(self) -> None:
        settings = LspSettings.from_dict(
            {
                "binary": {"path": "/p", "arguments": ["a"], "env": {"N": 1}},
                "initialization_options": {"x": [1, 2]},
                "settings": {"y": True},
            }
        )

        assert settings.binary == BinarySettings(path="/p", arguments=["a"], env={"N": "1"})
        assert settings.initialization_options == {"x": [1, 2]}
        assert settings.settings == {"y": True}

    def test_empty(self) -> None:
        assert LspSettings.from_dict({}) == LspSettings()

    @pytest.mark.parametrize(
        "data",
        [
            {"binary": "/usr/bin/sourcekit-lsp"},
            {"binary": {"path": 3}},
            {"binary": {"arguments": "a b"}},
            {"binary": {"env": ["A=1"]}},
        ],
    )
    def test_invalid(self, data: dict) -> None:
        with pytest.raises(SettingsError):
            LspSettings.from_dict(data)

    def test_dict_store_defaults(self) -> None:
        store = DictSettingsStore({"other": {"binary": {"path": "/x"}}})

        assert store.lsp_settings("sourcekit-lsp", FakeWorktree()) == LspSettings()


class TestYamlSettingsStore:
    def test_reads_lsp_section(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yml"
        path.write_text(
            "lsp:\n"
            "  sourcekit-lsp:\n"
            "    binary:\n"
            "      path: /opt/swift/usr/bin/sourcekit-lsp\n"
            "      arguments: [--log-level, debug]\n"
            "    initialization_options:\n"
            "      backgroundIndexing: true\n",
            encoding="utf-8",
        )

        settings = YamlSettingsStore(str(path)).lsp_settings("sourcekit-lsp", FakeWorktree())

        assert settings.binary is not None
        assert settings.binary.path == "/opt/swift/usr/bin/sourcekit-lsp"
        assert settings.binary.arguments == ["--log-level", "debug"]
        assert settings.initialization_options == {"backgroundIndexing": True}

    def test_missing_file_yields_defaults(self, tmp_path: Path) -> None:
        store = YamlSettingsStore(str(tmp_path / "missing.yml"))

        assert store.lsp_settings("sourcekit-lsp", FakeWorktree()) == LspSettings()

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yml"
        path.write_text("", encoding="utf-8")

        assert YamlSettingsStore(str(path)).lsp_settings("sourcekit-lsp", FakeWorktree()) == LspSettings()

    @pytest.mark.parametrize("content", ["lsp: [1, 2]\n", "- a\n- b\n", "lsp: {unclosed\n"])
    def test_malformed_file(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "settings.yml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(SettingsError):
            YamlSettingsStore(str(path))


class TestLocalWorktree:
    def test_which_uses_worktree_path(self, tmp_path: Path) -> None:
        executable = tmp_path / "sourcekit-lsp"
        executable.write_text("#!/bin/sh\n", encoding="utf-8")
        executable.chmod(0o755)
        worktree = LocalWorktree(str(tmp_path), env={"PATH": str(tmp_path)})

        assert worktree.which("sourcekit-lsp") == str(executable)
        assert worktree.which("lldb-dap") is None

    def test_root_and_env(self, tmp_path: Path) -> None:
        worktree = LocalWorktree(str(tmp_path), env={"PATH": "/bin", "A": "1"})

        assert worktree.root_path() == os.path.abspath(str(tmp_path))
        assert worktree.shell_env() == {"PATH": "/bin", "A": "1"}
