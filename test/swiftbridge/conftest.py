import pytest
from overrides import override

from swiftbridge.extension import SwiftExtension
from swiftbridge.settings import DictSettingsStore
from swiftbridge.worktree import Worktree


class FakeWorktree(Worktree):
    """A worktree whose executables and environment are given explicitly."""

    def __init__(self, executables: dict[str, str] | None = None, env: dict[str, str] | None = None, root: str = "/work/project"):
        self.executables = executables or {}
        self.env = env if env is not None else {"PATH": "/usr/bin:/bin", "HOME": "/home/dev"}
        self.root = root
        self.which_calls: list[str] = []

    @override
    def which(self, name: str) -> str | None:
        self.which_calls.append(name)
        return self.executables.get(name)

    @override
    def shell_env(self) -> dict[str, str]:
        return dict(self.env)

    @override
    def root_path(self) -> str:
        return self.root


@pytest.fixture
def worktree() -> FakeWorktree:
    return FakeWorktree()


@pytest.fixture
def extension() -> SwiftExtension:
    return SwiftExtension(DictSettingsStore())
