"""
The worktree abstraction through which binaries are looked up.
"""

import os
import shutil
from abc import ABC, abstractmethod

from overrides import override
from sensai.util import logging

log = logging.getLogger(__name__)


class Worktree(ABC):
    """
    A view on a project directory as provided by the host.
    """

    @abstractmethod
    def which(self, name: str) -> str | None:
        """
        :param name: an executable name or an absolute path
        :return: the path of the executable if it can be found using the worktree's search path, None otherwise
        """

    @abstractmethod
    def shell_env(self) -> dict[str, str]:
        """
        :return: the environment a login shell in the worktree would see
        """

    @abstractmethod
    def root_path(self) -> str:
        pass


class LocalWorktree(Worktree):
    """
    A worktree on the local file system which resolves executables via the process environment.
    """

    def __init__(self, root: str, env: dict[str, str] | None = None):
        self._root = os.path.abspath(root)
        self._env = dict(os.environ) if env is None else dict(env)

    @override
    def which(self, name: str) -> str | None:
        path = shutil.which(name, path=self._env.get("PATH"))
        log.debug(f"which({name!r}) -> {path}")
        return path

    @override
    def shell_env(self) -> dict[str, str]:
        return dict(self._env)

    @override
    def root_path(self) -> str:
        return self._root
