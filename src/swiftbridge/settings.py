"""
Read-only access to the per-language-server settings a user configured for a worktree.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Self

from overrides import override
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from sensai.util import logging
from sensai.util.string import ToStringMixin

from swiftbridge.constants import SWIFTBRIDGE_FILE_ENCODING
from swiftbridge.exceptions import SettingsError
from swiftbridge.worktree import Worktree

log = logging.getLogger(__name__)


@dataclass
class BinarySettings:
    path: str | None = None
    arguments: list[str] | None = None
    env: dict[str, str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        path = data.get("path")
        if path is not None and not isinstance(path, str):
            raise SettingsError(f"Invalid binary path setting: {path!r}")
        arguments = data.get("arguments")
        if arguments is not None:
            if not isinstance(arguments, list) or not all(isinstance(a, str) for a in arguments):
                raise SettingsError(f"Binary arguments must be a list of strings, got {arguments!r}")
            arguments = list(arguments)
        env = data.get("env")
        if env is not None:
            if not isinstance(env, Mapping):
                raise SettingsError(f"Binary env must be a mapping, got {env!r}")
            env = {str(k): str(v) for k, v in env.items()}
        return cls(path=path, arguments=arguments, env=env)


@dataclass
class LspSettings:
    binary: BinarySettings | None = None
    initialization_options: Any = None
    settings: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        if not isinstance(data, Mapping):
            raise SettingsError(f"Language server settings must be a mapping, got {type(data).__name__}")
        binary = data.get("binary")
        if binary is not None and not isinstance(binary, Mapping):
            raise SettingsError(f"Binary settings must be a mapping, got {binary!r}")
        return cls(
            binary=BinarySettings.from_dict(binary) if binary is not None else None,
            initialization_options=data.get("initialization_options"),
            settings=data.get("settings"),
        )


class SettingsStore(ABC):
    @abstractmethod
    def lsp_settings(self, server_id: str, worktree: Worktree) -> LspSettings:
        """
        :param server_id: the language server identifier
        :param worktree: the worktree the server is started for
        :return: the settings for the server; default (empty) settings if none are configured
        """


class DictSettingsStore(SettingsStore, ToStringMixin):
    """
    Serves settings from an in-memory mapping of server identifiers to raw settings.
    """

    def __init__(self, lsp: Mapping[str, Mapping[str, Any]] | None = None):
        self._lsp = dict(lsp or {})

    def _tostring_includes(self) -> list[str]:
        return ["_lsp"]

    @override
    def lsp_settings(self, server_id: str, worktree: Worktree) -> LspSettings:
        data = self._lsp.get(server_id)
        if data is None:
            return LspSettings()
        return LspSettings.from_dict(data)


class YamlSettingsStore(DictSettingsStore):
    """
    Serves settings from the ``lsp`` section of a YAML file, e.g.

    .. code-block:: yaml

        lsp:
          sourcekit-lsp:
            binary:
              path: /opt/swift/usr/bin/sourcekit-lsp
              arguments: ["--log-level", "debug"]
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(self._load(path))

    def _tostring_includes(self) -> list[str]:
        return ["path"]

    @staticmethod
    def _load(path: str) -> dict[str, Any]:
        if not os.path.exists(path):
            log.info(f"Settings file {path} does not exist; using default settings")
            return {}
        try:
            with open(path, encoding=SWIFTBRIDGE_FILE_ENCODING) as f:
                data = YAML(typ="safe").load(f)
        except YAMLError as e:
            raise SettingsError(f"Could not parse settings file {path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping at the top level")
        lsp = data.get("lsp") or {}
        if not isinstance(lsp, dict):
            raise SettingsError(f"The 'lsp' section of {path} must be a mapping")
        log.debug(f"Loaded settings for language servers {list(lsp)} from {path}")
        return lsp
