"""
The entry point called by the host: dispatches language server and debug adapter callbacks.
"""

from typing import Any

from sensai.util import logging
from sensai.util.string import ToStringMixin

from swiftbridge import debug
from swiftbridge.constants import SWIFT_DEBUG_ADAPTER_NAME
from swiftbridge.debug import DebugAdapterBinary, DebugRequestKind, DebugScenario, DebugTaskDefinition, HostDebugConfig
from swiftbridge.exceptions import UnknownIdentifierError
from swiftbridge.language_server import SourceKitLsp
from swiftbridge.settings import DictSettingsStore, SettingsStore
from swiftbridge.types import CodeLabel, Command, Completion, Symbol
from swiftbridge.worktree import Worktree

log = logging.getLogger(__name__)


class SwiftExtension(ToStringMixin):
    """
    Swift support for an editor host, backed by SourceKit-LSP and lldb-dap.

    The host calls one method at a time; the SourceKit-LSP instance is created on the first
    command request and reused for the lifetime of the extension.
    """

    def __init__(self, settings_store: SettingsStore | None = None):
        self.settings_store = settings_store if settings_store is not None else DictSettingsStore()
        self._sourcekit_lsp: SourceKitLsp | None = None

    def _tostring_includes(self) -> list[str]:
        return ["settings_store"]

    def _check_adapter(self, adapter_name: str) -> None:
        if adapter_name != SWIFT_DEBUG_ADAPTER_NAME:
            raise UnknownIdentifierError(f"Unknown debug adapter: {adapter_name}")

    def language_server_command(self, server_id: str, worktree: Worktree) -> Command:
        match server_id:
            case SourceKitLsp.SERVER_ID:
                if self._sourcekit_lsp is None:
                    log.debug(f"Creating {SourceKitLsp.SERVER_ID} language server")
                    self._sourcekit_lsp = SourceKitLsp(self.settings_store)
                return self._sourcekit_lsp.language_server_command(server_id, worktree)
            case _:
                raise UnknownIdentifierError(f"Unknown language server: {server_id}")

    def language_server_initialization_options(self, server_id: str, worktree: Worktree) -> Any:
        """
        :return: the initialization options configured for the server, passed through verbatim
        """
        return self.settings_store.lsp_settings(server_id, worktree).initialization_options

    def language_server_workspace_configuration(self, server_id: str, worktree: Worktree) -> Any:
        return self.settings_store.lsp_settings(server_id, worktree).settings

    def label_for_completion(self, server_id: str, completion: Completion) -> CodeLabel | None:
        match server_id:
            case SourceKitLsp.SERVER_ID if self._sourcekit_lsp is not None:
                return self._sourcekit_lsp.label_for_completion(completion)
            case _:
                return None

    def label_for_symbol(self, server_id: str, symbol: Symbol) -> CodeLabel | None:
        match server_id:
            case SourceKitLsp.SERVER_ID if self._sourcekit_lsp is not None:
                return self._sourcekit_lsp.label_for_symbol(symbol)
            case _:
                return None

    def get_dap_binary(
        self,
        adapter_name: str,
        definition: DebugTaskDefinition,
        user_provided_debug_adapter_path: str | None,
        worktree: Worktree,
    ) -> DebugAdapterBinary:
        self._check_adapter(adapter_name)
        return debug.get_dap_binary(definition, user_provided_debug_adapter_path, worktree)

    def dap_request_kind(self, adapter_name: str, config: dict[str, Any] | str) -> DebugRequestKind:
        self._check_adapter(adapter_name)
        return debug.classify_request(config)

    def dap_config_to_scenario(self, host_config: HostDebugConfig) -> DebugScenario:
        self._check_adapter(host_config.adapter)
        return debug.config_to_scenario(host_config)
