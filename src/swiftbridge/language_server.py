"""
Provides the SourceKit-LSP language server command and its code labels.
"""

from sensai.util import logging
from sensai.util.string import ToStringMixin

from swiftbridge import labels
from swiftbridge.constants import SOURCEKIT_LSP_SERVER_ID, XCRUN_PATH
from swiftbridge.settings import SettingsStore
from swiftbridge.types import CodeLabel, Command, Completion, ServerBinary, Symbol
from swiftbridge.worktree import Worktree

log = logging.getLogger(__name__)


class SourceKitLsp(ToStringMixin):
    """
    Resolves how to launch SourceKit-LSP for a worktree. The binary is determined in this order:

    1. the binary path configured in the language server settings,
    2. ``sourcekit-lsp`` found on the worktree's search path,
    3. the ``xcrun`` dispatcher, which locates sourcekit-lsp in the active developer toolchain.
    """

    SERVER_ID = SOURCEKIT_LSP_SERVER_ID

    def __init__(self, settings_store: SettingsStore):
        self._settings_store = settings_store

    def _tostring_includes(self) -> list[str]:
        return ["SERVER_ID"]

    @staticmethod
    def get_executable_args() -> list[str]:
        return []

    def language_server_binary(self, server_id: str, worktree: Worktree) -> ServerBinary:
        lsp_settings = self._settings_store.lsp_settings(server_id, worktree)

        binary_settings = lsp_settings.binary
        if binary_settings is not None and binary_settings.path is not None:
            log.info(f"Using configured {server_id} binary: {binary_settings.path}")
            return ServerBinary(
                path=binary_settings.path,
                args=binary_settings.arguments,
                env=dict(binary_settings.env or {}),
            )

        path = worktree.which(self.SERVER_ID)
        if path is not None:
            log.info(f"Using {self.SERVER_ID} found on the search path: {path}")
            return ServerBinary(path=path, args=None, env=worktree.shell_env())

        log.info(f"{self.SERVER_ID} is neither configured nor on the search path; falling back to {XCRUN_PATH}")
        return ServerBinary(path=XCRUN_PATH, args=[self.SERVER_ID], env={})

    def language_server_command(self, server_id: str, worktree: Worktree) -> Command:
        binary = self.language_server_binary(server_id, worktree)
        args = binary.args if binary.args is not None else self.get_executable_args()
        return Command(command=binary.path, args=list(args), env=binary.env)

    def label_for_completion(self, completion: Completion) -> CodeLabel | None:
        return labels.label_for_completion(completion)

    def label_for_symbol(self, symbol: Symbol) -> CodeLabel | None:
        return labels.label_for_symbol(symbol)
