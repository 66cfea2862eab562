"""
Command line access to the extension's entry points, acting as a minimal host.
Useful to check how the extension resolves binaries and labels for a given project.
"""

import dataclasses
import json
import os
from typing import Any

import click
from sensai.util import logging

from swiftbridge.constants import SOURCEKIT_LSP_SERVER_ID, SWIFT_DEBUG_ADAPTER_NAME, SWIFTBRIDGE_LOG_FORMAT
from swiftbridge.debug import DebugTaskDefinition
from swiftbridge.exceptions import SwiftBridgeError
from swiftbridge.extension import SwiftExtension
from swiftbridge.settings import YamlSettingsStore
from swiftbridge.types import CodeLabel, Completion, CompletionKind, Symbol, SymbolKind
from swiftbridge.worktree import LocalWorktree

log = logging.getLogger(__name__)

_MAX_CONTENT_WIDTH = 100
_DEFAULT_SETTINGS_FILE = os.path.join(".swiftbridge", "settings.yml")


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(value, indent=2, default=str))


def _label_to_dict(label: CodeLabel | None) -> dict | None:
    if label is None:
        return None
    d = dataclasses.asdict(label)
    d["display_text"] = label.display_text()
    d["filter_text"] = label.filter_text()
    return d


def _parse_kind(enum_cls: type[CompletionKind] | type[SymbolKind], value: str) -> Any:
    try:
        return enum_cls[value]
    except KeyError:
        raise click.BadParameter(f"Unknown kind {value!r}; valid kinds: {', '.join(k.name for k in enum_cls)}") from None


class _ExtensionContext:
    def __init__(self, project: str, settings_file: str | None):
        self.worktree = LocalWorktree(project)
        settings_path = settings_file or os.path.join(self.worktree.root_path(), _DEFAULT_SETTINGS_FILE)
        self.extension = SwiftExtension(YamlSettingsStore(settings_path))


class AutoRegisteringGroup(click.Group):
    """
    A click.Group subclass that automatically registers any click.Command
    attributes defined on the class into the group.
    """

    def __init__(self, name: str, help: str):
        super().__init__(name=name, help=help)
        for attr in dir(self.__class__):
            cmd = getattr(self.__class__, attr)
            if isinstance(cmd, click.Command):
                self.add_command(cmd)


_project_option = click.option(
    "--project", type=click.Path(exists=True, file_okay=False), default=os.getcwd, help="The worktree root.", show_default="cwd"
)
_settings_option = click.option(
    "--settings-file", type=click.Path(dir_okay=False), default=None, help=f"YAML settings file [default: <project>/{_DEFAULT_SETTINGS_FILE}]."
)
_log_level_option = click.option(
    "--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False), default="WARNING"
)


def _create_context(project: str, settings_file: str | None, log_level: str) -> _ExtensionContext:
    logging.configure(format=SWIFTBRIDGE_LOG_FORMAT, level=logging.getLevelName(log_level.upper()))
    try:
        return _ExtensionContext(project, settings_file)
    except SwiftBridgeError as e:
        raise click.ClickException(str(e)) from e


class TopLevelCommands(AutoRegisteringGroup):
    """Root CLI group containing the swiftbridge commands."""

    def __init__(self) -> None:
        super().__init__(name="swiftbridge", help="Inspect how the Swift extension resolves binaries, labels and debug configurations.")

    @staticmethod
    @click.command("command", help="Print the command used to launch the language server.", context_settings={"max_content_width": _MAX_CONTENT_WIDTH})
    @click.option("--server-id", default=SOURCEKIT_LSP_SERVER_ID, show_default=True)
    @_project_option
    @_settings_option
    @_log_level_option
    def command(server_id: str, project: str, settings_file: str | None, log_level: str) -> None:
        ctx = _create_context(project, settings_file, log_level)
        try:
            cmd = ctx.extension.language_server_command(server_id, ctx.worktree)
        except SwiftBridgeError as e:
            raise click.ClickException(str(e)) from e
        _echo_json(cmd.to_dict())

    @staticmethod
    @click.command("init-options", help="Print the initialization options passed to the language server.")
    @click.option("--server-id", default=SOURCEKIT_LSP_SERVER_ID, show_default=True)
    @_project_option
    @_settings_option
    @_log_level_option
    def init_options(server_id: str, project: str, settings_file: str | None, log_level: str) -> None:
        ctx = _create_context(project, settings_file, log_level)
        try:
            options = ctx.extension.language_server_initialization_options(server_id, ctx.worktree)
        except SwiftBridgeError as e:
            raise click.ClickException(str(e)) from e
        _echo_json(options)

    @staticmethod
    @click.command("label-completion", help="Print the code label for a completion item.")
    @click.argument("label")
    @click.option("--kind", required=True, help="Completion kind name, e.g. Function or EnumMember.")
    @click.option("--detail", default=None, help="Detail (type) text of the completion item.")
    @click.option("--server-id", default=SOURCEKIT_LSP_SERVER_ID, show_default=True)
    @_project_option
    @_settings_option
    @_log_level_option
    def label_completion(
        label: str, kind: str, detail: str | None, server_id: str, project: str, settings_file: str | None, log_level: str
    ) -> None:
        ctx = _create_context(project, settings_file, log_level)
        completion = Completion(label=label, kind=_parse_kind(CompletionKind, kind), detail=detail)
        # labels are only produced once the server has been started
        try:
            ctx.extension.language_server_command(SOURCEKIT_LSP_SERVER_ID, ctx.worktree)
        except SwiftBridgeError as e:
            raise click.ClickException(str(e)) from e
        _echo_json(_label_to_dict(ctx.extension.label_for_completion(server_id, completion)))

    @staticmethod
    @click.command("label-symbol", help="Print the code label for a symbol.")
    @click.argument("name")
    @click.option("--kind", required=True, help="Symbol kind name, e.g. Class or Function.")
    @click.option("--server-id", default=SOURCEKIT_LSP_SERVER_ID, show_default=True)
    @_project_option
    @_settings_option
    @_log_level_option
    def label_symbol(name: str, kind: str, server_id: str, project: str, settings_file: str | None, log_level: str) -> None:
        ctx = _create_context(project, settings_file, log_level)
        symbol = Symbol(name=name, kind=_parse_kind(SymbolKind, kind))
        try:
            ctx.extension.language_server_command(SOURCEKIT_LSP_SERVER_ID, ctx.worktree)
        except SwiftBridgeError as e:
            raise click.ClickException(str(e)) from e
        _echo_json(_label_to_dict(ctx.extension.label_for_symbol(server_id, symbol)))

    @staticmethod
    @click.command("dap-kind", help="Print the request kind of a debug configuration given as JSON.")
    @click.argument("config")
    @click.option("--adapter", default=SWIFT_DEBUG_ADAPTER_NAME, show_default=True)
    def dap_kind(config: str, adapter: str) -> None:
        try:
            kind = SwiftExtension().dap_request_kind(adapter, config)
        except SwiftBridgeError as e:
            raise click.ClickException(str(e)) from e
        click.echo(kind.value)

    @staticmethod
    @click.command("dap-binary", help="Print the debug adapter invocation for a debug configuration given as JSON.")
    @click.argument("config")
    @click.option("--adapter", default=SWIFT_DEBUG_ADAPTER_NAME, show_default=True)
    @click.option("--adapter-path", default=None, help="Explicit path to lldb-dap.")
    @_project_option
    @_settings_option
    @_log_level_option
    def dap_binary(config: str, adapter: str, adapter_path: str | None, project: str, settings_file: str | None, log_level: str) -> None:
        ctx = _create_context(project, settings_file, log_level)
        definition = DebugTaskDefinition(label="swiftbridge", adapter=adapter, config=config)
        try:
            binary = ctx.extension.get_dap_binary(adapter, definition, adapter_path, ctx.worktree)
        except SwiftBridgeError as e:
            raise click.ClickException(str(e)) from e
        _echo_json(dataclasses.asdict(binary))


top_level = TopLevelCommands()


def get_help() -> str:
    """Retrieve the help text for the top-level swiftbridge CLI."""
    return top_level.get_help(click.Context(top_level, info_name="swiftbridge"))
