"""
Translates between the host's debug requests and the configuration understood by lldb-dap.

The configuration is handed around as JSON text. Only the fields listed in
:class:`LaunchConfig` and :class:`AttachConfig` are interpreted; all other fields are
passed through to the adapter untouched.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sensai.util import logging

from swiftbridge.constants import LLDB_DAP_NAME, LLDB_DAP_TOOLCHAIN_PATHS
from swiftbridge.exceptions import AdapterNotFoundError, MalformedConfigError
from swiftbridge.worktree import Worktree

log = logging.getLogger(__name__)


class DebugRequestKind(str, Enum):
    LAUNCH = "launch"
    ATTACH = "attach"


class _SwiftDebugConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    stop_on_entry: bool | None = Field(default=None, alias="stopOnEntry")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class LaunchConfig(_SwiftDebugConfig):
    request: Literal["launch"] = "launch"
    program: str
    cwd: str | None = None
    env: dict[str, str] = Field(default_factory=dict)


class AttachConfig(_SwiftDebugConfig):
    request: Literal["attach"] = "attach"
    pid: int | None = None
    cwd: str | None = None
    env: dict[str, str] | None = None


SwiftDebugConfig = LaunchConfig | AttachConfig


@dataclass
class LaunchRequest:
    program: str
    cwd: str | None = None
    envs: dict[str, str] = field(default_factory=dict)


@dataclass
class AttachRequest:
    process_id: int | None = None


@dataclass
class HostDebugConfig:
    """
    A debug session as requested natively by the host (e.g. from a task or the debug panel).
    """

    label: str
    adapter: str
    request: LaunchRequest | AttachRequest
    stop_on_entry: bool | None = None


@dataclass
class DebugScenario:
    adapter: str
    label: str
    config: str
    build: Any = None
    tcp_connection: Any = None


@dataclass
class DebugTaskDefinition:
    label: str
    adapter: str
    config: str


@dataclass
class StartDebuggingRequestArguments:
    configuration: str
    request: DebugRequestKind


@dataclass
class DebugAdapterBinary:
    command: str | None
    arguments: list[str]
    envs: dict[str, str]
    cwd: str | None
    request_args: StartDebuggingRequestArguments
    connection: Any = None


def _as_object(config: dict[str, Any] | str) -> dict[str, Any]:
    if isinstance(config, str):
        try:
            config = json.loads(config)
        except json.JSONDecodeError as e:
            raise MalformedConfigError(f"Swift debug adapter configuration is not valid JSON: {e}") from e
    if not isinstance(config, dict):
        raise MalformedConfigError(f"Swift debug adapter configuration must be a JSON object, got {type(config).__name__}")
    return config


def classify_request(config: dict[str, Any] | str) -> DebugRequestKind:
    """
    Determines whether a configuration describes a launch or an attach request.

    :param config: the configuration as a JSON object or JSON text
    :return: the request kind
    """
    config = _as_object(config)
    if "request" not in config:
        raise MalformedConfigError("Missing required `request` field in Swift debug adapter configuration")
    value = config["request"]
    for kind in DebugRequestKind:
        if value == kind.value:
            return kind
    raise MalformedConfigError(f"Unexpected value for `request` key in Swift debug adapter configuration: {value!r}")


def parse_config(config: dict[str, Any] | str) -> SwiftDebugConfig:
    data = _as_object(config)
    kind = classify_request(data)
    model = LaunchConfig if kind == DebugRequestKind.LAUNCH else AttachConfig
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedConfigError(f"Invalid Swift debug adapter configuration for request '{kind.value}': {e}") from e


def config_to_scenario(host_config: HostDebugConfig) -> DebugScenario:
    request = host_config.request
    if isinstance(request, LaunchRequest):
        config: SwiftDebugConfig = LaunchConfig(
            program=request.program,
            cwd=request.cwd,
            env=dict(request.envs),
            stop_on_entry=host_config.stop_on_entry,
        )
    else:
        config = AttachConfig(pid=request.process_id, stop_on_entry=host_config.stop_on_entry)
    return DebugScenario(adapter=host_config.adapter, label=host_config.label, config=config.to_json())


def resolve_adapter_command(user_provided_path: str | None, worktree: Worktree) -> str:
    """
    :param user_provided_path: the adapter path configured by the user, which takes precedence
    :param worktree: the worktree used to look up the adapter
    :return: the command to launch lldb-dap
    """
    if user_provided_path is not None:
        log.info(f"Using user-provided debug adapter: {user_provided_path}")
        return user_provided_path
    searched = [*LLDB_DAP_TOOLCHAIN_PATHS, LLDB_DAP_NAME]
    for candidate in searched:
        path = worktree.which(candidate)
        if path is not None:
            log.info(f"Using debug adapter {path}")
            return path
        log.debug(f"{candidate} not found")
    raise AdapterNotFoundError(f"Could not find {LLDB_DAP_NAME}; searched: {', '.join(searched)}")


def get_dap_binary(
    definition: DebugTaskDefinition,
    user_provided_debug_adapter_path: str | None,
    worktree: Worktree,
) -> DebugAdapterBinary:
    config = parse_config(definition.config)
    command = resolve_adapter_command(user_provided_debug_adapter_path, worktree)
    return DebugAdapterBinary(
        command=command,
        arguments=[],
        envs=dict(config.env or {}),
        cwd=config.cwd or worktree.root_path(),
        request_args=StartDebuggingRequestArguments(
            configuration=definition.config,
            request=DebugRequestKind(config.request),
        ),
    )
