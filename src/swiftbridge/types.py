"""
Value types exchanged with the host: command lines, completion/symbol records and code labels.
"""

from dataclasses import dataclass, field
from enum import IntEnum


class CompletionKind(IntEnum):
    """
    The kind of a completion entry (LSP ``CompletionItemKind``).
    """

    Text = 1
    Method = 2
    Function = 3
    Constructor = 4
    Field = 5
    Variable = 6
    Class = 7
    Interface = 8
    Module = 9
    Property = 10
    Unit = 11
    Value = 12
    Enum = 13
    Keyword = 14
    Snippet = 15
    Color = 16
    File = 17
    Reference = 18
    Folder = 19
    EnumMember = 20
    Constant = 21
    Struct = 22
    Event = 23
    Operator = 24
    TypeParameter = 25


class SymbolKind(IntEnum):
    """
    A symbol kind (LSP ``SymbolKind``).
    """

    File = 1
    Module = 2
    Namespace = 3
    Package = 4
    Class = 5
    Method = 6
    Property = 7
    Field = 8
    Constructor = 9
    Enum = 10
    Interface = 11
    Function = 12
    Variable = 13
    Constant = 14
    String = 15
    Number = 16
    Boolean = 17
    Array = 18
    Object = 19
    Key = 20
    Null = 21
    EnumMember = 22
    Struct = 23
    Event = 24
    Operator = 25
    TypeParameter = 26


@dataclass(frozen=True)
class Completion:
    label: str
    kind: CompletionKind | None = None
    detail: str | None = None


@dataclass(frozen=True)
class Symbol:
    name: str
    kind: SymbolKind


@dataclass(frozen=True)
class Range:
    """
    A half-open range of UTF-8 byte offsets.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid range: {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def is_within(self, text: str) -> bool:
        return self.end <= len(text.encode("utf-8"))

    def slice(self, text: str) -> str:
        return text.encode("utf-8")[self.start : self.end].decode("utf-8")


@dataclass(frozen=True)
class CodeLabelSpan:
    """
    A span of a code label, referring to a range of the label's code.
    If no highlight name is given, the host highlights the span by parsing the code.
    """

    range: Range
    highlight: str | None = None


@dataclass(frozen=True)
class CodeLabel:
    code: str
    spans: list[CodeLabelSpan]
    filter_range: Range

    def display_text(self) -> str:
        """
        :return: the text shown to the user, i.e. the concatenation of all spans
        """
        return "".join(span.range.slice(self.code) for span in self.spans)

    def filter_text(self) -> str:
        """
        :return: the part of the display text that fuzzy matching is applied to
        """
        return self.filter_range.slice(self.display_text())


@dataclass
class ServerBinary:
    path: str
    args: list[str] | None = None
    env: dict[str, str] = field(default_factory=dict)


@dataclass
class Command:
    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"command": self.command, "args": list(self.args), "env": dict(self.env)}
