"""
Builds code labels for SourceKit-LSP completions and symbols.

A label consists of a snippet of Swift code (which the host highlights), the spans of that
code that are displayed, and a filter range into the displayed text that fuzzy matching is
applied to. Snippets wrap the completion label in a synthetic declaration so that it
highlights like real code; all ranges are derived from the lengths of the literal parts
the snippet is built from.
"""

from sensai.util import logging

from swiftbridge.types import CodeLabel, CodeLabelSpan, Completion, CompletionKind, Range, Symbol, SymbolKind

log = logging.getLogger(__name__)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _name_range(label: str) -> Range:
    """
    :return: the range of the label up to the first opening parenthesis (the whole label if there is none)
    """
    paren = label.find("(")
    return Range(0, _byte_len(label if paren == -1 else label[:paren]))


_TYPE_LIKE_HIGHLIGHTS = {
    CompletionKind.Class: "type",
    CompletionKind.Struct: "type",
    CompletionKind.Enum: "type",
    CompletionKind.Interface: "type",
    CompletionKind.Module: "type",
    CompletionKind.Keyword: "keyword",
}

_DECLARATION_KEYWORDS = {
    CompletionKind.Variable: "var",
    CompletionKind.Field: "var",
    CompletionKind.Property: "var",
    CompletionKind.Constant: "let",
}

_SYMBOL_KEYWORDS = {
    SymbolKind.Function: "func",
    SymbolKind.Method: "func",
    SymbolKind.Class: "class",
    SymbolKind.Struct: "struct",
    SymbolKind.Enum: "enum",
    SymbolKind.Variable: "var",
    SymbolKind.Constant: "let",
}


def _plain_label(label: str, highlight: str) -> CodeLabel:
    whole = Range(0, _byte_len(label))
    return CodeLabel(code=label, spans=[CodeLabelSpan(whole, highlight)], filter_range=whole)


def _enum_case_label(label: str) -> CodeLabel:
    prefix = "enum Enum { case "
    code = f"{prefix}{label} }}"
    start = _byte_len(prefix)
    return CodeLabel(
        code=code,
        spans=[CodeLabelSpan(Range(start, start + _byte_len(label)))],
        filter_range=_name_range(label),
    )


def _function_label(label: str, return_type: str | None) -> CodeLabel | None:
    if label.startswith("(") or not label.strip():
        log.debug(f"Function completion without a name: {label!r}")
        return None
    prefix = "func "
    suffix = " {}"
    signature = label if "(" in label else f"{label}()"
    if return_type:
        signature += f" -> {return_type}"
    code = f"{prefix}{signature}{suffix}"
    return CodeLabel(
        code=code,
        spans=[CodeLabelSpan(Range(_byte_len(prefix), _byte_len(code) - _byte_len(suffix)))],
        filter_range=_name_range(label),
    )


def _type_parameter_label(label: str, detail: str | None) -> CodeLabel | None:
    if not detail:
        return None
    prefix = "typealias "
    code = f"{prefix}{label} = {detail}"
    return CodeLabel(
        code=code,
        spans=[CodeLabelSpan(Range(_byte_len(prefix), _byte_len(code)))],
        filter_range=Range(0, _byte_len(label)),
    )


def _declaration_label(keyword: str, label: str, type_name: str | None) -> CodeLabel | None:
    if not type_name:
        return None
    prefix = f"{keyword} "
    code = f"{prefix}{label}: {type_name}"
    return CodeLabel(
        code=code,
        spans=[CodeLabelSpan(Range(_byte_len(prefix), _byte_len(code)))],
        filter_range=Range(0, _byte_len(label)),
    )


def _value_label(label: str, type_name: str | None) -> CodeLabel:
    prefix = f"var _: {type_name} = " if type_name else "var _ = "
    code = f"{prefix}{label}"
    return CodeLabel(
        code=code,
        spans=[CodeLabelSpan(Range(_byte_len(prefix), _byte_len(code)))],
        filter_range=Range(0, _byte_len(label)),
    )


def label_for_completion(completion: Completion) -> CodeLabel | None:
    """
    :param completion: the completion item as reported by the language server
    :return: the label to display, or None if the host shall apply its default rendering
    """
    kind = completion.kind
    label = completion.label
    detail = completion.detail
    if kind is None:
        return None
    if kind in _TYPE_LIKE_HIGHLIGHTS:
        return _plain_label(label, _TYPE_LIKE_HIGHLIGHTS[kind])
    if kind in _DECLARATION_KEYWORDS:
        return _declaration_label(_DECLARATION_KEYWORDS[kind], label, detail)
    match kind:
        case CompletionKind.EnumMember:
            return _enum_case_label(label)
        case CompletionKind.Function | CompletionKind.Method | CompletionKind.Constructor:
            return _function_label(label, detail)
        case CompletionKind.TypeParameter:
            return _type_parameter_label(label, detail)
        case CompletionKind.Value:
            return _value_label(label, detail)
        case _:
            return None


def label_for_symbol(symbol: Symbol) -> CodeLabel | None:
    """
    :param symbol: a workspace or document symbol
    :return: a label showing the symbol as a declaration, or None for kinds without a template
    """
    keyword = _SYMBOL_KEYWORDS.get(symbol.kind)
    if keyword is None:
        return None
    prefix = f"{keyword} "
    code = f"{prefix}{symbol.name}"
    start = _byte_len(prefix)
    return CodeLabel(
        code=code,
        spans=[CodeLabelSpan(Range(0, _byte_len(code)))],
        filter_range=Range(start, start + _byte_len(symbol.name)),
    )
