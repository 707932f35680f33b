from typing import Mapping, Optional

from ..dap.types import CompletionItem
from ..shared.types import ItemKind, SuggestionItem

_SNIPPET_MARKER = "$"

KINDS: Mapping[str, ItemKind] = {
    "method": ItemKind.method,
    "function": ItemKind.function,
    "constructor": ItemKind.constructor,
    "field": ItemKind.field,
    "variable": ItemKind.variable,
    "class": ItemKind.class_,
    "interface": ItemKind.interface,
    "module": ItemKind.module,
    "property": ItemKind.property,
    "unit": ItemKind.unit,
    "value": ItemKind.value,
    "enum": ItemKind.enum,
    "keyword": ItemKind.keyword,
    "snippet": ItemKind.snippet,
    "text": ItemKind.text,
    "file": ItemKind.file,
    "reference": ItemKind.reference,
}

_BY_LABEL: Mapping[str, ItemKind] = {kind.label.casefold(): kind for kind in ItemKind}


def parse_kind(name: str) -> Optional[ItemKind]:
    return _BY_LABEL.get(name.casefold())


def kinds(overrides: Mapping[str, str]) -> Mapping[str, ItemKind]:
    """
    `overrides` map DAP types to kind names, ie. {"color": "Value"}
    """

    acc = {**KINDS}
    for dap_type, name in overrides.items():
        if kind := parse_kind(name):
            acc[dap_type] = kind
    return acc


def trans(
    kind_map: Mapping[str, ItemKind], snippets: bool, item: CompletionItem
) -> SuggestionItem:
    label = item.label or item.text or ""
    insert_text = item.text or item.label or ""
    kind = kind_map.get(item.type or "", ItemKind.variable)

    return SuggestionItem(
        label=label,
        kind=kind,
        filter_text=item.filterText or label,
        insert_text=insert_text,
        is_snippet=snippets and _SNIPPET_MARKER in insert_text,
        detail=item.detail,
        documentation=item.documentation,
        sort_text=item.sortText,
    )
