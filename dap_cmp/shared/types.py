import builtins
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

# https://microsoft.github.io/language-server-protocol/specification#textDocument_completion
PLAIN_TEXT_FORMAT = 1
SNIPPET_FORMAT = 2


class ItemKind(Enum):
    """
    Values are LSP `CompletionItemKind`, which is what the popup renders
    """

    text = 1
    method = 2
    function = 3
    constructor = 4
    field = 5
    variable = 6
    class_ = 7
    interface = 8
    module = 9
    property = 10
    unit = 11
    value = 12
    enum = 13
    keyword = 14
    snippet = 15
    file = 17
    reference = 18

    @builtins.property
    def label(self) -> str:
        return self.name.rstrip("_")


@dataclass(frozen=True)
class BufInfo:
    buftype: str
    filetype: str
    name: str


@dataclass(frozen=True)
class CompletionContext:
    """
    |...            line             ...|
    |... before_cursor 🐭            ...|
    """

    row: int
    column: int
    line: str
    before_cursor: str


@dataclass(frozen=True)
class CompletionRequest:
    """
    Arguments of the DAP `completions` request, `line` is 0 based
    """

    text: str
    column: int
    line: int
    frameId: Optional[int] = None


@dataclass(frozen=True)
class SuggestionItem:
    label: str
    kind: ItemKind
    filter_text: str
    insert_text: str
    is_snippet: bool = False
    detail: Optional[str] = None
    documentation: Optional[str] = None
    sort_text: Optional[str] = None


@dataclass(frozen=True)
class CompletionOutcome:
    items: Sequence[SuggestionItem]
    is_incomplete: bool


EMPTY = CompletionOutcome(items=(), is_incomplete=False)
STALE = CompletionOutcome(items=(), is_incomplete=True)
