"""Include/exclude selector bookkeeping."""

from dataclasses import dataclass, field
from typing import Iterable, List, Union

SelectorArgs = Union[str, Iterable[str]]


def flatten_selectors(selectors: tuple) -> List[str]:
    out = []
    for item in selectors:
        if isinstance(item, str):
            out.append(item)
        else:
            out.extend(item)
    return out


@dataclass
class SelectorSet:
    """
    Ordered CSS selectors to include in, and exclude from, a scan.

    Both lists are append-only. Duplicates are kept, and the first include
    is significant: a lone include is sent to the engine as a bare string.
    Selectors are not checked for CSS syntax; the browser does that when
    the engine evaluates them.
    """

    includes: List[str] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)

    def include(self, *selectors: SelectorArgs) -> None:
        self.includes.extend(flatten_selectors(selectors))

    def exclude(self, *selectors: SelectorArgs) -> None:
        self.excludes.extend(flatten_selectors(selectors))
