"""
Scan scope resolution.

The engine accepts three shapes of context:

    document                                  whole page
    "#main"                                   one selector, shorthand form
    {"include": [["#a"]], "exclude": [["#b"]]}  selector lists

Each selector in the structured form is wrapped in its own list because the
engine treats every entry as a frame path.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .selector_set import SelectorSet


class ScopeKind(Enum):
    """Which context shape a scan is sent with."""

    UNSCOPED = "document"
    SINGLE_INCLUDE = "selector"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class ScopeDescriptor:
    kind: ScopeKind
    payload: Any = None


class ScopeManager:
    """Decides the context shape for a SelectorSet and renders it."""

    def __init__(self, selectors: Optional[SelectorSet] = None):
        self.selectors = selectors if selectors is not None else SelectorSet()

    def include(self, *selectors) -> None:
        self.selectors.include(*selectors)

    def exclude(self, *selectors) -> None:
        self.selectors.exclude(*selectors)

    def has_structured_scope(self) -> bool:
        return len(self.selectors.includes) > 1 or len(self.selectors.excludes) > 0

    def has_single_include(self) -> bool:
        return len(self.selectors.includes) == 1 and len(self.selectors.excludes) == 0

    def first_include(self) -> str:
        """Return the first include; only meaningful when has_single_include() holds."""
        return self.selectors.includes[0]

    def to_scope_payload(self) -> Dict[str, List[List[str]]]:
        return {
            "include": [[selector] for selector in self.selectors.includes],
            "exclude": [[selector] for selector in self.selectors.excludes],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_scope_payload(), ensure_ascii=False)

    def resolve(self) -> ScopeDescriptor:
        # Structured wins over the shorthand: one include plus any exclude is structured.
        if self.has_structured_scope():
            return ScopeDescriptor(ScopeKind.STRUCTURED, self.to_scope_payload())
        if self.has_single_include():
            # Only single quotes are stripped; other characters pass through untouched.
            return ScopeDescriptor(ScopeKind.SINGLE_INCLUDE, self.first_include().replace("'", ""))
        return ScopeDescriptor(ScopeKind.UNSCOPED)
