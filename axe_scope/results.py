"""Scan result value and extraction from the raw browser response."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple


@dataclass(frozen=True)
class ScanResult:
    """
    Findings returned by one scan.

    Records are kept exactly as the engine produced them; their structure is
    engine-defined.
    """

    violations: Tuple[Any, ...] = field(default_factory=tuple)
    passes: Tuple[Any, ...] = field(default_factory=tuple)

    @property
    def violation_count(self) -> int:
        return len(self.violations)

    @property
    def pass_count(self) -> int:
        return len(self.passes)

    @property
    def is_clean(self) -> bool:
        return not self.violations

    def violation_ids(self) -> List[str]:
        ids = []
        for finding in self.violations:
            if isinstance(finding, Mapping) and finding.get("id"):
                ids.append(finding["id"])
        return ids

    def to_dict(self) -> Dict[str, Any]:
        return {"violations": list(self.violations), "passes": list(self.passes)}


class ResultExtractor:
    def extract(self, raw: Mapping[str, Any]) -> ScanResult:
        # The invoker has already checked that both values are lists.
        return ScanResult(violations=tuple(raw["violations"]), passes=tuple(raw["passes"]))
