"""
Deterministic preview selection.

Every finding is ranked by sha256(seed + salt + key(item)); the first 8 hex
digits of the digest are the rank, ties broken by key(item). The rank of an
item depends only on the item itself, so adding unrelated findings never
reshuffles the ones that were already shown.
"""
import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

RANK_HEX_WIDTH = 8


def finding_key(item: Any) -> str:
    if isinstance(item, str):
        return item
    return json.dumps(item, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _rank(seed_key: str, salt: str, key: str) -> int:
    digest = hashlib.sha256((seed_key + salt + key).encode("utf-8")).hexdigest()
    return int(digest[:RANK_HEX_WIDTH], 16)


def pick_stable_preview(items: List[Any], cap: int, seed_key: str, salt: str) -> List[Any]:
    if not items or cap <= 0:
        return []
    ranked = sorted(
        items,
        key=lambda item: (_rank(seed_key, salt, finding_key(item)), finding_key(item)),
    )
    return ranked[:cap]


@dataclass
class PreviewResult:
    preview: List[Any] = field(default_factory=list)
    total: int = 0

    @property
    def locked(self) -> int:
        return max(0, self.total - len(self.preview))

    def to_dict(self) -> Dict[str, Any]:
        return {"preview": list(self.preview), "total": self.total, "locked": self.locked}


@dataclass
class ScanResult:
    """Uniform scanner output: every finding plus the true count."""
    items: List[Any] = field(default_factory=list)
    total: int = -1
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.total < 0:
            self.total = len(self.items)
        if self.total < len(self.items):
            raise ValueError(f"total {self.total} is smaller than {len(self.items)} items")
        if self.total > 0 and not self.items:
            raise ValueError("non-zero total with no items")

    def preview(self, cap: int, seed_key: str, salt: str) -> PreviewResult:
        return PreviewResult(pick_stable_preview(self.items, cap, seed_key, salt), self.total)

    def to_dict(self) -> Dict[str, Any]:
        data = {"items": list(self.items), "total": self.total}
        data.update(self.extra)
        return data
