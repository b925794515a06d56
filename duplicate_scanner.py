import re
from collections import defaultdict
from pathlib import PurePosixPath
from typing import Dict, List

from stable_preview import ScanResult

COPY_SUFFIX = re.compile(r"[\s_-]*copy(?:[\s_-]*\d+)?$", re.IGNORECASE)
COUNTER_SUFFIX = re.compile(r"\s*\(\d+\)$")


def normalize_name(path: str) -> str:
    """Card copy 2.tsx, Card (1).tsx and card.tsx all normalize to 'card'."""
    original = PurePosixPath(path).stem
    stem = original
    previous = None
    while stem != previous:
        previous = stem
        stem = COUNTER_SUFFIX.sub("", stem)
        stem = COPY_SUFFIX.sub("", stem)
    # a bare "Copy.tsx" strips to nothing; it still clusters with "copy.tsx"
    return (stem.strip() or original.strip()).lower()


class DuplicateScanner:
    def scan(self, components: List[str]) -> ScanResult:
        """
        Group components by normalized base name. Every member of a group of
        two or more is a finding; the clusters themselves go in extra data.
        """
        groups: Dict[str, List[str]] = defaultdict(list)
        for comp in components:
            key = normalize_name(comp)
            if key:
                groups[key].append(comp)

        clusters = {key: sorted(members) for key, members in sorted(groups.items()) if len(members) > 1}
        members = [m for cluster in clusters.values() for m in cluster]
        return ScanResult(members, extra={"clusters": clusters})
