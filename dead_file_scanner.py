from typing import List

from stable_preview import ScanResult

DEAD_MARKERS = ("old", "unused", "deprecated", "backup")


def looks_dead(path: str) -> bool:
    lower = path.lower()
    return any(marker in lower for marker in DEAD_MARKERS)


class DeadFileScanner:
    """Name-based dead file heuristic; substring matches are intentional."""

    def scan(self, files: List[str]) -> ScanResult:
        return ScanResult([f for f in files if looks_dead(f)])
