from pathlib import PurePosixPath

from project_walker import ProjectSnapshot
from stable_preview import ScanResult

COMPONENT_EXTS = {".tsx", ".jsx", ".ts", ".js", ".vue", ".svelte"}
COMPONENT_DIRS = {"components", "component", "ui"}
# Framework entry files that look like components but are not
SPECIAL_STEMS = {"page", "layout", "_app", "_document"}


class ComponentScanner:
    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def scan(self) -> ScanResult:
        found = [rel for rel in self.snapshot.files if self.is_component(rel)]
        return ScanResult(found)

    @staticmethod
    def is_component(rel: str) -> bool:
        p = PurePosixPath(rel)
        if p.suffix not in COMPONENT_EXTS:
            return False
        if p.stem.lower() in SPECIAL_STEMS:
            return False
        in_component_dir = any(part.lower() in COMPONENT_DIRS for part in p.parts[:-1])
        return in_component_dir or p.name[:1].isupper()
