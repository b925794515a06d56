from pathlib import PurePosixPath

from manifest import Manifest
from project_walker import ProjectSnapshot
from stable_preview import ScanResult

SOURCE_EXTS = {
    ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".vue", ".svelte",
    ".css", ".scss", ".sass", ".less", ".html",
}


class UnusedDependencyScanner:
    """
    A dependency is used when its name appears anywhere in any source file
    body. Plain substring search: a name contained in some longer identifier
    counts as used.
    """

    def __init__(self, snapshot: ProjectSnapshot, manifest: Manifest):
        self.snapshot = snapshot
        self.manifest = manifest

    def scan(self) -> ScanResult:
        pending = set(self.manifest.all_names())
        if not pending:
            return ScanResult()

        for rel in self.snapshot.files:
            if not pending:
                break
            if PurePosixPath(rel).suffix not in SOURCE_EXTS:
                continue
            content = self.snapshot.read_text(rel)
            if not content:
                continue
            pending -= {dep for dep in pending if dep in content}

        unused = [dep for dep in self.manifest.all_names() if dep in pending]
        return ScanResult(unused)
