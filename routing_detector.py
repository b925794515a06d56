import re
from pathlib import PurePosixPath
from typing import List

from project_walker import ProjectSnapshot
from stable_preview import ScanResult

ROUTE_EXTS = {".tsx", ".jsx", ".ts", ".js"}
# Compiled once, used only through findall(): no match cursor is shared between files
ROUTE_ATTR = re.compile(r"""\b(?:path|to)=["'`](.*?)["'`]""")


class RoutingDetector:
    """
    Merges three independent routing signals: Next App Router pages,
    Next Pages Router files (API routes excluded) and react-router usage
    with the path=/to= values found in those files.
    """

    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def scan(self) -> ScanResult:
        results = self.next_app_routes() + self.next_pages_routes() + self.react_routes()
        unique = list(dict.fromkeys(results))
        return ScanResult(unique)

    def next_app_routes(self) -> List[str]:
        return [
            f"Next App: {rel}" for rel in self.snapshot.under("app")
            if PurePosixPath(rel).stem == "page" and PurePosixPath(rel).suffix in ROUTE_EXTS
        ]

    def next_pages_routes(self) -> List[str]:
        return [
            f"Next Pages: {rel}" for rel in self.snapshot.under("pages")
            if not rel.startswith("pages/api/") and PurePosixPath(rel).suffix in ROUTE_EXTS
        ]

    def react_routes(self) -> List[str]:
        found = []
        for rel in self.snapshot.under("src"):
            if PurePosixPath(rel).suffix not in ROUTE_EXTS:
                continue
            content = self.snapshot.read_text(rel)
            if not content or "react-router" not in content:
                continue
            for value in ROUTE_ATTR.findall(content):
                if value:
                    found.append(f"React Route: {value}")
        for app in ("src/App.tsx", "src/App.jsx"):
            content = self.snapshot.read_text(app) if app in self.snapshot.files else None
            if content and "react-router" in content:
                found.append("React Router detected in App component")
                break
        return found
