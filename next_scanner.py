from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from project_walker import ProjectSnapshot

NEXT_EXTS = (".tsx", ".ts", ".jsx", ".js")


class NextScanner:
    """Structural details of a Next.js project: routers, groups, dynamic segments, layouts, API handlers."""

    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def scan(self) -> Dict[str, Any]:
        is_app = self.detect_app_router()
        is_pages = self.detect_pages_router()
        return {
            "detected": is_app or is_pages,
            "app_router": is_app,
            "pages_router": is_pages,
            "groups": self.route_groups(),
            "dynamic": self.dynamic_routes(),
            "layouts": self.layouts(),
            "api": self.api_routes(),
            "middleware": self.middleware(),
        }

    def _has_entry(self, folder: str, stem: str) -> bool:
        return any(self.snapshot.exists(f"{folder}/{stem}{ext}") for ext in NEXT_EXTS)

    def detect_app_router(self) -> bool:
        if not self.snapshot.is_dir("app"):
            return False
        return self._has_entry("app", "layout") or self._has_entry("app", "page")

    def detect_pages_router(self) -> bool:
        return self.snapshot.is_dir("pages") and self._has_entry("pages", "index")

    def route_groups(self) -> List[str]:
        return [
            name for name in self.snapshot.subdirs("app")
            if name.startswith("(") and name.endswith(")")
        ]

    def dynamic_routes(self) -> List[str]:
        found = []
        for rel in self.snapshot.dirs_under("app"):
            name = rel.rsplit("/", 1)[-1]
            # [id], [...slug], [[...slug]]
            if name.startswith("[") and name.endswith("]"):
                found.append(rel)
        return found

    def layouts(self) -> List[str]:
        return [
            rel for rel in self.snapshot.under("app")
            if PurePosixPath(rel).stem == "layout" and rel.endswith(NEXT_EXTS)
        ]

    def api_routes(self) -> List[str]:
        return [
            rel for rel in self.snapshot.under("app/api")
            if PurePosixPath(rel).stem == "route" and rel.endswith(NEXT_EXTS)
        ]

    def middleware(self) -> Optional[str]:
        for ext in NEXT_EXTS:
            if f"middleware{ext}" in self.snapshot.files:
                return f"middleware{ext}"
        return None
