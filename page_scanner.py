"""
Page detection.

Recognizes Next.js App Router pages (app/**/page.*), Pages Router files
(pages/** minus pages/api/**), plain React pages under src/pages, and
page-like files elsewhere whose name ends in Page.<ext>.
"""
from pathlib import PurePosixPath
from typing import List

from project_walker import ProjectSnapshot
from stable_preview import ScanResult

PAGE_EXTS = {".tsx", ".jsx", ".ts", ".js"}
PAGE_DIRS = ("app", "src/app", "pages", "src/pages")


def _in_dir(rel: str, base: str) -> bool:
    return rel.startswith(base + "/")


class PageScanner:
    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def scan(self) -> ScanResult:
        pages = self.app_router_pages() + self.pages_router_pages() + self.page_like_files()
        seen = set()
        unique = []
        for rel in pages:
            if rel not in seen:
                seen.add(rel)
                unique.append(rel)
        return ScanResult(unique)

    def app_router_pages(self) -> List[str]:
        found = []
        for base in ("app", "src/app"):
            for rel in self.snapshot.under(base):
                p = PurePosixPath(rel)
                if p.stem == "page" and p.suffix in PAGE_EXTS:
                    found.append(rel)
        return found

    def pages_router_pages(self) -> List[str]:
        found = []
        for base in ("pages", "src/pages"):
            for rel in self.snapshot.under(base):
                if _in_dir(rel, base + "/api"):
                    continue
                if PurePosixPath(rel).suffix in PAGE_EXTS:
                    found.append(rel)
        return found

    def page_like_files(self) -> List[str]:
        found = []
        for rel in self.snapshot.files:
            if any(_in_dir(rel, base) for base in PAGE_DIRS):
                continue
            p = PurePosixPath(rel)
            if p.suffix in PAGE_EXTS and p.stem.endswith("Page") and p.stem != "Page":
                found.append(rel)
        return found
