"""
Structure hints.

Shallow checks over src/ and the component folders. Each finding adds a
free-text hint and a weighted penalty to meta["totalScore"] (higher is
worse):

    deep nesting              5
    mixed JS/TS               3
    missing index file        2
    near-empty component      2
    empty folder              1
    duplicate-like file name  1
    misplaced asset           1
"""
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from project_walker import ProjectSnapshot

DEEP_NESTING_DEPTH = 4
NEAR_EMPTY_BYTES = 10
INDEX_NAMES = ("index.ts", "index.tsx", "index.js", "index.jsx")
SCRIPT_EXTS = {".ts", ".tsx", ".js", ".jsx"}
ASSET_EXTS = {".png", ".jpg", ".jpeg", ".svg", ".gif", ".webp"}
ASSET_DIRS = {"assets", "public"}

PENALTY = {
    "deep_nesting": 5,
    "mixed_ext": 3,
    "missing_index": 2,
    "empty_component": 2,
    "empty_folder": 1,
    "duplicate_like": 1,
    "misplaced_asset": 1,
}


class HintEngine:
    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot
        self.hints: List[str] = []
        self.meta: Dict[str, Any] = {}

    def scan(self) -> Dict[str, Any]:
        self.hints = []
        self.meta = {"deepNesting": 0, "emptyFolders": 0, "mixedExt": False, "totalScore": 0}

        bases = [b for b in ("src", "components") if self.snapshot.is_dir(b)]
        component_bases = [b for b in ("components", "src/components") if self.snapshot.is_dir(b)]

        for base in bases:
            self._deep_nesting(base)
        for base in component_bases:
            self._missing_index(base)
        self._mixed_extensions(bases)
        for base in bases:
            self._empty_folders(base)
        self._duplicate_like()
        self._misplaced_assets()
        for base in component_bases:
            self._empty_components(base)

        return {"hints": list(self.hints), "meta": dict(self.meta)}

    def _add(self, hint: str, kind: str):
        self.hints.append(hint)
        self.meta["totalScore"] += PENALTY[kind]

    def _deep_nesting(self, base: str):
        offender = self._first_deep_dir(base)
        if offender:
            self.meta["deepNesting"] += 1
            self._add(f"Deep nesting detected → {offender}", "deep_nesting")

    def _first_deep_dir(self, base: str) -> Optional[str]:
        base_depth = len(PurePosixPath(base).parts)
        for rel in self.snapshot.dirs_under(base):
            if len(PurePosixPath(rel).parts) - base_depth >= DEEP_NESTING_DEPTH:
                return rel
        return None

    def _missing_index(self, base: str):
        for name in self.snapshot.subdirs(base):
            folder = f"{base}/{name}"
            if not any(self.snapshot.exists(f"{folder}/{index}") for index in INDEX_NAMES):
                self._add(f"Missing index file in component folder → {folder}", "missing_index")

    def _mixed_extensions(self, bases: List[str]):
        has_js = has_ts = False
        for base in bases:
            for rel in self.snapshot.under(base):
                suffix = PurePosixPath(rel).suffix
                has_js = has_js or suffix in (".js", ".jsx")
                has_ts = has_ts or suffix in (".ts", ".tsx")
        if has_js and has_ts:
            self.meta["mixedExt"] = True
            self._add("Mixed JS and TS detected, consider standardizing for maintainability", "mixed_ext")

    def _empty_folders(self, base: str):
        for rel in self.snapshot.dirs_under(base):
            if rel in self.snapshot.empty_dirs:
                self.meta["emptyFolders"] += 1
                self._add(f"Empty folder detected → {rel}", "empty_folder")

    def _duplicate_like(self):
        for rel in self.snapshot.under("src"):
            name = PurePosixPath(rel).name
            if "copy" in name.lower():
                self._add(f'Duplicate-like file "{name}" found, consider refactoring', "duplicate_like")

    def _misplaced_assets(self):
        for rel in self.snapshot.under("src"):
            p = PurePosixPath(rel)
            if p.suffix.lower() not in ASSET_EXTS:
                continue
            if not any(part in ASSET_DIRS for part in p.parts[:-1]):
                self._add(f"Asset found outside /assets → {rel}", "misplaced_asset")

    def _empty_components(self, base: str):
        for rel in self.snapshot.under(base):
            if PurePosixPath(rel).suffix not in SCRIPT_EXTS:
                continue
            size = self.snapshot.size(rel)
            if size is not None and size < NEAR_EMPTY_BYTES:
                self._add(f"Empty component file → {rel} (remove or implement)", "empty_component")
