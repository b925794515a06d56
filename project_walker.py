"""
Project enumeration for a single audit run.

Builds a ProjectSnapshot: every file and directory under the root, relative
and POSIX-style, with build output, VCS metadata, lockfiles and prior audit
artifacts filtered out. Snapshots are never cached across runs.
"""
import logging
import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

IGNORE_DIRS = {
    "node_modules", ".git", "dist", "build", ".next", ".turbo",
    "coverage", "out", ".cache", ".vscode", "audit_history",
}

IGNORE_FILES = {
    "bridge_summary.md", "package-lock.json", "yarn.lock", "pnpm-lock.yaml",
}


@dataclass
class ProjectSnapshot:
    root: Path
    files: List[str] = field(default_factory=list)
    dirs: List[str] = field(default_factory=list)
    empty_dirs: Set[str] = field(default_factory=set)

    def under(self, base: str) -> List[str]:
        """Files below a relative directory, e.g. under("src/components")."""
        prefix = base.rstrip("/") + "/"
        return [f for f in self.files if f.startswith(prefix)]

    def dirs_under(self, base: str) -> List[str]:
        prefix = base.rstrip("/") + "/"
        return [d for d in self.dirs if d.startswith(prefix)]

    def subdirs(self, base: str) -> List[str]:
        """Names of the walked (not ignored) directories directly below base, sorted."""
        prefix = base.rstrip("/") + "/"
        return [d[len(prefix):] for d in self.dirs if d.startswith(prefix) and "/" not in d[len(prefix):]]

    def is_dir(self, rel: str) -> bool:
        return (self.root / rel).is_dir()

    def exists(self, rel: str) -> bool:
        return (self.root / rel).exists()

    def read_text(self, rel: str) -> Optional[str]:
        """Read a project file as text. Unreadable files are reported as absent."""
        try:
            return (self.root / rel).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Skipping unreadable file %s: %s", rel, e)
            return None

    def size(self, rel: str) -> Optional[int]:
        try:
            return (self.root / rel).stat().st_size
        except OSError as e:
            logger.debug("Cannot stat %s: %s", rel, e)
            return None

    def listdir(self, rel: str) -> List[str]:
        """Immediate entry names of a directory, sorted; empty when missing."""
        try:
            return sorted(os.listdir(self.root / rel))
        except OSError:
            return []


class ProjectWalker:
    def __init__(self, repo_root: Path, extra_ignores: Iterable[str] = (), exclude_paths: Iterable[str] = ()):
        self.repo_root = repo_root
        # exact relative paths (files or directories), e.g. configured output locations
        self.exclude_paths = {posixpath.normpath(p.strip("/")) for p in exclude_paths if p}
        self.ignore_dirs = IGNORE_DIRS | set(extra_ignores)
        self.ignore_files = IGNORE_FILES | set(extra_ignores)

    def snapshot(self) -> ProjectSnapshot:
        snap = ProjectSnapshot(root=self.repo_root)
        if not self.repo_root.is_dir():
            return snap

        def on_error(err: OSError):
            logger.debug("Skipping unreadable directory: %s", err)

        for current, dirnames, filenames in os.walk(self.repo_root, onerror=on_error):
            rel_dir = Path(current).relative_to(self.repo_root).as_posix()
            prefix = "" if rel_dir == "." else rel_dir + "/"
            if rel_dir != ".":
                snap.dirs.append(rel_dir)
                if not dirnames and not filenames:
                    snap.empty_dirs.add(rel_dir)

            # Prune in place so os.walk never descends into ignored trees
            dirnames[:] = sorted(
                d for d in dirnames
                if d not in self.ignore_dirs and prefix + d not in self.exclude_paths
            )

            for name in filenames:
                rel = prefix + name
                if name in self.ignore_files or rel in self.exclude_paths:
                    continue
                snap.files.append(rel)

        snap.files.sort()
        snap.dirs.sort()
        return snap


if __name__ == "__main__":
    import sys
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(".")
    snap = ProjectWalker(root.resolve()).snapshot()
    print(f"{len(snap.files)} files, {len(snap.dirs)} folders ({len(snap.empty_dirs)} empty)")
