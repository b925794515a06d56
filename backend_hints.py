from typing import Dict

from backend_scanner import BACKEND_DIRS
from project_walker import ProjectSnapshot
from stable_preview import ScanResult

DEPRECATED_MARKERS = ("old", "deprecated", "backup")


class BackendHintEngine:
    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def scan(self, backend: Dict[str, ScanResult]) -> ScanResult:
        """Turn backend scan totals and folder state into advisory hints."""
        hints = []
        routes = backend["routes"].total
        controllers = backend["controllers"].total
        services = backend["services"].total
        models = backend["models"].total

        if routes == 0:
            hints.append("No API routes detected.")
        if controllers == 0:
            hints.append("No controllers found, backend logic may be incomplete.")
        if models == 0:
            hints.append("No models detected, no persistence layer found.")
        if controllers > 0 and routes == 0:
            hints.append("Controllers exist but no route handlers are mapped.")
        if models > 0 and services == 0:
            hints.append("Models detected but no services using them, consider adding a service layer.")

        for folder in BACKEND_DIRS:
            if not self.snapshot.is_dir(folder):
                continue
            entries = [e for e in self.snapshot.listdir(folder) if not e.startswith(".")]
            if not entries:
                hints.append(f'Folder "{folder}" is empty, consider removing or populating it.')

        if not self.snapshot.exists(".env"):
            hints.append("Missing .env file, recommended for environment security.")

        for folder in BACKEND_DIRS:
            for name in self.snapshot.listdir(folder):
                if any(marker in name.lower() for marker in DEPRECATED_MARKERS):
                    hints.append(f"Deprecated/old file detected → {folder}/{name}")

        return ScanResult(hints)
