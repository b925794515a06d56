from typing import Dict, List

from project_walker import ProjectSnapshot
from stable_preview import ScanResult

FEATURES_DIR = "src/features"
SHARED_DIRS = {"utils", "helpers", "common", "shared"}
FEATURE_PARTS = ("pages", "components", "hooks", "services", "store")


class FeatureScanner:
    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def scan(self) -> ScanResult:
        """
        Each directory directly under src/features is a feature, except shared
        helper folders. Findings are feature names; the per-feature layout
        (which of pages/components/hooks/services/store exist) rides along
        in the result's extra data for the archival record.
        """
        details: List[Dict[str, object]] = []
        for name in self.snapshot.subdirs(FEATURES_DIR):
            if name in SHARED_DIRS:
                continue
            parts = set(self.snapshot.subdirs(f"{FEATURES_DIR}/{name}"))
            entry = {"name": name}
            for part in FEATURE_PARTS:
                entry[part] = part in parts
            details.append(entry)

        return ScanResult([d["name"] for d in details], extra={"details": details})
