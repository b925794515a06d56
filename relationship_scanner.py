import posixpath
import re
from typing import Dict, List

from project_walker import ProjectSnapshot
from stable_preview import ScanResult

IMPORT_FROM = re.compile(r"""import\s+[^;]*?\s+from\s+['"]([^'"]+)['"]""")


class RelationshipScanner:
    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def scan(self, components: List[str]) -> ScanResult:
        """Emit a {from, to} edge for each relative import in a component file."""
        edges: List[Dict[str, str]] = []
        for comp in components:
            content = self.snapshot.read_text(comp)
            if not content:
                continue
            base = posixpath.dirname(comp)
            for target in IMPORT_FROM.findall(content):
                if not (target.startswith("./") or target.startswith("../")):
                    continue
                resolved = posixpath.normpath(posixpath.join(base, target))
                edges.append({"from": comp, "to": resolved})
        return ScanResult(edges)