import json
import logging
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


class Manifest:
    """Dependency view of a project's package.json."""

    def __init__(self, dependencies: Dict[str, str] = None, dev_dependencies: Dict[str, str] = None,
                 found: bool = False):
        self.dependencies = dependencies or {}
        self.dev_dependencies = dev_dependencies or {}
        # package.json exists and parsed, even if it declares nothing
        self.found = found

    @classmethod
    def load(cls, repo_root: Path) -> "Manifest":
        """
        Read the manifest at the project root.
        A missing or malformed manifest is an empty manifest, never an error.
        """
        path = repo_root / MANIFEST_NAME
        if not path.is_file():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable manifest %s: %s", path, e)
            return cls()
        if not isinstance(data, dict):
            logger.warning("Ignoring manifest %s: top level is not an object", path)
            return cls()
        return cls(_name_map(data.get("dependencies")), _name_map(data.get("devDependencies")), found=True)

    @property
    def present(self) -> bool:
        return bool(self.dependencies or self.dev_dependencies)

    def all_names(self) -> List[str]:
        """Runtime then dev dependency names, first occurrence wins."""
        seen = []
        for name in list(self.dependencies) + list(self.dev_dependencies):
            if name not in seen:
                seen.append(name)
        return seen

    def has(self, name: str) -> bool:
        return name in self.dependencies or name in self.dev_dependencies

    def has_runtime(self, name: str) -> bool:
        return name in self.dependencies

    def has_prefix(self, prefix: str) -> bool:
        return any(n.startswith(prefix) for n in self.all_names())


def _name_map(value) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}
