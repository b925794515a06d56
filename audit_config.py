"""
Audit configuration.

Loaded from an optional origin_audit.yml at the project root. Every key is
optional; anything missing or malformed falls back to the defaults below.

    seed: my-app
    caps:
      components: 12
      dead_files: 8
    ignore:
      - storybook-static
    output:
      summary: docs/ai/bridge_summary.md
      history: docs/audit_history
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_NAME = "origin_audit.yml"

DEFAULT_CAPS = {
    "components": 10,
    "pages": 10,
    "features": 10,
    "routing": 10,
    "relationships": 3,
    "duplicates": 3,
    "dead_files": 5,
    "unused_deps": 3,
    "backend_routes": 10,
    "controllers": 10,
    "services": 10,
    "models": 10,
    "middleware": 5,
    "utils": 5,
    "config": 10,
    "backend_dead_files": 3,
    "backend_hints": 4,
    "hints": 6,
}

DEFAULT_SUMMARY_PATH = "docs/ai/bridge_summary.md"
DEFAULT_HISTORY_DIR = "docs/audit_history"


@dataclass
class AuditConfig:
    seed: Optional[str] = None
    caps: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_CAPS))
    ignore: List[str] = field(default_factory=list)
    summary_path: str = DEFAULT_SUMMARY_PATH
    history_dir: str = DEFAULT_HISTORY_DIR

    def cap(self, category: str) -> int:
        return self.caps.get(category, 10)

    @classmethod
    def load(cls, repo_root: Path) -> "AuditConfig":
        path = repo_root / CONFIG_NAME
        if not path.is_file():
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return cls()
        if not isinstance(raw, dict):
            logger.warning("Ignoring config %s: top level is not a mapping", path)
            return cls()
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AuditConfig":
        config = cls()

        seed = raw.get("seed")
        if isinstance(seed, (str, int)) and str(seed).strip():
            config.seed = str(seed).strip()

        caps = raw.get("caps") or {}
        if isinstance(caps, dict):
            for name, value in caps.items():
                # bool is an int subclass; a cap of True is a typo, not 1
                if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                    config.caps[str(name)] = value
                else:
                    logger.warning("Ignoring invalid cap %s=%r", name, value)

        ignore = raw.get("ignore") or []
        if isinstance(ignore, list):
            config.ignore = [str(i) for i in ignore if i]

        output = raw.get("output") or {}
        if isinstance(output, dict):
            if output.get("summary"):
                config.summary_path = str(output["summary"])
            if output.get("history"):
                config.history_dir = str(output["history"])

        return config
