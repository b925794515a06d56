"""
Backend detectors for Node-style services.

Path conventions (routes/, controllers/, services/, models/, middleware/,
utils/, config/) and decorator literals (@Controller(, @Injectable(,
@Entity() do the classification. Every detector reads through the
snapshot, so unreadable files are simply skipped.
"""
import re
from pathlib import PurePosixPath
from typing import Dict, List, Optional

from project_walker import ProjectSnapshot
from stable_preview import ScanResult

BACKEND_DIRS = ("routes", "controllers", "services", "models", "middleware", "utils")
BACKEND_EXTS = {".js", ".ts", ".mjs", ".cjs"}
ROUTE_DIRS = ("routes", "src/routes")
DEAD_MARKERS = ("old", "unused", "deprecated", "backup")

ROUTE_CALL = re.compile(r"""\.(get|post|put|delete|patch)\(\s*['"`](.*?)['"`]""")

PRISMA_MODEL = re.compile(r"^\s*model\s+([A-Za-z0-9_]+)", re.MULTILINE)
MONGOOSE_MODEL = re.compile(r"""mongoose\.model\(\s*["'`](.*?)["'`]""")
SEQUELIZE_MODEL = re.compile(r"""sequelize\.define\(\s*["'`](.*?)["'`]""")
EXPORTED_CLASS = re.compile(r"export\s+class\s+([A-Za-z0-9_]+)")

ENV_FILES = {".env", ".env.local", ".env.example", ".env.production", ".env.development"}
DB_FILES = {"db.js", "db.ts", "database.js", "database.ts", "ormconfig.js", "ormconfig.ts"}
SECURITY_MARKERS = ("jwt", "auth", "cors", "rate")


def _name(rel: str) -> str:
    return rel.rsplit("/", 1)[-1]


def _in_folder(rel: str, folder: str) -> bool:
    return rel.startswith(folder + "/") or f"/{folder}/" in rel


class BackendScanner:
    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def _code_files(self) -> List[str]:
        return [f for f in self.snapshot.files if PurePosixPath(f).suffix in BACKEND_EXTS]

    def scan_routes(self) -> ScanResult:
        """One {method, pattern, sourceFile} finding per router.<verb>('...') call."""
        routes = []
        for base in ROUTE_DIRS:
            for rel in self.snapshot.under(base):
                if PurePosixPath(rel).suffix not in BACKEND_EXTS:
                    continue
                content = self.snapshot.read_text(rel)
                if not content:
                    continue
                for method, pattern in ROUTE_CALL.findall(content):
                    routes.append({"method": method.upper(), "pattern": pattern, "sourceFile": rel})
        return ScanResult(routes)

    def _classify(self, keyword: str, folder: str, decorator: str) -> List[str]:
        found = []
        for rel in self._code_files():
            if keyword in _name(rel).lower() or _in_folder(rel, folder):
                found.append(rel)
                continue
            content = self.snapshot.read_text(rel)
            if content and decorator in content:
                found.append(rel)
        return found

    def scan_controllers(self) -> ScanResult:
        return ScanResult(self._classify("controller", "controllers", "@Controller("))

    def scan_services(self) -> ScanResult:
        return ScanResult(self._classify("service", "services", "@Injectable("))

    def scan_models(self) -> ScanResult:
        """
        Model names with the connector that declared them. Schema-level
        declarations win; files under models/ or entities/ only add names
        not already seen.
        """
        models: List[Dict[str, str]] = []
        seen = set()

        def add(name: str, connector: str):
            if name and name not in seen:
                seen.add(name)
                models.append({"name": name, "connector": connector})

        for rel in self.snapshot.files:
            if _name(rel) == "schema.prisma":
                for name in PRISMA_MODEL.findall(self.snapshot.read_text(rel) or ""):
                    add(name, "Prisma")

        for rel in self._code_files():
            content = self.snapshot.read_text(rel)
            if not content:
                continue
            if "mongoose.model(" in content:
                for name in MONGOOSE_MODEL.findall(content):
                    add(name, "Mongoose")
            if "sequelize.define(" in content:
                for name in SEQUELIZE_MODEL.findall(content):
                    add(name, "Sequelize")
            if "@Entity(" in content:
                for name in EXPORTED_CLASS.findall(content):
                    add(name, "TypeORM")

        for rel in self._code_files():
            if _in_folder(rel, "models") or _in_folder(rel, "entities"):
                add(PurePosixPath(rel).stem, "Folder")

        connector = next((m["connector"] for m in models if m["connector"] != "Folder"), "Unknown")
        return ScanResult(models, extra={"connector": connector})

    def _folder_files(self, folder: str) -> List[str]:
        return [
            rel for rel in self.snapshot.under(folder)
            if PurePosixPath(rel).suffix in BACKEND_EXTS
        ]

    def scan_middleware(self) -> ScanResult:
        return ScanResult(self._folder_files("middleware"))

    def scan_utils(self) -> ScanResult:
        return ScanResult(self._folder_files("utils"))

    def scan_config(self) -> ScanResult:
        categories: Dict[str, List[str]] = {"env": [], "db": [], "security": [], "app": []}
        found = []
        for rel in self.snapshot.files:
            category = self._config_category(rel)
            if category:
                categories[category].append(rel)
                found.append(rel)
        return ScanResult(found, extra={"categories": categories, "env_keys": self.scan_env_keys()})

    @staticmethod
    def _config_category(rel: str) -> Optional[str]:
        name = _name(rel).lower()
        if name in ENV_FILES:
            return "env"
        if _in_folder(rel, "config") or _in_folder(rel, "configs"):
            return "app"
        if name in DB_FILES or "prisma" in name:
            return "db"
        if PurePosixPath(name).suffix in BACKEND_EXTS and any(m in name for m in SECURITY_MARKERS):
            return "security"
        return None

    def scan_env_keys(self) -> Dict[str, List[str]]:
        """Key names declared in root .env* files. Values are never read into the report."""
        keys: Dict[str, List[str]] = {}
        for rel in self.snapshot.files:
            if "/" in rel or not rel.startswith(".env"):
                continue
            content = self.snapshot.read_text(rel)
            if content is None:
                continue
            names = []
            for line in content.splitlines():
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                name = line.split("=", 1)[0].strip()
                if name.startswith("export "):
                    name = name[len("export "):].strip()
                if name:
                    names.append(name)
            keys[rel] = names
        return keys

    def scan_dead_files(self) -> ScanResult:
        dead = []
        for folder in BACKEND_DIRS:
            for rel in self._folder_files(folder):
                name = _name(rel).lower()
                if any(marker in name for marker in DEAD_MARKERS):
                    dead.append(rel)
        return ScanResult(dead)
