"""
Summary aggregation.

build_report() composes every scanner result, the mode and the health score
into one report dict with capped, stable previews. render_markdown() turns
that dict into the bridge summary document; it reads nothing but the report,
so the same report always renders the same document.
"""
from typing import Any, Dict, List, Optional

from audit_config import AuditConfig
from framework_detector import framework_badge
from health import MOTIVATION, smart_tip, ux_quality
from mode_classifier import Mode
from stable_preview import ScanResult

# (report key, document title, cap/salt category)
FRONTEND_SECTIONS = [
    ("components", "Components (Preview)", "COMPONENTS"),
    ("pages", "Pages (Preview)", "PAGES"),
    ("features", "Features (Preview)", "FEATURES"),
    ("routing", "Routing (Preview)", "ROUTING"),
    ("relationships", "Component Relationships (Preview)", "REL_LITE"),
    ("duplicates", "Possible Duplicates (Preview)", "DUP"),
    ("dead_files", "Dead Files (Preview)", "DEAD_LITE"),
    ("unused_deps", "Unused Dependencies (Preview)", "UNUSED_DEPS"),
]

BACKEND_SECTIONS = [
    ("routes", "Routes (Preview)", "backend_routes", "BACKEND_ROUTES"),
    ("controllers", "Controllers (Preview)", "controllers", "CONTROLLERS"),
    ("services", "Services (Preview)", "services", "SERVICES"),
    ("models", "Models (Preview)", "models", "MODELS"),
    ("middleware", "Middleware (Preview)", "middleware", "MIDDLEWARE"),
    ("utils", "Utils (Preview)", "utils", "UTILS"),
    ("config", "Config Files (Preview)", "config", "CONFIG"),
    ("dead_files", "Backend Dead Files (Preview)", "backend_dead_files", "BACKEND_DEAD"),
    ("hints", "Backend Hints", "backend_hints", "BACKEND_HINTS"),
]

LOCKED_LABEL = "Pro"


def format_finding(item: Any) -> str:
    """One-line text for a finding of any shape."""
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        if "from" in item and "to" in item:
            return f"{item['from']} → {item['to']}"
        if "method" in item:
            return f"{item['method']} {item['pattern']} → {item['sourceFile']}"
        if "connector" in item:
            return f"{item['name']} ({item['connector']})"
    return str(item)


class SummaryGenerator:
    def __init__(self, config: AuditConfig, seed: str):
        self.config = config
        self.seed = seed

    def _preview(self, result: ScanResult, cap_name: str, salt: str) -> Dict[str, Any]:
        section = result.preview(self.config.cap(cap_name), self.seed, salt).to_dict()
        section["cap"] = self.config.cap(cap_name)
        return section

    def build_report(self,
                     project: str,
                     timestamp: str,
                     file_count: int,
                     framework: Dict[str, str],
                     mode: Mode,
                     health: int,
                     frontend: Dict[str, ScanResult],
                     ui: ScanResult,
                     structure: Dict[str, Any],
                     backend: Optional[Dict[str, ScanResult]] = None,
                     next_info: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        meta = structure.get("meta", {})
        report = {
            "project": project,
            "timestamp": timestamp,
            "files": file_count,
            "framework": framework,
            "mode": mode.value,
            "health": health,
            "experience": {
                "architecture": mode.architecture,
                "badge": framework_badge(framework.get("framework", "")),
                "ux_quality": ux_quality(meta),
                "tip": smart_tip(meta),
            },
            "sections": {},
            "ui": list(ui.items),
            "hints": list(structure.get("hints", [])),
            "meta": dict(meta),
            "backend": None,
            "next": next_info,
        }

        for key, _title, salt in FRONTEND_SECTIONS:
            report["sections"][key] = self._preview(frontend[key], key, salt)

        if backend is not None and mode != Mode.FRONTEND:
            sections = {}
            for key, _title, cap_name, salt in BACKEND_SECTIONS:
                sections[key] = self._preview(backend[key], cap_name, salt)
            report["backend"] = {
                "framework": framework.get("backend"),
                "connector": backend["models"].extra.get("connector", "Unknown"),
                "sections": sections,
            }
        return report

    def render_markdown(self, report: Dict[str, Any]) -> str:
        exp = report["experience"]
        lines = [
            "# Origin Lite Summary",
            "",
            f"Generated: **{report['timestamp']}**",
            "",
            "## Overview",
            f"- **Project:** {report['project']}",
            f"- **Files Scanned:** {report['files']}",
            f"- **Framework:** {report['framework']['framework']}",
            f"- **Mode:** {report['mode']}",
            f"- **Health:** {report['health']}%",
            "",
            "## Experience",
            f"- **Architecture:** {exp['architecture']}",
            f"- **Framework Badge:** {exp['badge']}",
            f"- **UX Quality:** {exp['ux_quality']}",
            f"- **{exp['tip']}**",
            "",
            "---",
            "",
        ]

        sections = report["sections"]
        for key in ("components", "pages", "features"):
            lines += self._section(_title(key), sections[key])

        lines.append("## UI System")
        lines += [f"- {u}" for u in report["ui"]] or ["None"]
        lines.append("")

        for key in ("relationships", "duplicates", "dead_files", "unused_deps"):
            lines += self._section(_title(key), sections[key])

        lines.append("## Structure Hints (Lite)")
        lines += [f"- {h}" for h in report["hints"]] or ["None"]
        lines.append("")

        backend = report.get("backend")
        if backend:
            lines += [
                "## Backend Summary",
                f"- **Backend Framework:** {backend['framework']}",
                f"- **Model Connector:** {backend['connector']}",
                "",
            ]
            for key, title, _cap, _salt in BACKEND_SECTIONS:
                lines += self._section(title, backend["sections"][key], level="###")

        lines += [
            "---",
            "",
            "## Motivation",
            MOTIVATION,
            "",
            "---",
            "_Generated by Origin Lite Mode_",
            "",
        ]
        return "\n".join(lines)

    @staticmethod
    def _section(title: str, section: Dict[str, Any], level: str = "##") -> List[str]:
        preview = section["preview"][:section["cap"]]
        lines = [f"{level} {title}"]
        lines += [f"- {format_finding(item)}" for item in preview] or ["None"]
        hidden = section["total"] - len(preview)
        if hidden > 0:
            lines.append(f"+{hidden} more ({LOCKED_LABEL})")
        lines.append("")
        return lines


def _title(key: str) -> str:
    for k, title, _salt in FRONTEND_SECTIONS:
        if k == key:
            return title
    return key
