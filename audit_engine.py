"""
Audit pipeline: enumerate -> scan -> classify -> score -> aggregate -> persist.

Each scanner runs behind run_scanner(), so a failing heuristic yields an
empty result instead of aborting the run. Only artifact writes propagate
errors (ArtifactWriteError) to the caller.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from artifact_writer import atomic_write_text
from audit_config import AuditConfig
from backend_hints import BackendHintEngine
from backend_scanner import BackendScanner
from component_scanner import ComponentScanner
from dead_file_scanner import DeadFileScanner
from duplicate_scanner import DuplicateScanner
from feature_scanner import FeatureScanner
from framework_detector import FrameworkDetector
from health import compute_health_score
from hint_engine import HintEngine
from history_store import AuditHistoryStore
from manifest import Manifest
from mode_classifier import Mode, classify, has_frontend_signal
from next_scanner import NextScanner
from page_scanner import PageScanner
from project_walker import ProjectWalker
from relationship_scanner import RelationshipScanner
from routing_detector import RoutingDetector
from stable_preview import ScanResult
from summary_generator import SummaryGenerator
from ui_detector import UIDetector
from unused_deps_scanner import UnusedDependencyScanner

logger = logging.getLogger(__name__)

Progress = Callable[[str], None]


@dataclass
class AuditRun:
    report: Dict[str, Any]
    document: str
    record: Dict[str, Any]
    record_id: Optional[str]
    summary_path: Path
    history_path: Optional[Path]


def run_scanner(name: str, fn: Callable[[], Any], default: Any = None) -> Any:
    """Run one scanner, containing any failure to that scanner."""
    try:
        return fn()
    except Exception:
        logger.warning("Scanner %s failed; reporting it as empty", name, exc_info=True)
        return ScanResult() if default is None else default


def _noop(_message: str):
    pass


def run_audit(repo_root: Path,
              config: Optional[AuditConfig] = None,
              persist_history: bool = True,
              progress: Progress = _noop) -> AuditRun:
    repo_root = Path(repo_root).resolve()
    config = config or AuditConfig.load(repo_root)
    project = repo_root.name
    seed = config.seed or project
    timestamp = datetime.now(timezone.utc).isoformat()

    progress("[1/5] Loading project...")
    # Prior artifacts never feed back into a scan, wherever they are configured to live
    outputs = [config.summary_path, config.history_dir]
    snapshot = ProjectWalker(repo_root, config.ignore, exclude_paths=outputs).snapshot()
    manifest = Manifest.load(repo_root)
    progress(f"  Found {len(snapshot.files)} files.")

    progress("[2/5] Scanning framework, components, pages, features...")
    framework = run_scanner("framework", lambda: FrameworkDetector(snapshot, manifest).detect(), default={
        "framework": "Unknown", "frontend": "Unknown", "backend": "Unknown Backend", "bundler": "Unknown",
    })
    components = run_scanner("components", lambda: ComponentScanner(snapshot).scan())
    component_paths: List[str] = list(components.items)

    frontend = {
        "components": components,
        "pages": run_scanner("pages", lambda: PageScanner(snapshot).scan()),
        "features": run_scanner("features", lambda: FeatureScanner(snapshot).scan()),
        "routing": run_scanner("routing", lambda: RoutingDetector(snapshot).scan()),
        "relationships": run_scanner("relationships", lambda: RelationshipScanner(snapshot).scan(component_paths)),
        "duplicates": run_scanner("duplicates", lambda: DuplicateScanner().scan(component_paths)),
        "dead_files": run_scanner("dead_files", lambda: DeadFileScanner().scan(snapshot.files)),
        "unused_deps": run_scanner("unused_deps", lambda: UnusedDependencyScanner(snapshot, manifest).scan()),
    }
    ui = run_scanner("ui", lambda: UIDetector(snapshot, manifest).scan())
    structure = run_scanner("hints", lambda: HintEngine(snapshot).scan(), default={
        "hints": [], "meta": {"deepNesting": 0, "emptyFolders": 0, "mixedExt": False, "totalScore": 0},
    })
    next_info = None
    if "Next.js" in framework["framework"]:
        next_info = run_scanner("next", lambda: NextScanner(snapshot).scan(), default={})

    progress("[3/5] Scanning backend...")
    backend_scanner = BackendScanner(snapshot)
    backend = {
        "routes": run_scanner("backend_routes", backend_scanner.scan_routes),
        "controllers": run_scanner("controllers", backend_scanner.scan_controllers),
        "services": run_scanner("services", backend_scanner.scan_services),
        "models": run_scanner("models", backend_scanner.scan_models),
        "middleware": run_scanner("middleware", backend_scanner.scan_middleware),
        "utils": run_scanner("utils", backend_scanner.scan_utils),
        "config": run_scanner("config", backend_scanner.scan_config),
        "dead_files": run_scanner("backend_dead_files", backend_scanner.scan_dead_files),
    }

    progress("[4/5] Classifying and scoring...")
    mode = classify(has_frontend_signal(snapshot), {
        "routes": backend["routes"].total,
        "controllers": backend["controllers"].total,
        "models": backend["models"].total,
    })
    backend["hints"] = ScanResult()
    if mode != Mode.FRONTEND:
        backend["hints"] = run_scanner("backend_hints", lambda: BackendHintEngine(snapshot).scan(backend))
    health = compute_health_score(len(structure["hints"]), frontend["features"].total, ui.total)

    generator = SummaryGenerator(config, seed)
    report = generator.build_report(
        project=project,
        timestamp=timestamp,
        file_count=len(snapshot.files),
        framework=framework,
        mode=mode,
        health=health,
        frontend=frontend,
        ui=ui,
        structure=structure,
        backend=backend,
        next_info=next_info,
    )
    document = generator.render_markdown(report)
    record = build_record(report, frontend, ui, structure, backend, snapshot.files, mode)

    progress("[5/5] Writing summary and history...")
    summary_path = atomic_write_text(repo_root / config.summary_path, document)
    record_id = None
    history_path = None
    if persist_history:
        store = AuditHistoryStore(repo_root / config.history_dir)
        record_id = store.persist(record)
        history_path = store.record_path(record_id)
        record = dict({"id": record_id}, **record)

    return AuditRun(report, document, record, record_id, summary_path, history_path)


def build_record(report: Dict[str, Any],
                 frontend: Dict[str, ScanResult],
                 ui: ScanResult,
                 structure: Dict[str, Any],
                 backend: Dict[str, ScanResult],
                 files: List[str],
                 mode: Mode) -> Dict[str, Any]:
    """Archival record: full summary counts plus uncapped, mode-relevant results."""
    counts = {key: result.total for key, result in frontend.items()}
    counts.update({f"backend_{key}": result.total for key, result in backend.items()})
    counts["ui"] = ui.total
    counts["hints"] = len(structure["hints"])

    results: Dict[str, Any] = {}
    if mode != Mode.BACKEND:
        results["frontend"] = {key: result.to_dict() for key, result in frontend.items()}
        results["ui"] = ui.to_dict()
        results["structure"] = structure
    if mode != Mode.FRONTEND:
        results["backend"] = {key: result.to_dict() for key, result in backend.items()}
    if report.get("next"):
        results["next"] = report["next"]

    return {
        "project": report["project"],
        "timestamp": report["timestamp"],
        "summary": {
            "files": report["files"],
            "framework": report["framework"],
            "mode": report["mode"],
            "health": report["health"],
            "counts": counts,
        },
        "results": results,
        "files": list(files),
    }
