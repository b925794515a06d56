#!/usr/bin/env python3
"""
Origin Lite project auditor.

Two commands:
  audit (default) -- scan the project, write docs/ai/bridge_summary.md and a
                     history record under docs/audit_history/
  history         -- list previous audit records

The audit never modifies scanned project files; it only writes its own
two artifacts.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from artifact_writer import ArtifactWriteError
from audit_config import AuditConfig
from audit_engine import run_audit
from history_store import AuditHistoryStore
from summary_generator import BACKEND_SECTIONS, FRONTEND_SECTIONS, LOCKED_LABEL, format_finding

RULE = "─" * 40


def build_arg_parser():
    desc = "Origin Lite -- offline heuristic audit of a JavaScript/TypeScript project tree."
    parser = argparse.ArgumentParser(prog="origin-audit", description=desc)
    parser.add_argument("command", nargs="?", choices=["audit", "history"], default="audit",
                        help="audit the project (default) or list previous audits")
    parser.add_argument("--root", default=".", help="Project root (default: current dir)")
    parser.add_argument("--no-history", action="store_true", help="Do not write a history record")
    parser.add_argument("--json", action="store_true", help="Print the report object as JSON instead of the console view")
    parser.add_argument("--verbose", action="store_true", help="Log skipped files and contained scanner failures")
    return parser


def print_section(title, section):
    if section["total"] == 0:
        return
    print(RULE)
    print(f"  {title.upper()}")
    print(RULE)
    shown = section["preview"][:section["cap"]]
    for item in shown:
        print("• " + format_finding(item))
    if section["total"] > len(shown):
        print(f"+{section['total'] - len(shown)} more ({LOCKED_LABEL})")
    print("")


def print_hints(title, hints, limit):
    print(RULE)
    print(f"  {title}")
    print(RULE)
    if not hints:
        print("No structural issues detected.\n")
        return
    for h in hints[:limit]:
        print("⚠ " + h)
    if len(hints) > limit:
        print(f"+{len(hints) - limit} more ({LOCKED_LABEL})")
    print("")


def print_report(report, config):
    exp = report["experience"]
    print(RULE)
    print("  PROJECT OVERVIEW")
    print(RULE)
    print(f"Project:      {report['project']}")
    print(f"Files:        {report['files']}")
    print(f"Framework:    {report['framework']['framework']}")
    print(f"Mode:         {report['mode']}")
    print(f"Health:       {report['health']}%")
    print("")

    print(RULE)
    print("  EXPERIENCE")
    print(RULE)
    print(f"Architecture: {exp['architecture']}")
    print(f"Framework Badge: {exp['badge']}")
    print(f"UX Quality: {exp['ux_quality']}")
    print(exp["tip"])
    print("")

    sections = report["sections"]
    for key, title, _salt in FRONTEND_SECTIONS[:4]:
        print_section(title, sections[key])

    print(RULE)
    print("  UI SYSTEM")
    print(RULE)
    if report["ui"]:
        for u in report["ui"]:
            print("• " + u)
    else:
        print("None detected")
    print("")

    for key, title, _salt in FRONTEND_SECTIONS[4:]:
        print_section(title, sections[key])

    print_hints("STRUCTURE HINTS (Lite)", report["hints"], config.cap("hints"))

    backend = report.get("backend")
    if backend:
        print(RULE)
        print("  BACKEND SUMMARY")
        print(RULE)
        print(f"Backend Framework: {backend['framework']}")
        print(f"Model Connector:   {backend['connector']}")
        print("")
        for key, title, _cap, _salt in BACKEND_SECTIONS:
            print_section(title, backend["sections"][key])


def _display(path, root):
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def run_history(repo_root, config):
    store = AuditHistoryStore(repo_root / config.history_dir)
    records = store.list_records()
    if not records:
        print("No audit history yet. Run: origin-audit audit")
        return 0
    print(f"{'ID':<22} {'TIMESTAMP':<34} {'MODE':<10} HEALTH")
    for r in records:
        health = f"{r['health']}%" if r["health"] is not None else "?"
        print(f"{r['id']:<22} {r['timestamp'] or '?':<34} {r['mode'] or '?':<10} {health}")
    return 0


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    repo_root = Path(args.root).resolve()
    if not repo_root.is_dir():
        print(f"❌ Error: Path {repo_root} does not exist or is not a directory.")
        return 1

    config = AuditConfig.load(repo_root)

    if args.command == "history":
        return run_history(repo_root, config)

    quiet = args.json
    progress = (lambda _m: None) if quiet else print
    if not quiet:
        print("\n✨ Origin Lite Mode Audit\n")

    try:
        run = run_audit(repo_root, config, persist_history=not args.no_history, progress=progress)
    except ArtifactWriteError as e:
        print(f"❌ Error: {e}")
        return 1
    except Exception as e:
        logging.getLogger(__name__).debug("Audit failed", exc_info=True)
        print(f"❌ Error: {e}")
        return 1

    if args.json:
        print(json.dumps(run.report, indent=2, ensure_ascii=False))
        return 0

    print("")
    print(f"📝 Summary saved → {_display(run.summary_path, repo_root)}")
    if run.history_path:
        print(f"📦 History saved → {_display(run.history_path, repo_root)}")
    print("")
    print_report(run.report, config)
    print("✨ Audit complete, great progress!\n")
    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
