import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from artifact_writer import ArtifactWriteError, atomic_write_text
from audit_config import AuditConfig
from audit_engine import run_audit
from history_store import AuditHistoryStore
from mode_classifier import Mode, classify
from stable_preview import pick_stable_preview
from summary_generator import SummaryGenerator

BODY = "export default function X() { return null; }\n"


class AuditTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, rel, content=BODY):
        path = self.root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    def add_components(self, count):
        for i in range(count):
            self.write(f"src/components/C{i}.tsx")


class EmptyProjectTest(AuditTestCase):
    def test_zero_counts_and_both_artifacts(self):
        run = run_audit(self.root)
        self.assertEqual(run.report["mode"], "FRONTEND")
        self.assertEqual(run.report["health"], 70)
        self.assertIsNone(run.report["backend"])
        self.assertEqual(run.report["files"], 0)
        self.assertTrue(all(v == 0 for v in run.record["summary"]["counts"].values()))
        for section in run.report["sections"].values():
            self.assertEqual(section["preview"], [])
            self.assertEqual(section["locked"], 0)

        self.assertTrue((self.root / "docs/ai/bridge_summary.md").is_file())
        self.assertTrue(run.history_path.is_file())
        self.assertEqual(run.history_path.name, f"audit_{run.record_id}.json")
        self.assertIn("# Origin Lite Summary", run.document)
        self.assertIn("_Generated by Origin Lite Mode_", run.document)

    def test_artifacts_do_not_feed_back(self):
        first = run_audit(self.root)
        second = run_audit(self.root)
        self.assertEqual(first.report["files"], second.report["files"])
        self.assertNotEqual(first.record_id, second.record_id)

    def test_history_can_be_skipped(self):
        run = run_audit(self.root, persist_history=False)
        self.assertIsNone(run.record_id)
        self.assertFalse((self.root / "docs/audit_history").exists())


class PreviewStabilityTest(AuditTestCase):
    def test_same_tree_same_previews(self):
        self.add_components(12)
        first = run_audit(self.root, persist_history=False)
        second = run_audit(self.root, persist_history=False)
        self.assertEqual(first.report["sections"], second.report["sections"])

    def test_locked_remainder_in_document(self):
        self.add_components(12)
        run = run_audit(self.root, persist_history=False)
        components = run.report["sections"]["components"]
        self.assertEqual(len(components["preview"]), 10)
        self.assertEqual(components["locked"], 2)
        self.assertIn("+2 more (Pro)", run.document)
        for item in components["preview"]:
            self.assertIn(f"- {item}", run.document)

    def test_history_record_round_trip(self):
        self.add_components(3)
        run = run_audit(self.root)
        stored = AuditHistoryStore(self.root / "docs/audit_history").load(run.record_id)
        self.assertEqual(stored, run.record)
        self.assertEqual(stored["summary"]["counts"]["components"], 3)
        self.assertEqual(len(stored["results"]["frontend"]["components"]["items"]), 3)


class ModeTest(AuditTestCase):
    def test_fullstack_has_backend_summary(self):
        self.write("src/App.tsx")
        self.write("routes/api.js", "router.get('/health', ok);\n")
        run = run_audit(self.root, persist_history=False)
        self.assertEqual(run.report["mode"], "FULLSTACK")
        self.assertIn("## Backend Summary", run.document)
        self.assertIn("### Routes (Preview)", run.document)
        self.assertIn("- GET /health → routes/api.js", run.document)
        self.assertIn("frontend", run.record["results"])
        self.assertIn("backend", run.record["results"])

    def test_document_section_order_and_rebuild(self):
        self.write("src/App.tsx")
        self.write("routes/api.js", "router.get('/health', ok);\n")
        run = run_audit(self.root, persist_history=False)
        headings = [
            "## Overview", "## Experience", "## Components (Preview)", "## Pages (Preview)",
            "## Features (Preview)", "## UI System", "## Component Relationships (Preview)",
            "## Possible Duplicates (Preview)", "## Dead Files (Preview)",
            "## Unused Dependencies (Preview)", "## Structure Hints (Lite)",
            "## Backend Summary", "## Motivation",
        ]
        positions = [run.document.index("\n" + h + "\n") for h in headings]
        self.assertEqual(positions, sorted(positions))
        self.assertEqual(len(set(positions)), len(positions))

        rebuilt = SummaryGenerator(AuditConfig.load(self.root), self.root.resolve().name).render_markdown(run.report)
        self.assertEqual(rebuilt, run.document)

    def test_backend_only_record(self):
        self.write("routes/api.js", "router.post('/login', login);\n")
        run = run_audit(self.root, persist_history=False)
        self.assertEqual(run.report["mode"], "BACKEND")
        self.assertNotIn("frontend", run.record["results"])
        self.assertEqual(run.record["results"]["backend"]["routes"]["total"], 1)

    def test_frontend_record_has_no_backend(self):
        self.write("src/App.tsx")
        run = run_audit(self.root, persist_history=False)
        self.assertNotIn("backend", run.record["results"])
        self.assertNotIn("## Backend Summary", run.document)

    def test_classify(self):
        self.assertEqual(classify(True, {"routes": 0, "controllers": 0, "models": 0}), Mode.FRONTEND)
        self.assertEqual(classify(False, {"models": 1}), Mode.BACKEND)
        self.assertEqual(classify(True, {"controllers": 2}), Mode.FULLSTACK)
        self.assertEqual(classify(False, {}), Mode.FRONTEND)
        self.assertEqual(Mode.FULLSTACK.architecture, "Fullstack")


class FailureTest(AuditTestCase):
    def test_unwritable_summary_raises(self):
        self.write("docs", "not a directory")
        with self.assertRaises(ArtifactWriteError):
            run_audit(self.root)
        self.assertEqual((self.root / "docs").read_text(), "not a directory")

    def test_failing_scanner_is_contained(self):
        self.add_components(2)
        with mock.patch("audit_engine.RoutingDetector.scan", side_effect=RuntimeError("boom")):
            with self.assertLogs("audit_engine", level="WARNING"):
                run = run_audit(self.root, persist_history=False)
        self.assertEqual(run.report["sections"]["routing"]["total"], 0)
        self.assertEqual(run.report["sections"]["components"]["total"], 2)

    def test_overwrite_refused(self):
        target = self.root / "out.json"
        atomic_write_text(target, "{}")
        with self.assertRaises(ArtifactWriteError):
            atomic_write_text(target, "[]", overwrite=False)
        self.assertEqual(target.read_text(), "{}")
        self.assertEqual([p.name for p in self.root.iterdir()], ["out.json"])


class UnreadableFileTest(AuditTestCase):
    def test_broken_and_undecodable_files_are_skipped(self):
        self.write("src/components/Card.tsx", "import Bad from './Bad';\n" + BODY)
        (self.root / "src/components/Bad.tsx").write_bytes(b"\xff\xfe" + b"import Card from './Card';\n")
        os.symlink(str(self.root / "missing.tsx"), str(self.root / "src/components/Broken.tsx"))
        run = run_audit(self.root, persist_history=False)
        sections = run.report["sections"]
        self.assertEqual(sections["components"]["total"], 3)
        self.assertEqual(sections["relationships"]["total"], 2)
        edges = run.record["results"]["frontend"]["relationships"]["items"]
        self.assertIn({"from": "src/components/Card.tsx", "to": "src/components/Bad"}, edges)
        self.assertIn({"from": "src/components/Bad.tsx", "to": "src/components/Card"}, edges)
        self.assertTrue(run.summary_path.is_file())


class ConfigTest(AuditTestCase):
    def test_caps_and_seed_from_yaml(self):
        self.add_components(12)
        self.write("origin_audit.yml", "seed: fixed\ncaps:\n  components: 2\n  pages: -1\n")
        run = run_audit(self.root, persist_history=False)
        components = run.report["sections"]["components"]
        self.assertEqual(components["cap"], 2)
        self.assertEqual(components["locked"], 10)
        items = [f"src/components/C{i}.tsx" for i in range(12)]
        self.assertEqual(components["preview"], pick_stable_preview(items, 2, "fixed", "COMPONENTS"))
        self.assertEqual(run.report["sections"]["pages"]["cap"], 10)

    def test_malformed_yaml_uses_defaults(self):
        self.write("origin_audit.yml", "caps: [unclosed\n")
        config = AuditConfig.load(self.root)
        self.assertEqual(config, AuditConfig())

    def test_output_locations(self):
        self.write("origin_audit.yml", "output:\n  summary: reports/summary.md\n  history: reports/runs\n")
        run = run_audit(self.root)
        self.assertEqual(run.summary_path, self.root / "reports/summary.md")
        self.assertEqual(run.history_path.parent, self.root / "reports/runs")
        again = run_audit(self.root, persist_history=False)
        self.assertEqual(again.report["files"], 1)

    def test_output_path_hides_only_itself(self):
        self.write("origin_audit.yml", "output:\n  summary: docs/README.md\n")
        self.write("src/README.md", "# notes\n")
        run_audit(self.root, persist_history=False)
        again = run_audit(self.root, persist_history=False)
        self.assertIn("src/README.md", again.record["files"])
        self.assertNotIn("docs/README.md", again.record["files"])


class HistoryStoreTest(AuditTestCase):
    def test_listing(self):
        store = AuditHistoryStore(self.root / "history")
        self.assertEqual(store.list_records(), [])
        first = store.persist({"project": "p", "timestamp": "2024-01-01T00:00:00+00:00",
                               "summary": {"mode": "FRONTEND", "health": 80}})
        second = store.persist({"project": "p", "timestamp": "2024-01-02T00:00:00+00:00",
                                "summary": {"mode": "BACKEND", "health": 60}})
        (self.root / "history/audit_broken.json").write_text("{")
        records = store.list_records()
        self.assertEqual([r["id"] for r in records], [first, second])
        self.assertEqual(records[1]["mode"], "BACKEND")
        with open(store.record_path(first)) as f:
            self.assertEqual(next(iter(json.load(f))), "id")


if __name__ == "__main__":
    unittest.main()
