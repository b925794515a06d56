import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from main import build_arg_parser, main


class MainTest(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        comp = self.root / "src/components/Header.tsx"
        comp.parent.mkdir(parents=True)
        comp.write_text("export default function Header() { return null; }\n")

    def tearDown(self):
        self._tmp.cleanup()

    def run_main(self, *argv):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(list(argv))
        return code, buf.getvalue()

    def test_audit_without_history(self):
        code, out = self.run_main("--root", str(self.root), "--no-history")
        self.assertEqual(code, 0)
        self.assertIn("PROJECT OVERVIEW", out)
        self.assertIn("Header.tsx", out)
        self.assertIn("Summary saved → docs/ai/bridge_summary.md", out)
        self.assertFalse((self.root / "docs/audit_history").exists())

    def test_history_listing(self):
        code, out = self.run_main("history", "--root", str(self.root))
        self.assertEqual(code, 0)
        self.assertIn("No audit history yet", out)

        self.run_main("audit", "--root", str(self.root))
        code, out = self.run_main("history", "--root", str(self.root))
        self.assertEqual(code, 0)
        self.assertIn("FRONTEND", out)

    def test_json_output(self):
        code, out = self.run_main("--root", str(self.root), "--json", "--no-history")
        self.assertEqual(code, 0)
        report = json.loads(out)
        self.assertEqual(report["sections"]["components"]["total"], 1)

    def test_bad_root(self):
        code, out = self.run_main("--root", str(self.root / "missing"))
        self.assertEqual(code, 1)
        self.assertIn("Error", out)

    def test_parser_defaults(self):
        args = build_arg_parser().parse_args([])
        self.assertEqual(args.command, "audit")
        self.assertEqual(args.root, ".")
        self.assertFalse(args.no_history)


if __name__ == "__main__":
    unittest.main()
