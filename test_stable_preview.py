import random
import unittest

from stable_preview import PreviewResult, ScanResult, finding_key, pick_stable_preview


class StablePreviewTest(unittest.TestCase):
    def setUp(self):
        self.items = [f"src/components/C{i}.tsx" for i in range(20)]

    def test_same_inputs_same_output(self):
        first = pick_stable_preview(self.items, 5, "my-app", "COMPONENTS")
        second = pick_stable_preview(list(self.items), 5, "my-app", "COMPONENTS")
        self.assertEqual(first, second)

    def test_insertion_order_does_not_matter(self):
        shuffled = list(self.items)
        random.Random(7).shuffle(shuffled)
        self.assertEqual(
            pick_stable_preview(self.items, 5, "my-app", "COMPONENTS"),
            pick_stable_preview(shuffled, 5, "my-app", "COMPONENTS"),
        )

    def test_salt_and_seed_change_selection_space(self):
        a = pick_stable_preview(self.items, 20, "my-app", "COMPONENTS")
        b = pick_stable_preview(self.items, 20, "my-app", "DEAD_LITE")
        self.assertCountEqual(a, b)
        self.assertNotEqual(a, b)

    def test_unrelated_growth_keeps_previous_picks(self):
        base = ["A", "B", "C"]
        before = pick_stable_preview(base, 2, "seed", "salt")
        after = pick_stable_preview(base + ["D"], 2, "seed", "salt")
        if "D" not in after:
            self.assertEqual(before, after)
        else:
            # D displaced exactly one entry; the survivor keeps its place relative to D
            self.assertEqual(len(set(after) & set(before)), 1)

        full = pick_stable_preview(base + ["D"], 4, "seed", "salt")
        self.assertEqual([x for x in full if x != "D"], pick_stable_preview(base, 3, "seed", "salt"))

    def test_cap_bounds(self):
        self.assertEqual(pick_stable_preview([], 3, "s", "x"), [])
        self.assertEqual(pick_stable_preview(self.items, 0, "s", "x"), [])
        everything = pick_stable_preview(self.items, 100, "s", "x")
        self.assertCountEqual(everything, self.items)
        self.assertEqual(everything, pick_stable_preview(self.items, 100, "s", "x"))

    def test_structured_findings(self):
        edges = [{"from": "a.tsx", "to": "b"}, {"to": "c", "from": "a.tsx"}]
        picked = pick_stable_preview(edges, 1, "s", "REL_LITE")
        self.assertEqual(len(picked), 1)
        self.assertEqual(finding_key({"b": 1, "a": 2}), finding_key({"a": 2, "b": 1}))


class ScanResultTest(unittest.TestCase):
    def test_total_defaults_to_item_count(self):
        self.assertEqual(ScanResult(["a", "b"]).total, 2)
        self.assertEqual(ScanResult().total, 0)

    def test_invariants_enforced(self):
        with self.assertRaises(ValueError):
            ScanResult(["a", "b"], total=1)
        with self.assertRaises(ValueError):
            ScanResult([], total=3)

    def test_preview_cap_and_locked(self):
        result = ScanResult([f"f{i}" for i in range(7)])
        for cap in (0, 3, 7, 10):
            preview = result.preview(cap, "seed", "salt")
            self.assertEqual(len(preview.preview), min(cap, result.total))
            self.assertEqual(preview.locked, result.total - len(preview.preview))
            self.assertGreaterEqual(preview.locked, 0)

    def test_preview_dict(self):
        data = PreviewResult(["x"], 4).to_dict()
        self.assertEqual(data, {"preview": ["x"], "total": 4, "locked": 3})


if __name__ == "__main__":
    unittest.main()
