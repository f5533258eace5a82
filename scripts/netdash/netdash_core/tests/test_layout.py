from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from netdash_core.layout import compute_layout  # noqa: E402


class LayoutTests(unittest.TestCase):
    def test_panes_share_top_half(self):
        layout = compute_layout(80, 24, 4)
        self.assertEqual([p.width for p in layout.panes], [20, 20, 20, 20])
        self.assertTrue(all(p.height == 12 for p in layout.panes))
        self.assertEqual(layout.output.width, 80)
        self.assertEqual(layout.output.height, 12)

    def test_remainder_columns_go_to_last_pane(self):
        layout = compute_layout(83, 25, 4)
        self.assertEqual([p.width for p in layout.panes], [20, 20, 20, 23])
        self.assertEqual(sum(p.width for p in layout.panes), 83)
        self.assertEqual(layout.top_height + layout.output.height, 25)

    def test_same_size_same_dimensions(self):
        for width, height in [(80, 24), (120, 40), (7, 3), (0, 0)]:
            self.assertEqual(compute_layout(width, height, 4), compute_layout(width, height, 4))

    def test_no_list_panes_gives_output_everything(self):
        layout = compute_layout(100, 30, 0)
        self.assertEqual(layout.panes, ())
        self.assertEqual((layout.output.width, layout.output.height), (100, 30))

    def test_inner_size_never_negative(self):
        layout = compute_layout(3, 1, 2)
        self.assertEqual(layout.panes[0].inner_width, 0)
        self.assertEqual(layout.panes[0].inner_height, 0)


if __name__ == "__main__":
    unittest.main()
