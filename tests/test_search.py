"""Integration tests for the backtracking search."""
import sys, os
import contextlib
import io
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from single_crossing.checks import (admits_split_line, grid_valid,
                                    has_isolated, is_monodominated)
from single_crossing.config import BORDER_COUNTEREXAMPLE
from single_crossing.grid import Grid, parse_grid
from single_crossing.search import GridSearch, run_grid_trial


def _search(N, M, C, **kwargs):
    kwargs.setdefault("progress_every", 0)
    return GridSearch(N, M, C, **kwargs)


class TestSmallScenarios(unittest.TestCase):
    def test_single_voter(self):
        result = run_grid_trial(1, 1, 3, verbose=False)
        self.assertEqual(result['status'], 'confirmed')
        self.assertIsNone(result['counterexample'])
        self.assertEqual(result['stats']['n_leaves'], 1)

    def test_two_by_two_two_candidates(self):
        # Candidate 0 everywhere, or split by the middle row or column.
        result = run_grid_trial(2, 2, 2, verbose=False)
        self.assertEqual(result['status'], 'confirmed')
        self.assertEqual(result['stats']['n_leaves'], 3)
        self.assertGreater(result['stats']['n_pruned'], 0)

    def test_parameters_reported(self):
        result = run_grid_trial(1, 2, 2, hypothesis='border', verbose=False)
        self.assertEqual(result['parameters']['hypothesis'], 'border')
        self.assertEqual(result['parameters']['N'], 1)
        self.assertEqual(result['parameters']['M'], 2)


class TestEnumeration(unittest.TestCase):
    def test_free_cell_all_permutations(self):
        search = _search(1, 1, 3, symmetry_breaking=False)
        result = search.run(verbose=False)
        # Every single voter is monodominated by its own top choice.
        self.assertEqual(result['status'], 'confirmed')
        self.assertEqual(search.n_leaves, 6)

    def test_pinned_cell_identity_only(self):
        search = _search(1, 1, 4)
        search.run(verbose=False)
        self.assertEqual(search.n_leaves, 1)

    def test_pair_always_feasible(self):
        search = _search(1, 2, 3)
        search.run(verbose=False)
        self.assertEqual(search.n_leaves, 6)

    def test_line_of_three(self):
        # Pairs sigma1, sigma2 whose inversion sets are nested.
        self.assertEqual(_search(1, 3, 3).run(verbose=False)['stats']['n_leaves'], 17)
        self.assertEqual(_search(3, 1, 3).run(verbose=False)['stats']['n_leaves'], 17)

    def test_line_matches_lemma_profile_count(self):
        result = _search(1, 3, 4).run(verbose=False)
        self.assertEqual(result['stats']['n_leaves'], 151)

    def test_grid_restored_after_run(self):
        search = _search(2, 2, 3)
        search.run(verbose=False)
        self.assertFalse(search.grid.assigned.any())

    def test_no_fast_cross(self):
        # Identity plus the two adjacent transpositions.
        search = _search(1, 2, 3, no_fast_cross=True)
        search.run(verbose=False)
        self.assertEqual(search.n_leaves, 3)
        self.assertGreater(search.n_fast_cross, 0)


class TestLeaves(unittest.TestCase):
    def test_show_all_prints_every_leaf(self):
        out = io.StringIO()
        search = _search(2, 2, 2, show_all=True, out=out)
        search.run(verbose=False)
        text = out.getvalue()
        self.assertEqual(text.count("####"), 3)
        grids = [parse_grid(block, C=2) for block in text.split("####")
                 if block.strip()]
        self.assertIn(parse_grid("01 01\n01 01"), grids)
        self.assertIn(parse_grid("01 01\n10 10"), grids)
        self.assertIn(parse_grid("01 10\n01 10"), grids)

    def test_every_leaf_sliceable_or_monodominated(self):
        out = io.StringIO()
        result = _search(2, 3, 3, show_all=True, out=out).run(verbose=False)
        self.assertEqual(result['status'], 'confirmed')
        blocks = [b for b in out.getvalue().split("####") if b.strip()]
        self.assertEqual(len(blocks), result['stats']['n_leaves'])
        for block in blocks:
            g = parse_grid(block, C=3)
            self.assertTrue(g.is_complete())
            self.assertTrue(grid_valid(g))
            self.assertEqual(g.get(0, 0), (0, 1, 2))
            self.assertTrue(admits_split_line(g) or is_monodominated(g), block)

    def test_progress_lines(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            _search(1, 3, 3, progress_every=5).run(verbose=False)
        lines = [l for l in err.getvalue().splitlines() if "Processed" in l]
        self.assertEqual(len(lines), 3)
        self.assertEqual([l[11:] for l in lines],
                         ["Processed 5 grid profiles.",
                          "Processed 10 grid profiles.",
                          "Processed 15 grid profiles."])
        for l in lines:
            self.assertRegex(l, r"^\[\d\d:\d\d:\d\d\] Processed \d+ grid profiles\.$")

    def test_summary_goes_to_stderr(self):
        err = io.StringIO()
        out = io.StringIO()
        with contextlib.redirect_stderr(err), contextlib.redirect_stdout(out):
            run_grid_trial(1, 1, 2)
        self.assertEqual(out.getvalue(), "")
        self.assertIn("STATUS: confirmed", err.getvalue())


class TestPartialProfile(unittest.TestCase):
    def _initial(self):
        g = parse_grid(BORDER_COUNTEREXAMPLE)
        g.clear(2, 2)
        return g

    def test_border_counterexample_found(self):
        initial = self._initial()
        search = _search(3, 3, 5, hypothesis='border', initial=initial)
        result = search.run(verbose=False)
        self.assertEqual(result['status'], 'counterexample')
        found = result['counterexample']
        self.assertTrue(found.is_complete())
        self.assertTrue(grid_valid(found))
        self.assertTrue(has_isolated(found, 5))
        for r in range(3):
            for c in range(3):
                if (r, c) != (2, 2):
                    self.assertEqual(found.get(r, c), initial.get(r, c))
        # Fixed voters survive the search; the free one is cleared again.
        self.assertTrue(search.grid.is_assigned(1, 1))
        self.assertFalse(search.grid.is_assigned(2, 2))

    def test_sliceable_holds_on_completions(self):
        result = _search(3, 3, 5, initial=self._initial()).run(verbose=False)
        self.assertEqual(result['status'], 'confirmed')
        self.assertGreaterEqual(result['stats']['n_leaves'], 1)

    def test_initial_grid_not_mutated(self):
        initial = self._initial()
        _search(3, 3, 5, initial=initial).run(verbose=False)
        self.assertEqual(initial, self._initial())

    def test_free_corner_not_pinned_when_neighbour_fixed(self):
        # Relabelling cannot make (0, 0) the identity once (0, 1) is fixed.
        initial = parse_grid("? 10", C=2)
        search = _search(1, 2, 2, initial=initial)
        result = search.run(verbose=False)
        self.assertEqual(result['stats']['n_leaves'], 2)
        self.assertFalse(search.pin_first)

    def test_empty_initial_still_pins_corner(self):
        search = _search(1, 2, 2, initial=Grid(1, 2, 2))
        self.assertTrue(search.pin_first)
        self.assertEqual(search.run(verbose=False)['stats']['n_leaves'], 2)

    def test_initial_shape_mismatch(self):
        with self.assertRaises(ValueError):
            GridSearch(2, 2, 3, initial=Grid(2, 2, 4))


class TestConfiguration(unittest.TestCase):
    def test_unknown_hypothesis(self):
        with self.assertRaises(ValueError):
            GridSearch(2, 2, 2, hypothesis='convex')

    def test_bad_size(self):
        with self.assertRaises(ValueError):
            GridSearch(0, 2, 2)


if __name__ == '__main__':
    unittest.main()
