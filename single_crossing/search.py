"""Backtracking search over grid single-crossing preference profiles.

Testing two hypotheses about the structure of optimal k-tilings of grid
single-crossing preferences. If a property fails for an optimal k-tiling
on some instance, it also fails once every candidate outside the elected
committee is removed, so it is enough to take k = C and look only at
each voter's most preferred candidate.

Hypothesis 1 (sliceable): every complete single-crossing profile either
admits a split line or is monodominated.
Hypothesis 2 (border): every dominance box touches a side of the grid.

Voters are visited in row-major order and each free voter is given every
ranking in lexicographic order. Voter (0, 0) is pinned to 0 > 1 > ... > C-1
without loss of generality. After every assignment the partial profile
is checked with grid_valid and the whole subtree is dropped if it fails.
"""
import time

from single_crossing import config
from single_crossing.checks import (grid_valid, has_fast_cross,
                                    violates_border, violates_sliceable)
from single_crossing.grid import Grid, format_grid
from single_crossing.logutil import fmt_count, log
from single_crossing.prefs import all_permutations, identity

LEAF_CHECKS = {
    config.HYPOTHESIS_SLICEABLE: violates_sliceable,
    config.HYPOTHESIS_BORDER: violates_border,
}


class GridSearch:
    """Exhaustive search over completions of a partial N x M profile.

    Parameters
    ----------
    N, M, C : int
        Grid height, width and number of candidates.
    hypothesis : str
        'sliceable' or 'border'; selects the leaf check.
    no_fast_cross : bool
        Only consider profiles whose adjacent voters differ in at most one
        pair of candidates.
    symmetry_breaking : bool
        Pin voter (0, 0) to the identity ranking. Ignored when `initial`
        fixes any voter.
    initial : Grid, optional
        Partial profile to complete. Its assigned voters stay fixed.
    progress_every : int
        Log a progress line every this many complete profiles (0 disables).
    show_all : bool
        Write every complete single-crossing profile to `out`.
    out : file-like, optional
        Stream for printed grids (stdout if None).
    """

    def __init__(self, N=config.DEFAULT_ROWS, M=config.DEFAULT_COLS,
                 C=config.DEFAULT_CANDIDATES,
                 hypothesis=config.DEFAULT_HYPOTHESIS, no_fast_cross=False,
                 symmetry_breaking=True, initial=None,
                 progress_every=config.PROGRESS_EVERY, show_all=False,
                 out=None):
        if hypothesis not in LEAF_CHECKS:
            raise ValueError(f"Unknown hypothesis {hypothesis!r}, "
                             f"expected one of {config.HYPOTHESES}.")
        if initial is None:
            initial = Grid(N, M, C)
        elif (initial.N, initial.M, initial.C) != (N, M, C):
            raise ValueError(
                f"Initial grid is {initial.N}x{initial.M} with C={initial.C}, "
                f"expected {N}x{M} with C={C}.")
        self.N = N
        self.M = M
        self.C = C
        self.hypothesis = hypothesis
        self.no_fast_cross = no_fast_cross
        self.symmetry_breaking = symmetry_breaking
        self.progress_every = progress_every
        self.show_all = show_all
        self.out = out
        self.grid = initial.copy()
        self.fixed = initial.assigned.copy()
        # Relabelling candidates so that (0, 0) is the identity is only
        # possible when no voter is fixed.
        self.pin_first = symmetry_breaking and not self.fixed.any()
        self._leaf_check = LEAF_CHECKS[hypothesis]
        self.n_nodes = 0
        self.n_pruned = 0
        self.n_fast_cross = 0
        self.n_leaves = 0

    def _rankings(self, r, c):
        if r == 0 and c == 0 and self.pin_first:
            # The first voter is assumed to always have preferences 0 > ... > C - 1.
            return [identity(self.C)]
        return all_permutations(self.C)

    def _emit(self, g):
        print(format_grid(g), file=self.out, flush=True)

    def _leaf(self):
        """Test the hypothesis on a complete profile; return a copy if it fails."""
        self.n_leaves += 1
        if self.progress_every and self.n_leaves % self.progress_every == 0:
            log(f"Processed {self.n_leaves} grid profiles.")
        if self.show_all:
            self._emit(self.grid)
        if self._leaf_check(self.grid, self.C):
            return self.grid.copy()
        return None

    def _backtrack(self, r, c):
        """Explore every complete profile agreeing with the current grid,
        where (r, c) is the first voter not yet decided by the recursion.

        Returns the first counterexample found, or None.
        """
        self.n_nodes += 1
        if self.no_fast_cross and has_fast_cross(self.grid, self.C):
            self.n_fast_cross += 1
            return None
        # Prune profiles which can not be single-crossing early.
        if not grid_valid(self.grid, self.C):
            self.n_pruned += 1
            return None
        if r == self.N:
            return self._leaf()
        if c == self.M:
            return self._backtrack(r + 1, 0)
        if self.fixed[r, c]:
            return self._backtrack(r, c + 1)
        try:
            for p in self._rankings(r, c):
                self.grid.assign(r, c, p)
                found = self._backtrack(r, c + 1)
                if found is not None:
                    return found
        finally:
            self.grid.clear(r, c)
        return None

    def run(self, verbose=True):
        """Run the full search.

        Returns
        -------
        dict with: status ('confirmed' or 'counterexample'), counterexample
        (Grid or None), parameters, stats, elapsed
        """
        if verbose:
            log(f"Grid trial: N={self.N}, M={self.M}, C={self.C}, "
                f"hypothesis={self.hypothesis}, no_fast_cross={self.no_fast_cross}")
        t0 = time.time()
        found = self._backtrack(0, 0)
        elapsed = time.time() - t0
        result = {
            "status": "confirmed" if found is None else "counterexample",
            "counterexample": found,
            "parameters": {
                "N": self.N,
                "M": self.M,
                "C": self.C,
                "hypothesis": self.hypothesis,
                "no_fast_cross": self.no_fast_cross,
                "symmetry_breaking": self.symmetry_breaking,
            },
            "stats": {
                "n_nodes": self.n_nodes,
                "n_pruned": self.n_pruned,
                "n_fast_cross": self.n_fast_cross,
                "n_leaves": self.n_leaves,
            },
            "elapsed": elapsed,
        }
        if verbose:
            _print_summary(result)
        return result


def _print_summary(result):
    stats = result["stats"]
    log(f"  STATUS: {result['status']}")
    log(f"  nodes visited: {fmt_count(stats['n_nodes'])}, "
        f"pruned: {fmt_count(stats['n_pruned'])}, "
        f"fast-cross skipped: {fmt_count(stats['n_fast_cross'])}")
    log(f"  complete profiles: {fmt_count(stats['n_leaves'])}")
    log(f"  time: {result['elapsed']:.1f}s")


def run_grid_trial(N=config.DEFAULT_ROWS, M=config.DEFAULT_COLS,
                   C=config.DEFAULT_CANDIDATES,
                   hypothesis=config.DEFAULT_HYPOTHESIS, verbose=True,
                   **kwargs):
    """Build a GridSearch and run it. Extra keyword arguments go to GridSearch."""
    if not verbose:
        kwargs.setdefault("progress_every", 0)
    search = GridSearch(N, M, C, hypothesis=hypothesis, **kwargs)
    return search.run(verbose=verbose)
