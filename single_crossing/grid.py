"""Grid preference profiles.

Voters are pairs (r, c) in {0, ..., N - 1} x {0, ..., M - 1}; each holds
either a full ranking of the candidates {0, ..., C - 1} or nothing yet.
Rankings are stored in numpy arrays so the JIT checks can read them
directly:

  prefs[r, c, k]  k-th most preferred candidate of voter (r, c)
  ranks[r, c, x]  position of candidate x in that ranking
  assigned[r, c]  whether voter (r, c) has a ranking

Entries of prefs/ranks for unassigned voters are meaningless; every
reader must consult `assigned` first.
"""
import numpy as np

from single_crossing.config import (GRID_SEPARATOR, MAX_CANDIDATES,
                                    UNASSIGNED_TOKEN)


class Grid:
    """Mutable N x M grid of (possibly unassigned) preference lists."""

    def __init__(self, N, M, C):
        if N < 1 or M < 1:
            raise ValueError(f"Grid must be at least 1x1, got {N}x{M}.")
        if not 1 <= C <= MAX_CANDIDATES:
            raise ValueError(
                f"Number of candidates must be in 1..{MAX_CANDIDATES}, got {C}.")
        self.N = N
        self.M = M
        self.C = C
        self.prefs = np.zeros((N, M, C), dtype=np.int8)
        self.ranks = np.zeros((N, M, C), dtype=np.int8)
        self.assigned = np.zeros((N, M), dtype=np.bool_)
        self._positions = np.arange(C, dtype=np.int8)

    @property
    def shape(self):
        return self.N, self.M

    def assign(self, r, c, p):
        """Give voter (r, c) the ranking p (a permutation of 0..C-1)."""
        p = tuple(p)
        if sorted(p) != list(range(self.C)):
            raise ValueError(
                f"Preference list {p} is not a permutation of 0..{self.C - 1}.")
        self.prefs[r, c] = p
        self.ranks[r, c, list(p)] = self._positions
        self.assigned[r, c] = True

    def clear(self, r, c):
        self.assigned[r, c] = False

    def is_assigned(self, r, c):
        return bool(self.assigned[r, c])

    def get(self, r, c):
        """Ranking of voter (r, c) as a tuple, or None if unassigned."""
        if not self.assigned[r, c]:
            return None
        return tuple(int(x) for x in self.prefs[r, c])

    def tops(self):
        """(N, M) array of most preferred candidates, -1 where unassigned."""
        return np.where(self.assigned, self.prefs[:, :, 0], -1)

    def is_complete(self):
        return bool(self.assigned.all())

    def copy(self):
        g = Grid(self.N, self.M, self.C)
        g.prefs[...] = self.prefs
        g.ranks[...] = self.ranks
        g.assigned[...] = self.assigned
        return g

    def rows(self):
        """Nested lists of rankings (None for unassigned voters)."""
        return [[self.get(r, c) for c in range(self.M)] for r in range(self.N)]

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and self.C == other.C \
            and self.rows() == other.rows()

    def __repr__(self):
        return f"Grid({self.N}x{self.M}, C={self.C}, assigned={int(self.assigned.sum())})"

    def __str__(self):
        return format_grid(self, separator=False)


def format_grid(g, separator=True):
    """Render g one row per line; each voter is its ranking's digits or '?'.

    e.g. a 1x2 grid with C=3 renders as "012 ?" followed by "####".
    """
    lines = []
    for r in range(g.N):
        tokens = []
        for c in range(g.M):
            p = g.get(r, c)
            if p is None:
                tokens.append(UNASSIGNED_TOKEN)
            else:
                tokens.append("".join(str(x) for x in p))
        lines.append(" ".join(tokens))
    if separator:
        lines.append(GRID_SEPARATOR)
    return "\n".join(lines)


def parse_grid(text, C=None):
    """Inverse of format_grid (separator lines and blank lines are ignored).

    If C is not given it is inferred from the first assigned token.
    """
    rows = []
    for line in text.strip().splitlines():
        line = line.strip()
        if not line or line == GRID_SEPARATOR:
            continue
        rows.append(line.split())
    if not rows:
        raise ValueError("Empty grid text.")
    M = len(rows[0])
    if any(len(row) != M for row in rows):
        raise ValueError("All grid rows must have the same number of voters.")
    if C is None:
        sized = [t for row in rows for t in row if t != UNASSIGNED_TOKEN]
        if not sized:
            raise ValueError("Cannot infer C from a fully unassigned grid.")
        C = len(sized[0])
    g = Grid(len(rows), M, C)
    for r, row in enumerate(rows):
        for c, tok in enumerate(row):
            if tok != UNASSIGNED_TOKEN:
                g.assign(r, c, [int(ch) for ch in tok])
    return g
