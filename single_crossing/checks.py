"""Validity and hypothesis checks on grid preference profiles.

All checks are read-only. Bounding boxes are recomputed from the live
grid on every call.

grid_valid is the pruning test of the search and runs once per search
node, so it has a Numba kernel working directly on the rank arrays;
grid_valid_reference is the same test written with Rect and is kept to
cross-validate the kernel. has_fast_cross also runs per node when the
fast-cross restriction is on and is split the same way.
"""
import numba
import numpy as np

from single_crossing.prefs import cnt_crosses
from single_crossing.rect import INF, Rect, do_intersect


def preference_bounding_box(g, c0, c1):
    """Bounding box of all assigned voters who prefer c0 to c1."""
    ans = Rect.empty()
    for i in range(g.N):
        for j in range(g.M):
            if g.assigned[i, j] and g.ranks[i, j, c0] < g.ranks[i, j, c1]:
                ans = ans.add(i, j)
    return ans


def dominance_box(g, c):
    """Bounding box of all assigned voters whose most preferred candidate is c."""
    ans = Rect.empty()
    rows, cols = np.nonzero(g.tops() == c)
    for i, j in zip(rows, cols):
        ans = ans.add(int(i), int(j))
    return ans


@numba.njit(cache=True)
def _grid_valid_jit(ranks, assigned, C):
    """Numba JIT: False iff some pair's two preference boxes intersect."""
    N = assigned.shape[0]
    M = assigned.shape[1]
    for a in range(C):
        for b in range(a + 1, C):
            # Box of voters with a > b, and of voters with b > a.
            ar0 = INF
            ar1 = -INF
            ac0 = INF
            ac1 = -INF
            br0 = INF
            br1 = -INF
            bc0 = INF
            bc1 = -INF
            for i in range(N):
                for j in range(M):
                    if not assigned[i, j]:
                        continue
                    if ranks[i, j, a] < ranks[i, j, b]:
                        ar0 = min(ar0, i)
                        ar1 = max(ar1, i)
                        ac0 = min(ac0, j)
                        ac1 = max(ac1, j)
                    else:
                        br0 = min(br0, i)
                        br1 = max(br1, i)
                        bc0 = min(bc0, j)
                        bc1 = max(bc1, j)
            if (ar0 <= br1 and br0 <= ar1
                    and ac0 <= bc1 and bc0 <= ac1):
                return False
    return True


def grid_valid(g, C=None):
    """Given a (potentially incomplete) profile g, returns False if and only
    if it is certain that g is not single-crossing.

    For every pair of candidates, the box of voters preferring one must
    not meet the box of voters preferring the other. Assigning further
    voters only grows both boxes, so a failing profile never recovers.
    """
    if C is None:
        C = g.C
    return bool(_grid_valid_jit(g.ranks, g.assigned, C))


def grid_valid_reference(g, C=None):
    """Pure-Python grid_valid built from Rect."""
    if C is None:
        C = g.C
    for c0 in range(C):
        for c1 in range(c0 + 1, C):
            if do_intersect(preference_bounding_box(g, c0, c1),
                            preference_bounding_box(g, c1, c0)):
                return False
    return True


def is_monodominated(g, c=0):
    """Whether every voter's most preferred candidate is c.

    Voter (0, 0) ranks 0 first under symmetry breaking, so the default is
    the same as all voters sharing a top candidate. On single-crossing
    profiles it is equivalent to the dominance box of c covering the
    whole grid.
    """
    return bool(np.all(g.tops() == c))


def has_isolated(g, C=None):
    """Whether the dominance box of some candidate touches none of the
    four sides of the grid. Candidates nobody ranks first are skipped.
    """
    if C is None:
        C = g.C
    for c in range(C):
        r = dominance_box(g, c)
        if r.is_empty:
            continue
        if not r.touches_border(g.N, g.M):
            return True
    return False


def admits_split_line(g, C=None):
    """Whether some horizontal/vertical grid line crosses no dominance box.

    This is the tiling formed by the dominance boxes admitting a split
    line, the first condition for a non-trivial sliceable tiling.
    """
    if C is None:
        C = g.C
    boxes = [dominance_box(g, c) for c in range(C)]
    for i in range(g.N - 1):
        if not any(r.intersects_horizontal(i) for r in boxes):
            return True
    for j in range(g.M - 1):
        if not any(r.intersects_vertical(j) for r in boxes):
            return True
    return False


@numba.njit(cache=True)
def _fast_cross_jit(ranks, assigned, C):
    """Numba JIT: True iff some assigned voter and its assigned right or
    lower neighbour order more than one pair differently."""
    N = assigned.shape[0]
    M = assigned.shape[1]
    for i in range(N):
        for j in range(M):
            if not assigned[i, j]:
                continue
            for d in range(2):
                ni = i + 1 - d
                nj = j + d
                if ni >= N or nj >= M or not assigned[ni, nj]:
                    continue
                n = 0
                for a in range(C):
                    for b in range(a + 1, C):
                        if ((ranks[i, j, a] < ranks[i, j, b])
                                != (ranks[ni, nj, a] < ranks[ni, nj, b])):
                            n += 1
                if n > 1:
                    return True
    return False


def has_fast_cross(g, C=None):
    """Whether two grid-adjacent assigned voters differ in more than one
    pair of candidates.
    """
    if C is None:
        C = g.C
    return bool(_fast_cross_jit(g.ranks, g.assigned, C))


def has_fast_cross_reference(g, C=None):
    """Pure-Python has_fast_cross built from cnt_crosses."""
    if C is None:
        C = g.C
    for i in range(g.N):
        for j in range(g.M):
            if not g.assigned[i, j]:
                continue
            for di, dj in ((1, 0), (0, 1)):
                ni, nj = i + di, j + dj
                if ni >= g.N or nj >= g.M or not g.assigned[ni, nj]:
                    continue
                if cnt_crosses(g.prefs[i, j], g.prefs[ni, nj], C) > 1:
                    return True
    return False


def violates_sliceable(g, C=None):
    """Hypothesis 1 fails on a complete single-crossing profile g."""
    if admits_split_line(g, C):
        return False
    # Without symmetry breaking voter (0, 0) need not rank 0 first.
    return not is_monodominated(g, g.tops()[0, 0])


def violates_border(g, C=None):
    """Hypothesis 2 fails on a complete single-crossing profile g."""
    return has_isolated(g, C)
