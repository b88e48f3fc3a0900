"""Operations on individual preference lists.

A preference list is a sequence of distinct candidates, most preferred
first: (0, 2, 1) means 0 > 2 > 1.
"""
import itertools

import numpy as np


def identity(C):
    """The ranking 0 > 1 > ... > C - 1."""
    return tuple(range(C))


def all_permutations(C):
    """All rankings of C candidates in lexicographic order (identity first)."""
    return itertools.permutations(range(C))


def position_of(p, c):
    """Index of candidate c in p (0 if c is ranked first, and so on).

    Raises ValueError if c does not occur in p.
    """
    for i, x in enumerate(p):
        if x == c:
            return i
    raise ValueError(f"Could not find candidate {c} in {tuple(p)}.")


def prefers(p, c0, c1):
    """Whether c0 is preferred over c1 in p."""
    return position_of(p, c0) < position_of(p, c1)


def inverse(p, C):
    """Rank array of length C: inv[c] is the position of candidate c in p.

    Candidates absent from p get -1.
    """
    inv = np.full(C, -1, dtype=np.int64)
    inv[np.asarray(p, dtype=np.int64)] = np.arange(len(p))
    return inv


def cnt_crosses(p0, p1, C):
    """Number of unordered pairs {c0, c1} ordered differently by p0 and p1."""
    inv0 = inverse(p0, C)
    inv1 = inverse(p1, C)
    ans = 0
    for c0 in range(C):
        for c1 in range(c0 + 1, C):
            ans += (inv0[c0] < inv0[c1]) != (inv1[c0] < inv1[c1])
    return int(ans)


def is_single_crossing(profile):
    """Whether a line-ordered profile is single-crossing.

    For every pair of candidates, the voters preferring one to the other
    must form a prefix or a suffix of the line, i.e. the preference
    between the two flips at most once along it.
    """
    profile = [tuple(p) for p in profile]
    if len(profile) < 2:
        return True
    cands = sorted(profile[0])
    size = cands[-1] + 1
    invs = [inverse(p, size) for p in profile]
    for a, b in itertools.combinations(cands, 2):
        flips = 0
        prev = invs[0][a] < invs[0][b]
        for inv in invs[1:]:
            cur = inv[a] < inv[b]
            if cur != prev:
                flips += 1
                if flips > 1:
                    return False
            prev = cur
    return True
