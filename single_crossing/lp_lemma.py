"""Calling the Z3 theorem prover on each of the 151 linear programs of the
three-voter lemma (Section 3.3).

Profiles are P = (id, sigma1, sigma2) over candidates 1..4, where id is
1 > 2 > 3 > 4 and P is single-crossing along the line of voters 1, 2, 3.
For every such profile and every candidate c2, the system below over the
real variables r_v_c (v = 1..3, c = 1..4) must be unsatisfiable:

  premise (5):    r_1_1 = 0, r_2_{sigma1[0]} = 0, r_3_{sigma2[0]} = 0, and
                  each voter's r values are non-decreasing along its ranking
  condition (2):  for all c, c' in 1..4
                  r_1_c + r_2_c + r_2_c' + r_3_c' >= 1 + r_1_c2 + r_2_c2 + r_3_c2

The strict variant replaces condition (2) by
r_1_c + r_2_c + r_2_c' + r_3_c' > r_1_c2 + r_2_c2 + r_3_c2 (Remark 3.11);
both give unsat verdicts.
"""
import itertools
import time

import z3

from single_crossing import config
from single_crossing.logutil import log
from single_crossing.prefs import is_single_crossing

CANDIDATES = tuple(range(1, config.LEMMA_CANDIDATES + 1))
VOTERS = tuple(range(1, config.LEMMA_VOTERS + 1))


def single_crossing_profiles():
    """Yield all (sigma1, sigma2) such that (id, sigma1, sigma2) is
    single-crossing, in lexicographic order of sigma1 then sigma2.
    """
    for sigma1 in itertools.permutations(CANDIDATES):
        for sigma2 in itertools.permutations(CANDIDATES):
            if is_single_crossing([CANDIDATES, sigma1, sigma2]):
                yield sigma1, sigma2


def make_variables(ctx=None):
    """Real variables r_v_c keyed by (v, c)."""
    return {(v, c): z3.Real(f"r_{v}_{c}", ctx)
            for v in VOTERS for c in CANDIDATES}


def build_solver(sigma1, sigma2, c2, strict=False):
    """Solver holding premise (5) and condition (2) for one profile and c2."""
    ctx = z3.Context()
    r = make_variables(ctx)
    s = z3.Solver(ctx=ctx)
    orders = {1: CANDIDATES, 2: tuple(sigma1), 3: tuple(sigma2)}

    # Premise (5).
    for v, order in orders.items():
        s.add(r[v, order[0]] == 0)
        for k in range(len(order) - 1):
            s.add(r[v, order[k]] <= r[v, order[k + 1]])

    # Condition (2).
    rhs = r[1, c2] + r[2, c2] + r[3, c2]
    for c in CANDIDATES:
        for c1 in CANDIDATES:
            lhs = r[1, c] + r[2, c] + r[2, c1] + r[3, c1]
            if strict:
                s.add(lhs > rhs)
            else:
                s.add(lhs >= 1 + rhs)
    return s


def check_system(sigma1, sigma2, c2, strict=False):
    """Returns (verdict, model): verdict is 'unsat', 'sat' or 'unknown',
    model is the satisfying z3 model when sat, else None.
    """
    s = build_solver(sigma1, sigma2, c2, strict=strict)
    res = s.check()
    if res == z3.unsat:
        return "unsat", None
    if res == z3.sat:
        return "sat", s.model()
    return "unknown", None


def run_lp_proof(strict=False, verbose=True):
    """Check every system; stop at the first one that is not unsat.

    Returns
    -------
    dict with: status ('proven', 'counterexample' or 'inconclusive'),
    n_profiles, n_systems, failure (None or dict with sigma1, sigma2, c2,
    verdict, model), elapsed
    """
    t0 = time.time()
    n_profiles = 0
    n_systems = 0
    failure = None
    for sigma1, sigma2 in single_crossing_profiles():
        n_profiles += 1
        if verbose:
            log(f"Processing profile {n_profiles}")
        for c2 in CANDIDATES:
            verdict, model = check_system(sigma1, sigma2, c2, strict=strict)
            n_systems += 1
            if verdict != "unsat":
                failure = {"sigma1": sigma1, "sigma2": sigma2, "c2": c2,
                           "verdict": verdict, "model": model}
                break
        if failure is not None:
            break

    if failure is None:
        status = "proven"
    elif failure["verdict"] == "sat":
        status = "counterexample"
    else:
        status = "inconclusive"
    result = {
        "status": status,
        "strict": strict,
        "n_profiles": n_profiles,
        "n_systems": n_systems,
        "failure": failure,
        "elapsed": time.time() - t0,
    }
    if verbose:
        log(f"  STATUS: {status} ({n_profiles} profiles, {n_systems} systems, "
            f"{result['elapsed']:.1f}s)")
    return result
