"""Z3 verification of the three-voter lemma.

Checks that each of the 4 x 151 linear systems (one per single-crossing
profile (id, sigma1, sigma2) over 4 candidates and per choice of c2) is
unsatisfiable. Requires the z3-solver package.

Exit status: 0 if every system is unsat, 1 if one is satisfiable (its
model is printed to stdout), 2 if Z3 could not decide one (fail closed).

Usage:
    python run_lp_proof.py
    python run_lp_proof.py --strict        # strict-inequality variant
"""
import argparse
import sys

from single_crossing.lp_lemma import run_lp_proof
from single_crossing.logutil import log


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Z3 check of the three-voter single-crossing lemma')
    parser.add_argument('--strict', action='store_true',
                        help='Use ">" instead of ">= 1 +" in condition (2)')
    parser.add_argument('--quiet', action='store_true',
                        help='No progress lines on stderr')
    args = parser.parse_args(argv)

    result = run_lp_proof(strict=args.strict, verbose=not args.quiet)
    failure = result["failure"]
    if result["status"] == "counterexample":
        print(failure["model"], flush=True)
        return 1
    if result["status"] == "inconclusive":
        log(f"  FATAL INCONCLUSIVE: z3 returned unknown for "
            f"sigma1={failure['sigma1']}, sigma2={failure['sigma2']}, "
            f"c2={failure['c2']}")
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
