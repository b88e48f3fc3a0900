"""Exhaustive search over grid single-crossing profiles.

Tests one hypothesis about optimal k-tilings on every complete N x M
single-crossing profile with C candidates and stops at the first
counterexample, which is printed to stdout followed by '####'.

Exit status: 0 if the hypothesis held on every profile, 1 if a
counterexample was printed, 2 on bad arguments.

Usage:
    python run_grid_trial.py                                  # N=4, M=5, C=5, Hypothesis 1
    python run_grid_trial.py --rows 3 --cols 3 --candidates 6
    python run_grid_trial.py --rows 6 --cols 6 --candidates 6 --no-fast-cross
    python run_grid_trial.py --rows 3 --cols 3 --candidates 5 --hypothesis border
    python run_grid_trial.py --rows 3 --cols 3 --candidates 5 --initial partial.txt

--initial reads a partial profile in the output format, with '?' for
voters left to the search; its assigned voters stay fixed.
"""
import argparse
import sys

from single_crossing import config
from single_crossing.grid import format_grid, parse_grid
from single_crossing.search import GridSearch


def _known_results_epilog():
    lines = ["Confirmed ranges (hypothesis, N, M, C):"]
    for hyp, N, M, C, no_fast in config.KNOWN_RESULTS:
        extra = " without fast crosses" if no_fast else ""
        lines.append(f"  {hyp}: N <= {N}, M <= {M}, C = {C}{extra}")
    lines.append("Hypothesis 2 (border) fails for N = M = 3, C = 5:")
    lines.extend("  " + row for row in config.BORDER_COUNTEREXAMPLE.splitlines())
    return "\n".join(lines)


def build_parser():
    parser = argparse.ArgumentParser(
        description='Grid single-crossing k-tiling hypothesis search',
        epilog=_known_results_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('--rows', type=int, default=config.DEFAULT_ROWS,
                        help=f'Grid height N (default: {config.DEFAULT_ROWS})')
    parser.add_argument('--cols', type=int, default=config.DEFAULT_COLS,
                        help=f'Grid width M (default: {config.DEFAULT_COLS})')
    parser.add_argument('--candidates', type=int,
                        default=config.DEFAULT_CANDIDATES,
                        help=f'Number of candidates C (default: {config.DEFAULT_CANDIDATES})')
    parser.add_argument('--hypothesis', choices=config.HYPOTHESES,
                        default=config.DEFAULT_HYPOTHESIS,
                        help=f'Hypothesis to test (default: {config.DEFAULT_HYPOTHESIS})')
    parser.add_argument('--no-fast-cross', action='store_true',
                        help='Only adjacent voters differing in at most one pair')
    parser.add_argument('--no-symmetry-breaking', action='store_true',
                        help='Do not pin voter (0, 0) to 0 > 1 > ... > C-1')
    parser.add_argument('--show-all', action='store_true',
                        help='Print every complete single-crossing profile')
    parser.add_argument('--progress-every', type=int,
                        default=config.PROGRESS_EVERY,
                        help=f'Progress line interval (default: {config.PROGRESS_EVERY})')
    parser.add_argument('--initial', metavar='PATH',
                        help='Partial profile to complete (? marks free voters)')
    parser.add_argument('--quiet', action='store_true',
                        help='No progress or summary on stderr')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    initial = None
    try:
        if args.initial:
            with open(args.initial) as f:
                initial = parse_grid(f.read(), C=args.candidates)
        search = GridSearch(
            args.rows, args.cols, args.candidates,
            hypothesis=args.hypothesis,
            no_fast_cross=args.no_fast_cross,
            symmetry_breaking=not args.no_symmetry_breaking,
            progress_every=0 if args.quiet else args.progress_every,
            show_all=args.show_all,
            initial=initial)
    except (OSError, ValueError) as e:
        parser.error(str(e))
    result = search.run(verbose=not args.quiet)
    if result["status"] == "counterexample":
        print(format_grid(result["counterexample"]), flush=True)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
