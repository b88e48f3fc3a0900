"""Computational experiments for grid single-crossing preference profiles.

Usage:
    from single_crossing import run_grid_trial, parse_grid, has_isolated

    result = run_grid_trial(N=3, M=3, C=4)        # Hypothesis 1
    if result['status'] == 'counterexample':
        print(result['counterexample'])

    # Z3 check of the three-voter lemma (151 profiles x 4 systems):
    from single_crossing import run_lp_proof
    run_lp_proof()['status']                       # 'proven'
"""
from single_crossing.checks import (admits_split_line, dominance_box,
                                    grid_valid, grid_valid_reference,
                                    has_fast_cross, has_fast_cross_reference,
                                    has_isolated, is_monodominated,
                                    preference_bounding_box)
from single_crossing.grid import Grid, format_grid, parse_grid
from single_crossing.lp_lemma import run_lp_proof
from single_crossing.prefs import cnt_crosses, position_of, prefers
from single_crossing.rect import Rect, do_intersect
from single_crossing.search import GridSearch, run_grid_trial

__version__ = "1.0.0"

__all__ = [
    'Grid',
    'GridSearch',
    'Rect',
    'admits_split_line',
    'cnt_crosses',
    'do_intersect',
    'dominance_box',
    'format_grid',
    'grid_valid',
    'grid_valid_reference',
    'has_fast_cross',
    'has_fast_cross_reference',
    'has_isolated',
    'is_monodominated',
    'parse_grid',
    'position_of',
    'preference_bounding_box',
    'prefers',
    'run_grid_trial',
    'run_lp_proof',
]
