"""Default constants for the grid single-crossing experiments."""

# Grid height N, width M and number of candidates C.
DEFAULT_ROWS = 4
DEFAULT_COLS = 5
DEFAULT_CANDIDATES = 5

# Ranks are printed as single digits, one per candidate.
MAX_CANDIDATES = 10

# Emit a progress line every this many complete profiles.
PROGRESS_EVERY = 100

# Separator printed after every grid written to stdout.
GRID_SEPARATOR = "####"
UNASSIGNED_TOKEN = "?"

HYPOTHESIS_SLICEABLE = "sliceable"  # Hypothesis 1: optimal k-tilings are sliceable
HYPOTHESIS_BORDER = "border"        # Hypothesis 2: every rectangle touches a side
HYPOTHESES = (HYPOTHESIS_SLICEABLE, HYPOTHESIS_BORDER)
DEFAULT_HYPOTHESIS = HYPOTHESIS_SLICEABLE

# (hypothesis, N, M, C, no_fast_cross) ranges for which the exhaustive
# search has completed without a counterexample.
KNOWN_RESULTS = [
    (HYPOTHESIS_SLICEABLE, 8, 8, 4, False),
    (HYPOTHESIS_SLICEABLE, 4, 5, 5, False),
    (HYPOTHESIS_SLICEABLE, 3, 6, 5, False),
    (HYPOTHESIS_SLICEABLE, 3, 3, 6, False),
    (HYPOTHESIS_SLICEABLE, 6, 6, 6, True),
]

# Hypothesis 2 fails on this 3x3 profile with 5 candidates: candidate 2
# dominates only the centre voter.
BORDER_COUNTEREXAMPLE = """\
01234 02134 03214
12304 21304 32104
41230 42130 43210
"""

# Lemma harness: candidates 1..LEMMA_CANDIDATES, three voters.
LEMMA_CANDIDATES = 4
LEMMA_VOTERS = 3
LEMMA_EXPECTED_PROFILES = 151
