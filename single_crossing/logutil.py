"""Timestamped progress output."""
import sys
from datetime import datetime


def log(msg, stream=None):
    """Timestamped, flushed log line (stderr unless another stream is given).

    Every line is msg prefixed with "[HH:MM:SS] ", including the progress
    lines of the search and the lemma harness.
    """
    if stream is None:
        stream = sys.stderr
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", file=stream, flush=True)


def fmt_count(n):
    """Format large counts with commas."""
    return f"{n:,}"
