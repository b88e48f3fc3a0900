"""Axis-aligned bounding boxes over grid coordinates.

Supports adding points, unioning, and checking whether the box crosses
a given horizontal/vertical line. The empty box has r0 = c0 = INF and
r1 = c1 = -INF, so it is the identity for union and intersects nothing.
"""
from dataclasses import dataclass

INF = 2 ** 31 - 1


@dataclass(frozen=True)
class Rect:
    r0: int = INF
    r1: int = -INF
    c0: int = INF
    c1: int = -INF

    @classmethod
    def empty(cls):
        return cls()

    @property
    def is_empty(self):
        return self.r0 > self.r1

    def add(self, r, c):
        """Smallest box containing self and the point (r, c)."""
        return Rect(min(self.r0, r), max(self.r1, r),
                    min(self.c0, c), max(self.c1, c))

    def union(self, other):
        return Rect(min(self.r0, other.r0), max(self.r1, other.r1),
                    min(self.c0, other.c0), max(self.c1, other.c1))

    def intersects_horizontal(self, r):
        """Whether the box crosses the horizontal line between rows r and r + 1."""
        return self.r0 <= r < self.r1

    def intersects_vertical(self, c):
        """Whether the box crosses the vertical line between columns c and c + 1."""
        return self.c0 <= c < self.c1

    def touches_border(self, N, M):
        """Whether a non-empty box reaches any side of an N x M grid."""
        return (self.r0 == 0 or self.r1 == N - 1
                or self.c0 == 0 or self.c1 == M - 1)


def do_intersect(a, b):
    """Whether boxes a and b share at least one point."""
    if a.r0 > b.r1:
        return False
    if b.r0 > a.r1:
        return False
    if a.c0 > b.c1:
        return False
    if b.c0 > a.c1:
        return False
    return True
