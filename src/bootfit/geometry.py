"""
Geometry primitives — volume, axis-aligned overlap and rotations.

Boxes are described by a corner ``(x, y, z)`` and extents ``(l, w, h)``
along the same axes.  All functions are pure.

``rotations`` feeds the orientation generator.  ``volume``, ``boxes_overlap``
and ``fits_within`` are scalar reference checks for verifying finished
results; the position search uses its own vectorised form of the same
tests (``bootfit.placement``).
"""

from typing import List, Tuple

from bootfit.models import Dimensions

Vec3 = Tuple[int, int, int]


def volume(dims: Dimensions) -> int:
    """Volume of a dimension triple (mm³)."""
    return dims.length * dims.width * dims.height


def boxes_overlap(pos_a: Vec3, dims_a: Vec3, pos_b: Vec3, dims_b: Vec3) -> bool:
    """
    Strict separating-axis overlap test.

    Boxes that only touch (a face of one equals a face of the other) do
    not overlap.
    """
    ax, ay, az = pos_a
    al, aw, ah = dims_a
    bx, by, bz = pos_b
    bl, bw, bh = dims_b
    return (
        ax < bx + bl and ax + al > bx
        and ay < by + bw and ay + aw > by
        and az < bz + bh and az + ah > bz
    )


def fits_within(pos: Vec3, dims: Vec3, bounds: Vec3) -> bool:
    """True if the box at *pos* lies inside ``[0, bounds]`` on every axis."""
    return all(p >= 0 and p + d <= b for p, d, b in zip(pos, dims, bounds))


def rotations(dims: Dimensions) -> List[Dimensions]:
    """
    The six axis-aligned permutations of *dims*, in a fixed order.

    Duplicates (for boxes with equal sides) are kept so the enumeration is
    positionally stable; the order is the implicit tie-break of the
    position search.
    """
    l, w, h = dims.length, dims.width, dims.height
    return [
        Dimensions(l, w, h),
        Dimensions(w, l, h),
        Dimensions(h, w, l),
        Dimensions(l, h, w),
        Dimensions(w, h, l),
        Dimensions(h, l, w),
    ]
