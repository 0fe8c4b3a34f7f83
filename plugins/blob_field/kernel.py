"""
Blob Kernel

The stamp pattern: a 17x17 radial falloff peaking at the center cell.

  d   = distance from (8, 8)
  cap = distance from center to a corner (sqrt(128))
  k   = (1 - d / cap * 1.1) ** 2

The 1.1 pushes the zero crossing inside the corners; the square turns
the slightly negative corner values into small positives rather than
clamping them. The result is normalized to a peak of 1 and scaled by
KERNEL_GAIN so a single stamp adds at most 0.1.
"""

import math

from .grid import Grid

KERNEL_SIZE = 17
KERNEL_CENTER = 8
KERNEL_REACH = 1.1
KERNEL_GAIN = 0.1


def radial_falloff(v, x, y):
    cap = math.sqrt(KERNEL_CENTER ** 2 + KERNEL_CENTER ** 2)
    dist = ((x - KERNEL_CENTER) ** 2 + (y - KERNEL_CENTER) ** 2) ** 0.5
    return (1 - dist / cap * KERNEL_REACH) ** 2


def build_blob_kernel():
    """Build the normalized, gain-scaled blob kernel (fresh Grid)."""
    raw = Grid.create(KERNEL_SIZE, KERNEL_SIZE).map_array(radial_falloff)
    return raw.normalize().map_array(lambda v, x, y: v * KERNEL_GAIN)
