"""
Grid - Fixed-Size 2D Float Field

A Grid wraps a (height, width) float64 numpy array. Cells are addressed
as (x, y) with x along the width and y along the height, stored
row-major, so the flat index of (x, y) is y * width + x.

Composition primitives:
  blit(src, dst, ox, oy)      overwrite dst with src placed at (ox, oy)
  add_blit(src, dst, ox, oy)  accumulate src into dst at (ox, oy)

Both clip silently against every edge of the destination; parts of the
source that land outside are dropped, never wrapped.
"""

import numbers
import numpy as np

from .errors import EmptyGrid, InvalidDimensions


def _check_dimension(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidDimensions(f"{name} must be positive, got {value!r}")
    return int(value)


class Grid:

    def __init__(self, data):
        """Wrap an existing 2D array (shape is (height, width)).

        Use Grid.create() to allocate a fresh grid.
        """
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 2:
            raise InvalidDimensions(f"Grid data must be 2D, got shape {data.shape}")
        self.data = data

    @classmethod
    def create(cls, width, height, initial_value=0.0):
        """Allocate a width x height grid filled with initial_value."""
        width = _check_dimension("width", width)
        height = _check_dimension("height", height)
        return cls(np.full((height, width), initial_value, dtype=np.float64))

    @property
    def width(self):
        return self.data.shape[1]

    @property
    def height(self):
        return self.data.shape[0]

    @property
    def shape(self):
        """(width, height)"""
        return (self.width, self.height)

    @property
    def cells(self):
        """Flat row-major view of the cells (length width * height)."""
        return self.data.reshape(-1)

    def __len__(self):
        return self.data.size

    def get(self, x, y):
        return float(self.data[y, x])

    def set(self, x, y, value):
        self.data[y, x] = value

    def copy(self):
        return Grid(self.data.copy())

    def map(self, fn):
        """Return a new grid whose cells are fn(value, x, y).

        fn is called per cell with scalars, so it may branch or use
        scalar builtins. Use map_array for pure arithmetic.
        """
        Y, X = np.ogrid[:self.height, :self.width]
        result = np.vectorize(fn, otypes=[np.float64])(self.data, X, Y)
        return Grid(np.broadcast_to(result, self.data.shape).copy())

    def map_array(self, fn):
        """Whole-array form of map: fn(value, x, y) is called once.

        value is the (H, W) cell array, x a (1, W) column-index row and
        y an (H, 1) row-index column; results broadcast to the grid.
        """
        Y, X = np.ogrid[:self.height, :self.width]
        result = np.asarray(fn(self.data.copy(), X, Y), dtype=np.float64)
        return Grid(np.broadcast_to(result, self.data.shape).copy())

    def max_value(self):
        if self.data.size == 0:
            raise EmptyGrid("max_value() of an empty grid")
        return float(self.data.max())

    def normalize(self):
        """Divide every cell by the maximum.

        A zero maximum gives 0/0 = NaN cells; that is left to the caller.
        """
        peak = self.max_value()
        with np.errstate(divide="ignore", invalid="ignore"):
            return self.map_array(lambda v, x, y: v / peak)

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.data.shape == other.data.shape and np.array_equal(self.data, other.data)

    def __repr__(self):
        return f"Grid(width={self.width}, height={self.height})"


def _clip_region(source, dest, offset_x, offset_y):
    """Overlap of source placed at (offset_x, offset_y) inside dest.

    Returns (dest_slices, source_slices), or None when nothing overlaps.
    """
    x0 = max(offset_x, 0)
    y0 = max(offset_y, 0)
    x1 = min(offset_x + source.width, dest.width)
    y1 = min(offset_y + source.height, dest.height)
    if x0 >= x1 or y0 >= y1:
        return None
    dst = (slice(y0, y1), slice(x0, x1))
    src = (slice(y0 - offset_y, y1 - offset_y), slice(x0 - offset_x, x1 - offset_x))
    return dst, src


def blit(source, dest, offset_x, offset_y):
    """Copy source into dest at (offset_x, offset_y), clipped to dest."""
    region = _clip_region(source, dest, int(offset_x), int(offset_y))
    if region is None:
        return
    dst, src = region
    dest.data[dst] = source.data[src]


def add_blit(source, dest, offset_x, offset_y):
    """Add source into dest at (offset_x, offset_y), clipped to dest."""
    region = _clip_region(source, dest, int(offset_x), int(offset_y))
    if region is None:
        return
    dst, src = region
    dest.data[dst] += source.data[src]
