"""
Blob Stamp Engine

Each frame:
  1. Stamp the blob kernel stamp_count times at positions drawn from the
     random source. The kernel's top-left corner goes to (x - 16, y - 8),
     so stamps sit left of the drawn point; kept as-is so seeded runs
     reproduce the same field.
  2. Render: normalize the world to a peak of 1, raise to `contrast`.
  3. Decay the world in place by 1 - (1 - attenuation) ** 8.

The eighth-power easing makes the attenuation control most sensitive
near 1, where the decay is slow enough for trails to build up.

An all-zero world normalizes to NaN (0/0). Renderers must clamp or
skip non-finite cells before converting to pixels.
"""

import numbers
import numpy as np

from .engine_base import FieldEngine
from .errors import InvalidStampCount
from .grid import add_blit
from .kernel import build_blob_kernel
from .wichmann_hill import WichmannHill

STAMP_OFFSET_X = -16
STAMP_OFFSET_Y = -8
ATTENUATION_EASING = 8


def attenuation_factor(attenuation):
    """Map the raw attenuation control [0, 1] to a per-frame decay factor."""
    return 1.0 - (1.0 - attenuation) ** ATTENUATION_EASING


class BlobFieldEngine(FieldEngine):

    engine_name = "stamp"
    engine_label = "Blob Stamp"

    def __init__(self, width=256, height=256, seed=(100, 100, 100),
                 random_source=None, stamp_count=10, contrast=1.0,
                 attenuation=0.5):
        """
        Args:
            width, height: World size in cells
            seed: WichmannHill seed triple (ignored if random_source given)
            random_source: Any RandomSource; defaults to WichmannHill(seed)
            stamp_count: Blobs stamped per step
            contrast: Exponent applied to the normalized world
            attenuation: Raw decay control in [0, 1] (1 = no decay)
        """
        super().__init__(width, height)
        if random_source is None:
            random_source = WichmannHill(seed)
        self.random_source = random_source
        self.kernel = build_blob_kernel()
        self.stamps = 0

        self.stamp_count = 0
        self.contrast = 1.0
        self.attenuation = 1.0
        self.set_params(stamp_count=stamp_count, contrast=contrast,
                        attenuation=attenuation)

    def stamp(self):
        """Stamp one kernel at the next random position. Returns (x, y)."""
        x = int(self.random_source.draw() * self.width)
        y = int(self.random_source.draw() * self.height)
        add_blit(self.kernel, self.world, x + STAMP_OFFSET_X, y + STAMP_OFFSET_Y)
        self.stamps += 1
        return x, y

    def render(self, contrast=None):
        """Normalized, contrast-curved copy of the world (world untouched)."""
        if contrast is None:
            contrast = self.contrast
        with np.errstate(invalid="ignore"):
            return self.world.normalize().map_array(lambda v, x, y: v ** contrast)

    def step(self, stamp_count=None, contrast=None, attenuation=None):
        """Advance one frame and return the output Grid.

        Arguments left as None use the engine's current parameters.
        """
        if stamp_count is None:
            stamp_count = self.stamp_count
        else:
            stamp_count = _check_stamp_count(stamp_count)
        if contrast is None:
            contrast = self.contrast
        if attenuation is None:
            attenuation = self.attenuation

        for _ in range(stamp_count):
            self.stamp()

        factor = attenuation_factor(attenuation)
        frame = self.render(contrast)
        self.world.data *= factor

        self.generation += 1
        return frame

    def renormalize(self):
        """Replace the world with its normalized form (peak becomes 1).

        On an all-zero world every cell becomes NaN and stays NaN, since
        later stamps add onto NaN. clear() is the way back.
        """
        self.world = self.world.normalize()

    def clear(self):
        super().clear()
        self.stamps = 0

    def set_params(self, stamp_count=None, contrast=None, attenuation=None, **_kw):
        if stamp_count is not None:
            self.stamp_count = _check_stamp_count(stamp_count)
        if contrast is not None:
            self.contrast = float(contrast)
        if attenuation is not None:
            self.attenuation = float(attenuation)

    def get_params(self):
        return {
            "stamp_count": self.stamp_count,
            "contrast": self.contrast,
            "attenuation": self.attenuation,
        }

    @property
    def stats(self):
        stats = super().stats
        stats["stamps"] = self.stamps
        return stats

    @classmethod
    def get_slider_defs(cls):
        return [
            {"key": "contrast", "label": "Contrast", "section": "OUTPUT",
             "min": 0.0, "max": 4.0, "default": 1.0, "fmt": ".2f"},
            {"key": "stamp_count", "label": "Velocity", "section": "STAMPING",
             "min": 0, "max": 100, "default": 10, "fmt": "d", "step": 1},
            {"key": "attenuation", "label": "Attenuation", "section": "DECAY",
             "min": 0.0, "max": 1.0, "default": 0.5, "fmt": ".3f"},
        ]


def _check_stamp_count(stamp_count):
    if isinstance(stamp_count, bool) or not isinstance(stamp_count, numbers.Integral):
        raise InvalidStampCount(f"stamp_count must be an integer, got {stamp_count!r}")
    if stamp_count < 0:
        raise InvalidStampCount(f"stamp_count must be >= 0, got {stamp_count}")
    return int(stamp_count)


def create_engine(width, height, seed, **params):
    """Build a BlobFieldEngine seeded with a WichmannHill generator.

    Raises InvalidDimensions / InvalidSeed before any state is created.
    """
    return BlobFieldEngine(width=width, height=height, seed=seed, **params)
